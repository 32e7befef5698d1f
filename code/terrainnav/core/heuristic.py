"""
Distance estimators used as search heuristics.

Euclidean is the straight-line distance (use when nodes are not on a grid).
Octile and Chebyshev count 8-directional grid steps on the X/Y plane,
with a diagonal step costing sqrt(2) and 1 respectively.
"""

import logging
import math
from enum import Enum
from typing import Union

import numpy as np

from ..utils.math_utils import euclidean_distance

logger = logging.getLogger(__name__)

# Returned when no heuristic is set. Callers must treat it as "no usable estimate".
MAX_ESTIMATE = float(np.finfo(np.float32).max)


class HeuristicType(str, Enum):
    EUCLIDEAN = 'euclidean'
    OCTILE = 'octile'
    CHEBYSHEV = 'chebyshev'


def _resolve(kind: Union[HeuristicType, str, None]):
    if isinstance(kind, HeuristicType):
        return kind
    try:
        return HeuristicType(str(kind).lower())
    except ValueError:
        return None


def estimate(a: np.ndarray, b: np.ndarray, kind: Union[HeuristicType, str] = HeuristicType.EUCLIDEAN) -> float:
    """
    H-score between two positions for the chosen heuristic.

    Octile and Chebyshev use only the X and Y axes.
    An unrecognised kind logs an error and returns MAX_ESTIMATE.
    """
    heuristic = _resolve(kind)

    if heuristic is HeuristicType.EUCLIDEAN:
        return euclidean_distance(a, b)

    if heuristic in (HeuristicType.OCTILE, HeuristicType.CHEBYSHEV):
        d1 = 1.0
        d2 = math.sqrt(2.0) if heuristic is HeuristicType.OCTILE else 1.0
        dx = abs(float(b[0]) - float(a[0]))
        dy = abs(float(b[1]) - float(a[1]))
        return d1 * (dx + dy) + (d2 - 2 * d1) * min(dx, dy)

    logger.error(f"No heuristic set (got {kind!r})")
    return MAX_ESTIMATE
