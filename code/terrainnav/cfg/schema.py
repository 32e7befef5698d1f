"""
Configuration validation for navigation settings.

Provides validation functions to ensure configuration parameters are valid.
"""

from typing import Optional


VALID_HEURISTICS = ['euclidean', 'octile', 'chebyshev']
VALID_ALGORITHMS = ['a_star', 'jps']


def validate_allowed_angle(allowed_angle: float) -> float:
    """Validate steepness threshold (vertical component of a unit direction)"""
    if allowed_angle < 0:
        raise ValueError(f"allowed_angle must be non-negative, got {allowed_angle}")
    return float(allowed_angle)


def validate_heuristic(heuristic: str) -> str:
    """Validate heuristic name"""
    heuristic = str(heuristic).lower()
    if heuristic not in VALID_HEURISTICS:
        raise ValueError(f"heuristic must be one of {VALID_HEURISTICS}, got {heuristic}")
    return heuristic


def validate_algorithm(algorithm: str) -> str:
    """Validate pathfinding algorithm name"""
    algorithm = str(algorithm).lower()
    if algorithm not in VALID_ALGORITHMS:
        raise ValueError(f"algorithm must be one of {VALID_ALGORITHMS}, got {algorithm}")
    return algorithm


def validate_max_iterations(max_iterations: Optional[int]) -> Optional[int]:
    """Validate optional search iteration cap"""
    if max_iterations is None:
        return None
    if max_iterations <= 0:
        raise ValueError("max_iterations must be positive or None")
    return int(max_iterations)


def validate_num_agents(num_agents: int) -> int:
    """Validate number of agents to spawn"""
    if num_agents < 0:
        raise ValueError("num_agents must be non-negative")
    return int(num_agents)
