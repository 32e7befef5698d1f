"""
Configuration module for navigation settings.

Provides:
- NavigationConfig: Dataclass-based configuration loaded from YAML
- GraphConfig: Graph generation and steepness filtering
- SearchConfig: Heuristic, algorithm and iteration cap
- AgentsConfig: Agent spawning
"""

from .config import (
    NavigationConfig,
    GraphConfig,
    SearchConfig,
    AgentsConfig
)

__all__ = [
    'NavigationConfig',
    'GraphConfig',
    'SearchConfig',
    'AgentsConfig'
]
