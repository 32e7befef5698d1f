"""
Main configuration classes for navigation.

Provides dataclass-based configuration system with validation.
All default values are defined in default.yaml, not in Python code.
"""

import os
import yaml
from dataclasses import dataclass
from typing import Dict, Optional, Any

from .schema import (
    validate_allowed_angle,
    validate_heuristic,
    validate_algorithm,
    validate_max_iterations,
    validate_num_agents
)


DEFAULTS_PATH = os.path.join(os.path.dirname(__file__), 'default.yaml')


@dataclass
class GraphConfig:
    """Configuration for graph generation"""
    allowed_angle: float
    steepness_prevents_connection: bool

    def __post_init__(self):
        self.allowed_angle = validate_allowed_angle(self.allowed_angle)


@dataclass
class SearchConfig:
    """Configuration for path search"""
    heuristic: str
    algorithm: str
    max_iterations: Optional[int] = None

    def __post_init__(self):
        self.heuristic = validate_heuristic(self.heuristic)
        self.algorithm = validate_algorithm(self.algorithm)
        self.max_iterations = validate_max_iterations(self.max_iterations)


@dataclass
class AgentsConfig:
    """Configuration for agent spawning"""
    num_agents: int
    template: str
    seed: Optional[int] = None

    def __post_init__(self):
        self.num_agents = validate_num_agents(self.num_agents)


@dataclass
class NavigationConfig:
    """Top-level navigation configuration"""
    graph: GraphConfig
    search: SearchConfig
    agents: AgentsConfig
    log_dir: str

    @classmethod
    def default(cls) -> 'NavigationConfig':
        """Configuration built from default.yaml only"""
        return cls.from_params(None)

    @classmethod
    def from_params(cls, base_config_path: Optional[str] = None, **params) -> 'NavigationConfig':
        """
        Create configuration from YAML base and parameter overrides.

        Args:
            base_config_path: Path to a YAML config merged over the packaged defaults
            **params: Parameters to override using dot notation keys

        Example:
            config = NavigationConfig.from_params(
                'steep.yaml',
                **{
                    'graph.allowed_angle': 0.2,
                    'search.heuristic': 'octile',
                }
            )
        """
        with open(DEFAULTS_PATH, 'r') as f:
            defaults = yaml.safe_load(f)

        if base_config_path and os.path.exists(base_config_path):
            with open(base_config_path, 'r') as f:
                custom = yaml.safe_load(f) or {}
                defaults = cls._deep_update(defaults, custom)

        if params:
            nested_overrides = cls._params_to_nested_dict(params)
            defaults = cls._deep_update(defaults, nested_overrides)

        return cls(
            graph=GraphConfig(**defaults['graph']),
            search=SearchConfig(**defaults['search']),
            agents=AgentsConfig(**defaults['agents']),
            log_dir=defaults['simulation']['log_dir']
        )

    @staticmethod
    def _params_to_nested_dict(params: Dict[str, Any]) -> Dict[str, Any]:
        """Convert dot notation parameters to nested dictionary"""
        result = {}
        for key, value in params.items():
            keys = key.split('.')
            current = result
            for k in keys[:-1]:
                if k not in current:
                    current[k] = {}
                current = current[k]
            current[keys[-1]] = value
        return result

    @staticmethod
    def _deep_update(base_dict: Dict, update_dict: Dict) -> Dict:
        """Deep update dictionary, handling nested structures"""
        result = base_dict.copy()
        for key, value in update_dict.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = NavigationConfig._deep_update(result[key], value)
            else:
                result[key] = value
        return result
