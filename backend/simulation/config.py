"""
Configuration settings for the simulation module.
"""

import os
import json
from typing import Any, Dict, Optional
from dataclasses import dataclass, field, asdict

ALGORITHMS = ("minimax", "random")


@dataclass
class AgentConfig:
    """Configuration for one side of a simulated game."""
    algorithm: str = "minimax"
    max_depth: int = 2
    randomize: bool = True
    parallel_processes: Optional[int] = None  # Root-level search fan-out, None to search sequentially

    def __post_init__(self):
        if self.algorithm not in ALGORITHMS:
            raise ValueError(f"Unknown algorithm: {self.algorithm}")
        if self.max_depth < 1:
            raise ValueError("max_depth must be at least 1")

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass
class SimulationConfig:
    """Main configuration for a batch of games between two agents."""
    player_a: AgentConfig = field(default_factory=AgentConfig)
    player_b: AgentConfig = field(default_factory=lambda: AgentConfig(algorithm="random"))
    games: int = 10
    max_moves: int = 200  # Games still running after this many moves are draws
    swap_sides: bool = True  # Alternate which config plays A
    parallel_games: Optional[int] = None  # Games run in parallel, None for one at a time
    output_dir: str = "simulation_results"

    def __post_init__(self):
        if isinstance(self.player_a, dict):
            self.player_a = AgentConfig(**self.player_a)
        if isinstance(self.player_b, dict):
            self.player_b = AgentConfig(**self.player_b)
        if self.games < 1:
            raise ValueError("games must be at least 1")
        if self.max_moves < 1:
            raise ValueError("max_moves must be at least 1")
        if self.parallel_games and self.parallel_games > 1:
            # Pool workers are daemonic and cannot start a search pool of their own
            for agent in (self.player_a, self.player_b):
                if agent.parallel_processes and agent.parallel_processes > 1:
                    raise ValueError("parallel_processes cannot be combined with parallel_games")


def get_config_path(config_path: str = "simulation_config.json") -> str:
    """
    Get the absolute path to the configuration file.

    Args:
        config_path: Relative or absolute path to the configuration file

    Returns:
        Absolute path to the configuration file
    """
    if os.path.isabs(config_path):
        return config_path

    # Try relative to current directory
    if os.path.exists(config_path):
        return os.path.abspath(config_path)

    # Default to the simulation directory
    sim_dir = os.path.dirname(os.path.abspath(__file__))
    return os.path.join(sim_dir, config_path)

def load_config(config_path: str = "simulation_config.json") -> SimulationConfig:
    """
    Load configuration from a JSON file, creating a default one if it is missing.

    Args:
        config_path: Path to the configuration file

    Returns:
        SimulationConfig object

    Raises:
        ValueError: If the file holds unknown keys or invalid values
    """
    config_path = get_config_path(config_path)

    if not os.path.exists(config_path):
        print(f"Config file {config_path} not found. Creating default configuration...")
        default_config = SimulationConfig()
        save_config(default_config, config_path)
        print(f"Created default config at {config_path}")
        return default_config

    with open(config_path, 'r') as f:
        config_dict = json.load(f)

    try:
        return SimulationConfig(**config_dict)
    except TypeError as e:
        raise ValueError(f"Invalid simulation config {config_path}: {e}")

def save_config(config: SimulationConfig, config_path: str = "simulation_config.json"):
    """
    Save configuration to a JSON file.

    Args:
        config: SimulationConfig object
        config_path: Path to save the configuration file
    """
    config_path = get_config_path(config_path)

    config_dict = {k: v for k, v in asdict(config).items() if v is not None}
    config_dict['player_a'] = config.player_a.to_dict()
    config_dict['player_b'] = config.player_b.to_dict()

    # Create directory if it doesn't exist
    os.makedirs(os.path.dirname(os.path.abspath(config_path)), exist_ok=True)

    with open(config_path, 'w') as f:
        json.dump(config_dict, f, indent=2)
