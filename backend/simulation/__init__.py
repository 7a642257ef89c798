"""
Quoridor AI Simulation Package

This package provides tools for running batches of games
between different AI agent configurations and analyzing the results.
"""

from .game_runner import GameRunner
from .simulation_controller import SimulationController

__all__ = ["GameRunner", "SimulationController"]
