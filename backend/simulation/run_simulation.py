#!/usr/bin/env python3
"""
Run a batch of games between two agent configurations.

Settings come from the JSON config file; command line options override it.
Results are written as CSV to the output directory and summarized at the end.
"""

import os
import sys
import argparse
import logging
from dataclasses import replace
from datetime import datetime

# Add parent directory to path to make imports work
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from simulation.simulation_controller import SimulationController
from simulation.config import load_config, SimulationConfig
from simulation.analysis import print_summary


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description='Run games between two Quoridor agents')
    parser.add_argument('--config', type=str, default='simulation_config.json',
                        help='Path to simulation configuration file')
    parser.add_argument('--player-a', type=str, choices=['minimax', 'random'], default=None,
                        help='Algorithm for the first configuration')
    parser.add_argument('--player-b', type=str, choices=['minimax', 'random'], default=None,
                        help='Algorithm for the second configuration')
    parser.add_argument('--depth-a', type=int, default=None,
                        help='Search depth for the first configuration')
    parser.add_argument('--depth-b', type=int, default=None,
                        help='Search depth for the second configuration')
    parser.add_argument('--games', type=int, default=None,
                        help='Number of games to play')
    parser.add_argument('--end-after-moves', type=int, default=None,
                        help='Call the game a draw after this many moves')
    parser.add_argument('--output-dir', type=str, default=None,
                        help='Directory to store results')
    parser.add_argument('--parallel', type=int, default=None,
                        help='Number of games to run in parallel')
    return parser.parse_args(argv)

def apply_overrides(config: SimulationConfig, args) -> SimulationConfig:
    """Return a copy of `config` with every option given on the command line applied."""
    player_a = config.player_a
    player_b = config.player_b
    if args.player_a is not None:
        player_a = replace(player_a, algorithm=args.player_a)
    if args.depth_a is not None:
        player_a = replace(player_a, max_depth=args.depth_a)
    if args.player_b is not None:
        player_b = replace(player_b, algorithm=args.player_b)
    if args.depth_b is not None:
        player_b = replace(player_b, max_depth=args.depth_b)

    overrides = {'player_a': player_a, 'player_b': player_b}
    if args.games is not None:
        overrides['games'] = args.games
    if args.end_after_moves is not None:
        overrides['max_moves'] = args.end_after_moves
    if args.output_dir is not None:
        overrides['output_dir'] = args.output_dir
    if args.parallel is not None:
        overrides['parallel_games'] = args.parallel
    return replace(config, **overrides)

def setup_logging(output_dir: str) -> logging.Logger:
    """Set up logging to file and console."""
    logger = logging.getLogger()
    logger.setLevel(logging.INFO)

    # Clear any existing handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    os.makedirs(output_dir, exist_ok=True)
    log_file = os.path.join(output_dir, "simulation.log")

    file_handler = logging.FileHandler(log_file, mode='a')
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(logging.Formatter('%(levelname)s - %(message)s'))

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    # Separator to distinguish runs
    with open(log_file, 'a') as f:
        f.write("\n\n" + "=" * 80 + "\n")
        f.write(f"SIMULATION RUN STARTED AT {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")
        f.write("=" * 80 + "\n\n")

    return logger

def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    try:
        config = apply_overrides(load_config(args.config), args)
    except ValueError as e:
        print(f"Invalid configuration: {e}")
        return 1

    logger = setup_logging(config.output_dir)
    logger.info(f"Starting {config.games} games at {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")

    controller = SimulationController(output_dir=config.output_dir)
    results_file = controller.run_simulation(config)

    print_summary(results_file)
    return 0

if __name__ == "__main__":
    sys.exit(main())
