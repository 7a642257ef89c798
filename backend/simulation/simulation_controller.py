import os
import csv
import json
import logging
import time
from typing import Dict, List, Tuple
from datetime import datetime
import multiprocessing as mp

from .config import AgentConfig, SimulationConfig
from .game_runner import GameRunner

logger = logging.getLogger(__name__)


class SimulationController:
    """
    Manages running multiple games between two agent configurations and saving results.
    """

    def __init__(self, output_dir: str = "simulation_results"):
        """
        Initialize the simulation controller.

        Args:
            output_dir: Directory to save results
        """
        self.output_dir = output_dir
        os.makedirs(output_dir, exist_ok=True)

        # CSV headers
        self.csv_headers = [
            "game_id", "winner", "winner_config", "reason", "moves", "game_duration",
            "avg_a_move_time", "avg_b_move_time", "a_walls_used", "b_walls_used",
            "move_history", "a_config", "b_config"
        ]

    @staticmethod
    def _run_game_wrapper(args: Tuple[AgentConfig, AgentConfig, int]) -> Dict:
        """
        Wrapper function to run a single game for multiprocessing.

        Args:
            args: Tuple containing (a_config, b_config, max_moves)

        Returns:
            Game result dictionary
        """
        a_config, b_config, max_moves = args
        return GameRunner(a_config, b_config, max_moves).run_game()

    def _build_tasks(self, config: SimulationConfig) -> List[Tuple[AgentConfig, AgentConfig, int]]:
        """One task per game; with swap_sides every other game gives player_a's config to B."""
        tasks = []
        for i in range(config.games):
            if config.swap_sides and i % 2 == 1:
                tasks.append((config.player_b, config.player_a, config.max_moves))
            else:
                tasks.append((config.player_a, config.player_b, config.max_moves))
        return tasks

    def _result_to_row(self, result: Dict) -> Dict:
        row = {key: result.get(key) for key in self.csv_headers}
        row["a_config"] = json.dumps(result["a_config"], sort_keys=True)
        row["b_config"] = json.dumps(result["b_config"], sort_keys=True)
        if result["winner"] == "A":
            row["winner_config"] = row["a_config"]
        elif result["winner"] == "B":
            row["winner_config"] = row["b_config"]
        else:
            row["winner_config"] = ""
        return row

    def run_simulation(self, config: SimulationConfig, output_file: str = None) -> str:
        """
        Play `config.games` games and append one CSV row per game.

        Args:
            config: Simulation configuration
            output_file: Optional CSV file name inside the output directory

        Returns:
            Path to the CSV file with results
        """
        if output_file is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            output_file = f"simulation_{timestamp}.csv"
        output_path = os.path.join(self.output_dir, output_file)

        tasks = self._build_tasks(config)
        logger.info(f"Running {len(tasks)} games: A={config.player_a.to_dict()} B={config.player_b.to_dict()}")

        file_exists = os.path.exists(output_path)
        start_time = time.time()
        games_saved = 0

        with open(output_path, 'a' if file_exists else 'w', newline='') as csvfile:
            writer = csv.DictWriter(csvfile, fieldnames=self.csv_headers)
            if not file_exists:
                writer.writeheader()

            if config.parallel_games and config.parallel_games > 1:
                with mp.Pool(processes=config.parallel_games) as pool:
                    results = pool.imap_unordered(self._run_game_wrapper, tasks)
                    for result in results:
                        writer.writerow(self._result_to_row(result))
                        csvfile.flush()
                        games_saved += 1
                        logger.info(f"Game {games_saved}/{len(tasks)}: winner {result['winner']} "
                                    f"({result['reason']}, {result['moves']} moves)")
            else:
                for task in tasks:
                    result = self._run_game_wrapper(task)
                    writer.writerow(self._result_to_row(result))
                    csvfile.flush()
                    games_saved += 1
                    logger.info(f"Game {games_saved}/{len(tasks)}: winner {result['winner']} "
                                f"({result['reason']}, {result['moves']} moves)")

        logger.info(f"Saved {games_saved} games to {output_path} in {time.time() - start_time:.2f}s")
        return output_path
