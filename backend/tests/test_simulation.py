#!/usr/bin/env python3
import sys
import os
import json
import shutil
import tempfile
import unittest

import pandas as pd

# Add parent directory to path to make imports work in test
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from simulation.config import AgentConfig, SimulationConfig, load_config, save_config
from simulation.game_runner import GameRunner
from simulation.simulation_controller import SimulationController
from simulation.analysis import calculate_confidence_interval, summarize_results
from simulation.run_simulation import apply_overrides, parse_args
from notation import parse_move


class TestConfig(unittest.TestCase):

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def test_load_creates_default(self):
        path = os.path.join(self.temp_dir, "simulation_config.json")
        config = load_config(path)
        self.assertTrue(os.path.exists(path))
        self.assertEqual(config.player_a.algorithm, "minimax")
        self.assertEqual(config.player_b.algorithm, "random")

    def test_save_and_load(self):
        path = os.path.join(self.temp_dir, "config.json")
        config = SimulationConfig(player_a=AgentConfig(max_depth=3, randomize=False), games=4, parallel_games=2)
        save_config(config, path)
        loaded = load_config(path)
        self.assertEqual(loaded, config)

    def test_invalid_values(self):
        with self.assertRaises(ValueError):
            AgentConfig(algorithm="mcts")
        with self.assertRaises(ValueError):
            AgentConfig(max_depth=0)
        with self.assertRaises(ValueError):
            SimulationConfig(games=0)

    def test_unknown_key(self):
        path = os.path.join(self.temp_dir, "config.json")
        with open(path, 'w') as f:
            json.dump({"games": 3, "tiger_config": {}}, f)
        with self.assertRaises(ValueError):
            load_config(path)

    def test_command_line_overrides(self):
        config = SimulationConfig()
        args = parse_args(["--player-b", "minimax", "--depth-b", "1", "--games", "6",
                           "--end-after-moves", "40", "--parallel", "3"])
        updated = apply_overrides(config, args)
        self.assertEqual(updated.player_b, AgentConfig(algorithm="minimax", max_depth=1))
        self.assertEqual(updated.player_a, config.player_a)
        self.assertEqual(updated.games, 6)
        self.assertEqual(updated.max_moves, 40)
        self.assertEqual(updated.parallel_games, 3)
        self.assertEqual(config.games, 10)

    def test_parallel_search_inside_parallel_games(self):
        with self.assertRaises(ValueError):
            SimulationConfig(player_a=AgentConfig(max_depth=1, parallel_processes=2),
                             player_b=AgentConfig(algorithm="random"), games=2, max_moves=4, parallel_games=2)
        with self.assertRaises(ValueError):
            SimulationConfig(player_b=AgentConfig(parallel_processes=4), parallel_games=3)
        # Either kind of parallelism on its own is fine
        SimulationConfig(player_a=AgentConfig(parallel_processes=2))
        SimulationConfig(player_a=AgentConfig(parallel_processes=2), parallel_games=1)
        SimulationConfig(parallel_games=2)

    def test_command_line_cannot_combine_parallelism(self):
        config = SimulationConfig(player_a=AgentConfig(parallel_processes=2))
        with self.assertRaises(ValueError):
            apply_overrides(config, parse_args(["--parallel", "2"]))


class TestGameRunner(unittest.TestCase):

    def test_random_game(self):
        runner = GameRunner(AgentConfig(algorithm="random"), AgentConfig(algorithm="random"), max_moves=20)
        result = runner.run_game()

        self.assertIn(result["winner"], ("A", "B", "DRAW"))
        self.assertLessEqual(result["moves"], 20)
        if result["winner"] == "DRAW":
            self.assertEqual(result["reason"], "MOVE_LIMIT")
            self.assertEqual(result["moves"], 20)
        history = result["move_history"].split(",")
        self.assertEqual(len(history), result["moves"])
        self.assertTrue(all(parse_move(move) is not None for move in history))
        self.assertEqual(result["a_walls_used"], sum(1 for move in history[0::2] if move[0] in "hv"))

    def test_minimax_against_random(self):
        runner = GameRunner(AgentConfig(algorithm="minimax", max_depth=1, randomize=False),
                            AgentConfig(algorithm="random"), max_moves=30)
        result = runner.run_game()
        self.assertIn(result["winner"], ("A", "B", "DRAW"))
        self.assertIn(result["reason"], ("STANDARD", "MOVE_LIMIT"))
        self.assertLessEqual(result["moves"], 30)
        self.assertEqual(result["a_config"]["algorithm"], "minimax")
        self.assertGreater(result["avg_a_move_time"], 0)


class TestSimulationController(unittest.TestCase):

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def test_run_simulation_writes_csv(self):
        config = SimulationConfig(
            player_a=AgentConfig(algorithm="random", max_depth=1),
            player_b=AgentConfig(algorithm="random", max_depth=2),
            games=4,
            max_moves=10,
        )
        controller = SimulationController(output_dir=self.temp_dir)
        path = controller.run_simulation(config, output_file="results.csv")

        df = pd.read_csv(path, keep_default_na=False)
        self.assertEqual(len(df), 4)
        self.assertEqual(list(df.columns), controller.csv_headers)
        # Sides alternate
        self.assertEqual(json.loads(df['a_config'][0])['max_depth'], 1)
        self.assertEqual(json.loads(df['a_config'][1])['max_depth'], 2)

        summary = summarize_results(path)
        self.assertEqual(len(summary), 2)
        self.assertEqual(sum(entry['games'] for entry in summary), 8)
        for entry in summary:
            low, high = entry['win_rate_ci']
            self.assertLessEqual(low, entry['win_rate'] + 1e-9)
            self.assertGreaterEqual(high, entry['win_rate'] - 1e-9)

    def test_results_append(self):
        config = SimulationConfig(
            player_a=AgentConfig(algorithm="random"),
            player_b=AgentConfig(algorithm="random"),
            games=1,
            max_moves=4,
        )
        controller = SimulationController(output_dir=self.temp_dir)
        controller.run_simulation(config, output_file="results.csv")
        path = controller.run_simulation(config, output_file="results.csv")
        self.assertEqual(len(pd.read_csv(path)), 2)


class TestAnalysis(unittest.TestCase):

    def test_wilson_interval(self):
        self.assertEqual(calculate_confidence_interval(0, 0), (0.0, 0.0))
        low, high = calculate_confidence_interval(5, 10)
        self.assertAlmostEqual(low, 0.2366, places=3)
        self.assertAlmostEqual(high, 0.7634, places=3)
        low, high = calculate_confidence_interval(10, 10)
        self.assertLess(low, 1.0)
        self.assertAlmostEqual(high, 1.0)


if __name__ == '__main__':
    unittest.main()
