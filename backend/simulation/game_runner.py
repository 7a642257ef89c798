from typing import Dict, Any
import logging
import time
import uuid
import sys
import os

# Add the parent directory to the path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from models.board import Player, INITIAL_WALLS
from models.game_state import GameState
from models.minimax_agent import MinimaxAgent
from models.random_agent import RandomAgent
from notation import format_move, render_board
from simulation.config import AgentConfig

logger = logging.getLogger(__name__)


class GameRunner:
    """
    Runs a single game between two AI agents and captures the results.
    A game ends when a piece reaches its goal row, when the side to move
    concedes (its search found no viable move), or at the move limit.
    """

    def __init__(self, a_config: AgentConfig, b_config: AgentConfig, max_moves: int = 200):
        """
        Initialize a game runner with agent configurations.

        Args:
            a_config: Configuration for the agent playing A (moves first)
            b_config: Configuration for the agent playing B
            max_moves: Number of moves after which the game is called a draw
        """
        self.a_config = a_config
        self.b_config = b_config
        self.max_moves = max_moves
        self.game_id = str(uuid.uuid4())
        self.move_history = []

    def _create_agent(self, config: AgentConfig) -> Any:
        """
        Create an agent based on configuration.

        Args:
            config: Agent configuration

        Returns:
            An instance of the appropriate agent class
        """
        if config.algorithm == 'minimax':
            return MinimaxAgent(
                max_depth=config.max_depth,
                randomize_equal_moves=config.randomize,
                parallel_processes=config.parallel_processes,
            )
        elif config.algorithm == 'random':
            return RandomAgent()
        else:
            raise ValueError(f"Unknown algorithm: {config.algorithm}")

    def run_game(self) -> Dict:
        """
        Run a complete game and return statistics.

        Returns:
            Dict containing game statistics
        """
        state = GameState()
        agents = {
            Player.A: self._create_agent(self.a_config),
            Player.B: self._create_agent(self.b_config),
        }
        move_times = {Player.A: [], Player.B: []}

        start_time = time.time()
        winner = None
        reason = "MOVE_LIMIT"

        while len(self.move_history) < self.max_moves:
            if state.is_terminal():
                winner = state.get_winner()
                reason = "STANDARD"
                break

            player = state.turn
            move_start = time.time()
            move = agents[player].get_move(state)
            move_times[player].append(time.time() - move_start)

            if move is None:
                logger.info(f"Game {self.game_id}: player {player} concedes after {len(self.move_history)} moves")
                winner = player.opponent
                reason = "CONCESSION"
                break

            self.move_history.append(format_move(move))
            state.apply_move(move)
        else:
            if state.is_terminal():
                winner = state.get_winner()
                reason = "STANDARD"

        logger.debug(f"Final position of game {self.game_id}:\n{render_board(state.board)}")

        return {
            "game_id": self.game_id,
            "a_config": self.a_config.to_dict(),
            "b_config": self.b_config.to_dict(),
            "winner": winner.name if winner is not None else "DRAW",
            "reason": reason,
            "moves": len(self.move_history),
            "game_duration": time.time() - start_time,
            "avg_a_move_time": sum(move_times[Player.A]) / len(move_times[Player.A]) if move_times[Player.A] else 0,
            "avg_b_move_time": sum(move_times[Player.B]) / len(move_times[Player.B]) if move_times[Player.B] else 0,
            "a_walls_used": INITIAL_WALLS - state.walls_left[Player.A.index],
            "b_walls_used": INITIAL_WALLS - state.walls_left[Player.B.index],
            "move_history": ",".join(self.move_history),
        }
