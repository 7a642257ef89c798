from typing import List, Optional, Tuple
import logging
import multiprocessing
import random
import time

from models.board import Move, Player
from models.game_state import GameState
from game_logic import execute_move
from move_ordering import get_ordered_moves
from a_star import path_length

logger = logging.getLogger(__name__)

LOSING_SCORE = -1000000
WINNING_SCORE = -LOSING_SCORE

PathLengths = Tuple[int, int]


def compute_path_lengths(state: GameState) -> Optional[PathLengths]:
    """Shortest path length for both players, or None if either one is sealed off."""
    lengths = []
    for player in Player:
        length = path_length(state.board, player)
        if length is None:
            return None
        lengths.append(length)
    return lengths[0], lengths[1]

def heuristic_board_score(state: GameState, player: Player, path_lengths: Optional[PathLengths] = None) -> int:
    """
    Static evaluation from `player`'s point of view:
    opponent distance - own distance + own walls left - opponent walls left.

    A side standing on its goal row short-circuits to a sentinel.
    """
    if path_lengths is None:
        path_lengths = compute_path_lengths(state)
        if path_lengths is None:
            raise ValueError("Cannot evaluate a position where a player has no path to goal")
    opponent = player.opponent
    opponent_distance = path_lengths[opponent.index]
    if opponent_distance == 0:
        return LOSING_SCORE
    player_distance = path_lengths[player.index]
    if player_distance == 0:
        return WINNING_SCORE
    return (
        opponent_distance - player_distance
        + state.walls_left[player.index] - state.walls_left[opponent.index]
    )

def _orient(score: int, player: Player) -> int:
    """Switch a score between `player`'s view and player A's (the maximizer's) frame."""
    return score if player == Player.A else -score

def _search_root_child(args):
    """Worker for parallel root search: score one root move with a full window."""
    state, player, move, depth = args
    agent = MinimaxAgent(max_depth=depth)
    child = state.clone()
    execute_move(child, player, move)
    path_lengths = compute_path_lengths(child)
    if path_lengths is None:
        return None, agent.nodes_visited, 1
    value = agent.alpha_beta(child, depth - 1, LOSING_SCORE, WINNING_SCORE, player.opponent, path_lengths)
    return value, agent.nodes_visited, agent.dead_branches


class MinimaxAgent:
    """
    Minimax agent with alpha-beta pruning for Quoridor.

    Player A maximizes and player B minimizes, whoever is at the root. Every
    child works on its own clone of the state.
    """

    def __init__(self, max_depth: int = 2, randomize_equal_moves: bool = False,
                 parallel_processes: Optional[int] = None, debug_mode: bool = False):
        self.max_depth = max_depth
        self.randomize_equal_moves = randomize_equal_moves
        self.parallel_processes = parallel_processes
        self.debug_mode = debug_mode
        self.best_move = None
        self.best_score = None

        # Search statistics, reset on every root search
        self.nodes_visited = 0
        self.dead_branches = 0

    def get_move(self, state: GameState) -> Optional[Move]:
        """Get the best move for the player to move at `max_depth`. None means concede."""
        start_time = time.time()
        score, move = self.best_move_alpha_beta(state, state.turn, self.max_depth)
        self.best_score = score
        self.best_move = move

        if self.debug_mode:
            logger.debug(f"Player {state.turn} best move {move} score {score} "
                         f"({self.nodes_visited} nodes, {self.dead_branches} dead branches, "
                         f"{time.time() - start_time:.2f}s)")
        return move

    def best_move_alpha_beta(self, state: GameState, player: Player, depth: int) -> Tuple[int, Optional[Move]]:
        """
        Search `depth` plies for `player`.

        Returns:
            (score, move). The score is from `player`'s point of view. The move is
            None when depth is 0 or when no viable move exists, which callers
            treat as a concession.
        """
        self.nodes_visited = 0
        self.dead_branches = 0

        if depth == 0:
            return heuristic_board_score(state, player), None

        maximizing = player == Player.A
        moves = get_ordered_moves(state, player)

        if self.parallel_processes and self.parallel_processes > 1 and len(moves) > 1:
            move_values = self._score_root_moves_parallel(state, player, moves, depth)
        else:
            move_values = self._score_root_moves(state, player, moves, depth, maximizing)

        best_value = LOSING_SCORE if maximizing else WINNING_SCORE
        best_moves: List[Move] = []
        for move, value in move_values:
            if self.debug_mode:
                logger.debug(f"  {move}: {value}")
            better = value > best_value if maximizing else value < best_value
            if not best_moves or better:
                best_value = value
                best_moves = [move]
            elif value == best_value:
                best_moves.append(move)

        if not best_moves:
            return LOSING_SCORE, None

        if self.randomize_equal_moves and len(best_moves) > 1:
            best_move = random.choice(best_moves)
        else:
            # Keep the first one, i.e. the best according to move ordering
            best_move = best_moves[0]

        return _orient(best_value, player), best_move

    def _score_root_moves(self, state: GameState, player: Player, moves: List[Move], depth: int,
                          maximizing: bool) -> List[Tuple[Move, int]]:
        alpha = LOSING_SCORE
        beta = WINNING_SCORE
        move_values = []

        for move in moves:
            child = state.clone()
            execute_move(child, player, move)
            path_lengths = compute_path_lengths(child)
            if path_lengths is None:
                self.dead_branches += 1
                continue

            # One point of slack so that moves tying the best score come back exact
            slack = 1 if self.randomize_equal_moves else 0
            value = self.alpha_beta(child, depth - 1, alpha - slack if maximizing else alpha,
                                    beta if maximizing else beta + slack, player.opponent, path_lengths)
            move_values.append((move, value))

            if maximizing:
                alpha = max(alpha, value)
            else:
                beta = min(beta, value)

        return move_values

    def _score_root_moves_parallel(self, state: GameState, player: Player, moves: List[Move],
                                   depth: int) -> List[Tuple[Move, int]]:
        tasks = [(state, player, move, depth) for move in moves]
        with multiprocessing.Pool(processes=self.parallel_processes) as pool:
            results = pool.map(_search_root_child, tasks)

        move_values = []
        for move, (value, nodes, dead) in zip(moves, results):
            self.nodes_visited += nodes
            self.dead_branches += dead
            if value is not None:
                move_values.append((move, value))
        return move_values

    def alpha_beta(self, state: GameState, depth: int, alpha: int, beta: int, player: Player,
                   path_lengths: Optional[PathLengths] = None) -> int:
        """
        Alpha-beta search with `player` to move. Scores are in player A's frame.

        `path_lengths` are the already known distances of both players in
        `state`; the parent passes them along so they are not searched twice.
        """
        self.nodes_visited += 1
        if path_lengths is None:
            path_lengths = compute_path_lengths(state)
            if path_lengths is None:
                raise ValueError("alpha_beta called on a position where a player has no path to goal")

        # Leaf, or somebody already reached their goal row
        if depth == 0 or 0 in path_lengths:
            return _orient(heuristic_board_score(state, player, path_lengths), player)

        maximizing = player == Player.A
        value = LOSING_SCORE if maximizing else WINNING_SCORE

        for move in get_ordered_moves(state, player):
            child = state.clone()
            execute_move(child, player, move)
            child_path_lengths = compute_path_lengths(child)
            if child_path_lengths is None:
                self.dead_branches += 1
                continue

            child_value = self.alpha_beta(child, depth - 1, alpha, beta, player.opponent, child_path_lengths)

            if maximizing:
                value = max(value, child_value)
                if value >= beta:
                    break  # Beta cutoff
                alpha = max(alpha, value)
            else:
                value = min(value, child_value)
                if value <= alpha:
                    break  # Alpha cutoff
                beta = min(beta, value)

        return value


def best_move_alpha_beta(state: GameState, player: Player, depth: int) -> Tuple[int, Optional[Move]]:
    """Search entry point: (score from `player`'s view, best move or None)."""
    return MinimaxAgent(max_depth=depth).best_move_alpha_beta(state, player, depth)
