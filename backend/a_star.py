import heapq
import itertools
from typing import Dict, List, Optional

from models.board import Board, Direction, PiecePosition, Player
from game_logic import is_move_direction_legal, new_position_after_direction


def heuristic(position: PiecePosition, player: Player) -> int:
    """Rows left between `position` and the player's goal row."""
    return abs(player.goal_row - position.y)

def a_star(board: Board, player: Player) -> Optional[List[PiecePosition]]:
    """
    Shortest path for `player` to any cell of its goal row.

    Moves are the legal piece moves at each visited cell, including jumps over
    the opponent, whose position stays fixed for the whole search.

    Returns:
        The cells visited after the start, ending on the goal row. An empty
        list if the player already stands on its goal row, None if the goal
        row cannot be reached.
    """
    start = board.player_position(player)
    counter = itertools.count()
    g_score: Dict[PiecePosition, int] = {start: 0}
    came_from: Dict[PiecePosition, PiecePosition] = {}

    open_heap = [(heuristic(start, player), next(counter), 0, start)]

    while open_heap:
        _, _, g, current = heapq.heappop(open_heap)
        if g > g_score[current]:
            # Superseded by a cheaper entry for the same cell
            continue

        if heuristic(current, player) == 0:
            return reconstruct_path(came_from, current)

        for neighbor in neighbors(board, player, current):
            tentative_g = g + 1
            if tentative_g < g_score.get(neighbor, float('inf')):
                came_from[neighbor] = current
                g_score[neighbor] = tentative_g
                heapq.heappush(open_heap, (tentative_g + heuristic(neighbor, player), next(counter), tentative_g, neighbor))

    return None

def reconstruct_path(came_from: Dict[PiecePosition, PiecePosition], current: PiecePosition) -> List[PiecePosition]:
    total_path = []
    while current in came_from:
        total_path.append(current)
        current = came_from[current]
    total_path.reverse()
    return total_path

def neighbors(board: Board, player: Player, position: PiecePosition) -> List[PiecePosition]:
    """
    Every cell reachable from `position` with one legal piece move.

    Same cells as filtering all 16 MovePiece combinations through
    is_piece_move_legal, without re-testing the first step four times.
    """
    opponent_position = board.player_position(player.opponent)
    result = []
    for direction in Direction:
        if not is_move_direction_legal(board, position, direction):
            continue
        step = new_position_after_direction(position, direction)
        if step != opponent_position:
            result.append(step)
            continue
        for on_collision in Direction:
            if is_move_direction_legal(board, step, on_collision):
                landing = new_position_after_direction(step, on_collision)
                if landing not in result:
                    result.append(landing)
    return result

def path_length(board: Board, player: Player) -> Optional[int]:
    """Number of moves the player needs to reach its goal row, or None."""
    path = a_star(board, player)
    return None if path is None else len(path)

def has_path(board: Board, player: Player) -> bool:
    return a_star(board, player) is not None
