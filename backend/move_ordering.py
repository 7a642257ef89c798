"""
Move ordering for the alpha-beta search.

Moves that are likely to matter come first: stepping toward (or jumping over)
the opponent, then the other steps, then walls in widening rings around the
opponent's cell. Ordering never adds or drops a move; the result holds exactly
the legal moves of the position.
"""
from typing import List

from models.board import Direction, Move, MovePiece, PlaceWall, Player, WallOrientation, WallPosition
from game_logic import (
    is_move_direction_legal, is_piece_move_legal, is_wall_move_legal,
    is_wall_slot_in_bounds, new_position_after_direction,
)
from square_outline import square_outline


def _directions_toward(dx: int, dy: int) -> List[Direction]:
    """Directions that shrink the Manhattan distance to the opponent, longer axis first."""
    horizontal = Direction.RIGHT if dx > 0 else Direction.LEFT
    vertical = Direction.DOWN if dy > 0 else Direction.UP
    toward = []
    if abs(dy) >= abs(dx):
        if dy != 0:
            toward.append(vertical)
        if dx != 0:
            toward.append(horizontal)
    else:
        toward.append(horizontal)
        if dy != 0:
            toward.append(vertical)
    return toward

def _collision_directions(direction: Direction) -> List[Direction]:
    """Follow-ups for a jump: straight on, the two sidesteps, then back."""
    sidesteps = [d for d in Direction if d.is_vertical != direction.is_vertical]
    return [direction] + sidesteps + [direction.opposite]

def ordered_piece_moves(state, player: Player) -> List[MovePiece]:
    board = state.board
    position = board.player_position(player)
    opponent_position = board.player_position(player.opponent)

    toward = _directions_toward(opponent_position.x - position.x, opponent_position.y - position.y)
    directions = toward + [d for d in Direction if d not in toward]

    moves = []
    for direction in directions:
        if not is_move_direction_legal(board, position, direction):
            continue
        if new_position_after_direction(position, direction) == opponent_position:
            for on_collision in _collision_directions(direction):
                move = MovePiece(direction, on_collision)
                if is_piece_move_legal(board, player, position, move):
                    moves.append(move)
        else:
            moves.append(MovePiece(direction, direction))
    return moves

def ordered_wall_moves(state, player: Player) -> List[PlaceWall]:
    """
    Wall placements ring by ring around the opponent. Ring r is the outline
    of the 2r x 2r block of slots centred on the opponent's cell; the walk
    stops at the first ring with no slot on the grid, since every later ring
    lies outside it too.
    """
    if state.walls_left[player.index] <= 0:
        return []
    center = state.board.player_position(player.opponent)

    moves = []
    radius = 1
    while True:
        slots = [
            (x, y) for x, y in square_outline(center.x - radius, center.y - radius, 2 * radius)
            if is_wall_slot_in_bounds(x, y)
        ]
        if not slots:
            break
        for x, y in slots:
            for orientation in WallOrientation:
                if is_wall_move_legal(state, player, orientation, WallPosition(x, y)):
                    moves.append(PlaceWall(orientation, WallPosition(x, y)))
        radius += 1
    return moves

def get_ordered_moves(state, player: Player) -> List[Move]:
    """All legal moves for `player`, most promising first."""
    return ordered_piece_moves(state, player) + ordered_wall_moves(state, player)
