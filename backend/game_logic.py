from typing import List, Optional

from models.board import (
    Board, Direction, Move, MovePiece, PiecePosition, PlaceWall, Player,
    WallOrientation, WallPosition, PIECE_GRID_HEIGHT, PIECE_GRID_WIDTH,
    WALL_GRID_HEIGHT, WALL_GRID_WIDTH,
)


def is_wall_slot_in_bounds(x, y):
    """Check if coordinates are within the 8x8 wall-slot grid."""
    return 0 <= x < WALL_GRID_WIDTH and 0 <= y < WALL_GRID_HEIGHT

def is_move_direction_legal(board: Board, position: PiecePosition, direction: Direction) -> bool:
    """
    Check if a single step from `position` in `direction` stays on the board
    and is not blocked by a wall.

    An edge between two cells is guarded by the two wall slots that share
    its line, one on each side of it.
    """
    x, y = position.x, position.y
    if direction == Direction.UP:
        return (
            y > 0 and
            not board.wall_at(WallOrientation.HORIZONTAL, x - 1, y - 1) and
            not board.wall_at(WallOrientation.HORIZONTAL, x, y - 1)
        )
    if direction == Direction.DOWN:
        return (
            y < PIECE_GRID_HEIGHT - 1 and
            not board.wall_at(WallOrientation.HORIZONTAL, x - 1, y) and
            not board.wall_at(WallOrientation.HORIZONTAL, x, y)
        )
    if direction == Direction.LEFT:
        return (
            x > 0 and
            not board.wall_at(WallOrientation.VERTICAL, x - 1, y) and
            not board.wall_at(WallOrientation.VERTICAL, x - 1, y - 1)
        )
    # RIGHT
    return (
        x < PIECE_GRID_WIDTH - 1 and
        not board.wall_at(WallOrientation.VERTICAL, x, y) and
        not board.wall_at(WallOrientation.VERTICAL, x, y - 1)
    )

def new_position_after_direction(position: PiecePosition, direction: Direction) -> PiecePosition:
    dx, dy = direction.offset
    return PiecePosition(position.x + dx, position.y + dy)

def new_position_after_move(position: PiecePosition, move: MovePiece,
                            opponent_position: PiecePosition) -> PiecePosition:
    """Where a piece lands: a plain step, or a jump over the opponent."""
    new_position = new_position_after_direction(position, move.direction)
    if new_position == opponent_position:
        return new_position_after_direction(opponent_position, move.direction_on_collision)
    return new_position

def is_piece_move_legal(board: Board, player: Player, position: PiecePosition, move: MovePiece) -> bool:
    """
    Check a piece move for `player` as if it stood on `position`.

    When the first step lands on the opponent the move is legal only if the
    second step, taken from the opponent's cell, is legal as well.
    """
    if not is_move_direction_legal(board, position, move.direction):
        return False
    new_position = new_position_after_direction(position, move.direction)
    if new_position == board.player_position(player.opponent):
        return is_move_direction_legal(board, new_position, move.direction_on_collision)
    return True

def room_for_wall_placement(board: Board, orientation: WallOrientation, x: int, y: int) -> bool:
    """
    Check that a wall fits in slot (x, y): the slot is on the grid, it does not
    cross a perpendicular wall, and no wall of the same orientation overlaps
    it from the slot itself or either neighbour along its length.
    """
    if not is_wall_slot_in_bounds(x, y):
        return False
    if orientation == WallOrientation.HORIZONTAL:
        offsets = [(-1, 0), (0, 0), (1, 0)]
    else:
        offsets = [(0, -1), (0, 0), (0, 1)]
    if any(board.wall_at(orientation, x + dx, y + dy) for dx, dy in offsets):
        return False
    return not board.wall_at(orientation.other, x, y)

def is_wall_move_legal(state, player: Player, orientation: WallOrientation, position: WallPosition) -> bool:
    """
    Check a wall placement: the player has a wall left, there is room for it,
    and after placing it both players can still reach their goal row.
    """
    from a_star import a_star

    if state.walls_left[player.index] <= 0:
        return False
    if not room_for_wall_placement(state.board, orientation, position.x, position.y):
        return False

    board_copy = state.board.clone()
    board_copy.place_wall(orientation, position)
    return a_star(board_copy, player) is not None and a_star(board_copy, player.opponent) is not None

def is_move_legal(state, player: Player, move: Move) -> bool:
    """Check any move for `player` from its current position."""
    if isinstance(move, MovePiece):
        return is_piece_move_legal(state.board, player, state.board.player_position(player), move)
    if isinstance(move, PlaceWall):
        return is_wall_move_legal(state, player, move.orientation, move.position)
    return False

def execute_move(state, player: Player, move: Move) -> None:
    """
    Apply a move and hand the turn to the opponent.

    No legality check happens here; callers validate first.
    """
    if isinstance(move, PlaceWall):
        state.board.place_wall(move.orientation, move.position)
        state.walls_left[player.index] -= 1
    else:
        new_position = new_position_after_move(
            state.board.player_position(player),
            move,
            state.board.player_position(player.opponent),
        )
        state.board.set_player_position(player, new_position)
    state.turn = player.opponent

def get_piece_moves(board: Board, player: Player) -> List[MovePiece]:
    """
    Get the legal piece moves for a player, one per distinct intent.

    A non-colliding step is listed once (collision direction equal to the
    step); a step onto the opponent is listed with every legal follow-up.
    """
    position = board.player_position(player)
    opponent_position = board.player_position(player.opponent)
    moves = []
    for direction in Direction:
        if not is_move_direction_legal(board, position, direction):
            continue
        if new_position_after_direction(position, direction) == opponent_position:
            for on_collision in Direction:
                move = MovePiece(direction, on_collision)
                if is_piece_move_legal(board, player, position, move):
                    moves.append(move)
        else:
            moves.append(MovePiece(direction, direction))
    return moves

def get_wall_moves(state, player: Player) -> List[PlaceWall]:
    """Get every legal wall placement, slot by slot."""
    if state.walls_left[player.index] <= 0:
        return []
    moves = []
    for x in range(WALL_GRID_WIDTH):
        for y in range(WALL_GRID_HEIGHT):
            for orientation in WallOrientation:
                if is_wall_move_legal(state, player, orientation, WallPosition(x, y)):
                    moves.append(PlaceWall(orientation, WallPosition(x, y)))
    return moves

def get_all_possible_moves(state, player: Player) -> List[Move]:
    """Get all possible moves for a player: piece moves first, then walls."""
    return get_piece_moves(state.board, player) + get_wall_moves(state, player)

def get_winner(board: Board) -> Optional[Player]:
    """Return the player standing on their goal row, if any."""
    for player in Player:
        if board.player_position(player).y == player.goal_row:
            return player
    return None
