"""
Text notation for moves and a box-drawing board renderer, used for logs and
the simulation move history.

Notation:
    m<d>[<c>]   move a piece, d and c in u/d/l/r; c is the direction taken
                after landing on the opponent and defaults to d
    h<x><y>     horizontal wall in slot (x, y)
    v<x><y>     vertical wall in slot (x, y)
"""
from typing import Optional

from models.board import (
    Board, Direction, Move, MovePiece, PlaceWall, Player, WallOrientation, WallPosition,
    PIECE_GRID_HEIGHT, PIECE_GRID_WIDTH, WALL_GRID_HEIGHT, WALL_GRID_WIDTH,
)


def format_move(move: Move) -> str:
    if isinstance(move, PlaceWall):
        return f"{move.orientation.value}{move.position.x}{move.position.y}"
    if move.direction_on_collision == move.direction:
        return f"m{move.direction.value}"
    return f"m{move.direction.value}{move.direction_on_collision.value}"

def parse_move(text: str) -> Optional[Move]:
    """Parse move notation. Returns None for anything that is not a move."""
    text = text.strip().lower()
    if not text:
        return None

    directions = {d.value: d for d in Direction}
    if text[0] == "m":
        if len(text) not in (2, 3) or any(c not in directions for c in text[1:]):
            return None
        direction = directions[text[1]]
        on_collision = directions[text[2]] if len(text) == 3 else direction
        return MovePiece(direction, on_collision)

    orientations = {o.value: o for o in WallOrientation}
    if text[0] in orientations:
        if len(text) != 3 or not text[1:].isdigit():
            return None
        return PlaceWall(orientations[text[0]], WallPosition(int(text[1]), int(text[2])))
    return None

def render_board(board: Board) -> str:
    """Draw the board: cells as boxes, pieces as A/B, walls as lines, free slots by index."""
    lines = []
    for y in range(PIECE_GRID_HEIGHT):
        def vertical_wall(x):
            above = x < WALL_GRID_WIDTH and y > 0 and board.walls[x][y - 1] == WallOrientation.VERTICAL
            below = x < WALL_GRID_WIDTH and y < WALL_GRID_HEIGHT and board.walls[x][y] == WallOrientation.VERTICAL
            return "│" if above or below else " "

        top, middle, bottom = "", "", ""
        for x in range(PIECE_GRID_WIDTH):
            piece = " "
            for player in Player:
                position = board.player_position(player)
                if position.x == x and position.y == y:
                    piece = player.name
            top += f"┌───┐ {vertical_wall(x)} "
            middle += f"│ {piece} │ {vertical_wall(x)} "
            bottom += f"└───┘ {vertical_wall(x)} "
        lines.extend([top, middle, bottom])

        if y < WALL_GRID_HEIGHT:
            gap = ""
            for x in range(PIECE_GRID_WIDTH):
                wall_right = x < WALL_GRID_WIDTH and board.walls[x][y] == WallOrientation.HORIZONTAL
                wall_left = 0 < x and board.walls[x - 1][y] == WallOrientation.HORIZONTAL
                vertical = x < WALL_GRID_WIDTH and board.walls[x][y] == WallOrientation.VERTICAL
                centre = "│" if vertical else " "
                label_x, label_y = (str(x), str(y)) if x < WALL_GRID_WIDTH and not vertical else (" ", " ")
                if wall_right:
                    gap += "────────"
                elif wall_left:
                    gap += f"─────{label_x}{centre}{label_y}"
                else:
                    gap += f"     {label_x}{centre}{label_y}"
            lines.append(gap)
    return "\n".join(lines)
