from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

PIECE_GRID_WIDTH = 9
PIECE_GRID_HEIGHT = 9
WALL_GRID_WIDTH = PIECE_GRID_WIDTH - 1
WALL_GRID_HEIGHT = PIECE_GRID_HEIGHT - 1
PLAYER_COUNT = 2
INITIAL_WALLS = 10


class Player(Enum):
    """The two sides. A starts at the top and races down, B the other way."""
    A = 0
    B = 1

    @property
    def index(self) -> int:
        return self.value

    @property
    def opponent(self) -> 'Player':
        return Player.B if self is Player.A else Player.A

    @property
    def goal_row(self) -> int:
        return PIECE_GRID_HEIGHT - 1 if self is Player.A else 0

    @property
    def start_position(self) -> 'PiecePosition':
        return PiecePosition(PIECE_GRID_WIDTH // 2, 0 if self is Player.A else PIECE_GRID_HEIGHT - 1)

    def __str__(self) -> str:
        return self.name


class Direction(Enum):
    UP = "u"
    DOWN = "d"
    LEFT = "l"
    RIGHT = "r"

    @property
    def offset(self) -> Tuple[int, int]:
        return _DIRECTION_OFFSETS[self]

    @property
    def opposite(self) -> 'Direction':
        return _OPPOSITE_DIRECTIONS[self]

    @property
    def is_vertical(self) -> bool:
        return self in (Direction.UP, Direction.DOWN)


_DIRECTION_OFFSETS = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}

_OPPOSITE_DIRECTIONS = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class WallOrientation(Enum):
    HORIZONTAL = "h"
    VERTICAL = "v"

    @property
    def other(self) -> 'WallOrientation':
        if self is WallOrientation.HORIZONTAL:
            return WallOrientation.VERTICAL
        return WallOrientation.HORIZONTAL


@dataclass(frozen=True)
class PiecePosition:
    x: int
    y: int

    def in_bounds(self) -> bool:
        return 0 <= self.x < PIECE_GRID_WIDTH and 0 <= self.y < PIECE_GRID_HEIGHT


@dataclass(frozen=True)
class WallPosition:
    x: int
    y: int


@dataclass(frozen=True)
class MovePiece:
    """
    Step one cell in `direction`. If that cell holds the opponent, the piece
    jumps and takes a second step in `direction_on_collision` from there.
    """
    direction: Direction
    direction_on_collision: Direction

    @staticmethod
    def all() -> List['MovePiece']:
        """All 16 direction / collision-direction combinations."""
        return [MovePiece(direction, on_collision) for direction in Direction for on_collision in Direction]

    def to_dict(self) -> Dict:
        return {
            "type": "move",
            "direction": self.direction.name,
            "direction_on_collision": self.direction_on_collision.name,
        }


@dataclass(frozen=True)
class PlaceWall:
    orientation: WallOrientation
    position: WallPosition

    def to_dict(self) -> Dict:
        return {
            "type": "wall",
            "orientation": self.orientation.name,
            "x": self.position.x,
            "y": self.position.y,
        }


Move = Union[MovePiece, PlaceWall]


def move_from_dict(data: Dict) -> Move:
    """Build a move from its JSON form. Raises ValueError on malformed input."""
    try:
        if data["type"] == "move":
            direction = Direction[data["direction"]]
            on_collision = Direction[data.get("direction_on_collision") or data["direction"]]
            return MovePiece(direction, on_collision)
        if data["type"] == "wall":
            return PlaceWall(WallOrientation[data["orientation"]], WallPosition(int(data["x"]), int(data["y"])))
    except (KeyError, TypeError) as e:
        raise ValueError(f"Malformed move {data}: {e}")
    raise ValueError(f"Unknown move type: {data.get('type')}")


class Board:
    """
    Piece positions plus the wall-slot grid.

    `walls[x][y]` is the slot whose top-left cell is (x, y). A horizontal wall
    there blocks vertical steps between rows y and y+1 for columns x and x+1;
    a vertical wall blocks horizontal steps between columns x and x+1 for rows
    y and y+1.
    """

    def __init__(self):
        self.walls: List[List[Optional[WallOrientation]]] = [
            [None for _ in range(WALL_GRID_HEIGHT)] for _ in range(WALL_GRID_WIDTH)
        ]
        self.player_positions: List[PiecePosition] = [Player.A.start_position, Player.B.start_position]

    def clone(self) -> 'Board':
        new_board = Board()
        new_board.walls = [column[:] for column in self.walls]
        new_board.player_positions = list(self.player_positions)
        return new_board

    def wall_at(self, orientation: WallOrientation, x: int, y: int) -> bool:
        """True if slot (x, y) holds a wall of `orientation`. Out-of-range slots hold nothing."""
        return (
            0 <= x < WALL_GRID_WIDTH
            and 0 <= y < WALL_GRID_HEIGHT
            and self.walls[x][y] is orientation
        )

    def player_position(self, player: Player) -> PiecePosition:
        return self.player_positions[player.index]

    def set_player_position(self, player: Player, position: PiecePosition) -> None:
        self.player_positions[player.index] = position

    def place_wall(self, orientation: WallOrientation, position: WallPosition) -> None:
        self.walls[position.x][position.y] = orientation

    def wall_count(self) -> int:
        return sum(1 for column in self.walls for slot in column if slot is not None)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.walls == other.walls and self.player_positions == other.player_positions

    def __repr__(self) -> str:
        return f"Board(player_positions={self.player_positions}, walls={self.wall_count()})"
