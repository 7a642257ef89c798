from typing import List, Dict, Optional

from models.board import (
    Board, Move, PiecePosition, Player, WallOrientation, WallPosition, INITIAL_WALLS,
    WALL_GRID_HEIGHT, WALL_GRID_WIDTH,
)
from game_logic import execute_move, get_all_possible_moves, get_winner, is_move_legal, room_for_wall_placement
from a_star import a_star


class GameState:
    """
    A class representing the state of a Quoridor game.
    This class is designed to be used by the game-playing agents (Minimax, Random)
    and by the HTTP layer.
    """

    def __init__(self):
        self.board = Board()
        self.walls_left = [INITIAL_WALLS, INITIAL_WALLS]
        self.turn = Player.A

    def clone(self) -> 'GameState':
        """Create an independent copy of the current game state."""
        new_state = GameState()
        new_state.board = self.board.clone()
        new_state.walls_left = list(self.walls_left)
        new_state.turn = self.turn
        return new_state

    def get_valid_moves(self) -> List[Move]:
        """Get all valid moves for the player to move."""
        if self.is_terminal():
            return []
        return get_all_possible_moves(self, self.turn)

    def is_legal(self, move: Move) -> bool:
        return is_move_legal(self, self.turn, move)

    def apply_move(self, move: Move) -> None:
        """Apply a move for the player to move, after validating it."""
        if self.is_terminal():
            raise ValueError("Game is already over")
        if not self.is_legal(move):
            raise ValueError(f"Invalid move for player {self.turn}: {move}")
        execute_move(self, self.turn, move)

    def get_winner(self) -> Optional[Player]:
        """Get the winner of the game if it has ended."""
        return get_winner(self.board)

    def is_terminal(self) -> bool:
        """Check if the game has ended."""
        return self.get_winner() is not None

    def shortest_path(self, player: Player) -> Optional[List[PiecePosition]]:
        return a_star(self.board, player)

    def path_length(self, player: Player) -> Optional[int]:
        """Moves `player` still needs to reach its goal row, None when sealed off."""
        path = self.shortest_path(player)
        return None if path is None else len(path)

    def to_dict(self) -> Dict:
        walls = []
        for x in range(WALL_GRID_WIDTH):
            for y in range(WALL_GRID_HEIGHT):
                if self.board.walls[x][y] is not None:
                    walls.append({"orientation": self.board.walls[x][y].name, "x": x, "y": y})
        return {
            "positions": {
                player.name: {"x": self.board.player_position(player).x, "y": self.board.player_position(player).y}
                for player in Player
            },
            "walls": walls,
            "walls_left": {player.name: self.walls_left[player.index] for player in Player},
            "turn": self.turn.name,
        }

    @staticmethod
    def from_dict(data: Dict) -> 'GameState':
        """
        Rebuild a state from its JSON form.

        Raises:
            ValueError: If the data does not describe a consistent position.
        """
        state = GameState()
        try:
            for player in Player:
                position = data["positions"][player.name]
                state.board.set_player_position(player, PiecePosition(int(position["x"]), int(position["y"])))
            for wall in data.get("walls", []):
                x, y = int(wall["x"]), int(wall["y"])
                orientation = WallOrientation[wall["orientation"]]
                if not room_for_wall_placement(state.board, orientation, x, y):
                    raise ValueError(f"No room for {orientation.name} wall at slot ({x}, {y})")
                state.board.place_wall(orientation, WallPosition(x, y))
            walls_left = data.get("walls_left", {})
            for player in Player:
                state.walls_left[player.index] = int(walls_left.get(player.name, INITIAL_WALLS))
            state.turn = Player[data.get("turn", Player.A.name)]
        except (KeyError, TypeError) as e:
            raise ValueError(f"Malformed game state: {e}")

        positions = state.board.player_positions
        if not all(position.in_bounds() for position in positions):
            raise ValueError("Piece position out of bounds")
        if positions[0] == positions[1]:
            raise ValueError("Both pieces on the same cell")
        if any(count < 0 for count in state.walls_left):
            raise ValueError("Negative wall count")
        return state

    def __repr__(self) -> str:
        return f"GameState(turn={self.turn}, walls_left={self.walls_left}, board={self.board!r})"
