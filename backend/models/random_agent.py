import random

from models.board import Move
from models.game_state import GameState


class RandomAgent:
    def get_move(self, state: GameState) -> Move:
        """
        Get a random valid move for the player to move.
        Piece moves and wall placements are drawn from the same pool, so with
        walls in hand most random moves are wall placements.
        """
        possible_moves = state.get_valid_moves()
        if not possible_moves:
            raise ValueError(f"No valid moves available for {state.turn} in current state")

        return random.choice(possible_moves)
