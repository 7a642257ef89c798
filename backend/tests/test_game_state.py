#!/usr/bin/env python3
import sys
import os
import unittest

# Add parent directory to path to make imports work in test
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from models.board import Direction, MovePiece, PiecePosition, PlaceWall, Player, WallOrientation, WallPosition
from models.game_state import GameState


class TestGameState(unittest.TestCase):

    def test_initial_state(self):
        state = GameState()
        self.assertEqual(state.turn, Player.A)
        self.assertEqual(state.walls_left, [10, 10])
        self.assertFalse(state.is_terminal())
        self.assertEqual(len(state.get_valid_moves()), 3 + 128)
        self.assertEqual(state.path_length(Player.A), 8)

    def test_apply_move_alternates_turns(self):
        state = GameState()
        state.apply_move(MovePiece(Direction.DOWN, Direction.DOWN))
        self.assertEqual(state.turn, Player.B)
        state.apply_move(PlaceWall(WallOrientation.HORIZONTAL, WallPosition(4, 1)))
        self.assertEqual(state.turn, Player.A)
        self.assertEqual(state.walls_left, [10, 9])
        self.assertEqual(state.board.player_position(Player.A), PiecePosition(4, 1))

    def test_apply_illegal_move_raises(self):
        state = GameState()
        with self.assertRaises(ValueError):
            state.apply_move(MovePiece(Direction.UP, Direction.UP))
        self.assertEqual(state.turn, Player.A)

    def test_apply_move_after_game_over_raises(self):
        state = GameState()
        state.board.set_player_position(Player.A, PiecePosition(4, 8))
        state.board.set_player_position(Player.B, PiecePosition(0, 4))
        self.assertTrue(state.is_terminal())
        self.assertEqual(state.get_winner(), Player.A)
        self.assertEqual(state.get_valid_moves(), [])
        with self.assertRaises(ValueError):
            state.apply_move(MovePiece(Direction.LEFT, Direction.LEFT))

    def test_clone_is_independent(self):
        state = GameState()
        copy = state.clone()
        copy.apply_move(PlaceWall(WallOrientation.VERTICAL, WallPosition(2, 2)))
        self.assertEqual(state.walls_left, [10, 10])
        self.assertIsNone(state.board.walls[2][2])
        self.assertEqual(state.turn, Player.A)

    def test_dict_round_trip(self):
        state = GameState()
        state.apply_move(MovePiece(Direction.LEFT, Direction.LEFT))
        state.apply_move(PlaceWall(WallOrientation.VERTICAL, WallPosition(6, 3)))
        data = state.to_dict()
        self.assertEqual(data["walls"], [{"orientation": "VERTICAL", "x": 6, "y": 3}])
        self.assertEqual(data["walls_left"], {"A": 10, "B": 9})
        self.assertEqual(data["turn"], "A")

        restored = GameState.from_dict(data)
        self.assertEqual(restored.board, state.board)
        self.assertEqual(restored.walls_left, state.walls_left)
        self.assertEqual(restored.turn, state.turn)

    def test_from_dict_rejects_bad_positions(self):
        same_cell = {"positions": {"A": {"x": 4, "y": 4}, "B": {"x": 4, "y": 4}}}
        with self.assertRaises(ValueError):
            GameState.from_dict(same_cell)

        off_board = {"positions": {"A": {"x": 9, "y": 0}, "B": {"x": 4, "y": 8}}}
        with self.assertRaises(ValueError):
            GameState.from_dict(off_board)

        missing = {"positions": {"A": {"x": 4, "y": 0}}}
        with self.assertRaises(ValueError):
            GameState.from_dict(missing)

    def test_from_dict_rejects_bad_walls(self):
        positions = {"A": {"x": 4, "y": 0}, "B": {"x": 4, "y": 8}}
        with self.assertRaises(ValueError):
            GameState.from_dict({"positions": positions, "walls": [{"orientation": "HORIZONTAL", "x": 8, "y": 0}]})
        with self.assertRaises(ValueError):
            GameState.from_dict({"positions": positions, "walls": [{"orientation": "DIAGONAL", "x": 1, "y": 1}]})
        with self.assertRaises(ValueError):
            GameState.from_dict({"positions": positions, "walls_left": {"A": -1}})

    def test_from_dict_rejects_overlapping_walls(self):
        positions = {"A": {"x": 4, "y": 0}, "B": {"x": 4, "y": 8}}
        for walls in (
            [("HORIZONTAL", 3, 3), ("HORIZONTAL", 4, 3)],
            [("VERTICAL", 2, 5), ("VERTICAL", 2, 6)],
            [("HORIZONTAL", 3, 3), ("VERTICAL", 3, 3)],
            [("HORIZONTAL", 3, 3), ("HORIZONTAL", 3, 3)],
        ):
            data = {"positions": positions,
                    "walls": [{"orientation": o, "x": x, "y": y} for o, x, y in walls]}
            with self.assertRaises(ValueError, msg=str(walls)):
                GameState.from_dict(data)

        state = GameState.from_dict({"positions": positions, "walls": [
            {"orientation": "HORIZONTAL", "x": 3, "y": 3},
            {"orientation": "HORIZONTAL", "x": 5, "y": 3},
            {"orientation": "VERTICAL", "x": 4, "y": 3},
        ]})
        self.assertEqual(state.board.wall_count(), 3)


if __name__ == '__main__':
    unittest.main()
