#!/usr/bin/env python3
import sys
import os
import unittest

# Add parent directory to path to make imports work in test
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from models.board import (
    Board, Direction, MovePiece, PiecePosition, PlaceWall, Player, WallOrientation,
    WallPosition, move_from_dict,
)


class TestBoard(unittest.TestCase):

    def test_initial_positions(self):
        board = Board()
        self.assertEqual(board.player_position(Player.A), PiecePosition(4, 0))
        self.assertEqual(board.player_position(Player.B), PiecePosition(4, 8))
        self.assertEqual(board.wall_count(), 0)

    def test_players(self):
        self.assertEqual(Player.A.opponent, Player.B)
        self.assertEqual(Player.B.opponent, Player.A)
        self.assertEqual(Player.A.goal_row, 8)
        self.assertEqual(Player.B.goal_row, 0)
        self.assertEqual(str(Player.B), "B")

    def test_directions(self):
        self.assertEqual(Direction.UP.offset, (0, -1))
        self.assertEqual(Direction.RIGHT.offset, (1, 0))
        for direction in Direction:
            self.assertEqual(direction.opposite.opposite, direction)
        self.assertTrue(Direction.DOWN.is_vertical)
        self.assertFalse(Direction.LEFT.is_vertical)
        self.assertEqual(WallOrientation.HORIZONTAL.other, WallOrientation.VERTICAL)

    def test_all_piece_moves(self):
        moves = MovePiece.all()
        self.assertEqual(len(moves), 16)
        self.assertEqual(len(set(moves)), 16)

    def test_clone_is_independent(self):
        board = Board()
        copy = board.clone()
        copy.place_wall(WallOrientation.HORIZONTAL, WallPosition(2, 3))
        copy.set_player_position(Player.A, PiecePosition(4, 1))

        self.assertIsNone(board.walls[2][3])
        self.assertEqual(board.player_position(Player.A), PiecePosition(4, 0))
        self.assertNotEqual(board, copy)
        self.assertEqual(board, Board())

    def test_wall_at_out_of_range(self):
        board = Board()
        board.place_wall(WallOrientation.VERTICAL, WallPosition(7, 7))
        self.assertTrue(board.wall_at(WallOrientation.VERTICAL, 7, 7))
        self.assertFalse(board.wall_at(WallOrientation.HORIZONTAL, 7, 7))
        self.assertFalse(board.wall_at(WallOrientation.VERTICAL, 8, 7))
        self.assertFalse(board.wall_at(WallOrientation.VERTICAL, -1, 0))

    def test_move_dicts(self):
        wall = PlaceWall(WallOrientation.VERTICAL, WallPosition(3, 5))
        self.assertEqual(move_from_dict(wall.to_dict()), wall)

        step = move_from_dict({"type": "move", "direction": "DOWN"})
        self.assertEqual(step, MovePiece(Direction.DOWN, Direction.DOWN))

        jump = MovePiece(Direction.UP, Direction.LEFT)
        self.assertEqual(move_from_dict(jump.to_dict()), jump)

    def test_malformed_move_dicts(self):
        with self.assertRaises(ValueError):
            move_from_dict({"type": "move", "direction": "SIDEWAYS"})
        with self.assertRaises(ValueError):
            move_from_dict({"type": "wall", "orientation": "HORIZONTAL"})
        with self.assertRaises(ValueError):
            move_from_dict({"type": "teleport"})


if __name__ == '__main__':
    unittest.main()
