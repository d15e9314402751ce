import unittest

from tictactoe_ai.board import BoardState
from tictactoe_ai.game_logic import LINES, classify, winning_line
from tictactoe_ai.models import Outcome, OutcomeKind, Side


class ClassifyTests(unittest.TestCase):
    def test_exactly_eight_lines(self) -> None:
        self.assertEqual(len(LINES), 8)
        self.assertEqual(len(set(LINES)), 8)
        self.assertIn(((0, 0), (1, 1), (2, 2)), LINES)
        self.assertIn(((0, 2), (1, 1), (2, 0)), LINES)

    def test_every_line_wins_for_either_side(self) -> None:
        for side in Side:
            for line in LINES:
                with self.subTest(side=side, line=line):
                    board = BoardState()
                    for row, col in line:
                        board.place(row, col, side)
                    self.assertEqual(classify(board), Outcome.win(side))
                    self.assertEqual(winning_line(board), line)

    def test_two_marks_and_a_gap_is_not_a_win(self) -> None:
        for line in LINES:
            with self.subTest(line=line):
                board = BoardState()
                for row, col in line[:2]:
                    board.place(row, col, Side.X)
                self.assertEqual(classify(board).kind, OutcomeKind.IN_PROGRESS)
                self.assertIsNone(winning_line(board))

    def test_mixed_line_is_not_a_win(self) -> None:
        board = BoardState.from_rows([
            ["X", "X", "O"],
            ["", "", ""],
            ["", "", ""],
        ])
        self.assertEqual(classify(board), Outcome.in_progress())

    def test_empty_board_in_progress(self) -> None:
        outcome = classify(BoardState())
        self.assertEqual(outcome.kind, OutcomeKind.IN_PROGRESS)
        self.assertFalse(outcome.is_terminal)

    def test_full_board_without_line_is_draw(self) -> None:
        board = BoardState.from_rows([
            ["X", "O", "X"],
            ["X", "O", "O"],
            ["O", "X", "X"],
        ])
        outcome = classify(board)
        self.assertEqual(outcome, Outcome.draw())
        self.assertTrue(outcome.is_terminal)
        self.assertIsNone(outcome.winner)

    def test_win_takes_precedence_over_full_board(self) -> None:
        board = BoardState.from_rows([
            ["X", "O", "X"],
            ["O", "X", "O"],
            ["O", "X", "X"],
        ])
        self.assertTrue(board.is_full())
        self.assertEqual(classify(board), Outcome.win(Side.X))

    def test_reset_board_in_progress(self) -> None:
        board = BoardState.from_rows([
            ["O", "O", "O"],
            ["X", "X", ""],
            ["", "", ""],
        ])
        self.assertEqual(classify(board), Outcome.win(Side.O))
        board.reset()
        self.assertEqual(classify(board), Outcome.in_progress())


if __name__ == "__main__":
    unittest.main()
