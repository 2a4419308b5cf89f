import unittest
import sys
import os

# Allow direct imports from the project root
current_dir = os.path.dirname(os.path.abspath(__file__))
project_root = os.path.dirname(current_dir)
sys.path.insert(0, project_root)

from connect_four import ConnectFourBoard
from data_structures import GameStatus, PlayerMark
from game import IllegalMoveError
from tictactoe import TicTacToeBoard
from ultimate_ttt import UltimateTicTacToeBoard, UTTTAction

X, O = PlayerMark.CROSS, PlayerMark.NAUGHT


class TestPlayerMark(unittest.TestCase):

    def test_other_is_an_involution(self):
        self.assertIs(X.other(), O)
        self.assertIs(O.other(), X)
        self.assertIs(X.other().other(), X)

    def test_status_is_over(self):
        self.assertFalse(GameStatus.UNDECIDED.is_over)
        self.assertTrue(GameStatus.DRAW.is_over)
        self.assertTrue(GameStatus.won(X).is_over)
        self.assertNotEqual(GameStatus.won(X), GameStatus.won(O))


class TestBoardContract(unittest.TestCase):
    """Properties every board must have for tree search to be sound."""

    def sample_boards(self):
        ttt = TicTacToeBoard()
        ttt.place_mark(5, O)
        c4 = ConnectFourBoard()
        c4.place_mark(3, O)
        uttt = UltimateTicTacToeBoard()
        uttt.place_mark(UTTTAction(1, 1, 0, 2), O)
        return [ttt, c4, uttt]

    def test_copy_is_independent(self):
        for board in self.sample_boards():
            with self.subTest(board=type(board).__name__):
                before = board.copy()
                clone = board.copy()
                clone.place_mark(clone.valid_moves()[0], X)
                self.assertEqual(board, before)
                self.assertNotEqual(board, clone)
                self.assertEqual(board.n_moves_made(), 1)
                self.assertEqual(clone.n_moves_made(), 2)

    def test_naught_moves_first(self):
        for board_type in (TicTacToeBoard, ConnectFourBoard, UltimateTicTacToeBoard):
            board = board_type()
            self.assertEqual(board.current_player(), O)
            board.place_mark(board.valid_moves()[0], O)
            self.assertEqual(board.current_player(), X)

    def test_equal_positions_hash_alike(self):
        a = TicTacToeBoard()
        a.place_mark(1, O)
        a.place_mark(9, X)
        b = TicTacToeBoard()
        b.place_mark(9, X)
        b.place_mark(1, O)
        self.assertEqual(a, b)
        self.assertEqual(hash(a), hash(b))
        self.assertEqual(len({a, b}), 1)

    def test_boards_are_totally_ordered(self):
        boards = []
        for move in range(1, 10):
            board = TicTacToeBoard()
            board.place_mark(move, O)
            boards.append(board)
        ordered = sorted(boards)
        self.assertEqual(len(ordered), 9)
        for a, b in zip(ordered, ordered[1:]):
            self.assertLess(a, b)

    def test_finished_board_has_no_moves_and_rejects_marks(self):
        board = TicTacToeBoard.from_string("xx ooo   ")
        self.assertEqual(board.game_status(), GameStatus.won(O))
        self.assertEqual(board.valid_moves(), [])
        with self.assertRaises(IllegalMoveError):
            board.place_mark(3, X)


class TestTicTacToeBoard(unittest.TestCase):

    def test_valid_moves_are_empty_cells(self):
        board = TicTacToeBoard.from_string("x   o   x")
        self.assertEqual(board.valid_moves(), [2, 3, 4, 6, 7, 8])

    def test_illegal_moves_raise(self):
        board = TicTacToeBoard()
        board.place_mark(5, O)
        for bad in (0, 10, -1):
            with self.assertRaises(IllegalMoveError):
                board.place_mark(bad, X)
        with self.assertRaises(IllegalMoveError):
            board.place_mark(5, X)

    def test_from_string_rejects_garbage(self):
        with self.assertRaises(ValueError):
            TicTacToeBoard.from_string("xo")
        with self.assertRaises(ValueError):
            TicTacToeBoard.from_string("xo?      ")


class TestConnectFourBoard(unittest.TestCase):

    def test_tokens_stack(self):
        board = ConnectFourBoard()
        board.place_mark(2, O)
        board.place_mark(2, X)
        self.assertEqual(board.cells[2, 0], O)
        self.assertEqual(board.cells[2, 1], X)
        self.assertEqual(board.heights[2], 2)

    def test_full_column_is_not_a_valid_move(self):
        board = ConnectFourBoard()
        for i in range(6):
            board.place_mark(0, O if i % 2 == 0 else X)
        self.assertNotIn(0, board.valid_moves())
        self.assertEqual(board.valid_moves(), [1, 2, 3, 4, 5, 6])
        with self.assertRaises(IllegalMoveError):
            board.place_mark(0, O)

    def test_out_of_range_column_raises(self):
        board = ConnectFourBoard()
        with self.assertRaises(IllegalMoveError):
            board.place_mark(7, O)
        with self.assertRaises(IllegalMoveError):
            board.place_mark(-1, O)

    def test_parse_places_tokens_bottom_up(self):
        board = ConnectFourBoard.from_string(
            """
            .......
            .......
            .......
            ...o...
            ...x...
            x..o...
            """
        )
        self.assertEqual(board.cells[0, 0], X)
        self.assertEqual(board.cells[0, 1], 0)
        self.assertEqual(board.cells[3, 0], O)
        self.assertEqual(board.cells[3, 1], X)
        self.assertEqual(board.cells[3, 2], O)
        self.assertEqual(list(board.heights), [1, 0, 0, 3, 0, 0, 0])
        self.assertEqual(board.n_moves_made(), 4)
        self.assertEqual(board.current_player(), O)

    def test_parse_rejects_floating_tokens(self):
        with self.assertRaises(ValueError):
            ConnectFourBoard.from_string(
                """
                .......
                .......
                .......
                .......
                x......
                .......
                """
            )


class TestUltimateTicTacToeBoard(unittest.TestCase):

    def test_first_move_is_free(self):
        self.assertEqual(len(UltimateTicTacToeBoard().valid_moves()), 81)

    def test_cell_sends_opponent_to_matching_sub_board(self):
        board = UltimateTicTacToeBoard()
        board.place_mark(UTTTAction(0, 0, 1, 2), O)
        self.assertEqual(board.target_board(), (1, 2))
        moves = board.valid_moves()
        self.assertEqual(len(moves), 9)
        self.assertTrue(all((m.board_row, m.board_col) == (1, 2) for m in moves))
        with self.assertRaises(IllegalMoveError):
            board.place_mark(UTTTAction(0, 0, 0, 0), X)

        board.place_mark(UTTTAction(1, 2, 0, 0), X)
        self.assertEqual(board.target_board(), (0, 0))
        self.assertEqual(len(board.valid_moves()), 8)

    def test_decided_target_frees_the_next_move(self):
        board = UltimateTicTacToeBoard()
        for c in range(3):
            board.last_action = None
            board.place_mark(UTTTAction(0, 0, 0, c), X)
        self.assertEqual(board.sub_board_status(0, 0), GameStatus.won(X))

        board.last_action = None
        board.place_mark(UTTTAction(2, 2, 0, 0), O)
        self.assertIsNone(board.target_board())
        moves = board.valid_moves()
        self.assertEqual(len(moves), 8 * 9 - 1)
        self.assertFalse(any((m.board_row, m.board_col) == (0, 0) for m in moves))
        with self.assertRaises(IllegalMoveError):
            board.place_mark(UTTTAction(0, 0, 2, 2), X)

    def test_same_marks_different_target_are_different_positions(self):
        a = UltimateTicTacToeBoard()
        a.place_mark(UTTTAction(0, 0, 1, 1), O)
        a.place_mark(UTTTAction(1, 1, 0, 0), X)
        b = UltimateTicTacToeBoard()
        b.place_mark(UTTTAction(1, 1, 0, 0), X)
        b.place_mark(UTTTAction(0, 0, 1, 1), O)
        self.assertTrue((a.cells == b.cells).all())
        self.assertNotEqual(a.target_board(), b.target_board())
        self.assertNotEqual(a, b)

    def test_out_of_range_index_raises(self):
        with self.assertRaises(IllegalMoveError):
            UltimateTicTacToeBoard().place_mark(UTTTAction(0, 3, 0, 0), O)


if __name__ == '__main__':
    unittest.main(verbosity=2)
