from collections import namedtuple

import numpy as np

from data_structures import GameStatus, PlayerMark
from game import Board, IllegalMoveError

# Sub-board status codes in `sup_board`; +-1 means won by that mark.
OPEN, DRAWN = 0, 2

# A move: which sub-board (board_row, board_col) and which cell inside it (row, col), all 0..2.
UTTTAction = namedtuple('UTTTAction', ['board_row', 'board_col', 'row', 'col'])


def _completes_line(grid, row, col, mark) -> bool:
    """Is (row, col) on a full row, column or diagonal of `mark` in a 3x3 grid?"""
    if all(grid[row, c] == mark for c in range(3)):
        return True
    if all(grid[r, col] == mark for r in range(3)):
        return True
    if row == col and all(grid[i, i] == mark for i in range(3)):
        return True
    if row + col == 2 and all(grid[i, 2 - i] == mark for i in range(3)):
        return True
    return False


class UltimateTicTacToeBoard(Board):
    """
    A 3x3 grid of 3x3 tic-tac-toe boards.

    The cell chosen inside a sub-board sends the opponent to the sub-board at
    the same position. If that sub-board is already decided, the opponent may
    play in any open sub-board. Winning three sub-boards in a line wins the game.

    cells[br, bc, r, c] holds the mark at cell (r, c) of sub-board (br, bc);
    sup_board[br, bc] holds that sub-board's status.
    """

    def __init__(self):
        self.cells = np.zeros((3, 3, 3, 3), dtype=np.int8)
        self.sup_board = np.zeros((3, 3), dtype=np.int8)
        self.last_action = None
        self.move_count = 0
        self.status = GameStatus.UNDECIDED

    def target_board(self):
        """The sub-board the next move is forced into, or None if any open sub-board will do."""
        if self.last_action is None:
            return None
        target = (self.last_action.row, self.last_action.col)
        if self.sup_board[target] != OPEN:
            return None
        return target

    def sub_board_status(self, board_row, board_col) -> GameStatus:
        code = int(self.sup_board[board_row, board_col])
        if code == OPEN:
            return GameStatus.UNDECIDED
        if code == DRAWN:
            return GameStatus.DRAW
        return GameStatus.won(code)

    def valid_moves(self):
        if self.status.is_over:
            return []
        target = self.target_board()
        boards = [target] if target is not None else [
            (br, bc) for br in range(3) for bc in range(3) if self.sup_board[br, bc] == OPEN
        ]
        moves = []
        for br, bc in boards:
            for r, c in zip(*np.nonzero(self.cells[br, bc] == 0)):
                moves.append(UTTTAction(br, bc, int(r), int(c)))
        return moves

    def _check_legal(self, action):
        if not isinstance(action, tuple) or len(action) != 4:
            raise IllegalMoveError(f"Expected (board_row, board_col, row, col), got {action!r}")
        if any(not isinstance(i, (int, np.integer)) or not 0 <= i <= 2 for i in action):
            raise IllegalMoveError(f"Some index of {action!r} is outside 0..2")
        if self.status.is_over:
            raise IllegalMoveError(f"Game already ended: {self.status}")
        br, bc, r, c = action
        target = self.target_board()
        if target is not None and (br, bc) != target:
            raise IllegalMoveError(f"Move {action!r} must be played in sub-board {target}")
        if self.sup_board[br, bc] != OPEN:
            raise IllegalMoveError(f"Sub-board ({br}, {bc}) is already decided")
        if self.cells[br, bc, r, c] != 0:
            raise IllegalMoveError(f"Cell {action!r} is already taken")

    def place_mark(self, coordinate, mark):
        self._check_legal(coordinate)
        action = UTTTAction(*(int(i) for i in coordinate))
        mark = PlayerMark(mark)
        br, bc, r, c = action
        sub_board = self.cells[br, bc]
        sub_board[r, c] = mark
        self.move_count += 1
        self.last_action = action

        if _completes_line(sub_board, r, c, mark):
            self.sup_board[br, bc] = mark
            if _completes_line(self.sup_board, br, bc, mark):
                self.status = GameStatus.won(mark)
                return
        elif not (sub_board == 0).any():
            self.sup_board[br, bc] = DRAWN

        if (self.sup_board != OPEN).all():
            self.status = GameStatus.DRAW

    def game_status(self):
        return self.status

    def n_moves_made(self):
        return self.move_count

    def copy(self):
        new = UltimateTicTacToeBoard.__new__(UltimateTicTacToeBoard)
        new.cells = np.copy(self.cells)
        new.sup_board = np.copy(self.sup_board)
        new.last_action = self.last_action
        new.move_count = self.move_count
        new.status = self.status
        return new

    def _key(self):
        # Two positions with the same marks differ if they force different sub-boards.
        target = self.target_board()
        return self.cells.tobytes() + bytes(target if target is not None else (9, 9))
