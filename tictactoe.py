import numpy as np

from data_structures import GameStatus, PlayerMark
from game import Board, IllegalMoveError

# Line indices: rows 0-2, columns 3-5, main diagonal 6, anti-diagonal 7.
N_LINES = 8


class TicTacToeBoard(Board):
    """
    Plain 3x3 tic-tac-toe. Coordinates are cell numbers, row-major:

        1 2 3
        4 5 6
        7 8 9

    line_sums holds the sum of marks on each of the eight lines
    (+1 per naught, -1 per cross); a line reaching +-3 is a win.
    """

    def __init__(self):
        self.cells = np.zeros(9, dtype=np.int8)
        self.line_sums = np.zeros(N_LINES, dtype=np.int8)
        self.move_count = 0
        self.status = GameStatus.UNDECIDED

    @classmethod
    def from_string(cls, s: str) -> 'TicTacToeBoard':
        """Build a board from 9 characters of 'x', 'o' or ' ', row-major."""
        if len(s) != 9:
            raise ValueError(f"Expected 9 cells, got {len(s)}: {s!r}")
        board = cls()
        for num, c in enumerate(s, start=1):
            if c == 'x':
                board.place_mark(num, PlayerMark.CROSS)
            elif c == 'o':
                board.place_mark(num, PlayerMark.NAUGHT)
            elif c != ' ':
                raise ValueError(f"Invalid cell {c!r}; use 'x', 'o' or blank")
        return board

    def valid_moves(self):
        if self.status.is_over:
            return []
        return [int(i) + 1 for i in np.flatnonzero(self.cells == 0)]

    def place_mark(self, coordinate, mark):
        if not isinstance(coordinate, (int, np.integer)) or not 1 <= coordinate <= 9:
            raise IllegalMoveError(f"Cell {coordinate!r} is outside 1..9")
        if self.status.is_over:
            raise IllegalMoveError(f"Game already ended: {self.status}")
        idx = int(coordinate) - 1
        if self.cells[idx] != 0:
            raise IllegalMoveError(f"Cell {coordinate} is already taken")

        mark = PlayerMark(mark)
        row, col = divmod(idx, 3)
        lines = [row, 3 + col]
        if row == col:
            lines.append(6)
        if row + col == 2:
            lines.append(7)

        self.cells[idx] = mark
        self.move_count += 1
        for line in lines:
            self.line_sums[line] += mark
            if abs(int(self.line_sums[line])) == 3:
                self.status = GameStatus.won(mark)
        if not self.status.is_over and self.move_count == 9:
            self.status = GameStatus.DRAW

    def game_status(self):
        return self.status

    def n_moves_made(self):
        return self.move_count

    def copy(self):
        new = TicTacToeBoard.__new__(TicTacToeBoard)
        new.cells = np.copy(self.cells)
        new.line_sums = np.copy(self.line_sums)
        new.move_count = self.move_count
        new.status = self.status
        return new

    def _key(self):
        return self.cells.tobytes()
