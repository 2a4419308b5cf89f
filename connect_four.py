import numpy as np

from data_structures import GameStatus, PlayerMark
from game import Board, IllegalMoveError

N_COLUMNS, N_ROWS, N_IN_ROW = 7, 6, 4


class ConnectFourBoard(Board):
    """
    7 columns x 6 rows. A coordinate is a column index 0..6; the token lands
    on top of that column. Cells are stored column-major, row 0 at the bottom:

        [0][5] [1][5] ... [6][5]
        ...
        [0][0] [1][0] ... [6][0]
    """

    def __init__(self):
        self.cells = np.zeros((N_COLUMNS, N_ROWS), dtype=np.int8)
        self.heights = np.zeros(N_COLUMNS, dtype=np.int8)
        self.move_count = 0
        self.status = GameStatus.UNDECIDED

    @classmethod
    def from_string(cls, s: str) -> 'ConnectFourBoard':
        """
        Parse six lines of seven characters ('x', 'o' or '.'), top row first.
        Indentation and blank leading/trailing lines are ignored.
        """
        rows = [line.strip() for line in s.strip().split('\n')]
        if len(rows) != N_ROWS:
            raise ValueError(f"Expected {N_ROWS} rows, got {len(rows)}")
        grid = []
        for i_row, row in enumerate(rows):
            if len(row) != N_COLUMNS:
                raise ValueError(f"Row {i_row} must have {N_COLUMNS} cells: {row!r}")
            grid.append(row)

        board = cls()
        # Drop tokens bottom-up so every placement goes through the win check.
        for col in range(N_COLUMNS):
            for row in range(N_ROWS):
                c = grid[N_ROWS - 1 - row][col]
                if c == '.':
                    continue
                if c not in 'xo':
                    raise ValueError(f"Invalid cell {c!r} in column {col}")
                if board.heights[col] != row:
                    raise ValueError(f"Floating token in column {col}")
                board._drop(col, PlayerMark.CROSS if c == 'x' else PlayerMark.NAUGHT)
        return board

    def valid_moves(self):
        if self.status.is_over:
            return []
        return [int(c) for c in np.flatnonzero(self.heights < N_ROWS)]

    def place_mark(self, coordinate, mark):
        if not isinstance(coordinate, (int, np.integer)) or not 0 <= coordinate < N_COLUMNS:
            raise IllegalMoveError(f"Column {coordinate!r} is outside 0..{N_COLUMNS - 1}")
        if self.status.is_over:
            raise IllegalMoveError(f"Game already ended: {self.status}")
        if self.heights[coordinate] >= N_ROWS:
            raise IllegalMoveError(f"Column {coordinate} is full")
        self._drop(int(coordinate), PlayerMark(mark))

    def _drop(self, col, mark):
        row = int(self.heights[col])
        self.cells[col, row] = mark
        self.heights[col] += 1
        self.move_count += 1
        if not self.status.is_over:
            if self.check_win(col, row):
                self.status = GameStatus.won(mark)
            elif self.move_count == N_COLUMNS * N_ROWS:
                self.status = GameStatus.DRAW

    def check_win(self, col, row) -> bool:
        """Does the token at (col, row) complete four in a line?"""
        player = self.cells[col, row]
        if player == 0:
            return False

        # vertical, horizontal, slash, backslash
        directions = [(0, 1), (1, 0), (1, 1), (1, -1)]
        for dc, dr in directions:
            count = 1
            for sign in (1, -1):
                for i in range(1, N_IN_ROW):
                    nc, nr = col + sign * i * dc, row + sign * i * dr
                    if 0 <= nc < N_COLUMNS and 0 <= nr < N_ROWS and self.cells[nc, nr] == player:
                        count += 1
                    else:
                        break
            if count >= N_IN_ROW:
                return True
        return False

    def game_status(self):
        return self.status

    def n_moves_made(self):
        return self.move_count

    def copy(self):
        new = ConnectFourBoard.__new__(ConnectFourBoard)
        new.cells = np.copy(self.cells)
        new.heights = np.copy(self.heights)
        new.move_count = self.move_count
        new.status = self.status
        return new

    def _key(self):
        return self.cells.tobytes()
