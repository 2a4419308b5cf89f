"""
Leaf evaluators for the depth-limited searches.

Each heuristic is a plain function (my_mark, board) -> float where higher is
better for my_mark. They are only ever called at the search horizon or on a
finished board.
"""

import numpy as np

from data_structures import PlayerMark
from connect_four import ConnectFourBoard, N_COLUMNS, N_ROWS
from tictactoe import TicTacToeBoard
from ultimate_ttt import UltimateTicTacToeBoard


def ttt_heuristic(my_mark: PlayerMark, board: TicTacToeBoard) -> float:
    # Win fast, lose slow.
    n_moves = float(board.n_moves_made())
    winner = board.winner()
    if winner is None:
        return n_moves
    if winner == my_mark:
        return 100.0 - n_moves
    return -100.0 + n_moves


def c4_heuristic(my_mark: PlayerMark, board: ConnectFourBoard) -> float:
    cells = board.cells
    mine = cells == my_mark
    centre = float(mine[2].sum() + 2 * mine[3].sum() + mine[4].sum())

    # Horizontal windows of four holding three of my tokens and one hole.
    open_threes = 0
    for row in range(N_ROWS):
        for start in range(N_COLUMNS - 3):
            window = cells[start:start + 4, row]
            if (window == my_mark).sum() == 3 and (window == 0).sum() == 1:
                open_threes += 1

    winner = board.winner()
    win = 0.0 if winner is None else (1.0 if winner == my_mark else -1.0)
    return 100.0 * win + centre + 5.0 * open_threes


def uttt_heuristic(my_mark: PlayerMark, board: UltimateTicTacToeBoard) -> float:
    """
    A variant of Powell and Merrill's evaluation: sub-boards won, the centre
    sub-board, and the centre cell of every sub-board. A finished game is
    scored as +-inf so alpha-beta can cut on it immediately.
    """
    winner = board.winner()
    if winner is not None:
        return np.inf if winner == my_mark else -np.inf

    sup = board.sup_board
    won_balance = float((sup == my_mark).sum() - (sup == my_mark.other()).sum())
    won_centre = 1.0 if sup[1, 1] == my_mark else 0.0
    centres = board.cells[:, :, 1, 1]
    centre_balance = float((centres == my_mark).sum() - (centres == my_mark.other()).sum())
    return (
        float(board.n_moves_made())
        + 100.0 * won_balance
        + 30.0 * won_centre
        + 10.0 * centre_balance
    )


HEURISTICS = {
    'ttt': ttt_heuristic,
    'c4': c4_heuristic,
    'uttt': uttt_heuristic,
}
