"""
Drives games between two Player instances.

Player 1 always plays Naught and moves first. In blitz games each side has
its own clock; the wall time a player spends on a move is charged to it, and
a player whose clock runs out loses on the spot.
"""

import logging
import time
from collections import Counter
from datetime import datetime

from tqdm import tqdm

from config import config
from connect_four import ConnectFourBoard
from data_structures import GameRecord, GameStatus, GameType, PlayerMark
from tictactoe import TicTacToeBoard
from ultimate_ttt import UltimateTicTacToeBoard

logger = logging.getLogger("Arena")

BOARDS = {
    GameType.TTT: TicTacToeBoard,
    GameType.UTTT: UltimateTicTacToeBoard,
    GameType.C4: ConnectFourBoard,
}


def make_board(game_type):
    return BOARDS[GameType(game_type)]()


def run_game(player1, player2, board=None) -> GameStatus:
    """Plays to the end without clocks and returns the final status."""
    board = board if board is not None else TicTacToeBoard()
    players = {PlayerMark.NAUGHT: player1, PlayerMark.CROSS: player2}
    while not board.game_is_over():
        mark = board.current_player()
        action = players[mark].play(board)
        logger.debug(f"Player {mark} played {action}")
        board.place_mark(action, mark)
    logger.debug(f"Game over after {board.n_moves_made()} moves: {board.game_status()}")
    return board.game_status()


def run_blitz_game(player1, player2, board=None, think_time: float = None):
    """
    Plays to the end with a clock of `think_time` seconds per side.

    Returns (status, time_left_player1, time_left_player2).
    """
    board = board if board is not None else TicTacToeBoard()
    think_time = config.THINK_TIME if think_time is None else think_time
    players = {PlayerMark.NAUGHT: player1, PlayerMark.CROSS: player2}
    clocks = {PlayerMark.NAUGHT: think_time, PlayerMark.CROSS: think_time}

    while not board.game_is_over():
        mark = board.current_player()
        t0 = time.perf_counter()
        action = players[mark].blitz(board, clocks[mark])
        clocks[mark] = max(clocks[mark] - (time.perf_counter() - t0), 0.0)
        if clocks[mark] == 0.0:
            logger.debug(f"{mark} ran out of time")
            return GameStatus.won(mark.other()), clocks[PlayerMark.NAUGHT], clocks[PlayerMark.CROSS]
        logger.debug(f"Player {mark} played {action}")
        board.place_mark(action, mark)

    logger.debug(f"Time remaining: {clocks[PlayerMark.NAUGHT]:.4f}s and {clocks[PlayerMark.CROSS]:.4f}s")
    logger.debug(f"Game ended with {board.game_status()}")
    return board.game_status(), clocks[PlayerMark.NAUGHT], clocks[PlayerMark.CROSS]


def run_match(player1, player2, game_type=GameType.TTT, n_games: int = None,
              think_time: float = None, blitz: bool = True, progress: bool = False):
    """
    Plays `n_games` games between the same two players, player1 always moving
    first. Players keep their state across games.

    Returns (records, tally) where tally counts 'win' / 'draw' / 'loss' from
    player1's side.
    """
    game_type = GameType(game_type)
    n_games = config.NUM_GAMES if n_games is None else n_games
    records, tally = [], Counter()
    for _ in tqdm(range(n_games), desc=f"{player1.name} vs {player2.name}", disable=not progress):
        board = make_board(game_type)
        if blitz:
            result, time1, time2 = run_blitz_game(player1, player2, board, think_time)
        else:
            result, time1, time2 = run_game(player1, player2, board), None, None
        records.append(GameRecord(game_type, player1.name, player2.name, result,
                                  datetime.now(), time1, time2))
        if result.winner == PlayerMark.NAUGHT:
            tally['win'] += 1
        elif result.winner == PlayerMark.CROSS:
            tally['loss'] += 1
        else:
            tally['draw'] += 1
    logger.info(f"{game_type.value}: {player1.name} vs {player2.name} "
                f"{tally['win']}/{tally['draw']}/{tally['loss']} (win/draw/loss)")
    return records, tally
