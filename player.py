import logging
import random
from abc import ABC, abstractmethod

from game import Board, NoValidMovesError


class Player(ABC):
    """
    What the driver talks to. One instance owns all of its private state
    (RNG, tables, counters) and moves for one side of one or more games.
    """

    def __init__(self, name: str = None):
        self.name = name or self.__class__.__name__
        self.logger = logging.getLogger(f"{self.__class__.__name__}-{self.name}")

    @abstractmethod
    def play(self, board: Board):
        """Returns a coordinate from board.valid_moves(). No time limit."""
        pass

    def blitz(self, board: Board, time_remaining: float):
        """
        Tournament mode: `time_remaining` is what is left on this player's
        clock for the rest of the game, in seconds. Players that cannot budget
        their time just play.
        """
        return self.play(board)

    def close(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
        return False

    @staticmethod
    def _moves_or_raise(board: Board) -> list:
        moves = board.valid_moves()
        if not moves:
            raise NoValidMovesError(f"No legal moves on {board!r}")
        return moves


class RandomPlayer(Player):
    """Picks uniformly among the legal moves."""

    def __init__(self, seed=None, name: str = None):
        super().__init__(name or "random")
        self.rng = random.Random(seed)

    def play(self, board):
        move = self.rng.choice(self._moves_or_raise(board))
        self.logger.debug(f"{self.name} plays {move}")
        return move
