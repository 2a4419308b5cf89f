from abc import ABC, abstractmethod
from functools import total_ordering

from data_structures import GameStatus, PlayerMark


class IllegalMoveError(ValueError):
    """A mark was placed out of range, on an occupied cell, or after the game ended."""


class NoValidMovesError(RuntimeError):
    """An engine was asked to move on a board that has no legal moves."""


@total_ordering
class Board(ABC):
    """
    The contract every game must satisfy for the engines to search it.

    Concrete boards keep their cells in small fixed-size numpy arrays and
    update status incrementally inside place_mark, so game_status() and
    current_player() are always consistent with the marks on the board.
    Equality, hashing and ordering all derive from _key(), which is what
    lets boards act as keys in the MCTS tables.
    """

    @abstractmethod
    def valid_moves(self) -> list:
        """All legal coordinates from this position; empty once the game is over."""

    @abstractmethod
    def place_mark(self, coordinate, mark: PlayerMark):
        """Apply `mark` at `coordinate`. Raises IllegalMoveError for an illegal move."""

    @abstractmethod
    def game_status(self) -> GameStatus:
        pass

    @abstractmethod
    def n_moves_made(self) -> int:
        pass

    @abstractmethod
    def copy(self) -> 'Board':
        pass

    @abstractmethod
    def _key(self) -> bytes:
        pass

    def current_player(self) -> PlayerMark:
        # Naught always opens.
        return PlayerMark.NAUGHT if self.n_moves_made() % 2 == 0 else PlayerMark.CROSS

    def game_is_over(self) -> bool:
        return self.game_status().is_over

    def winner(self):
        return self.game_status().winner

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self):
        return hash(self._key())

    def __copy__(self):
        return self.copy()

    def __repr__(self):
        return f"{self.__class__.__name__}(moves={self.n_moves_made()}, status={self.game_status()})"
