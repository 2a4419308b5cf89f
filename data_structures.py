# data_structures.py

from collections import namedtuple
from enum import Enum, IntEnum


class PlayerMark(IntEnum):
    """The two marks. The value is what a board stores in its int8 cells."""
    CROSS = -1
    NAUGHT = 1

    def other(self) -> 'PlayerMark':
        return PlayerMark(-self.value)

    def __str__(self):
        return 'X' if self is PlayerMark.CROSS else 'O'


class GameStatus(namedtuple('GameStatus', ['state', 'winner'])):
    """Undecided, Draw, or Won(mark). The only terminal-detection contract engines rely on."""
    __slots__ = ()

    @classmethod
    def won(cls, mark: PlayerMark) -> 'GameStatus':
        return cls('won', PlayerMark(mark))

    @property
    def is_over(self) -> bool:
        return self.state != 'undecided'

    def __str__(self):
        if self.state == 'won':
            return f"Won({self.winner})"
        return self.state.capitalize()

GameStatus.UNDECIDED = GameStatus('undecided', None)
GameStatus.DRAW = GameStatus('draw', None)


class GameType(Enum):
    TTT = 'ttt'
    UTTT = 'uttt'
    C4 = 'c4'


# One finished arena game. Kept in memory; callers decide where it goes.
GameRecord = namedtuple('GameRecord', [
    'game',        # GameType
    'player1',     # name of the Naught player (moves first)
    'player2',     # name of the Cross player
    'result',      # GameStatus
    'played_at',   # datetime
    'time1',       # seconds left on player1's clock (None outside blitz)
    'time2'        # seconds left on player2's clock (None outside blitz)
])


class QTable:
    """
    What MCTS learns:

        returns:      (state, action) -> (accumulated return, visit count)
        state_visits: state -> total visit count

    Visit counts only ever grow.
    """

    def __init__(self, returns: dict = None, state_visits: dict = None):
        self.returns = {} if returns is None else returns
        self.state_visits = {} if state_visits is None else state_visits

    def stats(self, state, action):
        return self.returns.get((state, action), (0.0, 0.0))

    def visits(self, state) -> float:
        return self.state_visits.get(state, 0.0)

    def mark_visited(self, state):
        self.state_visits[state] = self.visits(state) + 1.0

    def record(self, state, action, g_return: float):
        w, v = self.stats(state, action)
        self.returns[(state, action)] = (w + g_return, v + 1.0)
        self.state_visits[state] = self.visits(state) + 1.0

    def __len__(self):
        return len(self.returns)

    def __eq__(self, other):
        if not isinstance(other, QTable):
            return NotImplemented
        return self.returns == other.returns and self.state_visits == other.state_visits
