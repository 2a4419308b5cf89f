# mcts.py

"""
Monte Carlo Tree Search over a flat table of state-action statistics.

There is no node graph. The search recomputes transitions from the game
state itself and keeps everything it learns in a QTable:

    (state, action) -> (accumulated return, visit count)
    state           -> total visit count

Any process the engine can sample from is an Mdp. Board games are turned
into one by BoardMdp, which rewards the player who just moved and uses a
negative discount factor so that a return that is good one ply down is bad
one ply up.
"""

import math
import random
import time
from abc import ABC, abstractmethod

from config import config
from data_structures import GameType, QTable
from db_manager import QMapStore
from player import Player
from utils import all_argmax


class Mdp(ABC):
    """act / is_terminal / allowed_actions plus a fixed discount factor."""

    discount_factor = 1.0

    @abstractmethod
    def act(self, state, action):
        """Sample (next_state, reward). Must not mutate `state`."""
        pass

    @abstractmethod
    def is_terminal(self, state) -> bool:
        pass

    @abstractmethod
    def allowed_actions(self, state) -> list:
        pass

    def rollout(self, state, rng: random.Random) -> float:
        """Discounted return of uniformly random play from `state` until the end."""
        g_return, scale = 0.0, 1.0
        while not self.is_terminal(state):
            action = rng.choice(self.allowed_actions(state))
            state, reward = self.act(state, action)
            g_return += scale * reward
            scale *= self.discount_factor
        return g_return


class BoardMdp(Mdp):
    """
    The single-agent view of a two-player board game. Reward is +1 when the
    mover wins with this move, -1 if the move somehow hands the win to the
    other side, 0 otherwise.
    """

    def __init__(self, discount_factor: float = None):
        self.discount_factor = config.DISCOUNT_FACTOR if discount_factor is None else discount_factor

    def act(self, state, action):
        board = state.copy()
        mark = board.current_player()
        board.place_mark(action, mark)
        winner = board.winner()
        if winner is None:
            return board, 0.0
        return board, 1.0 if winner == mark else -1.0

    def is_terminal(self, state):
        return state.game_is_over()

    def allowed_actions(self, state):
        return state.valid_moves()


def ucb1(c: float, total_return: float, n_visits: float, total_visits: float) -> float:
    """Unvisited actions score +inf so each is tried once before any is repeated."""
    if n_visits == 0:
        return math.inf
    return total_return / n_visits + c * math.sqrt(math.log(total_visits) / n_visits)


def best_action(mdp: Mdp, state, c: float, qtable: QTable, rng: random.Random):
    """The UCB1-maximizing action; ties are broken uniformly at random."""
    actions = mdp.allowed_actions(state)
    if not actions:
        raise ValueError(f"No actions available from {state!r}")
    t = qtable.visits(state)
    scored = ((action, ucb1(c, *qtable.stats(state, action), t)) for action in actions)
    return rng.choice(all_argmax(scored))


def mcts_step(mdp: Mdp, state, c: float, qtable: QTable, rng: random.Random) -> float:
    """
    One simulation from `state`: select down the known part of the tree with
    UCB1, roll out randomly from the first never-visited state, then fold the
    returns back up the path and record them.

    Walks with an explicit path instead of recursing, so long games cannot
    exhaust the call stack.
    """
    path = []
    tail = 0.0
    while not mdp.is_terminal(state):
        action = best_action(mdp, state, c, qtable, rng)
        new_state, reward = mdp.act(state, action)
        path.append((state, action, reward))
        if qtable.visits(new_state) == 0:
            qtable.mark_visited(new_state)
            tail = mdp.rollout(new_state, rng)
            break
        state = new_state

    g_return = tail
    for state, action, reward in reversed(path):
        g_return = reward + mdp.discount_factor * g_return
        qtable.record(state, action, g_return)
    return g_return


def run_train_steps(mdp: Mdp, state, c: float, qtable: QTable, rng: random.Random, n_rounds: int):
    for _ in range(n_rounds):
        mcts_step(mdp, state, c, qtable, rng)


def exploration_constant(game_type) -> float:
    return config.EXPLORATION_CONSTANTS[GameType(game_type).value]


class MCTSPlayer(Player):
    """
    Plays by MCTS on the board's MDP. The QTable survives between moves and
    games, and, when `qmap_path` is given, between processes: it is loaded
    here and written back by close(). Use the player as a context manager so
    the save happens on every exit path.
    """

    def __init__(self, exploration: float = 1.0, seed=None, qmap_path: str = None,
                 iterations: int = None, mdp: Mdp = None, name: str = None):
        super().__init__(name or f"mcts c={exploration}")
        self.c = exploration
        self.rng = random.Random(seed)
        self.iterations = iterations
        self.mdp = mdp or BoardMdp()
        self.store = QMapStore(qmap_path) if qmap_path else None
        self.qtable = self.store.load() if self.store else QTable()
        self._closed = False

    def play(self, board):
        self._moves_or_raise(board)
        n = self.iterations if self.iterations is not None else config.MCTS_ITERATIONS
        run_train_steps(self.mdp, board, self.c, self.qtable, self.rng, n)
        action = best_action(self.mdp, board, self.c, self.qtable, self.rng)
        self.logger.info(f"{self.name} played {action} after {n} iterations")
        return action

    def blitz(self, board, time_remaining):
        """
        Simulate until the projected end of the next iteration would pass a
        fixed fraction of the remaining clock. At least one iteration runs.
        """
        self._moves_or_raise(board)
        budget = time_remaining * config.BLITZ_TIME_FRACTION
        start = time.perf_counter()
        n = 0
        while True:
            mcts_step(self.mdp, board, self.c, self.qtable, self.rng)
            n += 1
            elapsed = time.perf_counter() - start
            if elapsed + elapsed / n > budget:
                break
        action = best_action(self.mdp, board, self.c, self.qtable, self.rng)
        self.logger.debug(f"{self.name} blitzed {action}: {n} iterations in {elapsed:.4f}s of {time_remaining:.4f}s left")
        return action

    def close(self):
        if self._closed:
            return
        self._closed = True
        if self.store:
            self.store.save(self.qtable)
