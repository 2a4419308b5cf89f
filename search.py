"""
Depth-limited game-tree search.

Both players below walk the tree from scratch on every decision: no
transposition table, no iterative deepening. The searching side maximizes
the heuristic from its own point of view and assumes the opponent minimizes
it. MinimaxPlayer explores every child and serves as the reference that
AlphaBetaPlayer's pruning must agree with.
"""

import math

from data_structures import PlayerMark
from player import Player
from utils import argmax_first


class MinimaxPlayer(Player):

    def __init__(self, mark: PlayerMark, heuristic_fn, depth: int, name: str = None):
        mark = PlayerMark(mark)
        super().__init__(name or f"{self.__class__.__name__.replace('Player', '').lower()} {mark}")
        self.mark = mark
        self.heuristic_fn = heuristic_fn
        self.max_depth = depth
        # Leaves evaluated during the last decision. Small means good pruning.
        self.n_leafs_evaluated = 0

    def heuristic(self, board) -> float:
        self.n_leafs_evaluated += 1
        return self.heuristic_fn(self.mark, board)

    def _children(self, node, mark):
        for move in node.valid_moves():
            child = node.copy()
            child.place_mark(move, mark)
            yield child

    def score_child(self, child) -> float:
        """Score a position reached by one of our root moves; the opponent is to reply."""
        return self.minimax(child, self.max_depth, maximizing=False)

    def minimax(self, node, depth: int, maximizing: bool) -> float:
        if depth == 0 or node.game_is_over():
            return self.heuristic(node)
        if maximizing:
            value = -math.inf
            for child in self._children(node, self.mark):
                value = max(value, self.minimax(child, depth - 1, False))
        else:
            value = math.inf
            for child in self._children(node, self.mark.other()):
                value = min(value, self.minimax(child, depth - 1, True))
        return value

    def play(self, board):
        moves = self._moves_or_raise(board)
        self.n_leafs_evaluated = 0

        def scored():
            for move in moves:
                child = board.copy()
                child.place_mark(move, self.mark)
                yield move, self.score_child(child)

        move = argmax_first(scored())
        self.logger.info(f"{self.n_leafs_evaluated} heuristic evaluations computed by {self.name}")
        return move


class AlphaBetaPlayer(MinimaxPlayer):
    """Minimax with alpha-beta pruning. Same choice as MinimaxPlayer, fewer leaves."""

    def score_child(self, child) -> float:
        return self.alphabeta(child, self.max_depth, -math.inf, math.inf, maximizing=False)

    def alphabeta(self, node, depth: int, alpha: float, beta: float, maximizing: bool) -> float:
        if depth == 0 or node.game_is_over():
            return self.heuristic(node)
        if maximizing:
            value = -math.inf
            for child in self._children(node, self.mark):
                value = max(value, self.alphabeta(child, depth - 1, alpha, beta, False))
                alpha = max(alpha, value)
                if value >= beta:
                    break
        else:
            value = math.inf
            for child in self._children(node, self.mark.other()):
                value = min(value, self.alphabeta(child, depth - 1, alpha, beta, True))
                beta = min(beta, value)
                if value <= alpha:
                    break
        return value
