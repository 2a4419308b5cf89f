# utils.py

import math


def argmax_first(scored):
    """
    Returns the item of the first (item, score) pair with the greatest score.

    Ties go to the earliest pair. A NaN never beats and is never beaten, so a
    decision is always reached.
    """
    best_item, best_score = None, None
    for item, score in scored:
        if best_score is None or score > best_score:
            best_item, best_score = item, score
    return best_item


def all_argmax(scored) -> list:
    """Returns every item whose score equals the maximum score, in encounter order."""
    best_score, best_items = -math.inf, []
    for item, score in scored:
        if score > best_score:
            best_score, best_items = score, [item]
        elif score == best_score:
            best_items.append(item)
    return best_items
