"""Rollout simulator: plays a cloned board out to a terminal outcome."""

import random
from typing import Optional

from reversi.core.board import Outcome, ReversiBoard
from reversi.core.policy import Policy


def rollout(board: ReversiBoard, policy: Policy, rng: Optional[random.Random] = None) -> Outcome:
    """
    Play `board` to the end with `policy` choosing every move.

    The board is mutated; callers pass a clone. Every iteration either
    returns or fills one empty cell, so empties + 1 iterations always suffice.
    """
    rng = rng or random.Random()
    max_iterations = board.empty_count() + 1

    for _ in range(max_iterations):
        result = board.check_terminal()
        if result != Outcome.NOT_OVER:
            return result

        moves = board.legal_moves()
        if not moves:
            board.switch_side()
            moves = board.legal_moves()
            if not moves:
                return board.check_terminal(forced_end=True)

        board.apply_move(policy.choose(moves, rng))
        board.switch_side()

    raise RuntimeError(f"rollout did not terminate within {max_iterations} iterations")
