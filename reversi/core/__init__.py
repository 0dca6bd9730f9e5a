"""Core engine components: board, playout policies, rollouts and search."""

from .board import (
    Cell, Outcome, OutOfRangeError, ReversiBoard,
    new_game, is_legal, legal_moves, apply_move, switch_side, score, check_terminal,
)
from .policy import HeuristicPolicy, Policy, RandomPolicy, get_policy
from .rollout import rollout
from .search import SearchEngine, SearchReport
