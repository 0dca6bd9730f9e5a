"""
Playout policies used inside rollouts.

A policy only picks among the moves it is given; it never looks ahead.
The heuristic policy ranks moves with fixed positional tables: corners
cannot be flipped, and the squares next to corners tend to give them away.
"""

import random
from abc import ABC, abstractmethod
from typing import Dict, Sequence

CORNERS = frozenset({0, 7, 56, 63})
BAD_EDGES = frozenset({1, 6, 8, 15, 48, 55, 57, 62})
WORST = frozenset({9, 14, 49, 54})


class Policy(ABC):
    """Chooses one move out of a non-empty candidate list."""

    name = "base"

    @abstractmethod
    def choose(self, moves: Sequence[int], rng: random.Random) -> int:
        pass


class RandomPolicy(Policy):
    name = "random"

    def choose(self, moves: Sequence[int], rng: random.Random) -> int:
        return rng.choice(moves)


class HeuristicPolicy(Policy):
    name = "heuristic"

    @staticmethod
    def tiers(moves: Sequence[int]):
        """Yield the candidate tiers in priority order."""
        yield [m for m in moves if m in CORNERS]
        yield [m for m in moves if m not in BAD_EDGES and m not in WORST]
        yield [m for m in moves if m in BAD_EDGES]
        yield list(moves)

    def choose(self, moves: Sequence[int], rng: random.Random) -> int:
        for tier in self.tiers(moves):
            if tier:
                return rng.choice(tier)
        raise ValueError("no moves to choose from")


POLICIES: Dict[str, Policy] = {
    "random": RandomPolicy(),
    "heuristic": HeuristicPolicy(),
}


def get_policy(name: str) -> Policy:
    policy = POLICIES.get(name)
    if policy is None:
        raise ValueError(f"Unsupported policy: {name}")
    return policy
