"""
Computer-vs-computer self-play.

Each colour searches with its own SearchEngine (and so its own rollout
policy and metrics). Results are tallied on the Match and written as one
line per game to the ``reversi.results`` logger.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from reversi.config import CONFIG
from reversi.core.board import Cell, Outcome, ReversiBoard
from reversi.core.search import SearchEngine
from reversi.main import parse_color

logger = logging.getLogger(__name__)
results_logger = logging.getLogger("reversi.results")

RESULT_LINES = {
    Outcome.LIGHT_WINS: "Light has won.",
    Outcome.DARK_WINS: "Dark has won.",
    Outcome.TIE: "It's a tie.",
}


@dataclass
class MatchStats:
    light_wins: int = 0
    dark_wins: int = 0
    ties: int = 0

    @property
    def games(self) -> int:
        return self.light_wins + self.dark_wins + self.ties

    def record(self, outcome: Outcome):
        if outcome == Outcome.LIGHT_WINS:
            self.light_wins += 1
        elif outcome == Outcome.DARK_WINS:
            self.dark_wins += 1
        elif outcome == Outcome.TIE:
            self.ties += 1
        else:
            raise ValueError(f"Cannot record unfinished game: {outcome}")


class Match:
    def __init__(self, light: Optional[SearchEngine] = None, dark: Optional[SearchEngine] = None,
                 first: Optional[Cell] = None):
        def default_engine(policy_name):
            return SearchEngine(policy_name, playouts=CONFIG.search.playouts,
                                time_limit=CONFIG.search.time_limit_s,
                                threads=CONFIG.search.threads, seed=CONFIG.search.seed)

        self.engines: Dict[Cell, SearchEngine] = {
            Cell.LIGHT: light or default_engine(CONFIG.game.light_policy),
            Cell.DARK: dark or default_engine(CONFIG.game.dark_policy),
        }
        self.first = first if first is not None else parse_color(CONFIG.game.first_mover)
        self.board = ReversiBoard.new_game(self.first)
        self.stats = MatchStats()

    def reset(self):
        self.board = ReversiBoard.new_game(self.first)

    def play_turn(self) -> Outcome:
        """Play one move (or pass) for the side to move and report the state."""
        result = self.board.check_terminal()
        if result != Outcome.NOT_OVER:
            return result
        if self.board.is_game_over():
            return self.board.check_terminal(forced_end=True)

        mover = self.board.turn
        move = self.engines[mover].search_best_move(self.board)
        if move is None:
            logger.info("%s has no legal move, skipping turn", mover.name)
        else:
            self.board.apply_move(move)
        self.board.switch_side()
        return Outcome.NOT_OVER

    def play_game(self) -> Outcome:
        """Play from the current position to the end and record the result."""
        # Each iteration fills a cell or passes; two passes in a row end the game.
        for _ in range(2 * self.board.empty_count() + 2):
            outcome = self.play_turn()
            if outcome != Outcome.NOT_OVER:
                break
        else:
            raise RuntimeError("game did not finish")

        self.stats.record(outcome)
        light, dark = self.board.score()
        results_logger.info("%s light=%d dark=%d", RESULT_LINES[outcome], light, dark)
        for color, engine in self.engines.items():
            logger.info("%s (%s): avg rollouts/s %s, avg search time %s",
                        color.name, engine.policy.name,
                        _fmt(engine.get_average_rollouts_per_second()),
                        _fmt(engine.get_average_search_seconds()))
        return outcome

    def play(self, games: int = 1) -> MatchStats:
        for _ in range(games):
            self.reset()
            self.play_game()
        logger.info("Light wins: %d, Dark wins: %d, Ties: %d",
                    self.stats.light_wins, self.stats.dark_wins, self.stats.ties)
        return self.stats


def _fmt(value: Optional[float]) -> str:
    return "no data" if value is None else f"{value:.3f}"
