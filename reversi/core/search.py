import logging
import random
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple, Union

from reversi.core.board import Cell, Outcome, ReversiBoard
from reversi.core.policy import HeuristicPolicy, Policy, get_policy
from reversi.core.rollout import rollout
from reversi.core.utils import format_info, list_average, rollouts_per_second

logger = logging.getLogger(__name__)

WIN_REWARD = 2
LOSS_PENALTY = -10
TIE_REWARD = 1

DEFAULT_PLAYOUTS = 500
DEFAULT_TIME_LIMIT = 10.0


@dataclass
class SearchReport:
    best_move: Optional[int] = None
    scores: Dict[int, int] = field(default_factory=dict)
    rollouts: Dict[int, int] = field(default_factory=dict)
    total_rollouts: int = 0
    elapsed: float = 0.0
    stopped_early: bool = False

    @property
    def best_score(self) -> Optional[int]:
        if self.best_move is None:
            return None
        return self.scores[self.best_move]


def outcome_reward(outcome: Outcome, mover: Cell) -> int:
    """Score one rollout result from the point of view of `mover`."""
    if outcome == Outcome.TIE:
        return TIE_REWARD
    mover_won = (outcome == Outcome.LIGHT_WINS) == (mover == Cell.LIGHT)
    return WIN_REWARD if mover_won else LOSS_PENALTY


class SearchEngine:
    """
    Flat Monte-Carlo move selection.

    Every legal move gets up to `playouts` independent rollouts, scored
    +2 / -10 / +1 for a mover win / loss / tie. There is no tree and no
    exploration bonus: the move with the highest total wins, ties going to
    the lowest cell index.

    The wall clock is checked before each rollout. Once `time_limit` is
    exceeded no new rollouts start, so moves later in index order may get
    fewer rollouts, or none.
    """

    def __init__(self, policy: Union[Policy, str, None] = None, playouts: int = DEFAULT_PLAYOUTS,
                 time_limit: Optional[float] = DEFAULT_TIME_LIMIT, threads: int = 1,
                 seed: Optional[int] = None):
        if isinstance(policy, str):
            policy = get_policy(policy)
        self.policy = policy or HeuristicPolicy()
        self.playouts = playouts
        self.time_limit = time_limit
        self.threads = max(1, threads)
        self.rng = random.Random(seed)

        self._stop_event = threading.Event()
        self._search_lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None

        self.last_report: Optional[SearchReport] = None
        self.playouts_per_second: List[float] = []
        self.search_times: List[float] = []

    # --- Metrics ---

    def reset_metrics(self):
        self.playouts_per_second.clear()
        self.search_times.clear()

    def get_average_rollouts_per_second(self) -> Optional[float]:
        return list_average(self.playouts_per_second)

    def get_average_search_seconds(self) -> Optional[float]:
        return list_average(self.search_times)

    # --- Search ---

    def search(self, board: ReversiBoard, playouts: Optional[int] = None) -> SearchReport:
        """
        Run one search and return its own report. `playouts` overrides the
        engine's budget for this call only. Searches on the same engine run
        one at a time.
        """
        with self._search_lock:
            self._stop_event.clear()
            return self._search(board, playouts)

    def search_best_move(self, board: ReversiBoard) -> Optional[int]:
        return self.search(board).best_move

    def start_search(self, board: ReversiBoard,
                     callback: Optional[Callable[[Optional[int], SearchReport], None]] = None):
        if self._thread and self._thread.is_alive(): return
        self._stop_event.clear()
        snapshot = board.copy()

        def worker():
            with self._search_lock:
                report = self._search(snapshot)
            if callback: callback(report.best_move, report)

        self._thread = threading.Thread(target=worker, daemon=True)
        self._thread.start()

    def stop(self):
        """Stop issuing rollouts; the ones already running finish."""
        self._stop_event.set()
        if self._thread:
            self._thread.join(timeout=0.2)

    def _search(self, board: ReversiBoard, playouts: Optional[int] = None) -> SearchReport:
        playouts = self.playouts if playouts is None else playouts
        report = SearchReport()
        candidates = board.legal_moves()
        if not candidates:
            self.last_report = report
            return report

        # One generator per candidate, drawn in order so a seeded engine is
        # reproducible whether or not the candidates run in parallel.
        rngs = [random.Random(self.rng.getrandbits(64)) for _ in candidates]
        start_time = time.monotonic()

        if self.threads > 1 and len(candidates) > 1:
            with ThreadPoolExecutor(max_workers=self.threads) as pool:
                results = list(pool.map(
                    lambda args: self._run_candidate(board, args[0], args[1], playouts, start_time),
                    zip(candidates, rngs)))
        else:
            results = [self._run_candidate(board, move, rng, playouts, start_time)
                       for move, rng in zip(candidates, rngs)]

        elapsed = time.monotonic() - start_time

        best_move, best_score = None, None
        for move, (score, count) in zip(candidates, results):
            report.scores[move] = score
            report.rollouts[move] = count
            if best_score is None or score > best_score:
                best_move, best_score = move, score

        report.best_move = best_move
        report.total_rollouts = sum(report.rollouts.values())
        report.elapsed = elapsed
        report.stopped_early = self._stop_event.is_set()

        rate = rollouts_per_second(report.total_rollouts, elapsed)
        if rate is not None:
            self.playouts_per_second.append(rate)
        self.search_times.append(elapsed)
        self.last_report = report

        logger.info(format_info(candidates, report.total_rollouts, elapsed,
                                best_move, best_score, report.stopped_early))
        return report

    def _out_of_time(self, start_time: float) -> bool:
        if self.time_limit is None:
            return False
        return time.monotonic() - start_time > self.time_limit

    def _run_candidate(self, board: ReversiBoard, move: int, rng: random.Random,
                       playouts: int, start_time: float) -> Tuple[int, int]:
        """Run the rollouts for one candidate. Returns (score, rollouts)."""
        mover = board.turn
        score = 0
        count = 0

        for _ in range(playouts):
            if self._stop_event.is_set():
                break
            if self._out_of_time(start_time):
                logger.debug("Time limit of %ss exceeded at move %d, making decision", self.time_limit, move)
                self._stop_event.set()
                break

            sim = board.copy()
            sim.apply_move(move)
            sim.switch_side()
            score += outcome_reward(rollout(sim, self.policy, rng), mover)
            count += 1

        return score, count
