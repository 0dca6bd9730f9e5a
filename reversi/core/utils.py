from typing import Optional, Sequence


def list_average(values: Sequence[float]) -> Optional[float]:
    """Arithmetic mean, or None when nothing has been recorded."""
    if not values:
        return None
    return sum(values) / len(values)


def rollouts_per_second(rollouts: int, elapsed: float) -> Optional[float]:
    """Rollout rate; None when rollouts ran but the clock measured no time."""
    if rollouts == 0:
        return 0.0
    return rollouts / elapsed if elapsed > 0 else None


def format_info(candidates, rollouts, elapsed, best_move, best_score, stopped_early=False):
    rate = rollouts_per_second(rollouts, elapsed)
    rps_str = str(int(rate)) if rate is not None else "-"
    best_str = str(best_move) if best_move is not None else "-"
    score_str = f"{best_score}" if best_score is not None else "-"
    stop_str = " stopped" if stopped_early else ""

    return (f"info candidates {len(candidates)} rollouts {rollouts} rps {rps_str} "
            f"time {elapsed:.3f} best {best_str} score {score_str}{stop_str}")
