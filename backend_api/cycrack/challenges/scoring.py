"""
Round scoring.

The calculation is pure: identical inputs give identical points, so a score
reported by a client can be recomputed and checked server side. Factors are
applied in a fixed order (time bonus, hints, attempts, streak) because the
order of float multiplication affects the rounded result.
"""
from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Any, Dict

from .levels import ATTEMPT_MULTIPLIERS, HINT_MULTIPLIERS, MAX_HINTS, STREAK_CAP, get_level

MIN_SCORE = 10


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (not banker's rounding)."""
    return int(math.floor(value + 0.5))


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class ScoreContext:
    """Inputs for one solved round."""

    level_id: Any
    time_elapsed: float
    hints_used: int = 0
    attempts: int = 1
    streak: int = 0
    round_number: int = 1

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


# PUBLIC_INTERFACE
def score_breakdown(
    level_id: Any,
    time_elapsed: float,
    hints_used: int = 0,
    attempts: int = 1,
    streak: int = 0,
    round_number: int = 1,
) -> Dict[str, Any]:
    """Compute a round score and every factor that went into it.

    Returns:
        dict with base_points, time_bonus, hint_multiplier,
        attempt_multiplier, streak_multiplier, raw (unrounded) and points.
        An unknown level yields a dict with points 0.
    """
    level = get_level(level_id)
    if level is None:
        return {"level_id": level_id, "points": 0}

    base = level.base_points_for_round(round_number)
    max_bonus = base * 0.5
    penalty = min(max(time_elapsed, 0) * 2, max_bonus)
    time_bonus = max_bonus - penalty

    hint_multiplier = HINT_MULTIPLIERS[min(max(hints_used, 0), MAX_HINTS)]
    attempt_multiplier = ATTEMPT_MULTIPLIERS[min(max(attempts, 1) - 1, len(ATTEMPT_MULTIPLIERS) - 1)]
    streak_multiplier = 1 + min(max(streak, 0), STREAK_CAP) * (level.streak_multiplier - 1)

    score = base
    score += time_bonus
    score *= hint_multiplier
    score *= attempt_multiplier
    score *= streak_multiplier

    return {
        "level_id": level.id,
        "base_points": base,
        "time_bonus": time_bonus,
        "hint_multiplier": hint_multiplier,
        "attempt_multiplier": attempt_multiplier,
        "streak_multiplier": streak_multiplier,
        "raw": score,
        "points": max(round_half_up(score), MIN_SCORE),
    }


# PUBLIC_INTERFACE
def calculate_score(
    level_id: Any,
    time_elapsed: float,
    hints_used: int = 0,
    attempts: int = 1,
    streak: int = 0,
    round_number: int = 1,
) -> int:
    """Points for a solved round; never below 10 for a known level, 0 for an unknown one.

    Example:
        calculate_score(1, time_elapsed=0, hints_used=0, attempts=1, streak=0)  # 225
    """
    return score_breakdown(level_id, time_elapsed, hints_used, attempts, streak, round_number)["points"]


def score_context(context: ScoreContext) -> int:
    return calculate_score(**context.as_dict())
