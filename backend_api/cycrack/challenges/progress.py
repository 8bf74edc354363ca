from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, Optional

from .levels import get_level
from .scoring import round_half_up

# Correct answers needed in one run before the next level opens.
REQUIRED_CORRECT_TO_UNLOCK = 5


@dataclass(frozen=True)
class RoundResult:
    correct: bool
    points: int = 0
    time_elapsed: float = 0


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class LevelSummary:
    """Totals for one run through a level."""

    level_id: Any
    total_score: int
    correct_answers: int
    total_challenges: int
    accuracy: int
    fastest_time: Optional[float]
    unlocks_next: bool

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


# PUBLIC_INTERFACE
def summarize_level(level_id: Any, results: Iterable[RoundResult]) -> Optional[LevelSummary]:
    """Summarize a level run.

    Accuracy is a whole percentage of the level's challenge count (or of the
    rounds played, for endless). ``fastest_time`` only considers solved rounds
    and is None when nothing was solved.

    Returns:
        LevelSummary, or None for an unknown level.
    """
    level = get_level(level_id)
    if level is None:
        return None
    results = list(results)
    solved = [result for result in results if result.correct]
    total = level.challenges_per_level or len(results)
    accuracy = round_half_up(len(solved) / total * 100) if solved and total else 0
    return LevelSummary(
        level_id=level.id,
        total_score=sum(result.points for result in solved),
        correct_answers=len(solved),
        total_challenges=total,
        accuracy=accuracy,
        fastest_time=min((result.time_elapsed for result in solved), default=None),
        unlocks_next=not level.is_endless and len(solved) >= REQUIRED_CORRECT_TO_UNLOCK,
    )
