"""
Challenges: level table, seeded word generation, challenge generator, scorer,
single-round state machine and level run summaries.

Like the cipher registry, nothing here imports Django.
"""

from .generator import Challenge, ChallengeGenerator, build_challenge, generate_challenge_at
from .levels import (
    ENDLESS,
    ENDLESS_LEVEL,
    LEVELS,
    LevelDefinition,
    completion_message,
    get_level,
    is_level_unlocked,
    levels_with_status,
    list_levels,
    parse_level_id,
)
from .progress import LevelSummary, RoundResult, summarize_level
from .rounds import GuessResult, Hint, Round, RoundStateError, RoundStatus
from .scoring import ScoreContext, calculate_score, score_breakdown
from .seeding import SessionSeed, generate_random_word, mulberry32, session_seed_from_datetime

__all__ = [
    "Challenge",
    "ChallengeGenerator",
    "build_challenge",
    "generate_challenge_at",
    "ENDLESS",
    "ENDLESS_LEVEL",
    "LEVELS",
    "LevelDefinition",
    "completion_message",
    "get_level",
    "is_level_unlocked",
    "levels_with_status",
    "list_levels",
    "parse_level_id",
    "LevelSummary",
    "RoundResult",
    "summarize_level",
    "GuessResult",
    "Hint",
    "Round",
    "RoundStateError",
    "RoundStatus",
    "ScoreContext",
    "calculate_score",
    "score_breakdown",
    "SessionSeed",
    "generate_random_word",
    "mulberry32",
    "session_seed_from_datetime",
]
