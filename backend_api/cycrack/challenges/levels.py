from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Optional, Tuple, Union

from ..ciphers import REGISTRY

logger = logging.getLogger(__name__)

LevelId = Union[int, str]
ENDLESS = "endless"

# Score multiplier by number of hints used (capped at 3).
HINT_MULTIPLIERS = MappingProxyType({0: 1.0, 1: 0.9, 2: 0.7, 3: 0.4})
# Score multiplier by attempt number: first try is worth the most, 5th+ the least.
ATTEMPT_MULTIPLIERS: Tuple[float, ...] = (1.5, 1.25, 1.1, 1.0, 0.85)
MAX_HINTS = 3
STREAK_CAP = 5


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class LevelDefinition:
    """Immutable description of one difficulty tier.

    Fields:
    - id: 1..6, or "endless"
    - ciphers: cipher ids a round of this level may draw from
    - word_length: length of the generated plaintext
    - challenges_per_level: rounds per run (None for endless)
    - time_limit: seconds shown by the UI timer (None for no limit)
    - base_points / time_bonus / streak_multiplier: scoring constants
    - points_increase_per_round: endless only, added to base points per round
    - unlock_requirement: highest level that must be cleared first
    """

    id: LevelId
    name: str
    description: str
    ciphers: Tuple[str, ...]
    word_length: int
    challenges_per_level: Optional[int]
    time_limit: Optional[int]
    max_attempts: int
    base_points: int
    time_bonus: int
    streak_multiplier: float
    xp_reward: int
    unlock_requirement: int
    completion_messages: Tuple[str, ...] = field(default=())
    points_increase_per_round: int = 0

    @property
    def is_endless(self) -> bool:
        return self.id == ENDLESS

    def base_points_for_round(self, round_number: int = 1) -> int:
        return self.base_points + self.points_increase_per_round * max(round_number - 1, 0)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "ciphers": list(self.ciphers),
            "word_length": self.word_length,
            "challenges_per_level": self.challenges_per_level,
            "time_limit": self.time_limit,
            "max_attempts": self.max_attempts,
            "base_points": self.base_points,
            "time_bonus": self.time_bonus,
            "streak_multiplier": self.streak_multiplier,
            "xp_reward": self.xp_reward,
            "unlock_requirement": self.unlock_requirement,
            "points_increase_per_round": self.points_increase_per_round,
        }


LEVELS: Tuple[LevelDefinition, ...] = (
    LevelDefinition(
        id=1,
        name="Rookie",
        description="Basic ciphers to get you started",
        ciphers=("reversed", "rot13", "simpleShift", "pigLatin", "rot5"),
        word_length=3,
        challenges_per_level=5,
        time_limit=120,
        max_attempts=5,
        base_points=100,
        time_bonus=2,
        streak_multiplier=1.1,
        xp_reward=50,
        unlock_requirement=0,
        completion_messages=(
            "You've taken your first steps into cryptography!",
            "Not bad for a beginner! The codes are getting nervous.",
            "Rookie no more! You're starting to think like a codebreaker.",
        ),
    ),
    LevelDefinition(
        id=2,
        name="Initiate",
        description="Classic ciphers with more challenge",
        ciphers=("caesar", "atbash", "a1z26", "keyword", "beaufort"),
        word_length=5,
        challenges_per_level=5,
        time_limit=100,
        max_attempts=4,
        base_points=150,
        time_bonus=3,
        streak_multiplier=1.15,
        xp_reward=75,
        unlock_requirement=1,
        completion_messages=(
            "Julius Caesar would be impressed!",
            "You're cracking codes like a true initiate.",
            "The ancient ciphers bow before your skills!",
        ),
    ),
    LevelDefinition(
        id=3,
        name="Hacker",
        description="Complex ciphers requiring more thought",
        ciphers=("vigenere", "railFence", "morse", "binary", "playfair", "polybius"),
        word_length=8,
        challenges_per_level=5,
        time_limit=120,
        max_attempts=4,
        base_points=200,
        time_bonus=4,
        streak_multiplier=1.2,
        xp_reward=100,
        unlock_requirement=2,
        completion_messages=(
            "You're hacking through ciphers like a pro!",
            "The digital realm trembles at your approach.",
            "Elite hacker status: CONFIRMED.",
        ),
    ),
    LevelDefinition(
        id=4,
        name="Expert",
        description="Advanced ciphers for seasoned crackers",
        ciphers=("affine", "substitution", "columnar", "hex", "bifid", "adfgx"),
        word_length=10,
        challenges_per_level=5,
        time_limit=150,
        max_attempts=4,
        base_points=300,
        time_bonus=5,
        streak_multiplier=1.25,
        xp_reward=150,
        unlock_requirement=3,
        completion_messages=(
            "Expert-level skills unlocked!",
            "Even the NSA is taking notes.",
            "Cryptographic mastery is within your grasp!",
        ),
    ),
    LevelDefinition(
        id=5,
        name="Master",
        description="Combined ciphers - the ultimate test",
        ciphers=("doubleCaesar", "reverseCaesar", "atbashVigenere", "fourSquare"),
        word_length=15,
        challenges_per_level=5,
        time_limit=180,
        max_attempts=5,
        base_points=500,
        time_bonus=8,
        streak_multiplier=1.5,
        xp_reward=250,
        unlock_requirement=4,
        completion_messages=(
            "Master-level complete! One level remains...",
            "The Enigma machine weeps at your brilliance.",
            "Almost legendary! Can you handle the final challenge?",
        ),
    ),
    LevelDefinition(
        id=6,
        name="Legendary",
        description="Modern cryptography concepts - for true masters",
        ciphers=("xorCipher", "base64ish", "fourSquare", "bifid", "playfair"),
        word_length=12,
        challenges_per_level=5,
        time_limit=240,
        max_attempts=6,
        base_points=750,
        time_bonus=10,
        streak_multiplier=2.0,
        xp_reward=500,
        unlock_requirement=5,
        completion_messages=(
            "LEGENDARY STATUS ACHIEVED! You are a true Cipher Master!",
            "You've conquered the impossible! The cryptographic world bows to you.",
            "Beyond legendary! You've transcended mere mortal codebreaking!",
        ),
    ),
)

ENDLESS_LEVEL = LevelDefinition(
    id=ENDLESS,
    name="Endless",
    description="Every cipher in the catalog, one round after another",
    ciphers=tuple(REGISTRY.ids()),
    word_length=8,
    challenges_per_level=None,
    time_limit=None,
    max_attempts=5,
    base_points=100,
    time_bonus=0,
    streak_multiplier=1.1,
    xp_reward=25,
    unlock_requirement=0,
    points_increase_per_round=25,
)

_BY_ID: Dict[LevelId, LevelDefinition] = {level.id: level for level in LEVELS + (ENDLESS_LEVEL,)}


# PUBLIC_INTERFACE
def parse_level_id(value: Any) -> Optional[LevelId]:
    """Normalize a level id from user input: ints, digit strings or "endless"."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if text == ENDLESS:
            return ENDLESS
        if text.isdigit():
            return int(text)
    return None


# PUBLIC_INTERFACE
def get_level(level_id: Any) -> Optional[LevelDefinition]:
    """Return the level definition, or None when the id is unknown."""
    level = _BY_ID.get(parse_level_id(level_id))
    if level is None:
        logger.warning("Unknown level id requested: %r", level_id)
    return level


# PUBLIC_INTERFACE
def list_levels(include_endless: bool = False) -> List[LevelDefinition]:
    """Numbered levels in order, optionally followed by the endless tier."""
    levels = list(LEVELS)
    if include_endless:
        levels.append(ENDLESS_LEVEL)
    return levels


# PUBLIC_INTERFACE
def is_level_unlocked(level_id: Any, highest_cleared_level: int) -> bool:
    """True when ``highest_cleared_level`` meets the level's unlock requirement."""
    level = get_level(level_id)
    if level is None:
        return False
    return highest_cleared_level >= level.unlock_requirement


def levels_with_status(highest_cleared_level: int, include_endless: bool = False) -> List[Dict[str, Any]]:
    return [
        {**level.as_dict(), "is_unlocked": highest_cleared_level >= level.unlock_requirement}
        for level in list_levels(include_endless)
    ]


def completion_message(level_id: Any, rng: Optional[random.Random] = None) -> str:
    level = get_level(level_id)
    if level is None or not level.completion_messages:
        return "Level Complete!"
    return (rng or random).choice(level.completion_messages)
