from __future__ import annotations

import logging
import random
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from ..ciphers import REGISTRY, CipherRegistry
from .levels import LevelDefinition, LevelId, get_level
from .seeding import SessionSeed

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class Challenge:
    """One round's puzzle, owned by that round and replaced wholesale by the next.

    ``cipher_params`` holds the exact values used for ``encrypted``; hints and
    examples for the round must be produced from these, never from defaults.
    """

    original: str
    encrypted: str
    cipher_id: str
    cipher_params: Dict[str, Any]
    level_id: LevelId
    max_attempts: int
    cipher_name: str = ""
    cipher_category: str = ""
    cipher_description: str = ""
    cipher_difficulty: str = ""
    time_limit: Optional[int] = None
    base_points: int = 0
    counter: int = 0
    extra: Dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


def build_challenge(
    level: LevelDefinition,
    word: str,
    cipher_id: str,
    rng: Optional[random.Random] = None,
    registry: CipherRegistry = REGISTRY,
    counter: int = 0,
) -> Challenge:
    """Encrypt ``word`` for ``level`` with freshly randomized parameters."""
    cipher = registry.require(cipher_id)
    params = cipher.randomize_params(rng) if cipher.has_params else {}
    encrypted = cipher.encode(word, params)
    return Challenge(
        original=word,
        encrypted=encrypted,
        cipher_id=cipher.id,
        cipher_params=dict(params),
        level_id=level.id,
        max_attempts=level.max_attempts,
        cipher_name=cipher.name,
        cipher_category=cipher.category,
        cipher_description=cipher.description,
        cipher_difficulty=cipher.difficulty,
        time_limit=level.time_limit,
        base_points=level.base_points,
        counter=counter,
    )


# PUBLIC_INTERFACE
class ChallengeGenerator:
    """Produces challenges for one game session.

    The plaintext is seeded by ``session`` (seed + counter). Cipher choice and
    keyed parameters come from ``rng``, which is unseeded unless the caller
    passes a seeded ``random.Random``; doing so makes a whole session
    replayable.
    """

    def __init__(
        self,
        session: Optional[SessionSeed] = None,
        rng: Optional[random.Random] = None,
        registry: CipherRegistry = REGISTRY,
    ):
        self.session = session or SessionSeed.from_clock()
        self.rng = rng or random.Random()
        self.registry = registry

    # PUBLIC_INTERFACE
    def initialize_session(self, now: Optional[datetime] = None) -> int:
        """Reset the seed from the clock and the counter to zero; return the seed."""
        self.session = SessionSeed.from_clock(now)
        logger.debug("Session initialized with seed %s", self.session.seed)
        return self.session.seed

    # PUBLIC_INTERFACE
    def generate_challenge(self, level_id: Any) -> Optional[Challenge]:
        """Generate the next challenge for ``level_id``.

        Returns:
            The populated Challenge, or None when the level is unknown.
        """
        level = get_level(level_id)
        if level is None:
            return None
        counter = self.session.counter
        word = self.session.next_word(level.word_length)
        cipher_id = self.rng.choice(level.ciphers)
        challenge = build_challenge(level, word, cipher_id, self.rng, self.registry, counter=counter)
        logger.debug(
            "Generated challenge #%s for level %s with %s %s",
            counter,
            level.id,
            challenge.cipher_id,
            challenge.cipher_params,
        )
        return challenge


# PUBLIC_INTERFACE
def generate_challenge_at(
    level_id: Any,
    seed: int,
    counter: int,
    rng: Optional[random.Random] = None,
    registry: CipherRegistry = REGISTRY,
) -> Optional[Challenge]:
    """Stateless variant: challenge number ``counter`` of the session ``seed``.

    Callers that hold the seed/counter pair themselves (e.g. an HTTP client)
    thread it through explicitly instead of sharing a generator object.
    """
    generator = ChallengeGenerator(SessionSeed(seed=seed, counter=counter), rng=rng, registry=registry)
    return generator.generate_challenge(level_id)
