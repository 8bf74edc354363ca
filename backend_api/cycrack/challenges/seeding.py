"""Deterministic plaintext generation.

Words are a pure function of ``(seed, counter, length)``: the same inputs
produce the same word in any process. The PRNG is Mulberry32 with 32-bit
wraparound arithmetic so the output matches other implementations bit for bit.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..ciphers import ALPHABET

MASK32 = 0xFFFFFFFF
WORD_SEED_STRIDE = 12345
LETTER_SEED_STRIDE = 7919


# PUBLIC_INTERFACE
def mulberry32(seed: int) -> float:
    """Single Mulberry32 step for ``seed``, returning a float in [0, 1)."""
    t = (seed + 0x6D2B79F5) & MASK32
    t = ((t ^ (t >> 15)) * (t | 1)) & MASK32
    t ^= (t + (((t ^ (t >> 7)) * (t | 61)) & MASK32)) & MASK32
    return ((t ^ (t >> 14)) & MASK32) / 4294967296


# PUBLIC_INTERFACE
def session_seed_from_datetime(moment: datetime) -> int:
    """Seed built from the wall-clock digits: YYYYMMDDhhmmss as one integer."""
    return (
        moment.year * 10_000_000_000
        + moment.month * 100_000_000
        + moment.day * 1_000_000
        + moment.hour * 10_000
        + moment.minute * 100
        + moment.second
    )


# PUBLIC_INTERFACE
def generate_random_word(seed: int, counter: int, length: int) -> str:
    """Uppercase pseudo-random word for challenge number ``counter`` of a session."""
    word_seed = seed + counter * WORD_SEED_STRIDE
    letters = []
    for position in range(length):
        value = mulberry32(word_seed + position * LETTER_SEED_STRIDE)
        letters.append(ALPHABET[int(value * 26)])
    return "".join(letters)


# PUBLIC_INTERFACE
@dataclass
class SessionSeed:
    """Seed and per-challenge counter owned by one game session.

    ``next_word`` consumes one counter value per call, never one per letter.
    """

    seed: int
    counter: int = 0

    @classmethod
    def from_clock(cls, now: Optional[datetime] = None) -> "SessionSeed":
        return cls(seed=session_seed_from_datetime(now or datetime.now()))

    def peek_word(self, length: int) -> str:
        return generate_random_word(self.seed, self.counter, length)

    def next_word(self, length: int) -> str:
        word = self.peek_word(length)
        self.counter += 1
        return word
