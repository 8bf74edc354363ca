"""
CyCrack app package initializer.

Re-exports the cipher registry and challenge helpers so callers can import
from cycrack directly, e.g.:

    from cycrack import REGISTRY, ChallengeGenerator, calculate_score
"""

# PUBLIC_INTERFACE
from .ciphers import REGISTRY, Cipher, CipherError, InvalidParameterError, UnknownCipherError, get_cipher
from .challenges import (
    Challenge,
    ChallengeGenerator,
    Round,
    RoundStateError,
    calculate_score,
    get_level,
    is_level_unlocked,
    list_levels,
)

__all__ = [
    "REGISTRY",
    "Cipher",
    "CipherError",
    "InvalidParameterError",
    "UnknownCipherError",
    "get_cipher",
    "Challenge",
    "ChallengeGenerator",
    "Round",
    "RoundStateError",
    "calculate_score",
    "get_level",
    "is_level_unlocked",
    "list_levels",
]
