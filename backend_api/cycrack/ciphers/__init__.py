"""
Cipher registry.

Exports:
- Cipher base class, WorkedExample and the error types
- CipherRegistry, the default REGISTRY and get_cipher for lookups
- mod_inverse and AFFINE_VALID_A for the affine cipher's key space

These modules are framework-agnostic: nothing here imports Django, so the
registry can be used from views, management code or plain scripts.
"""

from .base import (
    ALPHABET,
    DIFFICULTY_ORDER,
    Cipher,
    CipherError,
    InvalidParameterError,
    UnknownCipherError,
    WorkedExample,
)
from .registry import REGISTRY, CipherRegistry, get_cipher
from .substitution import AFFINE_VALID_A, mod_inverse

__all__ = [
    "ALPHABET",
    "DIFFICULTY_ORDER",
    "Cipher",
    "CipherError",
    "InvalidParameterError",
    "UnknownCipherError",
    "WorkedExample",
    "REGISTRY",
    "CipherRegistry",
    "get_cipher",
    "AFFINE_VALID_A",
    "mod_inverse",
]
