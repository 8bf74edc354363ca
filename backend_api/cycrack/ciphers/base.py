from __future__ import annotations

import random
from dataclasses import dataclass
from string import Template
from typing import Any, Callable, Dict, Literal, Mapping, Optional, Tuple

# Ordinal difficulty tiers, easiest first.
Difficulty = Literal["easy", "medium", "hard", "expert"]
DIFFICULTY_ORDER: Tuple[str, ...] = ("easy", "medium", "hard", "expert")

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"


class CipherError(ValueError):
    """Base class for cipher registry errors."""


class UnknownCipherError(CipherError, KeyError):
    """Raised when a cipher id is not present in the registry."""

    def __str__(self) -> str:  # KeyError would repr() the message
        return str(self.args[0]) if self.args else "Unknown cipher"


class InvalidParameterError(CipherError):
    """Raised when cipher parameters fail validation."""


def is_letter(char: str) -> bool:
    """Return True for a single ASCII letter."""
    return len(char) == 1 and ("A" <= char <= "Z" or "a" <= char <= "z")


def letter_index(char: str) -> int:
    """Return the 0-25 alphabet index of a letter (case-insensitive)."""
    return ord(char.upper()) - ord("A")


def index_to_letter(index: int, lower: bool = False) -> str:
    """Return the letter for an index, wrapping modulo 26."""
    letter = ALPHABET[index % 26]
    return letter.lower() if lower else letter


def map_letters(text: str, fn: Callable[[int], int]) -> str:
    """Apply an index transform to each letter, keeping case and non-letters."""
    out = []
    for char in text:
        if not is_letter(char):
            out.append(char)
            continue
        out.append(index_to_letter(fn(letter_index(char)), lower=char.islower()))
    return "".join(out)


def shift_text(text: str, shift: int) -> str:
    """Caesar-style shift of every letter by ``shift`` positions."""
    return map_letters(text, lambda i: i + shift)


def only_letters(text: str) -> str:
    """Uppercase the text and drop everything that is not a letter."""
    return "".join(ch for ch in text.upper() if is_letter(ch))


def require_keyword(value: Any, name: str = "keyword") -> str:
    """Validate an alphabetic keyword and return it uppercased."""
    if not isinstance(value, str) or not value or not value.isalpha() or not value.isascii():
        raise InvalidParameterError(f"{name} must be a non-empty alphabetic string, got {value!r}")
    return value.upper()


def require_int(value: Any, name: str, low: int, high: int) -> int:
    """Validate an integer parameter inside the closed range [low, high]."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidParameterError(f"{name} must be an integer, got {value!r}")
    if not low <= value <= high:
        raise InvalidParameterError(f"{name} must be between {low} and {high}, got {value}")
    return value


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class WorkedExample:
    """A single-letter walkthrough of a cipher.

    Fields:
    - visual: multi-line encryption/decryption trace shown in the hint panel
    - text: one-line summary of what happens to the letter
    """

    visual: str
    text: str

    def as_dict(self) -> Dict[str, str]:
        return {"visual": self.visual, "text": self.text}


# PUBLIC_INTERFACE
class Cipher:
    """Base class for every registered cipher.

    Subclasses set the metadata attributes and implement ``_encode`` and
    ``_decode`` over a fully resolved parameter dict. Parameters are never
    stored on the instance: every call receives the exact values to use, so a
    single registry instance can serve any number of rounds.

    Teaching aids are owned by the cipher as well:
    - ``hint(params)`` reveals the key in one line
    - ``worked_example(letter, params)`` walks one letter through the cipher
    - ``solver_template(encrypted, params)`` renders ``solver_script`` (a
      ``string.Template``) into an incomplete Python script for the sandbox
    """

    id: str = ""
    name: str = ""
    difficulty: Difficulty = "easy"
    category: str = ""
    description: str = ""
    defaults: Mapping[str, Any] = {}
    self_inverse: bool = False
    # "text": encode(encode(w)) == w. "codes": only the underlying step inverts itself.
    inverse_scope: str = "text"
    solver_script: str = ""

    # Parameter handling

    def validate_params(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Normalize and validate a merged parameter dict. Override per cipher."""
        return params

    # PUBLIC_INTERFACE
    def resolve_params(self, params: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """Overlay ``params`` on the defaults and validate the result.

        Raises:
            InvalidParameterError: for unknown names or invalid values.
        """
        merged = dict(self.defaults)
        for key, value in (params or {}).items():
            if key not in self.defaults:
                raise InvalidParameterError(f"{self.id} does not take a {key!r} parameter")
            merged[key] = value
        return self.validate_params(merged)

    # PUBLIC_INTERFACE
    def randomize_params(self, rng: Optional[random.Random] = None) -> Dict[str, Any]:
        """Return a fresh, valid parameter set. Unkeyed ciphers return {}."""
        return self.resolve_params()

    @property
    def has_params(self) -> bool:
        return bool(self.defaults)

    # Transformations

    def _encode(self, text: str, params: Dict[str, Any]) -> str:
        raise NotImplementedError

    def _decode(self, text: str, params: Dict[str, Any]) -> str:
        raise NotImplementedError

    # PUBLIC_INTERFACE
    def encode(self, text: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """Encrypt ``text`` with the given (or default) parameters."""
        return self._encode(text, self.resolve_params(params))

    # PUBLIC_INTERFACE
    def decode(self, text: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """Decrypt ``text`` with the given (or default) parameters."""
        return self._decode(text, self.resolve_params(params))

    # Teaching aids

    def hint(self, params: Optional[Mapping[str, Any]] = None) -> str:
        return self.description

    def _example(self, letter: str, params: Dict[str, Any]) -> WorkedExample:
        encoded = self._encode(letter, params)
        return WorkedExample(
            visual=f"Encryption: {letter} → {encoded}\nDecryption: {encoded} → {letter}",
            text=f"{letter} → {encoded}",
        )

    # PUBLIC_INTERFACE
    def worked_example(self, letter: str, params: Optional[Mapping[str, Any]] = None) -> WorkedExample:
        """Explain how ``letter`` is transformed under ``params``.

        Only the first character of ``letter`` is used; it is uppercased and
        falls back to ``A`` when it is not a letter.
        """
        sample = (letter or "A")[0].upper()
        if not is_letter(sample):
            sample = "A"
        return self._example(sample, self.resolve_params(params))

    def _template_values(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return dict(params)

    # PUBLIC_INTERFACE
    def solver_template(self, encrypted: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """Render the guided solver script for ``encrypted``.

        The script is deliberately incomplete (``TODO`` markers) and is only
        ever displayed; nothing here executes it.
        """
        values = self._template_values(self.resolve_params(params))
        return Template(self.solver_script).substitute(encrypted=encrypted, **values)

    # PUBLIC_INTERFACE
    def describe(self) -> Dict[str, Any]:
        """Return catalog metadata for listings."""
        return {
            "id": self.id,
            "name": self.name,
            "difficulty": self.difficulty,
            "category": self.category,
            "description": self.description,
            "defaults": dict(self.defaults),
            "self_inverse": self.self_inverse,
            "inverse_scope": self.inverse_scope if self.self_inverse else None,
        }

    def __repr__(self) -> str:  # pragma: no cover
        return f"<{type(self).__name__} {self.id!r}>"
