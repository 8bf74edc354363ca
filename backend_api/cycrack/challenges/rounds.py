from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from ..ciphers import REGISTRY, CipherRegistry
from ..ciphers.base import is_letter
from .generator import Challenge
from .levels import MAX_HINTS
from .scoring import calculate_score

logger = logging.getLogger(__name__)


class RoundStateError(ValueError):
    """Raised when a round operation is not allowed in the round's current state."""


class RoundStatus(str, enum.Enum):
    GENERATED = "generated"
    IN_PROGRESS = "in_progress"
    SOLVED = "solved"
    GAVE_UP = "gave_up"

    @property
    def is_terminal(self) -> bool:
        return self in (RoundStatus.SOLVED, RoundStatus.GAVE_UP)


@dataclass(frozen=True)
class Hint:
    """One step of the hint ladder: 1 description, 2 worked example, 3 solver script."""

    number: int
    kind: str
    content: str


@dataclass(frozen=True)
class GuessResult:
    """Outcome of one submitted guess.

    ``accepted`` is False for empty or repeated guesses; those do not count as
    attempts.
    """

    guess: str
    accepted: bool
    correct: bool
    matching_letters: int
    message: str


def count_matching_letters(guess: str, original: str) -> int:
    """Number of positions where ``guess`` and ``original`` carry the same letter."""
    return sum(1 for a, b in zip(guess, original) if a == b)


def guess_feedback(matching: int, original_length: int) -> str:
    if matching > 0 and matching >= original_length / 2:
        return f"Close! {matching} letters match"
    if matching > 0:
        return f"{matching} letter(s) in correct position"
    return "No letters in correct position"


# PUBLIC_INTERFACE
@dataclass
class Round:
    """Lifecycle of a single Challenge.

    GENERATED -> IN_PROGRESS -> SOLVED | GAVE_UP. A finished round is never
    reopened; the next round needs a new Challenge.
    """

    challenge: Challenge
    registry: CipherRegistry = REGISTRY
    status: RoundStatus = RoundStatus.GENERATED
    hints_used: int = 0
    guesses: List[str] = field(default_factory=list)
    hints: List[Hint] = field(default_factory=list)

    def _require(self, *allowed: RoundStatus) -> None:
        if self.status not in allowed:
            raise RoundStateError(f"Round is {self.status.value}; expected {' or '.join(s.value for s in allowed)}")

    # PUBLIC_INTERFACE
    def start(self) -> None:
        """Move a freshly generated round into play."""
        self._require(RoundStatus.GENERATED)
        self.status = RoundStatus.IN_PROGRESS

    @property
    def attempts(self) -> int:
        return len(self.guesses)

    @property
    def hints_remaining(self) -> int:
        return MAX_HINTS - self.hints_used

    # PUBLIC_INTERFACE
    def use_hint(self) -> Hint:
        """Reveal the next hint for this round.

        Hints are always built from the challenge's own parameters, so they
        describe the exact key that produced the ciphertext.

        Raises:
            RoundStateError: when the round is not in progress or all hints are used.
        """
        self._require(RoundStatus.IN_PROGRESS)
        if self.hints_used >= MAX_HINTS:
            raise RoundStateError("All hints used")
        number = self.hints_used + 1
        challenge = self.challenge
        cipher = self.registry.require(challenge.cipher_id)
        if number == 1:
            hint = Hint(number, "description", challenge.cipher_description or cipher.description)
        elif number == 2:
            example = cipher.worked_example(challenge.original[:1], challenge.cipher_params)
            hint = Hint(number, "example", example.visual)
        else:
            hint = Hint(number, "solver_template", cipher.solver_template(challenge.encrypted, challenge.cipher_params))
        self.hints_used = number
        self.hints.append(hint)
        return hint

    def is_solution(self, normalized: str) -> bool:
        """True for the plaintext or any letters-only guess that encrypts to the same ciphertext.

        Grid ciphers fold J into I and padding ciphers drop filler X, so the
        decryption a player recovers can differ from ``original`` while still
        being the correct answer.
        """
        challenge = self.challenge
        if normalized == challenge.original.upper():
            return True
        if not all(is_letter(ch) for ch in normalized):
            return False
        cipher = self.registry.require(challenge.cipher_id)
        return cipher.encode(normalized, challenge.cipher_params) == challenge.encrypted

    # PUBLIC_INTERFACE
    def submit_guess(self, guess: str) -> GuessResult:
        """Check ``guess`` against the plaintext.

        The guess is trimmed and uppercased. Empty and repeated guesses are
        rejected without counting as an attempt.
        """
        self._require(RoundStatus.IN_PROGRESS)
        normalized = (guess or "").strip().upper()
        if not normalized:
            return GuessResult(normalized, False, False, 0, "Please enter a guess")
        if normalized in self.guesses:
            return GuessResult(normalized, False, False, 0, "You already tried that!")

        self.guesses.append(normalized)
        original = self.challenge.original.upper()
        if self.is_solution(normalized):
            self.status = RoundStatus.SOLVED
            logger.debug("Round solved after %s attempt(s)", self.attempts)
            return GuessResult(normalized, True, True, len(original), "Correct!")

        matching = count_matching_letters(normalized, original)
        return GuessResult(normalized, True, False, matching, guess_feedback(matching, len(original)))

    # PUBLIC_INTERFACE
    def give_up(self) -> str:
        """End the round unsolved and reveal the plaintext."""
        self._require(RoundStatus.GENERATED, RoundStatus.IN_PROGRESS)
        self.status = RoundStatus.GAVE_UP
        return self.challenge.original

    # PUBLIC_INTERFACE
    def score(self, time_elapsed: float, streak: int = 0, round_number: Optional[int] = None) -> int:
        """Points for this round: the full formula when solved, 0 after giving up.

        Raises:
            RoundStateError: when the round has not finished yet.
        """
        if self.status is RoundStatus.GAVE_UP:
            return 0
        self._require(RoundStatus.SOLVED)
        return calculate_score(
            self.challenge.level_id,
            time_elapsed,
            self.hints_used,
            self.attempts,
            streak,
            round_number if round_number is not None else self.challenge.counter + 1,
        )
