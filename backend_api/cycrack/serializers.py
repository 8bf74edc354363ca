from __future__ import annotations

from typing import Any, Dict

from rest_framework import serializers

from cycrack.challenges import get_level, parse_level_id


def _validate_level_id(value: Any):
    """Accept 1..6 or "endless" (ints or strings) and return the normalized id."""
    level_id = parse_level_id(value)
    if level_id is None or get_level(level_id) is None:
        raise serializers.ValidationError(f"Unknown level: {value!r}")
    return level_id


class LevelIdField(serializers.Field):
    """Level id as sent by clients: an integer or the string "endless"."""

    def to_internal_value(self, data):
        return _validate_level_id(data)

    def to_representation(self, value):
        return value


# PUBLIC_INTERFACE
class SessionRequestSerializer(serializers.Serializer):
    """Request payload to start a session.

    Fields:
    - seed (optional): reuse a known seed instead of deriving one from the clock
    """

    seed = serializers.IntegerField(required=False, min_value=0)


# PUBLIC_INTERFACE
class SessionResponseSerializer(serializers.Serializer):
    """Seed and counter the client threads through challenge requests."""

    seed = serializers.IntegerField()
    counter = serializers.IntegerField()


# PUBLIC_INTERFACE
class ChallengeRequestSerializer(serializers.Serializer):
    """Request payload to generate a challenge.

    Fields:
    - level_id: 1..6 or "endless"
    - seed: session seed returned by the session endpoint
    - counter (optional, default 0): challenge number within the session
    """

    level_id = LevelIdField()
    seed = serializers.IntegerField(min_value=0)
    counter = serializers.IntegerField(required=False, min_value=0, default=0)


# PUBLIC_INTERFACE
class ChallengeResponseSerializer(serializers.Serializer):
    """A generated challenge plus the counter to send with the next request."""

    original = serializers.CharField()
    encrypted = serializers.CharField()
    cipher_id = serializers.CharField()
    cipher_name = serializers.CharField()
    cipher_category = serializers.CharField()
    cipher_description = serializers.CharField()
    cipher_difficulty = serializers.CharField()
    cipher_params = serializers.DictField()
    level_id = LevelIdField()
    max_attempts = serializers.IntegerField()
    time_limit = serializers.IntegerField(allow_null=True)
    base_points = serializers.IntegerField()
    counter = serializers.IntegerField()
    next_counter = serializers.IntegerField()


# PUBLIC_INTERFACE
class ScoreRequestSerializer(serializers.Serializer):
    """Inputs of a solved round.

    Fields:
    - level_id: 1..6 or "endless"
    - time_elapsed: seconds taken
    - hints_used (optional, default 0): 0..3
    - attempts (optional, default 1): guesses made, including the correct one
    - streak (optional, default 0): consecutive correct answers before this round
    - round_number (optional, default 1): raises base points in endless mode
    """

    level_id = LevelIdField()
    time_elapsed = serializers.FloatField(min_value=0)
    hints_used = serializers.IntegerField(required=False, min_value=0, max_value=3, default=0)
    attempts = serializers.IntegerField(required=False, min_value=1, default=1)
    streak = serializers.IntegerField(required=False, min_value=0, default=0)
    round_number = serializers.IntegerField(required=False, min_value=1, default=1)


# PUBLIC_INTERFACE
class ScoreResponseSerializer(serializers.Serializer):
    """Points for the round with each factor of the calculation."""

    level_id = LevelIdField()
    points = serializers.IntegerField()
    base_points = serializers.IntegerField()
    time_bonus = serializers.FloatField()
    hint_multiplier = serializers.FloatField()
    attempt_multiplier = serializers.FloatField()
    streak_multiplier = serializers.FloatField()


# PUBLIC_INTERFACE
class LevelSerializer(serializers.Serializer):
    """Level definition with unlock status for the requesting player."""

    id = LevelIdField()
    name = serializers.CharField()
    description = serializers.CharField()
    ciphers = serializers.ListField(child=serializers.CharField())
    word_length = serializers.IntegerField()
    challenges_per_level = serializers.IntegerField(allow_null=True)
    time_limit = serializers.IntegerField(allow_null=True)
    max_attempts = serializers.IntegerField()
    base_points = serializers.IntegerField()
    time_bonus = serializers.IntegerField()
    streak_multiplier = serializers.FloatField()
    xp_reward = serializers.IntegerField()
    unlock_requirement = serializers.IntegerField()
    points_increase_per_round = serializers.IntegerField()
    is_unlocked = serializers.BooleanField()


# PUBLIC_INTERFACE
class CipherSerializer(serializers.Serializer):
    """Catalog metadata for one cipher."""

    id = serializers.CharField()
    name = serializers.CharField()
    difficulty = serializers.ChoiceField(choices=["easy", "medium", "hard", "expert"])
    category = serializers.CharField()
    description = serializers.CharField()
    defaults = serializers.DictField()
    self_inverse = serializers.BooleanField()
    inverse_scope = serializers.ChoiceField(choices=["text", "codes"], allow_null=True)


# PUBLIC_INTERFACE
class CipherTextRequestSerializer(serializers.Serializer):
    """Request payload to run a cipher.

    Fields:
    - text: input to encode or decode
    - params (optional): overrides for the cipher's default parameters
    """

    text = serializers.CharField(trim_whitespace=False)
    params = serializers.DictField(required=False, default=dict)


# PUBLIC_INTERFACE
class CipherTextResponseSerializer(serializers.Serializer):
    cipher_id = serializers.CharField()
    params = serializers.DictField()
    input = serializers.CharField(trim_whitespace=False)
    output = serializers.CharField(trim_whitespace=False, allow_blank=True)


# PUBLIC_INTERFACE
class WorkedExampleRequestSerializer(serializers.Serializer):
    """Request payload for a worked example.

    Fields:
    - letter (optional, default "A"): the letter to walk through the cipher
    - params (optional): the round's cipher parameters
    """

    letter = serializers.CharField(required=False, default="A", max_length=1)
    params = serializers.DictField(required=False, default=dict)

    def validate_letter(self, value: str) -> str:
        if not value.isascii() or not value.isalpha():
            raise serializers.ValidationError("Letter must be a single A-Z character.")
        return value.upper()


# PUBLIC_INTERFACE
class WorkedExampleResponseSerializer(serializers.Serializer):
    cipher_id = serializers.CharField()
    letter = serializers.CharField()
    visual = serializers.CharField()
    text = serializers.CharField()


# PUBLIC_INTERFACE
class SolverTemplateRequestSerializer(serializers.Serializer):
    """Request payload for a guided solver script.

    Fields:
    - ciphertext: the round's encrypted text
    - params (optional): the round's cipher parameters
    """

    ciphertext = serializers.CharField(trim_whitespace=False)
    params = serializers.DictField(required=False, default=dict)

    def validate(self, attrs: Dict[str, Any]) -> Dict[str, Any]:
        # The ciphertext lands inside a double-quoted Python string literal.
        text = attrs["ciphertext"]
        if any(char in text for char in '"\\\n\r'):
            raise serializers.ValidationError(
                {"ciphertext": "Ciphertext may not contain quotes, backslashes or line breaks."}
            )
        return attrs


# PUBLIC_INTERFACE
class SolverTemplateResponseSerializer(serializers.Serializer):
    cipher_id = serializers.CharField()
    template = serializers.CharField()
