from __future__ import annotations

import logging
import random
from typing import Optional

from django.conf import settings
from django.utils import timezone
from drf_yasg import openapi
from drf_yasg.utils import swagger_auto_schema
from rest_framework import permissions, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from cycrack.challenges import (
    generate_challenge_at,
    levels_with_status,
    score_breakdown,
    session_seed_from_datetime,
)
from cycrack.ciphers import DIFFICULTY_ORDER, REGISTRY, CipherError

from .serializers import (
    ChallengeRequestSerializer,
    ChallengeResponseSerializer,
    CipherSerializer,
    CipherTextRequestSerializer,
    CipherTextResponseSerializer,
    LevelSerializer,
    ScoreRequestSerializer,
    ScoreResponseSerializer,
    SessionRequestSerializer,
    SessionResponseSerializer,
    SolverTemplateRequestSerializer,
    SolverTemplateResponseSerializer,
    WorkedExampleRequestSerializer,
    WorkedExampleResponseSerializer,
)

logger = logging.getLogger(__name__)


def _game_setting(name: str, default=None):
    return getattr(settings, "CYCRACK", {}).get(name, default)


def _challenge_rng(seed: int, counter: int) -> Optional[random.Random]:
    """Seeded rng for cipher choice when replayable challenges are enabled."""
    if _game_setting("DETERMINISTIC_CIPHER_CHOICE", False):
        return random.Random(seed + counter)
    return None


def _cipher_or_404(cipher_id: str):
    """Return (cipher, None) or (None, 404 response)."""
    cipher = REGISTRY.get(cipher_id)
    if cipher is None:
        return None, Response({"error": f"Unknown cipher: {cipher_id}"}, status=status.HTTP_404_NOT_FOUND)
    return cipher, None


def _run_cipher(request, cipher_id: str, decode: bool):
    serializer = CipherTextRequestSerializer(data=request.data or {})
    serializer.is_valid(raise_exception=True)
    cipher, error = _cipher_or_404(cipher_id)
    if error is not None:
        return error
    text = serializer.validated_data["text"]
    try:
        params = cipher.resolve_params(serializer.validated_data.get("params"))
        output = cipher.decode(text, params) if decode else cipher.encode(text, params)
    except CipherError as e:
        return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)
    resp = {"cipher_id": cipher.id, "params": params, "input": text, "output": output}
    return Response(CipherTextResponseSerializer(resp).data, status=status.HTTP_200_OK)


# PUBLIC_INTERFACE
@api_view(["GET"])
@permission_classes([permissions.AllowAny])
def health(request):
    """Health check endpoint for the API.

    Returns:
    - 200 OK with {"message": "Server is up!"}
    """
    return Response({"message": "Server is up!"})


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="post",
    operation_id="start_session",
    operation_summary="Start a game session",
    operation_description="""
Create a session seed. Send it back with every challenge request together with
the counter; the server keeps no session state.

Request body:
- seed (int, optional): reuse a known seed; defaults to the current time as YYYYMMDDhhmmss

Response:
- seed, counter (always 0)
""",
    request_body=SessionRequestSerializer,
    responses={200: SessionResponseSerializer},
    tags=["game"],
)
@api_view(["POST"])
@permission_classes([permissions.AllowAny])
def start_session(request):
    """Return a fresh session seed and a zero counter."""
    serializer = SessionRequestSerializer(data=request.data or {})
    serializer.is_valid(raise_exception=True)
    seed = serializer.validated_data.get("seed")
    if seed is None:
        seed = session_seed_from_datetime(timezone.localtime())
    logger.info("Session started with seed %s", seed)
    return Response(SessionResponseSerializer({"seed": seed, "counter": 0}).data, status=status.HTTP_200_OK)


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="post",
    operation_id="generate_challenge",
    operation_summary="Generate a challenge",
    operation_description="""
Generate challenge number `counter` of the session `seed` for a level. The
plaintext is a pure function of (seed, counter); the cipher and its key are
random unless the server runs with replayable cipher choice.

Request body:
- level_id (int 1-6 or "endless", required)
- seed (int, required)
- counter (int, optional, default 0)

Response includes the challenge, the exact cipher parameters used, and
next_counter for the following request.
""",
    request_body=ChallengeRequestSerializer,
    responses={200: ChallengeResponseSerializer},
    tags=["game"],
)
@api_view(["POST"])
@permission_classes([permissions.AllowAny])
def generate_challenge(request):
    """Generate one challenge for the given level, seed and counter."""
    serializer = ChallengeRequestSerializer(data=request.data or {})
    serializer.is_valid(raise_exception=True)
    vd = serializer.validated_data
    seed, counter = vd["seed"], vd.get("counter", 0)

    challenge = generate_challenge_at(vd["level_id"], seed, counter, rng=_challenge_rng(seed, counter))
    if challenge is None:
        return Response({"error": "Level not found."}, status=status.HTTP_404_NOT_FOUND)

    resp = {**challenge.as_dict(), "next_counter": counter + 1}
    return Response(ChallengeResponseSerializer(resp).data, status=status.HTTP_200_OK)


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="post",
    operation_id="calculate_score",
    operation_summary="Score a solved round",
    operation_description="""
Compute the points for a solved round and return every factor of the
calculation: base points, time bonus, hint, attempt and streak multipliers.
Scores never drop below 10.
""",
    request_body=ScoreRequestSerializer,
    responses={200: ScoreResponseSerializer},
    tags=["game"],
)
@api_view(["POST"])
@permission_classes([permissions.AllowAny])
def calculate_score(request):
    """Score a round from its level, time, hints, attempts and streak."""
    serializer = ScoreRequestSerializer(data=request.data or {})
    serializer.is_valid(raise_exception=True)
    breakdown = score_breakdown(**serializer.validated_data)
    return Response(ScoreResponseSerializer(breakdown).data, status=status.HTTP_200_OK)


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="get",
    operation_id="list_levels",
    operation_summary="List levels with unlock status",
    operation_description="""
Returns the level table followed by the endless tier.

Query params:
- highest_cleared (optional, default 0): highest level the player has cleared
""",
    manual_parameters=[
        openapi.Parameter("highest_cleared", openapi.IN_QUERY, type=openapi.TYPE_INTEGER, required=False),
    ],
    responses={200: LevelSerializer(many=True)},
    tags=["meta"],
)
@api_view(["GET"])
@permission_classes([permissions.AllowAny])
def list_levels(request):
    """List all levels, marking which ones are unlocked."""
    raw = (request.GET.get("highest_cleared") or "0").strip()
    if not raw.isdigit():
        return Response({"error": "highest_cleared must be a non-negative integer."}, status=status.HTTP_400_BAD_REQUEST)
    levels = levels_with_status(int(raw), include_endless=True)
    return Response(LevelSerializer(levels, many=True).data, status=status.HTTP_200_OK)


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="get",
    operation_id="list_ciphers",
    operation_summary="List available ciphers",
    operation_description="""
Returns catalog metadata for every registered cipher.

Query params:
- difficulty (optional): easy | medium | hard | expert
""",
    manual_parameters=[
        openapi.Parameter(
            "difficulty", openapi.IN_QUERY, type=openapi.TYPE_STRING, enum=list(DIFFICULTY_ORDER), required=False
        ),
    ],
    responses={200: CipherSerializer(many=True)},
    tags=["ciphers"],
)
@api_view(["GET"])
@permission_classes([permissions.AllowAny])
def list_ciphers(request):
    """List registered ciphers, optionally filtered by difficulty."""
    difficulty = (request.GET.get("difficulty") or "").strip().lower()
    if difficulty and difficulty not in DIFFICULTY_ORDER:
        return Response({"error": f"Unknown difficulty: {difficulty}"}, status=status.HTTP_400_BAD_REQUEST)
    ciphers = REGISTRY.by_difficulty(difficulty) if difficulty else REGISTRY.all()
    return Response(CipherSerializer([c.describe() for c in ciphers], many=True).data, status=status.HTTP_200_OK)


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="post",
    operation_id="encode_text",
    operation_summary="Encode text with a cipher",
    operation_description="Encrypt `text` with the cipher, using its defaults overlaid with `params`.",
    request_body=CipherTextRequestSerializer,
    responses={200: CipherTextResponseSerializer},
    tags=["ciphers"],
)
@api_view(["POST"])
@permission_classes([permissions.AllowAny])
def encode_text(request, cipher_id: str):
    """Encrypt text with the given cipher."""
    return _run_cipher(request, cipher_id, decode=False)


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="post",
    operation_id="decode_text",
    operation_summary="Decode text with a cipher",
    operation_description="Decrypt `text` with the cipher, using its defaults overlaid with `params`.",
    request_body=CipherTextRequestSerializer,
    responses={200: CipherTextResponseSerializer},
    tags=["ciphers"],
)
@api_view(["POST"])
@permission_classes([permissions.AllowAny])
def decode_text(request, cipher_id: str):
    """Decrypt text with the given cipher."""
    return _run_cipher(request, cipher_id, decode=True)


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="post",
    operation_id="worked_example",
    operation_summary="Worked example for one letter",
    operation_description="""
Walk a single letter through the cipher. Pass the round's `params` so the
example uses the same key as the challenge.
""",
    request_body=WorkedExampleRequestSerializer,
    responses={200: WorkedExampleResponseSerializer},
    tags=["ciphers", "hints"],
)
@api_view(["POST"])
@permission_classes([permissions.AllowAny])
def worked_example(request, cipher_id: str):
    """Return the worked example for a letter under the given parameters."""
    serializer = WorkedExampleRequestSerializer(data=request.data or {})
    serializer.is_valid(raise_exception=True)
    cipher, error = _cipher_or_404(cipher_id)
    if error is not None:
        return error
    letter = serializer.validated_data["letter"]
    try:
        example = REGISTRY.get_worked_example(cipher.id, letter, serializer.validated_data.get("params"))
    except CipherError as e:
        return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)
    resp = {"cipher_id": cipher.id, "letter": letter, **example.as_dict()}
    return Response(WorkedExampleResponseSerializer(resp).data, status=status.HTTP_200_OK)


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="post",
    operation_id="solver_template",
    operation_summary="Guided solver script",
    operation_description="""
Return a fill-in-the-blank Python script for decrypting `ciphertext`. The
script is text only; the server never executes it.
""",
    request_body=SolverTemplateRequestSerializer,
    responses={200: SolverTemplateResponseSerializer},
    tags=["ciphers", "hints"],
)
@api_view(["POST"])
@permission_classes([permissions.AllowAny])
def solver_template(request, cipher_id: str):
    """Return the guided solver script for a ciphertext."""
    serializer = SolverTemplateRequestSerializer(data=request.data or {})
    serializer.is_valid(raise_exception=True)
    cipher, error = _cipher_or_404(cipher_id)
    if error is not None:
        return error
    try:
        template = REGISTRY.get_guided_solver_template(
            cipher.id, serializer.validated_data["ciphertext"], serializer.validated_data.get("params")
        )
    except CipherError as e:
        return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)
    resp = {"cipher_id": cipher.id, "template": template}
    return Response(SolverTemplateResponseSerializer(resp).data, status=status.HTTP_200_OK)
