"""Keyword-driven polyalphabetic ciphers."""
from __future__ import annotations

import random
from typing import Any, Callable, Dict, Optional

from .base import (
    Cipher,
    WorkedExample,
    index_to_letter,
    is_letter,
    letter_index,
    require_keyword,
)

KEYWORDS = ("KEY", "CODE", "HACK", "CYBER", "LOCK", "SAFE", "PASS", "WORD")


def keyed_transform(text: str, keyword: str, fn: Callable[[int, int], int]) -> str:
    """Combine each letter with the next keyword letter via ``fn(text_idx, key_idx)``.

    The keyword only advances on letters; case is kept and other characters
    pass through.
    """
    out = []
    position = 0
    for char in text:
        if not is_letter(char):
            out.append(char)
            continue
        key_index = letter_index(keyword[position % len(keyword)])
        out.append(index_to_letter(fn(letter_index(char), key_index), lower=char.islower()))
        position += 1
    return "".join(out)


class VigenereCipher(Cipher):
    id = "vigenere"
    name = "Vigenère Cipher"
    difficulty = "medium"
    category = "Polyalphabetic Cipher"
    description = (
        "A polyalphabetic cipher that uses a keyword to set a different shift for each "
        "letter. Each letter of the keyword shifts the matching plaintext letter."
    )
    defaults = {"keyword": "KEY"}
    keywords = KEYWORDS
    solver_script = '''\
# Vigenère Decoder
# Each letter was shifted by the matching keyword letter (A=0, B=1, ..., Z=25).

encrypted = "$encrypted"
keyword = "$keyword"

# TODO: subtract the keyword shift, cycling through the keyword
decoded = ""
key_pos = 0
for char in encrypted:
    if char.isalpha():
        shift = ord(keyword[key_pos % len(keyword)]) - ord('A')
        new_pos = (ord(char) - ord('A')) % 26  # Fix this: subtract shift
        decoded += chr(new_pos + ord('A'))
        key_pos += 1
    else:
        decoded += char

print("Decoded:", decoded)
'''

    def validate_params(self, params: Dict[str, Any]) -> Dict[str, Any]:
        params["keyword"] = require_keyword(params["keyword"])
        return params

    def randomize_params(self, rng: Optional[random.Random] = None) -> Dict[str, Any]:
        rng = rng or random.Random()
        return self.resolve_params({"keyword": rng.choice(self.keywords)})

    def _encode(self, text: str, params: Dict[str, Any]) -> str:
        return keyed_transform(text, params["keyword"], lambda t, k: t + k)

    def _decode(self, text: str, params: Dict[str, Any]) -> str:
        return keyed_transform(text, params["keyword"], lambda t, k: t - k)

    def hint(self, params=None) -> str:
        return f'Keyword: "{self.resolve_params(params)["keyword"]}"'

    def _example(self, letter: str, params: Dict[str, Any]) -> WorkedExample:
        keyword = params["keyword"]
        key_letter = keyword[0]
        key_shift = letter_index(key_letter)
        encoded = index_to_letter(letter_index(letter) + key_shift)
        return WorkedExample(
            visual=(
                f"Encryption: {letter} + {key_letter}({key_shift}) → {encoded}\n"
                f"Decryption: {encoded} - {key_letter}({key_shift}) → {letter}\n"
                f'Keyword: "{keyword}"'
            ),
            text=f"{letter} → {encoded} (first key letter shifts by {key_shift})",
        )


class BeaufortCipher(Cipher):
    id = "beaufort"
    name = "Beaufort Cipher"
    difficulty = "medium"
    category = "Polyalphabetic Cipher"
    description = (
        "A reciprocal cousin of Vigenère: each letter becomes (key - letter) mod 26. "
        "Encrypting and decrypting are the very same operation."
    )
    defaults = {"keyword": "KEY"}
    keywords = KEYWORDS
    self_inverse = True
    solver_script = '''\
# Beaufort Decoder
# Cipher letter = (key letter - plain letter) mod 26. The same formula decodes.

encrypted = "$encrypted"
keyword = "$keyword"

# TODO: apply (key - letter) mod 26, cycling through the keyword
decoded = ""
key_pos = 0
for char in encrypted:
    if char.isalpha():
        key = ord(keyword[key_pos % len(keyword)]) - ord('A')
        pos = ord(char) - ord('A')
        decoded += chr(pos + ord('A'))  # Fix this: (key - pos) % 26
        key_pos += 1
    else:
        decoded += char

print("Decoded:", decoded)
'''

    def validate_params(self, params: Dict[str, Any]) -> Dict[str, Any]:
        params["keyword"] = require_keyword(params["keyword"])
        return params

    def randomize_params(self, rng: Optional[random.Random] = None) -> Dict[str, Any]:
        rng = rng or random.Random()
        return self.resolve_params({"keyword": rng.choice(self.keywords)})

    def _encode(self, text: str, params: Dict[str, Any]) -> str:
        return keyed_transform(text, params["keyword"], lambda t, k: k - t)

    def _decode(self, text: str, params: Dict[str, Any]) -> str:
        return keyed_transform(text, params["keyword"], lambda t, k: k - t)

    def hint(self, params=None) -> str:
        return f'Keyword: "{self.resolve_params(params)["keyword"]}" (key minus letter)'

    def _example(self, letter: str, params: Dict[str, Any]) -> WorkedExample:
        keyword = params["keyword"]
        key_letter = keyword[0]
        key_index = letter_index(key_letter)
        text_index = letter_index(letter)
        encoded = index_to_letter(key_index - text_index)
        return WorkedExample(
            visual=(
                f"Encryption: {key_letter}({key_index}) - {letter}({text_index}) mod 26 → {encoded}\n"
                f"Decryption: {key_letter}({key_index}) - {encoded} mod 26 → {letter} (self-inverting)\n"
                f'Keyword: "{keyword}"'
            ),
            text=f"{letter} → {encoded}",
        )
