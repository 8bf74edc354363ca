"""Ciphers built by chaining two registered ciphers.

Each compound holds direct references to its constituents, handed over at
construction time by the registry.
"""
from __future__ import annotations

import random
from typing import Any, Dict, Optional

from .base import Cipher, WorkedExample, index_to_letter, letter_index, require_int, require_keyword
from .polyalphabetic import VigenereCipher
from .substitution import AtbashCipher, CaesarCipher
from .transposition import ReversedCipher


class DoubleCaesarCipher(Cipher):
    id = "doubleCaesar"
    name = "Double Caesar"
    difficulty = "hard"
    category = "Compound Cipher"
    description = "The text is encrypted with the Caesar cipher twice, using two different shift values."
    defaults = {"shift1": 3, "shift2": 7}
    solver_script = '''\
# Double Caesar Decoder
# Two Caesar shifts were applied: first $shift1, then $shift2.

encrypted = "$encrypted"
shift1 = $shift1
shift2 = $shift2

# TODO: undo shift2, then undo shift1
decoded = ""
for char in encrypted:
    if char.isalpha():
        pos = ord(char) - ord('A')
        pos = pos % 26  # Fix this: subtract both shifts
        decoded += chr(pos + ord('A'))
    else:
        decoded += char

print("Decoded:", decoded)
'''

    def __init__(self, caesar: CaesarCipher):
        self.caesar = caesar

    def validate_params(self, params: Dict[str, Any]) -> Dict[str, Any]:
        params["shift1"] = require_int(params["shift1"], "shift1", -25, 25)
        params["shift2"] = require_int(params["shift2"], "shift2", -25, 25)
        return params

    def randomize_params(self, rng: Optional[random.Random] = None) -> Dict[str, Any]:
        rng = rng or random.Random()
        return self.resolve_params({"shift1": rng.randint(1, 12), "shift2": rng.randint(1, 12)})

    def _encode(self, text: str, params: Dict[str, Any]) -> str:
        first = self.caesar.encode(text, {"shift": params["shift1"]})
        return self.caesar.encode(first, {"shift": params["shift2"]})

    def _decode(self, text: str, params: Dict[str, Any]) -> str:
        first = self.caesar.decode(text, {"shift": params["shift2"]})
        return self.caesar.decode(first, {"shift": params["shift1"]})

    def hint(self, params=None) -> str:
        p = self.resolve_params(params)
        return f"First shift: {p['shift1']}, Second shift: {p['shift2']}"

    def _example(self, letter: str, params: Dict[str, Any]) -> WorkedExample:
        shift1, shift2 = params["shift1"], params["shift2"]
        index = letter_index(letter)
        middle = index_to_letter(index + shift1)
        final = index_to_letter(index + shift1 + shift2)
        return WorkedExample(
            visual=(
                f"Encryption: {letter} +{shift1}→ {middle} +{shift2}→ {final}\n"
                f"Decryption: {final} -{shift2}→ {middle} -{shift1}→ {letter}"
            ),
            text=f"{letter} → {final} (total shift: {shift1}+{shift2}={(shift1 + shift2) % 26})",
        )


class ReverseCaesarCipher(Cipher):
    id = "reverseCaesar"
    name = "Reverse Caesar"
    difficulty = "hard"
    category = "Compound Cipher"
    description = "The text is first reversed, then encrypted with a Caesar cipher."
    defaults = {"shift": 5}
    solver_script = '''\
# Reverse Caesar Decoder
# The text was reversed, then Caesar shifted by $shift.

encrypted = "$encrypted"
shift = $shift

# TODO: first undo the shift, then reverse the result
unshifted = ""
for char in encrypted:
    if char.isalpha():
        pos = (ord(char) - ord('A')) % 26  # Fix this: subtract shift
        unshifted += chr(pos + ord('A'))
    else:
        unshifted += char

decoded = unshifted  # Fix this: reverse it

print("Decoded:", decoded)
'''

    def __init__(self, reverse: ReversedCipher, caesar: CaesarCipher):
        self.reverse = reverse
        self.caesar = caesar

    def validate_params(self, params: Dict[str, Any]) -> Dict[str, Any]:
        params["shift"] = require_int(params["shift"], "shift", -25, 25)
        return params

    def randomize_params(self, rng: Optional[random.Random] = None) -> Dict[str, Any]:
        rng = rng or random.Random()
        return self.resolve_params({"shift": rng.randint(1, 25)})

    def _encode(self, text: str, params: Dict[str, Any]) -> str:
        return self.caesar.encode(self.reverse.encode(text), params)

    def _decode(self, text: str, params: Dict[str, Any]) -> str:
        return self.reverse.decode(self.caesar.decode(text, params))

    def hint(self, params=None) -> str:
        return f"Reversed, then shifted by {self.resolve_params(params)['shift']}"

    def _example(self, letter: str, params: Dict[str, Any]) -> WorkedExample:
        shift = params["shift"]
        shifted = index_to_letter(letter_index(letter) + shift)
        return WorkedExample(
            visual=(
                f"Encryption: Reverse text, then +{shift}\n"
                f"Decryption: Subtract {shift}, then reverse\nShift: {shift}"
            ),
            text=f"{letter} → {shifted}",
        )


class AtbashVigenereCipher(Cipher):
    id = "atbashVigenere"
    name = "Atbash Vigenère"
    difficulty = "hard"
    category = "Compound Cipher"
    description = "The text is first encrypted with Atbash, then with the Vigenère cipher."
    defaults = {"keyword": "MASTER"}
    keywords = ("MASTER", "EXPERT", "PUZZLE", "CRYPTO")
    solver_script = '''\
# Atbash Vigenère Decoder
# The text was Atbash-mirrored, then Vigenère encrypted with "$keyword".

encrypted = "$encrypted"
keyword = "$keyword"

# TODO: step 1, undo Vigenère (subtract the cycling keyword shift)
unvig = ""
key_pos = 0
for char in encrypted:
    if char.isalpha():
        shift = ord(keyword[key_pos % len(keyword)]) - ord('A')
        pos = (ord(char) - ord('A')) % 26  # Fix this: subtract shift
        unvig += chr(pos + ord('A'))
        key_pos += 1
    else:
        unvig += char

# TODO: step 2, undo Atbash (mirror every letter: 25 - pos)
decoded = unvig

print("Decoded:", decoded)
'''

    def __init__(self, atbash: AtbashCipher, vigenere: VigenereCipher):
        self.atbash = atbash
        self.vigenere = vigenere

    def validate_params(self, params: Dict[str, Any]) -> Dict[str, Any]:
        params["keyword"] = require_keyword(params["keyword"])
        return params

    def randomize_params(self, rng: Optional[random.Random] = None) -> Dict[str, Any]:
        rng = rng or random.Random()
        return self.resolve_params({"keyword": rng.choice(self.keywords)})

    def _encode(self, text: str, params: Dict[str, Any]) -> str:
        return self.vigenere.encode(self.atbash.encode(text), params)

    def _decode(self, text: str, params: Dict[str, Any]) -> str:
        return self.atbash.decode(self.vigenere.decode(text, params))

    def hint(self, params=None) -> str:
        return f'Atbash, then Vigenère with key "{self.resolve_params(params)["keyword"]}"'

    def _example(self, letter: str, params: Dict[str, Any]) -> WorkedExample:
        keyword = params["keyword"]
        mirrored = self.atbash.encode(letter)
        final = self.vigenere.encode(mirrored, {"keyword": keyword[0]})
        return WorkedExample(
            visual=(
                f"Encryption: {letter} →Atbash→ {mirrored} →Vigenère→ {final}\n"
                f'Decryption: Undo Vigenère, then Atbash\nKeyword: "{keyword}"'
            ),
            text=f"{letter} → {final} (decode: undo Vigenère, then Atbash)",
        )
