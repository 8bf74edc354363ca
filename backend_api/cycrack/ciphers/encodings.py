"""Fixed encodings: letters rendered as numbers, symbols or byte values."""
from __future__ import annotations

import base64
import binascii
import random
from typing import Any, Dict, List, Optional

from .base import Cipher, CipherError, WorkedExample, is_letter, letter_index, require_int

MORSE_CODE: Dict[str, str] = {
    "A": ".-", "B": "-...", "C": "-.-.", "D": "-..", "E": ".", "F": "..-.",
    "G": "--.", "H": "....", "I": "..", "J": ".---", "K": "-.-", "L": ".-..",
    "M": "--", "N": "-.", "O": "---", "P": ".--.", "Q": "--.-", "R": ".-.",
    "S": "...", "T": "-", "U": "..-", "V": "...-", "W": ".--", "X": "-..-",
    "Y": "-.--", "Z": "--..",
}
MORSE_LOOKUP: Dict[str, str] = {code: letter for letter, code in MORSE_CODE.items()}

PIG_LATIN_VOWELS = "AEIOUY"


def _parse_tokens(text: str, base: int, label: str) -> List[int]:
    try:
        return [int(token, base) for token in text.split(" ")]
    except ValueError as exc:
        raise CipherError(f"Malformed {label} ciphertext: {text!r}") from exc


class A1Z26Cipher(Cipher):
    id = "a1z26"
    name = "A1Z26"
    difficulty = "easy"
    category = "Encoding Scheme"
    description = "Each letter is replaced with its position in the alphabet. A=1, B=2, C=3, and so on."
    solver_script = '''\
# A1Z26 Decoder
# Numbers are alphabet positions: A=1, B=2, ... Z=26

encrypted = "$encrypted"

decoded = ""
for part in encrypted.split('-'):
    if part.isdigit():
        # TODO: turn the number into its letter
        # Step 1: int(part)   Step 2: subtract 1   Step 3: chr(... + ord('A'))
        pass  # Replace this with your code
    else:
        decoded += part

print("Decoded:", decoded)
'''

    def _encode(self, text: str, params: Dict[str, Any]) -> str:
        parts = []
        for char in text:
            if is_letter(char):
                parts.append(str(letter_index(char) + 1))
            else:
                parts.append("-" if char == " " else char)
        return "-".join(parts)

    def _decode(self, text: str, params: Dict[str, Any]) -> str:
        out = []
        for part in text.split("-"):
            if part.isascii() and part.isdigit() and 1 <= int(part) <= 26:
                out.append(chr(int(part) - 1 + ord("A")))
            else:
                out.append(part)
        return "".join(out)

    def hint(self, params=None) -> str:
        return "Numbers represent letter positions (A=1, B=2...)"

    def _example(self, letter: str, params: Dict[str, Any]) -> WorkedExample:
        position = letter_index(letter) + 1
        return WorkedExample(
            visual=(
                f"Encryption: {letter} → {position} (letter position)\n"
                f"Decryption: {position} → {letter} (position to letter)"
            ),
            text=f"{letter} → {position}",
        )


class PigLatinCipher(Cipher):
    """Word game encoding with a hyphen marking the moved consonant cluster.

    ``HELLO → ELLO-HAY``, ``EGG → EGG-YAY``, ``BCD → -BCDAY``. Y counts as a
    vowel so the ``YAY`` suffix can never be confused with a moved ``Y``.
    """

    id = "pigLatin"
    name = "Pig Latin"
    difficulty = "easy"
    category = "Encoding Scheme"
    description = (
        "The leading consonants of each word move to the end after a hyphen, followed by AY "
        "(HELLO becomes ELLO-HAY). Words starting with a vowel just gain -YAY."
    )
    solver_script = '''\
# Pig Latin Decoder
# WORD-YAY      -> word started with a vowel, drop the suffix
# ORD-WAY       -> move the letters between '-' and 'AY' back to the front

encrypted = "$encrypted"

decoded_words = []
for word in encrypted.split(' '):
    head, _, tail = word.rpartition('-')
    # TODO: handle the two suffix shapes described above
    decoded_words.append(word)  # Fix this line

print("Decoded:", ' '.join(decoded_words))
'''

    @staticmethod
    def _encode_word(word: str) -> str:
        if not word:
            return word
        if word[0] in PIG_LATIN_VOWELS:
            return f"{word}-YAY"
        split = len(word)
        for i, char in enumerate(word):
            if char in PIG_LATIN_VOWELS:
                split = i
                break
        return f"{word[split:]}-{word[:split]}AY"

    @staticmethod
    def _decode_word(token: str) -> str:
        if "-" not in token:
            return token
        head, _, tail = token.rpartition("-")
        if tail == "YAY":
            return head
        if tail.endswith("AY"):
            return tail[:-2] + head
        return token

    def _encode(self, text: str, params: Dict[str, Any]) -> str:
        return " ".join(self._encode_word(word) for word in text.upper().split(" "))

    def _decode(self, text: str, params: Dict[str, Any]) -> str:
        return " ".join(self._decode_word(token) for token in text.split(" "))

    def hint(self, params=None) -> str:
        return "The letters after the hyphen (minus AY) belong at the front"

    def _example(self, letter: str, params: Dict[str, Any]) -> WorkedExample:
        encoded = self._encode_word(letter)
        return WorkedExample(
            visual=(
                "Encryption: HELLO → ELLO + -H + AY → ELLO-HAY\n"
                "Decryption: ELLO-HAY → H + ELLO → HELLO\n"
                f"On its own: {letter} → {encoded}"
            ),
            text=f"{letter} → {encoded}",
        )


class MorseCipher(Cipher):
    id = "morse"
    name = "Morse Code"
    difficulty = "medium"
    category = "Encoding Scheme"
    description = (
        "Each letter is represented by a unique sequence of dots and dashes. Spaces separate "
        "letters, slashes separate words."
    )
    solver_script = '''\
# Morse Code Decoder
# Dots and dashes are letters, separated by spaces; '/' separates words.

encrypted = "$encrypted"

morse_to_letter = {
    '.-': 'A', '-...': 'B', '-.-.': 'C', '-..': 'D', '.': 'E',
    '..-.': 'F', '--.': 'G', '....': 'H', '..': 'I', '.---': 'J',
    '-.-': 'K', '.-..': 'L', '--': 'M', '-.': 'N', '---': 'O',
    '.--.': 'P', '--.-': 'Q', '.-.': 'R', '...': 'S', '-': 'T',
    '..-': 'U', '...-': 'V', '.--': 'W', '-..-': 'X', '-.--': 'Y',
    '--..': 'Z'
}

# TODO: split on spaces and look each code up
decoded = ""
for code in encrypted.split(' '):
    pass  # Replace this with your code

print("Decoded:", decoded)
'''

    def _encode(self, text: str, params: Dict[str, Any]) -> str:
        return " ".join("/" if char == " " else MORSE_CODE.get(char, char) for char in text.upper())

    def _decode(self, text: str, params: Dict[str, Any]) -> str:
        return "".join(" " if code == "/" else MORSE_LOOKUP.get(code, code) for code in text.split(" "))

    def hint(self, params=None) -> str:
        return "Dots (.) and dashes (-) represent letters"

    def _example(self, letter: str, params: Dict[str, Any]) -> WorkedExample:
        code = MORSE_CODE.get(letter, "?")
        return WorkedExample(
            visual=f"Encryption: {letter} → {code}\nDecryption: {code} → {letter}",
            text=f"{letter} → {code}",
        )


class BinaryCipher(Cipher):
    id = "binary"
    name = "Binary"
    difficulty = "medium"
    category = "Binary Encoding"
    description = "Each letter is converted to its ASCII value and written as an 8-bit binary number."
    solver_script = '''\
# Binary Decoder
# Each 8-bit group is the ASCII code of one character.

encrypted = "$encrypted"

# TODO: convert every group with int(group, 2) and chr()
decoded = ""
for group in encrypted.split(' '):
    pass  # Replace this with your code

print("Decoded:", decoded)
'''

    def _encode(self, text: str, params: Dict[str, Any]) -> str:
        return " ".join("00000000" if char == " " else format(ord(char), "08b") for char in text.upper())

    def _decode(self, text: str, params: Dict[str, Any]) -> str:
        if not text:
            return ""
        return "".join(" " if code == 0 else chr(code) for code in _parse_tokens(text, 2, "binary"))

    def hint(self, params=None) -> str:
        return "8-bit binary ASCII values"

    def _example(self, letter: str, params: Dict[str, Any]) -> WorkedExample:
        ascii_code = ord(letter)
        bits = format(ascii_code, "08b")
        return WorkedExample(
            visual=(
                f"Encryption: {letter} → {bits} (8-bit binary)\n"
                f"Decryption: {bits} → {ascii_code} → {letter}"
            ),
            text=f"{letter} → {bits}",
        )


class HexCipher(Cipher):
    id = "hex"
    name = "Hexadecimal"
    difficulty = "medium"
    category = "Hexadecimal Encoding"
    description = "Each letter is converted to its ASCII value written in hexadecimal (base 16)."
    solver_script = '''\
# Hexadecimal Decoder
# Each pair of hex digits is the ASCII code of one character.

encrypted = "$encrypted"

# TODO: convert every value with int(value, 16) and chr()
decoded = ""
for value in encrypted.split(' '):
    pass  # Replace this with your code

print("Decoded:", decoded)
'''

    def _encode(self, text: str, params: Dict[str, Any]) -> str:
        return " ".join(format(ord(char), "02X") for char in text.upper())

    def _decode(self, text: str, params: Dict[str, Any]) -> str:
        if not text:
            return ""
        return "".join(chr(code) for code in _parse_tokens(text, 16, "hex"))

    def hint(self, params=None) -> str:
        return "Hexadecimal ASCII values (base 16)"

    def _example(self, letter: str, params: Dict[str, Any]) -> WorkedExample:
        ascii_code = ord(letter)
        value = format(ascii_code, "X")
        return WorkedExample(
            visual=(
                f"Encryption: {letter} → {ascii_code} → {value} (hex)\n"
                f"Decryption: {value} (hex) → {ascii_code} → {letter}"
            ),
            text=f"{letter} → {value}",
        )


class Base64ishCipher(Cipher):
    """Standard Base64 of the uppercased text with the ``=`` padding dropped."""

    id = "base64ish"
    name = "Base64-ish"
    difficulty = "expert"
    category = "Encoding Scheme"
    description = (
        "The text's bytes are regrouped into 6-bit chunks and each chunk indexes the 64-symbol "
        "Base64 alphabet (A-Z, a-z, 0-9, +, /). The usual = padding is left off."
    )
    solver_script = '''\
# Base64-ish Decoder
# Standard Base64 with the '=' padding removed.

import base64

encrypted = "$encrypted"

# TODO: put back the missing '=' so the length is a multiple of 4,
# then decode with base64.b64decode(...).decode()
padded = encrypted

decoded = ""

print("Decoded:", decoded)
'''

    def _encode(self, text: str, params: Dict[str, Any]) -> str:
        return base64.b64encode(text.upper().encode("utf-8")).decode("ascii").rstrip("=")

    def _decode(self, text: str, params: Dict[str, Any]) -> str:
        padded = text + "=" * (-len(text) % 4)
        try:
            return base64.b64decode(padded, validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as exc:
            raise CipherError(f"Malformed base64 ciphertext: {text!r}") from exc

    def hint(self, params=None) -> str:
        return "Base64 alphabet, padding removed"

    def _example(self, letter: str, params: Dict[str, Any]) -> WorkedExample:
        bits = format(ord(letter), "08b")
        encoded = self._encode(letter, params)
        return WorkedExample(
            visual=(
                f"Encryption: {letter} → {bits} → {bits[:6]} | {bits[6:]}0000 → {encoded}\n"
                f"Decryption: {encoded} → 6-bit groups → {bits} → {letter}"
            ),
            text=f"{letter} → {encoded}",
        )


class XorCipher(Cipher):
    """XOR every character code with a one-byte key and print it as hex.

    The XOR step is its own inverse (``xor_codes(xor_codes(c, k), k) == c``);
    only the hex rendering differs between the two directions.
    """

    id = "xorCipher"
    name = "XOR Cipher"
    difficulty = "expert"
    category = "Stream Cipher"
    description = (
        "Each character's ASCII code is combined with a secret key using bitwise XOR and "
        "written in hex. XOR-ing with the same key again restores the original."
    )
    defaults = {"key": 42}
    self_inverse = True
    inverse_scope = "codes"
    solver_script = '''\
# XOR Cipher Decoder
# Every character code was XOR-ed with key = $key and written in hex.

encrypted = "$encrypted"
key = $key

# TODO: parse each hex value, XOR it with the key again, and chr() it
decoded = ""
for value in encrypted.split(' '):
    code = int(value, 16)
    decoded += chr(code)  # Fix this: code ^ key

print("Decoded:", decoded)
'''

    @staticmethod
    def xor_codes(codes: List[int], key: int) -> List[int]:
        return [code ^ key for code in codes]

    def validate_params(self, params: Dict[str, Any]) -> Dict[str, Any]:
        params["key"] = require_int(params["key"], "key", 1, 127)
        return params

    def randomize_params(self, rng: Optional[random.Random] = None) -> Dict[str, Any]:
        rng = rng or random.Random()
        return self.resolve_params({"key": rng.randint(1, 127)})

    def _encode(self, text: str, params: Dict[str, Any]) -> str:
        codes = self.xor_codes([ord(char) for char in text.upper()], params["key"])
        return " ".join(format(code, "02X") for code in codes)

    def _decode(self, text: str, params: Dict[str, Any]) -> str:
        if not text:
            return ""
        return "".join(chr(code) for code in self.xor_codes(_parse_tokens(text, 16, "hex"), params["key"]))

    def hint(self, params=None) -> str:
        return f"XOR key: {self.resolve_params(params)['key']}"

    def _example(self, letter: str, params: Dict[str, Any]) -> WorkedExample:
        key = params["key"]
        code = ord(letter)
        result = code ^ key
        return WorkedExample(
            visual=(
                f"Encryption: {letter} ({code:08b}) XOR {key} ({key:08b}) = {result:08b} → {result:02X}\n"
                f"Decryption: {result:02X} XOR {key} = {code} → {letter} (XOR is self-inverting)"
            ),
            text=f"{letter} → {result:02X}",
        )
