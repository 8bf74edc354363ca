"""Monoalphabetic substitution ciphers: fixed shifts and keyed alphabets."""
from __future__ import annotations

import random
from typing import Any, Dict, Optional, Tuple

from .base import (
    ALPHABET,
    Cipher,
    InvalidParameterError,
    WorkedExample,
    index_to_letter,
    is_letter,
    letter_index,
    map_letters,
    require_int,
    require_keyword,
    shift_text,
)

# Multiplicative units modulo 26: the only legal values for Affine's ``a``.
AFFINE_VALID_A: Tuple[int, ...] = (1, 3, 5, 7, 9, 11, 15, 17, 19, 21, 23, 25)


# PUBLIC_INTERFACE
def mod_inverse(a: int, m: int = 26) -> int:
    """Return x in 1..m-1 with (a * x) % m == 1.

    Raises:
        InvalidParameterError: when ``a`` has no inverse modulo ``m``.
    """
    for x in range(1, m):
        if (a * x) % m == 1:
            return x
    raise InvalidParameterError(f"{a} has no inverse modulo {m}")


def keyed_alphabet(keyword: str, alphabet: str = ALPHABET) -> str:
    """Deduplicated keyword letters followed by the unused alphabet letters."""
    seen = []
    for char in keyword.upper() + alphabet:
        if char in alphabet and char not in seen:
            seen.append(char)
    return "".join(seen)


class Rot13Cipher(Cipher):
    id = "rot13"
    name = "ROT13"
    difficulty = "easy"
    category = "Substitution Cipher"
    description = (
        "Each letter is replaced by the letter 13 positions after it in the alphabet. "
        "A becomes N, B becomes O, and applying it twice gives the original back."
    )
    self_inverse = True
    solver_script = '''\
# ROT13 Decoder
# Every letter moved 13 places; moving 13 more wraps back around.

encrypted = "$encrypted"

# TODO: rotate each letter by 13
# Hint: (ord(c) - ord('A') + 13) % 26 + ord('A')

decoded = ""
for char in encrypted:
    if char.isalpha():
        decoded += char  # Fix this line
    else:
        decoded += char

print("Decoded:", decoded)
'''

    def _encode(self, text: str, params: Dict[str, Any]) -> str:
        return shift_text(text, 13)

    def _decode(self, text: str, params: Dict[str, Any]) -> str:
        return shift_text(text, 13)

    def hint(self, params=None) -> str:
        return "Shift each letter by 13 positions"

    def _example(self, letter: str, params: Dict[str, Any]) -> WorkedExample:
        encoded = shift_text(letter, 13)
        return WorkedExample(
            visual=(
                f"Encryption: {letter} + 13 → {encoded}\n"
                f"Decryption: {encoded} + 13 → {letter} (self-inverting)"
            ),
            text=f"{letter} → {encoded}",
        )


class SimpleShiftCipher(Cipher):
    id = "simpleShift"
    name = "Simple Shift"
    difficulty = "easy"
    category = "Substitution Cipher"
    description = (
        "Each letter is replaced by the next letter in the alphabet. "
        "A becomes B, B becomes C, and Z wraps around to A."
    )
    solver_script = '''\
# Simple Shift Decoder
# Every letter moved forward by one, so move it back by one.

encrypted = "$encrypted"

# TODO: shift each letter back by 1
# Hint: (ord(c) - ord('A') - 1) % 26 + ord('A')

decoded = ""
for char in encrypted:
    if char.isalpha():
        decoded += char  # Fix this line
    else:
        decoded += char

print("Decoded:", decoded)
'''

    def _encode(self, text: str, params: Dict[str, Any]) -> str:
        return shift_text(text, 1)

    def _decode(self, text: str, params: Dict[str, Any]) -> str:
        return shift_text(text, -1)

    def hint(self, params=None) -> str:
        return "Each letter shifts to the next letter in the alphabet"

    def _example(self, letter: str, params: Dict[str, Any]) -> WorkedExample:
        encoded = shift_text(letter, 1)
        return WorkedExample(
            visual=f"Encryption: {letter} + 1 → {encoded}\nDecryption: {encoded} - 1 → {letter}",
            text=f"{letter} → {encoded}",
        )


class Rot5Cipher(Cipher):
    """Shift letters by 5 and rotate digits by 5 (mod 10)."""

    id = "rot5"
    name = "ROT5"
    difficulty = "easy"
    category = "Encoding Scheme"
    description = (
        "Letters move 5 places forward in the alphabet and digits rotate 5 places "
        "around 0-9. A becomes F, 3 becomes 8."
    )
    solver_script = '''\
# ROT5 Decoder
# Letters moved forward by 5 (digits rotate by 5 too).

encrypted = "$encrypted"

# TODO: move each letter back by 5 and each digit back by 5
decoded = ""
for char in encrypted:
    if char.isalpha():
        decoded += char  # Fix this: (ord(char) - ord('A') - 5) % 26
    elif char.isdigit():
        decoded += str((int(char) - 5) % 10)
    else:
        decoded += char

print("Decoded:", decoded)
'''

    @staticmethod
    def _rotate(text: str, step: int) -> str:
        out = []
        for char in text:
            if is_letter(char):
                out.append(index_to_letter(letter_index(char) + step, lower=char.islower()))
            elif char.isdigit() and char.isascii():
                out.append(str((int(char) + step) % 10))
            else:
                out.append(char)
        return "".join(out)

    def _encode(self, text: str, params: Dict[str, Any]) -> str:
        return self._rotate(text, 5)

    def _decode(self, text: str, params: Dict[str, Any]) -> str:
        return self._rotate(text, -5)

    def hint(self, params=None) -> str:
        return "Shift every letter (and digit) by 5"

    def _example(self, letter: str, params: Dict[str, Any]) -> WorkedExample:
        encoded = self._rotate(letter, 5)
        return WorkedExample(
            visual=f"Encryption: {letter} + 5 → {encoded}\nDecryption: {encoded} - 5 → {letter}",
            text=f"{letter} → {encoded}",
        )


class CaesarCipher(Cipher):
    id = "caesar"
    name = "Caesar Cipher"
    difficulty = "easy"
    category = "Substitution Cipher"
    description = (
        "A substitution cipher where each letter is shifted by a fixed number of positions "
        "in the alphabet. Named after Julius Caesar, who used a shift of 3."
    )
    defaults = {"shift": 3}
    solver_script = '''\
# Caesar Cipher Decoder
# Each letter was shifted forward by $shift, so shift it back.

encrypted = "$encrypted"
shift = $shift

# TODO: subtract the shift and wrap around the alphabet
# Hint: (ord(c) - ord('A') - shift) % 26 + ord('A')

decoded = ""
for char in encrypted:
    if char.isalpha():
        new_pos = (ord(char) - ord('A')) % 26  # Fix this line
        decoded += chr(new_pos + ord('A'))
    else:
        decoded += char

print("Decoded:", decoded)
'''

    def validate_params(self, params: Dict[str, Any]) -> Dict[str, Any]:
        params["shift"] = require_int(params["shift"], "shift", -25, 25)
        return params

    def randomize_params(self, rng: Optional[random.Random] = None) -> Dict[str, Any]:
        rng = rng or random.Random()
        return self.resolve_params({"shift": rng.randint(1, 25)})

    def _encode(self, text: str, params: Dict[str, Any]) -> str:
        return shift_text(text, params["shift"])

    def _decode(self, text: str, params: Dict[str, Any]) -> str:
        return shift_text(text, -params["shift"])

    def hint(self, params=None) -> str:
        return f"Shift value: {self.resolve_params(params)['shift']}"

    def _example(self, letter: str, params: Dict[str, Any]) -> WorkedExample:
        shift = params["shift"]
        encoded = shift_text(letter, shift)
        return WorkedExample(
            visual=f"Encryption: {letter} + {shift} → {encoded}\nDecryption: {encoded} - {shift} → {letter}",
            text=f"{letter} → {encoded}",
        )


class AtbashCipher(Cipher):
    id = "atbash"
    name = "Atbash Cipher"
    difficulty = "medium"
    category = "Substitution Cipher"
    description = (
        "Each letter is replaced with its mirror in the alphabet. A becomes Z, "
        "B becomes Y, and so on. Applying it twice gives the original back."
    )
    self_inverse = True
    solver_script = '''\
# Atbash Decoder
# Mirror alphabet: A<->Z, B<->Y, C<->X ... (self-inverting)

encrypted = "$encrypted"

# TODO: replace each letter with its mirror
# Hint: mirror_pos = 25 - (ord(c) - ord('A'))

decoded = ""
for char in encrypted:
    if char.isalpha():
        pos = ord(char) - ord('A')
        decoded += chr(pos + ord('A'))  # Fix this line
    else:
        decoded += char

print("Decoded:", decoded)
'''

    def _encode(self, text: str, params: Dict[str, Any]) -> str:
        return map_letters(text, lambda i: 25 - i)

    def _decode(self, text: str, params: Dict[str, Any]) -> str:
        return map_letters(text, lambda i: 25 - i)

    def hint(self, params=None) -> str:
        return "A=Z, B=Y, C=X... (mirror alphabet)"

    def _example(self, letter: str, params: Dict[str, Any]) -> WorkedExample:
        encoded = self._encode(letter, params)
        return WorkedExample(
            visual=(
                f"Encryption: {letter} ↔ {encoded} (mirror alphabet)\n"
                f"Decryption: {encoded} ↔ {letter} (self-inverting)"
            ),
            text=f"{letter} → {encoded} (self-inverting)",
        )


class AffineCipher(Cipher):
    id = "affine"
    name = "Affine Cipher"
    difficulty = "hard"
    category = "Mathematical Cipher"
    description = (
        "A mathematical cipher where each letter x is encrypted as (ax + b) mod 26. "
        "The values a and b are the key; a must be coprime with 26."
    )
    defaults = {"a": 5, "b": 8}
    solver_script = '''\
# Affine Cipher Decoder
# Encrypted with (${a}x + ${b}) mod 26
# Decrypt with a_inv * (y - b) mod 26

encrypted = "$encrypted"
a = $a
b = $b
a_inv = $a_inv  # modular inverse of a

# TODO: apply the decryption formula to every letter
decoded = ""
for char in encrypted:
    if char.isalpha():
        y = ord(char) - ord('A')
        x = y  # Fix this: (a_inv * (y - b)) % 26
        decoded += chr(x + ord('A'))
    else:
        decoded += char

print("Decoded:", decoded)
'''

    def validate_params(self, params: Dict[str, Any]) -> Dict[str, Any]:
        a = require_int(params["a"], "a", 1, 25)
        if a not in AFFINE_VALID_A:
            raise InvalidParameterError(f"a must be coprime with 26, got {a}")
        params["a"] = a
        params["b"] = require_int(params["b"], "b", 0, 25)
        return params

    def randomize_params(self, rng: Optional[random.Random] = None) -> Dict[str, Any]:
        rng = rng or random.Random()
        return self.resolve_params({"a": rng.choice(AFFINE_VALID_A), "b": rng.randrange(26)})

    def _encode(self, text: str, params: Dict[str, Any]) -> str:
        a, b = params["a"], params["b"]
        return map_letters(text, lambda x: a * x + b)

    def _decode(self, text: str, params: Dict[str, Any]) -> str:
        a_inv, b = mod_inverse(params["a"]), params["b"]
        return map_letters(text, lambda y: a_inv * (y - b))

    def hint(self, params=None) -> str:
        p = self.resolve_params(params)
        return f"Formula: ({p['a']}x + {p['b']}) mod 26"

    def _example(self, letter: str, params: Dict[str, Any]) -> WorkedExample:
        a, b = params["a"], params["b"]
        x = letter_index(letter)
        result = (a * x + b) % 26
        encoded = index_to_letter(result)
        return WorkedExample(
            visual=(
                f"Encryption: ({a}×{x} + {b}) mod 26 = {result} → {encoded}\n"
                f"Decryption: a⁻¹×(y - {b}) mod 26 → {letter}"
            ),
            text=f"{letter} → {encoded}",
        )

    def _template_values(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return {**params, "a_inv": mod_inverse(params["a"])}


class SubstitutionCipher(Cipher):
    id = "substitution"
    name = "Substitution"
    difficulty = "hard"
    category = "Monoalphabetic Cipher"
    description = (
        "Each letter is replaced with another letter according to a fixed substitution "
        "alphabet. The full substitution key is provided."
    )
    defaults = {"key": "QWERTYUIOPASDFGHJKLZXCVBNM"}
    solver_script = '''\
# Substitution Cipher Decoder
# Letter number N of the alphabet was replaced by letter number N of the key.

encrypted = "$encrypted"
key = "$key"
alphabet = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

# TODO: find each encrypted letter in the key and use that
# position in the normal alphabet

decoded = ""
for char in encrypted:
    if char.isalpha():
        decoded += char  # Fix this: alphabet[key.index(char)]
    else:
        decoded += char

print("Decoded:", decoded)
'''

    def validate_params(self, params: Dict[str, Any]) -> Dict[str, Any]:
        key = params["key"]
        if not isinstance(key, str) or sorted(key.upper()) != list(ALPHABET):
            raise InvalidParameterError("key must be a permutation of the 26 letters")
        params["key"] = key.upper()
        return params

    def randomize_params(self, rng: Optional[random.Random] = None) -> Dict[str, Any]:
        rng = rng or random.Random()
        letters = list(ALPHABET)
        rng.shuffle(letters)
        return self.resolve_params({"key": "".join(letters)})

    def _encode(self, text: str, params: Dict[str, Any]) -> str:
        key = params["key"]
        return map_letters(text, lambda i: ALPHABET.index(key[i]))

    def _decode(self, text: str, params: Dict[str, Any]) -> str:
        key = params["key"]
        return map_letters(text, lambda i: key.index(ALPHABET[i]))

    def hint(self, params=None) -> str:
        return f"Key: {self.resolve_params(params)['key'][:13]}..."

    def _example(self, letter: str, params: Dict[str, Any]) -> WorkedExample:
        index = letter_index(letter)
        encoded = params["key"][index]
        return WorkedExample(
            visual=(
                f"Encryption: {letter} (pos {index + 1}) → {encoded}\n"
                f"Decryption: Find {encoded} in key, get position → {letter}"
            ),
            text=f"{letter} → {encoded}",
        )


class KeywordCipher(Cipher):
    id = "keyword"
    name = "Keyword Cipher"
    difficulty = "medium"
    category = "Substitution Cipher"
    description = (
        "The cipher alphabet starts with the keyword (repeated letters removed) followed by "
        "the rest of the alphabet in order. Each letter is swapped for the letter in the "
        "same position of that cipher alphabet."
    )
    defaults = {"keyword": "SECRET"}
    keywords = ("SECRET", "CIPHER", "PUZZLE", "ZEBRA", "KNIGHT", "GALAXY")
    solver_script = '''\
# Keyword Cipher Decoder
# Cipher alphabet = keyword without repeats + remaining letters

encrypted = "$encrypted"
keyword = "$keyword"
alphabet = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

cipher_alphabet = ""
for char in keyword + alphabet:
    if char not in cipher_alphabet:
        cipher_alphabet += char

# TODO: look each letter up in cipher_alphabet and read the plain letter
decoded = ""
for char in encrypted:
    if char.isalpha():
        decoded += char  # Fix this: alphabet[cipher_alphabet.index(char)]
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
        cipher_alphabet = keyed_alphabet(params["keyword"])
        return map_letters(text, lambda i: ALPHABET.index(cipher_alphabet[i]))

    def _decode(self, text: str, params: Dict[str, Any]) -> str:
        cipher_alphabet = keyed_alphabet(params["keyword"])
        return map_letters(text, lambda i: cipher_alphabet.index(ALPHABET[i]))

    def hint(self, params=None) -> str:
        return f'Keyword: "{self.resolve_params(params)["keyword"]}"'

    def _example(self, letter: str, params: Dict[str, Any]) -> WorkedExample:
        cipher_alphabet = keyed_alphabet(params["keyword"])
        encoded = cipher_alphabet[letter_index(letter)]
        return WorkedExample(
            visual=(
                f"Plain:  {ALPHABET}\nCipher: {cipher_alphabet}\n"
                f"Encryption: {letter} → {encoded}\nDecryption: {encoded} → {letter}"
            ),
            text=f"{letter} → {encoded}",
        )
