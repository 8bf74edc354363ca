"""5x5 grid ciphers. J is merged into I everywhere in this module."""
from __future__ import annotations

import random
from typing import Any, Dict, List, Optional, Tuple

from .base import Cipher, CipherError, WorkedExample, is_letter, require_keyword
from .substitution import keyed_alphabet

GRID_ALPHABET = "ABCDEFGHIKLMNOPQRSTUVWXYZ"
# Mixed square from the classic ADFGX worked example.
ADFGX_SQUARE = "BTALPDHOZKQFVSNGICUXMREWY"
ADFGX_LABELS = "ADFGX"


def merge_j(text: str) -> str:
    """Uppercase, keep letters only and fold J into I."""
    return "".join(ch for ch in text.upper() if is_letter(ch)).replace("J", "I")


def require_pairs(letters: str, label: str) -> str:
    if len(letters) % 2:
        raise CipherError(f"Malformed {label} ciphertext: odd number of letters")
    return letters


def build_square(keyword: str = "") -> str:
    """25-letter square: keyword letters (J→I, deduplicated) then the rest."""
    return keyed_alphabet(keyword.upper().replace("J", "I"), GRID_ALPHABET)


def coords(square: str, letter: str) -> Tuple[int, int]:
    return divmod(square.index(letter), 5)


def at(square: str, row: int, col: int) -> str:
    return square[(row % 5) * 5 + (col % 5)]


def format_square(square: str) -> str:
    return "\n".join(" ".join(square[r * 5:r * 5 + 5]) for r in range(5))


def _labelled_tokens(text: str, square: str, labels: str) -> str:
    tokens = []
    for char in text.upper():
        if char == " ":
            tokens.append("/")
        elif is_letter(char):
            row, col = coords(square, "I" if char == "J" else char)
            tokens.append(labels[row] + labels[col])
        else:
            tokens.append(char)
    return " ".join(tokens)


def _unlabel_tokens(text: str, square: str, labels: str) -> str:
    out = []
    for token in text.split(" "):
        if token == "/":
            out.append(" ")
        elif len(token) == 2 and token[0] in labels and token[1] in labels:
            out.append(at(square, labels.index(token[0]), labels.index(token[1])))
        else:
            out.append(token)
    return "".join(out)


class PolybiusCipher(Cipher):
    id = "polybius"
    name = "Polybius Square"
    difficulty = "medium"
    category = "Encoding Scheme"
    description = (
        "Letters are placed in a 5×5 grid (I and J share a cell) and each letter is replaced "
        "by its row and column number, e.g. A=11, B=12, F=21."
    )
    solver_script = '''\
# Polybius Square Decoder
# Each pair of digits is (row, column) in the grid below, counting from 1.

encrypted = "$encrypted"

grid = [
    "ABCDE",
    "FGHIK",
    "LMNOP",
    "QRSTU",
    "VWXYZ",
]

# TODO: for each two-digit token look up grid[row - 1][col - 1]
decoded = ""
for token in encrypted.split(' '):
    pass  # Replace this with your code

print("Decoded:", decoded)
'''

    def _encode(self, text: str, params: Dict[str, Any]) -> str:
        return _labelled_tokens(text, GRID_ALPHABET, "12345")

    def _decode(self, text: str, params: Dict[str, Any]) -> str:
        return _unlabel_tokens(text, GRID_ALPHABET, "12345")

    def hint(self, params=None) -> str:
        return "Row then column in a 5×5 alphabet grid (I/J share a cell)"

    def _example(self, letter: str, params: Dict[str, Any]) -> WorkedExample:
        encoded = self._encode(letter, params)
        return WorkedExample(
            visual=(
                f"{format_square(GRID_ALPHABET)}\n"
                f"Encryption: {letter} is in row {encoded[0]}, column {encoded[1]} → {encoded}\n"
                f"Decryption: {encoded} → row {encoded[0]}, column {encoded[1]} → {letter}"
            ),
            text=f"{letter} → {encoded}",
        )


class AdfgxCipher(Cipher):
    """Polybius substitution with ``ADFGX`` labels over a fixed mixed square.

    The historical cipher follows the substitution with a keyed columnar
    transposition. That step is not applied in either direction, so the
    ciphertext is the plain fractionated stream.
    """

    id = "adfgx"
    name = "ADFGX Cipher"
    difficulty = "expert"
    category = "Digraphic Cipher"
    description = (
        "A World War I field cipher: each letter is looked up in a mixed 5×5 square whose rows "
        "and columns are labelled A, D, F, G, X, and replaced by its two labels. The historical "
        "version then shuffles the columns; here only the substitution is applied."
    )
    solver_script = '''\
# ADFGX Decoder
# Each pair of labels is (row, column) in the mixed square below.

encrypted = "$encrypted"

labels = "ADFGX"
square = [
    "BTALP",
    "DHOZK",
    "QFVSN",
    "GICUX",
    "MREWY",
]

# TODO: for each token use labels.index() on both characters
decoded = ""
for token in encrypted.split(' '):
    pass  # Replace this with your code

print("Decoded:", decoded)
'''

    def _encode(self, text: str, params: Dict[str, Any]) -> str:
        return _labelled_tokens(text, ADFGX_SQUARE, ADFGX_LABELS)

    def _decode(self, text: str, params: Dict[str, Any]) -> str:
        return _unlabel_tokens(text, ADFGX_SQUARE, ADFGX_LABELS)

    def hint(self, params=None) -> str:
        return "Row/column labels A, D, F, G, X in a mixed square"

    def _example(self, letter: str, params: Dict[str, Any]) -> WorkedExample:
        encoded = self._encode(letter, params)
        return WorkedExample(
            visual=(
                "    A D F G X\n"
                + "\n".join(
                    f"{ADFGX_LABELS[r]}   " + " ".join(ADFGX_SQUARE[r * 5:r * 5 + 5]) for r in range(5)
                )
                + f"\nEncryption: {letter} → row {encoded[0]}, column {encoded[1]} → {encoded}"
                + f"\nDecryption: {encoded} → {letter}"
            ),
            text=f"{letter} → {encoded}",
        )


class BifidCipher(Cipher):
    id = "bifid"
    name = "Bifid Cipher"
    difficulty = "expert"
    category = "Digraphic Cipher"
    description = (
        "Fractionation in a Polybius square: write every letter's row number, then every "
        "column number, read the combined sequence back in pairs and turn each pair into "
        "a letter again."
    )
    solver_script = '''\
# Bifid Decoder
# Encryption wrote all rows, then all columns, and re-paired the stream.

encrypted = "$encrypted"

grid = "ABCDEFGHIKLMNOPQRSTUVWXYZ"  # 5x5, row-major, J merged into I

# Coordinates of every cipher letter, flattened: r1, c1, r2, c2, ...
stream = []
for char in encrypted:
    row, col = divmod(grid.index(char), 5)
    stream += [row, col]

# TODO: the first half of the stream holds the original rows and the
# second half the original columns; zip them back into letters.
n = len(encrypted)
decoded = ""

print("Decoded:", decoded)
'''

    def _encode(self, text: str, params: Dict[str, Any]) -> str:
        letters = merge_j(text)
        points = [coords(GRID_ALPHABET, ch) for ch in letters]
        stream = [row for row, _ in points] + [col for _, col in points]
        return "".join(at(GRID_ALPHABET, stream[i], stream[i + 1]) for i in range(0, len(stream), 2))

    def _decode(self, text: str, params: Dict[str, Any]) -> str:
        letters = merge_j(text)
        stream: List[int] = []
        for ch in letters:
            stream.extend(coords(GRID_ALPHABET, ch))
        n = len(letters)
        rows, cols = stream[:n], stream[n:]
        return "".join(at(GRID_ALPHABET, row, col) for row, col in zip(rows, cols))

    def hint(self, params=None) -> str:
        return "All row numbers first, then all column numbers, re-paired"

    def _example(self, letter: str, params: Dict[str, Any]) -> WorkedExample:
        row, col = coords(GRID_ALPHABET, "I" if letter == "J" else letter)
        return WorkedExample(
            visual=(
                f"{format_square(GRID_ALPHABET)}\n"
                f"Encryption: {letter} sits at row {row + 1}, column {col + 1}; its row joins the "
                "row stream and its column the column stream, then the streams are re-paired\n"
                "Decryption: Split the cipher's coordinates in half: rows first, columns second"
            ),
            text=f"{letter} contributes row {row + 1} and column {col + 1}",
        )


class PlayfairCipher(Cipher):
    """Digraph cipher on a keyed square.

    Decoding removes an ``X`` sitting between two equal letters and a trailing
    pad ``X``, so words ending in ``X`` do not survive the round trip.
    """

    id = "playfair"
    name = "Playfair Cipher"
    difficulty = "hard"
    category = "Digraphic Cipher"
    description = (
        "Letters are encrypted in pairs using a 5×5 keyword square. Pairs in the same row "
        "shift right, pairs in the same column shift down, otherwise each letter takes the "
        "column of its partner. Doubled letters are split with an X."
    )
    defaults = {"keyword": "MONARCHY"}
    keywords = ("MONARCHY", "PLAYFAIR", "KEYWORD", "CIPHER", "SECRET")
    solver_script = '''\
# Playfair Decoder
# Keyword square for "$keyword" (J merged into I):
#
$square_comment

encrypted = "$encrypted"
square = "$square"

def pos(letter):
    return divmod(square.index(letter), 5)

decoded = ""
for i in range(0, len(encrypted), 2):
    a, b = encrypted[i], encrypted[i + 1]
    (ra, ca), (rb, cb) = pos(a), pos(b)
    # TODO: undo the three rules
    #   same row    -> take the letter to the LEFT  (column - 1, wrap with % 5)
    #   same column -> take the letter ABOVE        (row - 1, wrap with % 5)
    #   rectangle   -> swap the columns
    decoded += a + b  # Fix this line

# Remove the X fillers between doubled letters and at the end
print("Decoded:", decoded)
'''

    @staticmethod
    def digraphs(text: str) -> List[Tuple[str, str]]:
        letters = merge_j(text)
        pairs = []
        i = 0
        while i < len(letters):
            a = letters[i]
            b = letters[i + 1] if i + 1 < len(letters) else None
            if b is None or a == b:
                pairs.append((a, "X"))
                i += 1
            else:
                pairs.append((a, b))
                i += 2
        return pairs

    @staticmethod
    def _apply(square: str, a: str, b: str, step: int) -> str:
        ra, ca = coords(square, a)
        rb, cb = coords(square, b)
        if ra == rb:
            return at(square, ra, ca + step) + at(square, rb, cb + step)
        if ca == cb:
            return at(square, ra + step, ca) + at(square, rb + step, cb)
        return at(square, ra, cb) + at(square, rb, ca)

    def validate_params(self, params: Dict[str, Any]) -> Dict[str, Any]:
        params["keyword"] = require_keyword(params["keyword"])
        return params

    def randomize_params(self, rng: Optional[random.Random] = None) -> Dict[str, Any]:
        rng = rng or random.Random()
        return self.resolve_params({"keyword": rng.choice(self.keywords)})

    def _encode(self, text: str, params: Dict[str, Any]) -> str:
        square = build_square(params["keyword"])
        return "".join(self._apply(square, a, b, 1) for a, b in self.digraphs(text))

    def _decode(self, text: str, params: Dict[str, Any]) -> str:
        square = build_square(params["keyword"])
        letters = require_pairs(merge_j(text), "Playfair")
        pairs = [
            tuple(self._apply(square, letters[i], letters[i + 1], -1))
            for i in range(0, len(letters), 2)
        ]
        out = []
        for k, (a, b) in enumerate(pairs):
            out.append(a)
            if b == "X" and (k == len(pairs) - 1 or pairs[k + 1][0] == a):
                continue
            out.append(b)
        return "".join(out)

    def hint(self, params=None) -> str:
        return f'Keyword square: "{self.resolve_params(params)["keyword"]}"'

    def _example(self, letter: str, params: Dict[str, Any]) -> WorkedExample:
        keyword = params["keyword"]
        square = build_square(keyword)
        row, col = coords(square, "I" if letter == "J" else letter)
        return WorkedExample(
            visual=(
                f"{format_square(square)}\n"
                f"{letter} sits at row {row + 1}, column {col + 1} of the \"{keyword}\" square\n"
                "Encryption: same row → shift right, same column → shift down, else swap columns\n"
                "Decryption: same row → shift left, same column → shift up, else swap columns"
            ),
            text=f"{letter} is encrypted together with the letter that follows it",
        )

    def _template_values(self, params: Dict[str, Any]) -> Dict[str, Any]:
        square = build_square(params["keyword"])
        comment = "\n".join(f"#   {line}" for line in format_square(square).split("\n"))
        return {**params, "square": square, "square_comment": comment}


class FourSquareCipher(Cipher):
    """Two keyed squares plus the plain square, encrypting letter pairs."""

    id = "fourSquare"
    name = "Four-Square Cipher"
    difficulty = "expert"
    category = "Digraphic Cipher"
    description = (
        "Four 5×5 squares: plain alphabets top-left and bottom-right, keyed alphabets top-right "
        "and bottom-left. Each pair of letters forms a rectangle whose other corners, read from "
        "the keyed squares, are the ciphertext."
    )
    defaults = {"keyword1": "EXAMPLE", "keyword2": "KEYWORD"}
    keyword_pairs = (
        ("EXAMPLE", "KEYWORD"),
        ("CIPHER", "SECRET"),
        ("PUZZLE", "MASTER"),
        ("CRYPTO", "LEGEND"),
    )
    solver_script = '''\
# Four-Square Decoder
# Keyed squares: "$keyword1" (top-right) and "$keyword2" (bottom-left)

encrypted = "$encrypted"
plain = "ABCDEFGHIKLMNOPQRSTUVWXYZ"
top_right = "$square1"
bottom_left = "$square2"

decoded = ""
for i in range(0, len(encrypted), 2):
    c, d = encrypted[i], encrypted[i + 1]
    r1, c1 = divmod(top_right.index(c), 5)
    r2, c2 = divmod(bottom_left.index(d), 5)
    # TODO: the plain letters are plain[r1 * 5 + c2] and plain[r2 * 5 + c1]
    decoded += c + d  # Fix this line

print("Decoded:", decoded)
'''

    def validate_params(self, params: Dict[str, Any]) -> Dict[str, Any]:
        params["keyword1"] = require_keyword(params["keyword1"], "keyword1")
        params["keyword2"] = require_keyword(params["keyword2"], "keyword2")
        return params

    def randomize_params(self, rng: Optional[random.Random] = None) -> Dict[str, Any]:
        rng = rng or random.Random()
        first, second = rng.choice(self.keyword_pairs)
        return self.resolve_params({"keyword1": first, "keyword2": second})

    def _encode(self, text: str, params: Dict[str, Any]) -> str:
        upper = build_square(params["keyword1"])
        lower = build_square(params["keyword2"])
        letters = merge_j(text)
        if len(letters) % 2:
            letters += "X"
        out = []
        for i in range(0, len(letters), 2):
            ra, ca = coords(GRID_ALPHABET, letters[i])
            rb, cb = coords(GRID_ALPHABET, letters[i + 1])
            out.append(at(upper, ra, cb) + at(lower, rb, ca))
        return "".join(out)

    def _decode(self, text: str, params: Dict[str, Any]) -> str:
        upper = build_square(params["keyword1"])
        lower = build_square(params["keyword2"])
        letters = require_pairs(merge_j(text), "Four-Square")
        out = []
        for i in range(0, len(letters), 2):
            ra, cb = coords(upper, letters[i])
            rb, ca = coords(lower, letters[i + 1])
            out.append(at(GRID_ALPHABET, ra, ca) + at(GRID_ALPHABET, rb, cb))
        decoded = "".join(out)
        return decoded[:-1] if decoded.endswith("X") else decoded

    def hint(self, params=None) -> str:
        p = self.resolve_params(params)
        return f'Keywords: "{p["keyword1"]}" and "{p["keyword2"]}"'

    def _example(self, letter: str, params: Dict[str, Any]) -> WorkedExample:
        row, col = coords(GRID_ALPHABET, "I" if letter == "J" else letter)
        upper = build_square(params["keyword1"])
        return WorkedExample(
            visual=(
                f"{letter} sits at row {row + 1}, column {col + 1} of the plain square\n"
                f"Encryption: its row meets its partner's column in the top-right square "
                f"(\"{params['keyword1']}\"), e.g. {letter} + A → {at(upper, row, 0)}\n"
                "Decryption: find the cipher pair in the keyed squares, read the rectangle "
                "corners from the plain squares"
            ),
            text=f"{letter} is encrypted together with the letter that follows it",
        )

    def _template_values(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return {
            **params,
            "square1": build_square(params["keyword1"]),
            "square2": build_square(params["keyword2"]),
        }
