"""Transposition ciphers: characters keep their identity but change position."""
from __future__ import annotations

import math
import random
from typing import Any, Dict, List, Optional

from .base import Cipher, WorkedExample, require_int, require_keyword


def rail_pattern(length: int, rails: int) -> List[int]:
    """Rail index visited by each position of a zigzag over ``rails`` rails."""
    pattern = []
    rail, direction = 0, 1
    for _ in range(length):
        pattern.append(rail)
        rail += direction
        if rail == 0 or rail == rails - 1:
            direction *= -1
    return pattern


def column_order(keyword: str) -> List[int]:
    """Rank of each keyword column when the letters are sorted.

    Ties keep their original column order, so ``SECRET`` ranks the first E
    before the second.
    """
    ranked = sorted(range(len(keyword)), key=lambda i: (keyword[i], i))
    order = [0] * len(keyword)
    for rank, column in enumerate(ranked):
        order[column] = rank
    return order


class ReversedCipher(Cipher):
    id = "reversed"
    name = "Reversed"
    difficulty = "easy"
    category = "Transposition Cipher"
    description = "The text is simply written backwards. Read it from right to left to decode."
    solver_script = '''\
# Reversed Text Decoder
# The text is written backwards - reverse it to decode.

encrypted = "$encrypted"

# TODO: reverse the string
# Hint: slicing with [::-1] or ''.join(reversed(...))

decoded = encrypted  # Fix this line

print("Decoded:", decoded)
'''

    def _encode(self, text: str, params: Dict[str, Any]) -> str:
        return text[::-1]

    def _decode(self, text: str, params: Dict[str, Any]) -> str:
        return text[::-1]

    def hint(self, params=None) -> str:
        return "Try reading the text backwards!"

    def _example(self, letter: str, params: Dict[str, Any]) -> WorkedExample:
        return WorkedExample(
            visual='Encryption: "ABC" → "CBA" (reverse order)\nDecryption: "CBA" → "ABC" (reverse again)',
            text=f"In the full word, {letter} moves to the opposite end",
        )


class RailFenceCipher(Cipher):
    id = "railFence"
    name = "Rail Fence"
    difficulty = "medium"
    category = "Transposition Cipher"
    description = (
        'A transposition cipher that writes the message in a zigzag pattern across several '
        '"rails" and then reads off each rail in turn.'
    )
    defaults = {"rails": 3}
    solver_script = '''\
# Rail Fence Decoder
# The text was written in a zigzag over $rails rails, then read rail by rail.

encrypted = "$encrypted"
rails = $rails

def zigzag(length, num_rails):
    pattern, rail, step = [], 0, 1
    for _ in range(length):
        pattern.append(rail)
        rail += step
        if rail == 0 or rail == num_rails - 1:
            step = -step
    return pattern

pattern = zigzag(len(encrypted), rails)

# TODO: work out how many letters sit on each rail (count pattern values),
# cut the ciphertext into those rails, then walk the zigzag again taking the
# next unused letter from each rail.

decoded = ""

print("Decoded:", decoded)
'''

    def validate_params(self, params: Dict[str, Any]) -> Dict[str, Any]:
        params["rails"] = require_int(params["rails"], "rails", 1, 10)
        return params

    def randomize_params(self, rng: Optional[random.Random] = None) -> Dict[str, Any]:
        rng = rng or random.Random()
        return self.resolve_params({"rails": rng.randint(2, 4)})

    def _encode(self, text: str, params: Dict[str, Any]) -> str:
        rails = params["rails"]
        if rails == 1:
            return text
        fence: List[List[str]] = [[] for _ in range(rails)]
        for char, rail in zip(text, rail_pattern(len(text), rails)):
            fence[rail].append(char)
        return "".join("".join(row) for row in fence)

    def _decode(self, text: str, params: Dict[str, Any]) -> str:
        rails = params["rails"]
        if rails == 1:
            return text
        pattern = rail_pattern(len(text), rails)
        fence: List[List[str]] = []
        pos = 0
        for rail in range(rails):
            length = pattern.count(rail)
            fence.append(list(text[pos:pos + length]))
            pos += length
        cursors = [0] * rails
        out = []
        for rail in pattern:
            out.append(fence[rail][cursors[rail]])
            cursors[rail] += 1
        return "".join(out)

    def hint(self, params=None) -> str:
        return f"Number of rails: {self.resolve_params(params)['rails']}"

    def _example(self, letter: str, params: Dict[str, Any]) -> WorkedExample:
        rails = params["rails"]
        return WorkedExample(
            visual=(
                f"Encryption: Write zigzag across {rails} rails, read rows\n"
                f"Decryption: Distribute letters to rails, read zigzag\nRails: {rails}"
            ),
            text=f"Write zigzag across {rails} rails, read rows left-to-right",
        )


class ColumnarCipher(Cipher):
    id = "columnar"
    name = "Columnar Transposition"
    difficulty = "hard"
    category = "Transposition Cipher"
    description = (
        "Text is written into rows under a keyword, then the columns are read off in "
        "alphabetical order of the keyword letters. Short rows are padded with X."
    )
    defaults = {"keyword": "CIPHER"}
    keywords = ("KEY", "CODE", "HACK", "CIPHER", "SECRET", "HIDDEN")
    solver_script = '''\
# Columnar Transposition Decoder
# Rows were written under "$keyword"; columns were read in alphabetical key order.

encrypted = "$encrypted"
keyword = "$keyword"

cols = len(keyword)
rows = len(encrypted) // cols

# Column read order: alphabetical by key letter, ties left to right
order = sorted(range(cols), key=lambda i: (keyword[i], i))

# TODO: slice the ciphertext into `rows`-long chunks, give chunk k to
# column order[k], then read the grid row by row and strip the X padding.
columns = {}

decoded = ""

print("Decoded:", decoded.rstrip("X"))
'''

    def validate_params(self, params: Dict[str, Any]) -> Dict[str, Any]:
        params["keyword"] = require_keyword(params["keyword"])
        return params

    def randomize_params(self, rng: Optional[random.Random] = None) -> Dict[str, Any]:
        rng = rng or random.Random()
        return self.resolve_params({"keyword": rng.choice(self.keywords)})

    def _encode(self, text: str, params: Dict[str, Any]) -> str:
        keyword = params["keyword"]
        cols = len(keyword)
        order = column_order(keyword)
        clean = "".join(ch for ch in text.upper() if ch.isalpha())
        padded = clean.ljust(math.ceil(len(clean) / cols) * cols, "X")
        grid = [padded[i:i + cols] for i in range(0, len(padded), cols)]
        out = []
        for rank in range(cols):
            column = order.index(rank)
            out.extend(row[column] for row in grid)
        return "".join(out)

    def _decode(self, text: str, params: Dict[str, Any]) -> str:
        keyword = params["keyword"]
        cols = len(keyword)
        rows = math.ceil(len(text) / cols)
        order = column_order(keyword)
        columns: List[str] = [""] * cols
        pos = 0
        for rank in range(cols):
            column = order.index(rank)
            columns[column] = text[pos:pos + rows]
            pos += rows
        out = []
        for row in range(rows):
            for column in columns:
                if row < len(column):
                    out.append(column[row])
        decoded = "".join(out)
        # Padding never fills a whole row.
        pad = len(decoded) - len(decoded.rstrip("X"))
        return decoded[:len(decoded) - min(pad, cols - 1)]

    def hint(self, params=None) -> str:
        return f'Keyword: "{self.resolve_params(params)["keyword"]}"'

    def _example(self, letter: str, params: Dict[str, Any]) -> WorkedExample:
        keyword = params["keyword"]
        return WorkedExample(
            visual=(
                "Encryption: Write in rows, read columns alphabetically\n"
                f'Decryption: Reverse column order, read rows\nKeyword: "{keyword}"'
            ),
            text=f"{letter} position changes based on column reordering",
        )
