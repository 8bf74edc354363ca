from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .base import Cipher, UnknownCipherError, WorkedExample
from .compound import AtbashVigenereCipher, DoubleCaesarCipher, ReverseCaesarCipher
from .encodings import (
    A1Z26Cipher,
    Base64ishCipher,
    BinaryCipher,
    HexCipher,
    MorseCipher,
    PigLatinCipher,
    XorCipher,
)
from .grids import AdfgxCipher, BifidCipher, FourSquareCipher, PlayfairCipher, PolybiusCipher
from .polyalphabetic import BeaufortCipher, VigenereCipher
from .substitution import (
    AffineCipher,
    AtbashCipher,
    CaesarCipher,
    KeywordCipher,
    Rot5Cipher,
    Rot13Cipher,
    SimpleShiftCipher,
    SubstitutionCipher,
)
from .transposition import ColumnarCipher, RailFenceCipher, ReversedCipher

logger = logging.getLogger(__name__)


def _build_catalog() -> List[Cipher]:
    """Instantiate every cipher once, wiring compounds to their parts."""
    reversed_ = ReversedCipher()
    caesar = CaesarCipher()
    atbash = AtbashCipher()
    vigenere = VigenereCipher()
    return [
        reversed_,
        Rot13Cipher(),
        SimpleShiftCipher(),
        PigLatinCipher(),
        Rot5Cipher(),
        caesar,
        atbash,
        A1Z26Cipher(),
        KeywordCipher(),
        BeaufortCipher(),
        vigenere,
        RailFenceCipher(),
        MorseCipher(),
        BinaryCipher(),
        PlayfairCipher(),
        PolybiusCipher(),
        AffineCipher(),
        SubstitutionCipher(),
        ColumnarCipher(),
        HexCipher(),
        BifidCipher(),
        AdfgxCipher(),
        DoubleCaesarCipher(caesar),
        ReverseCaesarCipher(reversed_, caesar),
        AtbashVigenereCipher(atbash, vigenere),
        FourSquareCipher(),
        XorCipher(),
        Base64ishCipher(),
    ]


# PUBLIC_INTERFACE
class CipherRegistry:
    """Immutable catalog mapping cipher ids to cipher instances."""

    def __init__(self, ciphers: Iterable[Cipher]):
        table: Dict[str, Cipher] = {}
        for cipher in ciphers:
            if not cipher.id:
                raise ValueError(f"{type(cipher).__name__} has no id")
            if cipher.id in table:
                raise ValueError(f"Duplicate cipher id: {cipher.id!r}")
            table[cipher.id] = cipher
        self._table: Mapping[str, Cipher] = MappingProxyType(table)

    def __contains__(self, cipher_id: object) -> bool:
        return cipher_id in self._table

    def __len__(self) -> int:
        return len(self._table)

    def __iter__(self):
        return iter(self._table.values())

    # PUBLIC_INTERFACE
    def get(self, cipher_id: str) -> Optional[Cipher]:
        """Return the cipher for ``cipher_id`` or None when it is unknown."""
        cipher = self._table.get((cipher_id or "").strip())
        if cipher is None:
            logger.warning("Unknown cipher id requested: %r", cipher_id)
        return cipher

    # PUBLIC_INTERFACE
    def require(self, cipher_id: str) -> Cipher:
        """Return the cipher for ``cipher_id``.

        Raises:
            UnknownCipherError: when the id is not registered.
        """
        cipher = self.get(cipher_id)
        if cipher is None:
            raise UnknownCipherError(f"Unknown cipher: {cipher_id!r}")
        return cipher

    def ids(self) -> List[str]:
        return list(self._table)

    def all(self) -> List[Cipher]:
        return list(self._table.values())

    def by_difficulty(self, difficulty: str) -> List[Cipher]:
        return [cipher for cipher in self._table.values() if cipher.difficulty == difficulty]

    # PUBLIC_INTERFACE
    def get_worked_example(
        self, cipher_id: str, sample_letter: str, params: Optional[Mapping[str, Any]] = None
    ) -> Optional[WorkedExample]:
        """Worked example for ``sample_letter`` under ``params``, or None for unknown ids."""
        cipher = self.get(cipher_id)
        if cipher is None:
            return None
        return cipher.worked_example(sample_letter, params)

    # PUBLIC_INTERFACE
    def get_guided_solver_template(
        self, cipher_id: str, ciphertext: str, params: Optional[Mapping[str, Any]] = None
    ) -> Optional[str]:
        """Guided solver script for ``ciphertext``, or None for unknown ids."""
        cipher = self.get(cipher_id)
        if cipher is None:
            return None
        return cipher.solver_template(ciphertext, params)


REGISTRY = CipherRegistry(_build_catalog())


# PUBLIC_INTERFACE
def get_cipher(cipher_id: str) -> Optional[Cipher]:
    """Convenience lookup on the default registry.

    Example:
        caesar = get_cipher("caesar")
        caesar.encode("CAT", {"shift": 3})  # "FDW"
    """
    return REGISTRY.get(cipher_id)
