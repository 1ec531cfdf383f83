# dnadist/counting/nucleotide.py
"""
Nucleotide codec and substitution classifier.

Both functions sit in the innermost loop of the counting engine, so they are
written as closed-form bit arithmetic: no table lookups, no branches on the
letter itself.

    nucl2bit:  A → 0, C → 1, G → 2, T → 3

The three low bits of the ASCII codes of A, C, G, T are unique (001, 011,
111, 100). Masking with 6 and folding bit 2 into bit 1 yields the canonical
order. Lowercase letters share the low bits and map identically.

    classify:  (a, b) → Mutation index, symmetric in a and b
"""
from __future__ import annotations

from typing import Union

__all__ = [
    "PLACEHOLDER",
    "nucl2bit",
    "is_placeholder",
    "classify",
    "normalize",
]

Char = Union[str, int]

# Any code point below 'A' marks a gap or masked position.
_FIRST_VALID = ord("A")

# Replacement for characters the engine must skip ('!' < 'A').
PLACEHOLDER = "!"

# Base offset per "to" code, one nibble each: A → 0, C → 4, G → 7, T → 9.
_MAP4 = 0x9740

_ACGT = "ACGTacgt"
_KEEP = _ACGT + "".join(chr(c) for c in range(_FIRST_VALID))


def _code(c: Char) -> int:
    return c if isinstance(c, int) else ord(c)


def nucl2bit(c: Char) -> int:
    """2-bit code of an A/C/G/T character (str or code point)."""
    c = _code(c) & 6
    c ^= c >> 1
    return c >> 1


def is_placeholder(c: Char) -> bool:
    return _code(c) < _FIRST_VALID


def classify(a: int, b: int) -> int:
    """
    Category index of the unordered pair of 2-bit codes {a, b}.
    The larger code is the "from" value, the smaller one the "to" value.
    """
    if b > a:
        a, b = b, a
    base = (_MAP4 >> (4 * b)) & 0xF
    return base + (a - b)


class _NormalizeTable(dict):
    # str.translate consults __getitem__ for every code point; unknown letters
    # become the placeholder, everything listed in _KEEP passes through.
    def __missing__(self, key: int) -> str:
        return PLACEHOLDER


_normalize_table = _NormalizeTable(str.maketrans("acgt", "ACGT"))
_normalize_table.update({ord(ch): ch for ch in _KEEP if ch not in "acgt"})


def normalize(seq: str) -> str:
    """
    Prepare an aligned row for counting: upper-case acgt, keep gaps and other
    sub-'A' placeholders, and turn everything else (N, IUPAC ambiguity codes,
    stray letters) into '!'. Length is preserved.
    """
    return seq.translate(_normalize_table)
