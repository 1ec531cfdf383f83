# dnadist/sequences/fasta.py
from __future__ import annotations

from typing import Dict, Generator, Tuple

__all__ = ["iter_fasta", "read_aligned"]


def iter_fasta(path: str) -> Generator[Tuple[str, str], None, None]:
    """Yield (header, sequence) for every record; header is the text after '>'."""
    header = None
    chunks: list[str] = []
    with open(path, "rt", encoding="utf-8", errors="replace") as fh:
        for line in fh:
            if line.startswith(">"):
                if header is not None:
                    yield (header, "".join(chunks))
                header = line[1:].strip()
                chunks = []
            elif header is not None:
                chunks.append(line.strip())
        if header is not None:
            yield (header, "".join(chunks))


def read_aligned(path: str) -> Dict[str, str]:
    """
    Load an aligned FASTA into {id -> row}, in file order. The id is the first
    token of the header. All rows must have the same length and ids must be
    unique; otherwise ValueError.
    """
    rows: Dict[str, str] = {}
    width = None
    for header, seq in iter_fasta(path):
        name = header.split(None, 1)[0] if header else ""
        if name in rows:
            raise ValueError(f"duplicate sequence id {name!r} in {path}")
        if width is None:
            width = len(seq)
        elif len(seq) != width:
            raise ValueError(
                f"sequence {name!r} has length {len(seq)}, expected {width}: input is not aligned"
            )
        rows[name] = seq
    return rows
