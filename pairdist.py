#!/usr/bin/env python3
"""
Estimate pairwise evolutionary distances for an aligned FASTA file.

- Input : alignment.fa (rows of equal length, '-' for gaps)
- Model : jc by default; raw and kimura are available via --model
- Output: tab-separated subject/query/distance/coverage rows on stdout
"""

from dnadist.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
