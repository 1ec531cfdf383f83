"""
Pairwise evolutionary distances from an aligned FASTA file.

Example:
  ./pairdist.py alignment.fa --model kimura --bootstrap 100 --seed 7

Writes one tab-separated row per sequence pair:
  subject  query  distance  coverage  [ci_low  ci_high]
"""

from __future__ import annotations

import argparse
import logging
import math
import os
import sys
from itertools import combinations
from typing import List, Optional, Sequence, TextIO

from .metrics.bootstrap import bootstrap_distances, confidence_interval
from .metrics.distance import DistanceModel, estimate
from .models.aligned_pair import AlignedPair
from .options import DistanceOptions
from .sequences.fasta import read_aligned

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Estimate evolutionary distances between every pair of rows in an aligned FASTA file."
    )
    p.add_argument("alignment", help="Aligned FASTA (all rows the same length; '-' for gaps).")
    p.add_argument(
        "--model",
        default=DistanceModel.JC.value,
        choices=[m.value for m in DistanceModel],
        help="Distance model (default: jc).",
    )
    p.add_argument("--bootstrap", type=int, default=0, help="Number of bootstrap replicates per pair (default: 0).")
    p.add_argument("--seed", type=int, default=None, help="Seed for the bootstrap random generator.")
    p.add_argument("--level", type=float, default=0.95, help="Confidence level of the bootstrap interval.")
    p.add_argument(
        "--low-coverage",
        type=float,
        default=0.2,
        help="Warn when less than this fraction of a pair's columns could be counted.",
    )
    p.add_argument(
        "--output",
        default=None,
        help="Path to write the distance table. If omitted, writes to stdout.",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    return p.parse_args(argv)


def format_row(fields: List[object]) -> str:
    out = []
    for f in fields:
        out.append(f"{f:.6f}" if isinstance(f, float) else str(f))
    return "\t".join(out)


def write_distances(rows: dict, opts: DistanceOptions, sink: TextIO) -> int:
    """Write one row per pair; returns the number of pairs written."""
    rng = opts.make_rng() if opts.bootstrap else None
    written = 0
    for (sid, srow), (qid, qrow) in combinations(rows.items(), 2):
        pair = AlignedPair(subject_id=sid, query_id=qid, aligned_subject=srow, aligned_query=qrow)
        mm = pair.mutation_matrix()
        dist = estimate(mm, opts.model)
        cov = mm.coverage()

        if not math.isnan(cov) and cov < opts.low_coverage:
            logger.warning("low coverage %.3f for %s vs %s", cov, sid, qid)
        if math.isnan(dist):
            logger.info("distance undefined for %s vs %s (%d counted columns)", sid, qid, mm.total())

        fields: List[object] = [sid, qid, dist, cov]
        if opts.bootstrap:
            if mm.total() == 0:
                logger.warning("nothing to resample for %s vs %s", sid, qid)
                fields.extend([math.nan, math.nan])
            else:
                reps = bootstrap_distances(mm, opts.model, opts.bootstrap, rng)
                fields.extend(confidence_interval(reps, opts.level))
        sink.write(format_row(fields) + "\n")
        written += 1
    return written


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
    )

    if not os.path.isfile(args.alignment):
        print(f"[error] alignment '{args.alignment}' does not exist.", file=sys.stderr)
        return 1

    try:
        opts = DistanceOptions(
            model=args.model,
            bootstrap=args.bootstrap,
            seed=args.seed,
            level=args.level,
            low_coverage=args.low_coverage,
        )
    except ValueError as e:
        print(f"[error] {e}", file=sys.stderr)
        return 1

    try:
        rows = read_aligned(args.alignment)
    except ValueError as e:
        print(f"[error] {e}", file=sys.stderr)
        return 1
    if len(rows) < 2:
        print("[error] alignment must contain at least two sequences.", file=sys.stderr)
        return 1

    if args.output:
        with open(args.output, "wt", encoding="utf-8") as out:
            n = write_distances(rows, opts, out)
    else:
        n = write_distances(rows, opts, sys.stdout)

    logger.info("wrote %d pairs (model=%s)", n, opts.model.value)
    return 0
