#!/usr/bin/env python3
"""
Command line entry point.

Usage:
    phicorr baskets.txt
    phicorr baskets.txt --theta 0.5 --tau 0.01 -k 2 --minsup 20 --top 50
    python -m phicorr baskets.txt -v

Reads one transaction per line (whitespace-separated labels) and prints
the top correlated pairs as `label_a label_b : phi`, best first.
Exit status: 0 on success, 1 if the input file cannot be read,
2 on invalid arguments.
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import MinerConfig
from .constants import (
    DEFAULT_K,
    DEFAULT_MINSUP,
    DEFAULT_TAU,
    DEFAULT_THETA,
    DEFAULT_TOP_N,
    SHARED_SEED,
)
from .ingest import read_transactions_file
from .miner import CorrelatedPairMiner
from .report import format_report

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="phicorr",
        description="Find item pairs with high phi correlation across transactions.",
    )
    parser.add_argument("path", help="UTF-8 transaction file, one whitespace-separated transaction per line; "
                        "undecodable bytes are replaced with U+FFFD")
    parser.add_argument("--theta", type=float, default=DEFAULT_THETA,
                        help="report pairs with phi above this (default: %(default)s)")
    parser.add_argument("--tau", type=float, default=DEFAULT_TAU,
                        help="tolerated false negative fraction (default: %(default)s)")
    parser.add_argument("-k", "--band-width", dest="k", type=int, default=DEFAULT_K,
                        help="minhash slots per band (default: %(default)s)")
    parser.add_argument("--minsup", type=int, default=DEFAULT_MINSUP,
                        help="minimum co-occurrence support (default: %(default)s)")
    parser.add_argument("--top", type=int, default=DEFAULT_TOP_N,
                        help="number of pairs to print (default: %(default)s)")
    parser.add_argument("--seed", type=int, default=SHARED_SEED,
                        help="hash seed (default: %(default)s)")
    parser.add_argument("--workers", type=int, default=1,
                        help="parallel workers for accumulation and banding (default: %(default)s)")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="-v for progress, -vv for debug output")
    return parser


def configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = MinerConfig(theta=args.theta, tau=args.tau, k=args.k,
                             minsup=args.minsup, seed=args.seed)
    except ValueError as e:
        parser.error(str(e))
    if args.top < 0:
        parser.error(f"--top must be >= 0, got {args.top}")
    if args.workers < 1:
        parser.error(f"--workers must be >= 1, got {args.workers}")

    try:
        labeled = read_transactions_file(args.path)
    except (OSError, UnicodeDecodeError) as e:
        print(f"error: cannot read {args.path}: {e}", file=sys.stderr)
        return 1
    logger.info("Read %d transactions with %d distinct labels from %s",
                len(labeled), len(labeled.labels), args.path)

    miner = CorrelatedPairMiner(config, workers=args.workers)
    pairs = miner.find_correlated_pairs(labeled.transactions, labeled.max_item_id)

    report = format_report(pairs, labeled.labels, args.top)
    if report:
        print(report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
