"""Command-line entry point.

Usage:
    python -m colorflow --scales 2 3 4 --spread 0.15 --num-seeds 20 --seed 0
"""

from __future__ import annotations

import argparse
import sys

import structlog

from .batch import run_batch
from .config import DEFAULT_NUM_SEEDS, DEFAULT_SCALES, DEFAULT_SEED, DEFAULT_SPREAD


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="colorflow",
        description="Grow every color of a cubic palette into a square image.",
    )
    parser.add_argument("--scales", type=int, nargs="+", default=list(DEFAULT_SCALES))
    parser.add_argument("--spread", type=float, default=DEFAULT_SPREAD)
    parser.add_argument("--num-seeds", type=int, default=DEFAULT_NUM_SEEDS)
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED)
    parser.add_argument("--out-dir", default=".")
    parser.add_argument(
        "--no-spacing",
        action="store_true",
        help="Place seeds without the minimum spacing check",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            structlog.dev.ConsoleRenderer(),
        ],
    )
    args = build_parser().parse_args(argv)
    written = run_batch(
        scales=args.scales,
        spread=args.spread,
        num_seeds=args.num_seeds,
        seed=args.seed,
        out_dir=args.out_dir,
        seed_spacing=not args.no_spacing,
    )
    return 0 if len(written) == len(args.scales) else 1


if __name__ == "__main__":
    sys.exit(main())
