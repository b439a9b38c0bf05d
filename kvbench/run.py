"""CLI entry point: python -m kvbench --nops 1000 --lkv 32"""

from __future__ import annotations

import argparse
import random
import sys
import time
from pathlib import Path
from typing import Sequence

from .backends import get_backends
from .backends.base import BackendAdapter
from .config import DEFAULT_KV_LENGTH, DEFAULT_OPERATION_COUNT, BenchmarkConfig, ConfigError
from .runner import BenchmarkRunner
from .workload import generate_pairs


class _ArgumentParser(argparse.ArgumentParser):
    """argparse exits with status 2 on bad input; configuration errors exit 1."""

    def error(self, message: str) -> None:
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def _positive_int(text: str) -> int:
    try:
        value = int(text, 10)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid value {text!r}: not an integer") from None
    if value <= 0:
        raise argparse.ArgumentTypeError(f"invalid value {text!r}: must be a positive integer")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="kvbench",
        description="Sequential put/get/delete latency of embedded key-value engines",
    )
    parser.add_argument(
        "--nops", type=_positive_int, default=DEFAULT_OPERATION_COUNT,
        help=f"Number of operations (default: {DEFAULT_OPERATION_COUNT})",
    )
    parser.add_argument(
        "--lkv", type=_positive_int, default=DEFAULT_KV_LENGTH,
        help=f"Length of the random key/value suffix (default: {DEFAULT_KV_LENGTH})",
    )
    return parser


def main(
    argv: list[str] | None = None,
    *,
    backends: Sequence[BackendAdapter] | None = None,
    rng: random.Random | None = None,
    workdir: str | Path = ".",
) -> None:
    parser = build_parser()
    parsed = parser.parse_args(argv)

    try:
        config = BenchmarkConfig(nops=parsed.nops, lkv=parsed.lkv, workdir=Path(workdir))
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if rng is None:
        rng = random.Random(time.time_ns())
    if backends is None:
        backends = get_backends()

    print(f"Running benchmarks with {config.nops} operations "
          f"and key-value length of {config.lkv}\n", flush=True)

    try:
        pairs = generate_pairs(config.nops, config.lkv, rng, show_progress=sys.stderr.isatty())
        BenchmarkRunner(config, backends).run(pairs)
    except Exception as e:
        print(f"\nERROR running benchmarks: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
