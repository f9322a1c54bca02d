from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from resumable.arena import FrameArena, default_arena
from resumable.counters import COUNTER_STYLES
from resumable.handle import create
from resumable.settings import enable_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="resumable",
        description="Drive suspendable generators from the command line.",
    )
    parser.add_argument("--debug", action="store_true", help="Log frame transitions to stderr")
    subparsers = parser.add_subparsers(dest="command", required=True)

    counter_parser = subparsers.add_parser("counter", help="Print start, start+1, ..., end-1")
    counter_parser.add_argument("start", type=int)
    counter_parser.add_argument("end", type=int)
    counter_parser.add_argument(
        "--style",
        choices=sorted(COUNTER_STYLES),
        default="iterator",
        help="Producer style backing the counter",
    )
    counter_parser.add_argument("--sep", default=" ", help="Separator between values")
    counter_parser.add_argument(
        "--max-frames",
        type=int,
        default=None,
        help="Capacity of the frame arena (0 simulates allocation failure)",
    )
    counter_parser.add_argument(
        "--trace",
        action="store_true",
        help="Print a frame snapshot to stderr after every resume",
    )
    return parser


def handle_counter(args: argparse.Namespace) -> int:
    arena = default_arena() if args.max_frames is None else FrameArena(args.max_frames)
    definition = COUNTER_STYLES[args.style]
    values: list[str] = []
    with create(definition, args.start, args.end, arena=arena) as handle:
        if handle.is_empty:
            print("error: no frame could be allocated", file=sys.stderr)
            return 1
        while True:
            handle.resume()
            if args.trace:
                print(handle.snapshot().format(), file=sys.stderr)
            if handle.is_exhausted:
                break
            values.append(str(handle.current_value))
    print(args.sep.join(values))
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.debug:
        enable_logging()
    if args.command == "counter":
        return handle_counter(args)
    parser.error(f"unknown command {args.command!r}")
    return 2


if __name__ == "__main__":
    sys.exit(main())
