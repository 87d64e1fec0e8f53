"""CLI entry point for Insightology.

Diagnostic commands for inspecting insights:
  - describe: Build a price-magnitude insight and print it
  - decode: Print a serialized (JSON) insight in readable form
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime

from insightology.config import load_config, parse_period
from insightology.framework import InsightFramework
from insightology.models.insight import Insight
from insightology.serialization import from_json, to_json

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def cmd_describe(args: argparse.Namespace) -> None:
    """Build a price-magnitude insight from the arguments and print it."""
    config = load_config()
    period = parse_period(args.period) if args.period else config.default_period

    insight = Insight.price_magnitude(args.symbol, args.magnitude, period, args.confidence)
    if args.generated:
        InsightFramework().stamp(insight, datetime.fromisoformat(args.generated))

    if args.json:
        print(to_json(insight, source_model=config.source_model))
    else:
        print(insight)
        if insight.close_time_utc is not None:
            print(f"  generated: {insight.generated_time_utc}  close: {insight.close_time_utc}")


def cmd_decode(args: argparse.Namespace) -> None:
    """Read a JSON insight from a file (or stdin) and print it."""
    if args.file and args.file != "-":
        with open(args.file, encoding="utf-8") as f:
            text = f.read()
    else:
        text = sys.stdin.read()

    insight = from_json(text)
    logger.debug("Decoded insight %s", insight.id)
    print(insight)
    print(f"  score: {insight.score}")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="insightology",
        description="Inspect trading prediction records (insights)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subs = parser.add_subparsers(dest="command", required=True)

    # describe
    p_describe = subs.add_parser("describe", help="Build and print a price-magnitude insight")
    p_describe.add_argument("symbol", help="Symbol the insight is for")
    p_describe.add_argument("magnitude", type=float, help="Predicted percent change (sign sets direction)")
    p_describe.add_argument("--period", help="Prediction period, e.g. 30m, 4h, 1d (default from config)")
    p_describe.add_argument("--confidence", type=float, default=None, help="Confidence, conventionally 0-1")
    p_describe.add_argument("--generated", help="Generated time in UTC, ISO format")
    p_describe.add_argument("--json", action="store_true", help="Print the serialized form")

    # decode
    p_decode = subs.add_parser("decode", help="Print a serialized insight")
    p_decode.add_argument("file", nargs="?", default="-", help="JSON file (default: stdin)")

    args = parser.parse_args(argv)

    commands = {
        "describe": cmd_describe,
        "decode": cmd_decode,
    }
    try:
        setup_logging(args.verbose or load_config().verbose)
        commands[args.command](args)
    except ValueError as e:
        parser.error(str(e))


if __name__ == "__main__":
    main()
