#!/usr/bin/env python3
"""
Auction Runner

Replays a pipe-delimited event stream through an AuctionManager and prints
each finalized result line in finalization order.
"""

import sys
import logging
import argparse
from pathlib import Path
from typing import Iterable, List, TextIO

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from auction import (
    AuctionError,
    AuctionConfig,
    AuctionManager,
    EventParseError,
    dispatch,
    format_result,
    parse_event,
)
from observability.tracing import setup_tracing, shutdown_tracing

logger = logging.getLogger(__name__)


def run_events(lines: Iterable[str], manager: AuctionManager) -> List[str]:
    """
    Dispatch event lines to a manager.

    Blank lines and '#' comments are skipped; malformed lines are logged
    and skipped.

    Args:
        lines: Event lines
        manager: Manager receiving the events

    Returns:
        Result lines, in finalization order
    """
    output = []
    for line_no, line in enumerate(lines, start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        try:
            event = parse_event(stripped)
        except EventParseError as e:
            logger.warning(f"Skipping line {line_no}: {e.reason}")
            continue
        try:
            results = dispatch(manager, event)
        except AuctionError as e:
            logger.warning(f"Skipping line {line_no}: {e}")
            continue
        output.extend(format_result(result) for result in results)
    return output


def _write(lines: List[str], stream: TextIO):
    for line in lines:
        stream.write(line + "\n")


def main(argv=None) -> int:
    """Command-line interface for replaying auction events"""
    parser = argparse.ArgumentParser(
        description="Replay auction events and print finalized results"
    )

    parser.add_argument(
        'input',
        nargs='?',
        type=Path,
        help='Event file (default: read from stdin)'
    )

    parser.add_argument(
        '--strict-relisting',
        action='store_true',
        help='Reject listings for items that already have an active auction'
    )

    parser.add_argument(
        '--trace-console',
        action='store_true',
        help='Export trace spans to the console'
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )

    config = AuctionConfig.from_env()
    if args.strict_relisting:
        config.reject_active_relisting = True

    tracing = config.tracing_enabled or args.trace_console
    if tracing:
        setup_tracing(config.service_name, config.otlp_endpoint, console_export=args.trace_console)

    manager = AuctionManager(config)

    try:
        if args.input is None:
            _write(run_events(sys.stdin, manager), sys.stdout)
        else:
            if not args.input.exists():
                logger.error(f"Input file not found: {args.input}")
                return 1
            with open(args.input) as f:
                _write(run_events(f, manager), sys.stdout)
    finally:
        if tracing:
            shutdown_tracing()

    return 0


if __name__ == "__main__":
    sys.exit(main())
