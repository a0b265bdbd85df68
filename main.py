#!/usr/bin/env python3
"""
Station Temperature CLI

Fetches the station METAR and prints the current temperature.

Usage:
    python main.py
    python main.py --station UAAA --watch
    python main.py --relay "https://api.allorigins.win/raw?url={url}" --json
"""

# Load environment variables FIRST (before any other imports)
from dotenv import load_dotenv
load_dotenv()

import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional

from config import get_station_config
from core.models import MonitorState
from core.station_monitor import StationMonitor
from core.views import LOADING_TEXT, render_text

logger = logging.getLogger("station_cli")


def _print_snapshot(monitor: StationMonitor, as_json: bool) -> None:
    snapshot = monitor.snapshot
    if as_json:
        print(json.dumps(snapshot.to_dict(), ensure_ascii=False))
        return
    print(f"\n{'─'*40}")
    print(render_text(snapshot))
    print(f"{'─'*40}")


async def _refresh_and_show(monitor: StationMonitor, as_json: bool) -> None:
    if not as_json:
        print(LOADING_TEXT)
    await monitor.refresh()
    _print_snapshot(monitor, as_json)


async def run(args: argparse.Namespace) -> int:
    config = get_station_config(args.station, metar_url=args.url, relay_url=args.relay)
    monitor = StationMonitor(config)

    await _refresh_and_show(monitor, args.json)

    if args.watch:
        while True:
            try:
                answer = await asyncio.to_thread(input, "\n[Enter] refresh, [q] quit: ")
            except EOFError:
                break
            if answer.strip().lower() in ("q", "quit", "exit"):
                break
            await _refresh_and_show(monitor, args.json)

    return 1 if monitor.state == MonitorState.FAILED else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Current temperature at a METAR station")
    parser.add_argument("-s", "--station", type=str, help="Station ID (default: UAAA or $METAR_STATION)")
    parser.add_argument("--url", type=str, help="Bulletin URL override")
    parser.add_argument("--relay", type=str, help="Relay URL template containing {url}")
    parser.add_argument("-w", "--watch", action="store_true", help="Keep running and refresh on Enter")
    parser.add_argument("--json", action="store_true", help="Print the state as JSON")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        datefmt="%H:%M:%S"
    )

    try:
        return asyncio.run(run(args))
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2
    except KeyboardInterrupt:
        print("\nInterrupted by user")
        return 1


if __name__ == "__main__":
    sys.exit(main())
