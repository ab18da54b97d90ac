"""
CLI for replaying captured storefront events.

Input is a JSONL file with one raw storefront event per line, each carrying
its lifecycle ``name`` next to ``data``/``context``/``clientId``.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

from commerce_pixel.core.events import map_event
from commerce_pixel.core.exceptions import PixelError
from commerce_pixel.services import Dispatcher, PixelService
from commerce_pixel.settings import get_settings
from commerce_pixel.sinks import build_sink


def read_lines(path: Path) -> Iterator[Tuple[int, str]]:
    """Yield (line number, text) pairs, skipping blank lines."""
    with open(path, encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            line = line.strip()
            if line:
                yield lineno, line


def parse_event(line: str) -> Dict[str, Any]:
    """Decode one JSONL line; raises ValueError unless it holds a JSON object."""
    raw = json.loads(line)
    if not isinstance(raw, dict):
        raise ValueError(f"expected a JSON object, got {type(raw).__name__}")
    return raw


def cmd_map(path: Path, out=None) -> int:
    """Print the canonical form of every event; returns the number of failures."""
    out = out or sys.stdout
    settings = get_settings()
    failures = 0
    for lineno, line in read_lines(path):
        try:
            raw = parse_event(line)
            canonical = map_event(raw.get("name", ""), raw, settings=settings)
        except (PixelError, ValueError) as e:
            print(f"line {lineno}: {e}", file=sys.stderr)
            failures += 1
            continue
        if canonical is not None:
            out.write(json.dumps(canonical.to_dict()) + "\n")
    return failures


def cmd_send(path: Path) -> int:
    """Dispatch every event through the configured sink."""
    settings = get_settings()
    sink = build_sink(settings)
    sink.init()
    service = PixelService(Dispatcher(sink, debug=settings.debug), settings)

    sent = total = 0
    try:
        for lineno, line in read_lines(path):
            total += 1
            try:
                raw = parse_event(line)
            except ValueError as e:
                print(f"line {lineno}: {e}", file=sys.stderr)
                continue
            if service.handle(raw.get("name", ""), raw):
                sent += 1
    finally:
        sink.close()

    print(f"Sent {sent}/{total} events")
    return total - sent


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Normalize captured storefront events and forward them to analytics"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    map_parser = sub.add_parser("map", help="Print canonical events as JSONL (nothing is sent)")
    map_parser.add_argument("file", type=str, help="Path to JSONL file of storefront events")

    send_parser = sub.add_parser("send", help="Dispatch events through the configured sink")
    send_parser.add_argument("file", type=str, help="Path to JSONL file of storefront events")

    args = parser.parse_args(argv)

    logging.basicConfig(level=get_settings().log_level)

    file_path = Path(args.file)
    if not file_path.exists():
        print(f"❌ File does not exist: {args.file}", file=sys.stderr)
        return 1

    if args.command == "map":
        failures = cmd_map(file_path)
    else:
        failures = cmd_send(file_path)
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
