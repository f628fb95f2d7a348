"""Command-line entrypoint for geocell."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence

from geocell.contracts import GeoPoint, HashType
from geocell.errors import GeoCellError
from geocell.grid import cell_bbox, cell_key, check_precision_range, encode_cell
from geocell.logging_config import setup_logging

logger = logging.getLogger("geocell.cli")


def _parse_hash(value: str) -> int:
    """Parse a decimal or 0x-prefixed cell hash."""
    try:
        return int(value, 0)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid cell hash: {value}") from exc


def build_parser() -> argparse.ArgumentParser:
    """Create and return the top-level CLI parser."""
    parser = argparse.ArgumentParser(
        prog="geocell",
        description="Slippy-map tile and plus code cell hashing.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 0.1.0",
    )
    parser.add_argument("--log-level", default="WARNING")

    types = [t.value for t in HashType]
    subparsers = parser.add_subparsers(dest="command")

    encode = subparsers.add_parser("encode", help="Encode a point into a cell hash.")
    encode.add_argument("--type", choices=types, default=HashType.MAPTILE.value)
    encode.add_argument("--precision", type=int, required=True)
    encode.add_argument("--lat", type=float, required=True)
    encode.add_argument("--lon", type=float, required=True)

    key = subparsers.add_parser("key", help="Decode a cell hash into its key.")
    key.add_argument("--type", choices=types, default=HashType.MAPTILE.value)
    key.add_argument("hash", type=_parse_hash)

    bbox = subparsers.add_parser("bbox", help="Decode a cell hash into its bounding box.")
    bbox.add_argument("--type", choices=types, default=HashType.MAPTILE.value)
    bbox.add_argument("hash", type=_parse_hash)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI application."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level, stream=sys.stderr)

    try:
        if args.command == "encode":
            check_precision_range(args.precision, args.type)
            cell_hash = encode_cell(GeoPoint(lon=args.lon, lat=args.lat), args.type, args.precision)
            print(f"{cell_hash} {cell_key(cell_hash, args.type)}")
        elif args.command == "key":
            print(cell_key(args.hash, args.type))
        elif args.command == "bbox":
            print(json.dumps(cell_bbox(args.hash, args.type).to_dict()))
    except GeoCellError as exc:
        logger.warning("%s failed: %s", args.command, exc)
        print(f"error: {exc}", file=sys.stderr)
        return 2

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
