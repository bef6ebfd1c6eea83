"""Command-line entry point: convert an SVG or DXF file to polylines."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import configure_logging, settings
from .converter import INPUT_FORMATS, extract_polylines, polylines_to_dxf, polylines_to_svg
from .errors import ParseError
from .geometry import point_count
from .simplify import simplify

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="svg2polylines",
        description="Convert the path data of an SVG file, or the line work of a DXF file, to polylines.",
    )
    parser.add_argument("input_file", help="Path to input SVG or DXF file")
    parser.add_argument(
        "--simplify",
        nargs="?",
        type=float,
        const=settings.simplify_tolerance,
        default=None,
        metavar="TOL",
        help=f"Simplify polylines with this tolerance (default: {settings.simplify_tolerance})",
    )
    parser.add_argument(
        "--flatten-tolerance",
        type=float,
        default=None,
        help=f"Curve flattening tolerance (default: {settings.flattening_tolerance})",
    )
    parser.add_argument(
        "--prefilter",
        type=float,
        default=None,
        metavar="TOL",
        help="Skip points within TOL of the previous point in both axes while parsing SVG (0 disables)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on the first broken path instead of skipping it",
    )
    parser.add_argument("--svg", dest="output_svg", help="Write polylines to this SVG file")
    parser.add_argument("--dxf", dest="output_dxf", help="Write polylines to this DXF file")
    parser.add_argument("--json", action="store_true", help="Print polylines as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging("debug" if args.verbose else None)

    for name in ("simplify", "flatten_tolerance"):
        value = getattr(args, name)
        if value is not None and value <= 0:
            parser.error(f"--{name.replace('_', '-')} must be positive")
    if args.prefilter is not None and args.prefilter < 0:
        parser.error("--prefilter must not be negative")

    input_path = Path(args.input_file)
    file_format = input_path.suffix.lower().lstrip(".")
    if file_format not in INPUT_FORMATS:
        parser.error(f"unsupported input format {input_path.suffix!r}, expected .svg or .dxf")

    try:
        content = input_path.read_bytes()
        polylines = extract_polylines(
            content,
            file_format,
            flattening_tolerance=args.flatten_tolerance,
            prefilter_tolerance=args.prefilter,
            strict=args.strict,
        )
        if args.simplify is not None:
            polylines = simplify(polylines, args.simplify)

        if args.output_svg:
            Path(args.output_svg).write_bytes(polylines_to_svg(polylines))
            logger.info("Saved output file: %s", args.output_svg)
        if args.output_dxf:
            Path(args.output_dxf).write_bytes(polylines_to_dxf(polylines))
            logger.info("Saved output file: %s", args.output_dxf)
    except ParseError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    if args.json:
        print(json.dumps([[[x, y] for x, y in polyline] for polyline in polylines]))
        return 0

    print(f"polylines:{len(polylines)}, points: {point_count(polylines)}")
    print(f"Found {len(polylines)} polylines.")
    for polyline in polylines:
        print(f"- {[(x, y) for x, y in polyline]}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
