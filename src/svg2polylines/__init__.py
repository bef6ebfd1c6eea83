"""
svg2polylines - Convert SVG path data to polylines.

This package extracts the path data of an SVG document as a list of
polylines (lists of (x, y) points), flattening Bézier curves into line
segments, and can simplify the result for pen plotters and cutters. Line
work from DXF files can be read into the same form.
"""

__version__ = "0.4.0"

from .buffer import PolylineBuffer
from .converter import (
    dxf_to_dxf,
    dxf_to_svg,
    extract_polylines,
    extract_polylines_from_dxf,
    polylines_to_dxf,
    polylines_to_svg,
    svg_to_dxf,
    svg_to_svg,
)
from .errors import (
    InvalidStateError,
    LexicalError,
    ParseError,
    PathError,
    ScannerError,
    ToleranceError,
    UnsupportedCommandError,
)
from .geometry import CoordinatePair, Polyline
from .parser import parse, parse_path
from .simplify import simplify, simplify_polyline

__all__ = [
    "CoordinatePair",
    "Polyline",
    "PolylineBuffer",
    "parse",
    "parse_path",
    "simplify",
    "simplify_polyline",
    "polylines_to_svg",
    "polylines_to_dxf",
    "svg_to_svg",
    "svg_to_dxf",
    "extract_polylines",
    "extract_polylines_from_dxf",
    "dxf_to_svg",
    "dxf_to_dxf",
    "ParseError",
    "PathError",
    "LexicalError",
    "InvalidStateError",
    "UnsupportedCommandError",
    "ScannerError",
    "ToleranceError",
]
