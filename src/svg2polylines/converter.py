"""
Polyline input and output in SVG and DXF form.

Renders lists of polylines as SVG or DXF documents so the result of a parse
can be inspected or handed to CAD/CAM tools, and reads polylines back from
DXF line work so both formats can be simplified and converted.
"""

import xml.etree.ElementTree as ET
from io import StringIO
from typing import List, Optional, Sequence, Tuple, Union

import ezdxf

from .errors import ScannerError
from .geometry import CoordinatePair, PointLike, Polyline
from .parser import parse
from .simplify import simplify

# SVG namespace
SVG_NS = "http://www.w3.org/2000/svg"

# Input formats by file extension
INPUT_FORMATS = ("svg", "dxf")


def _bounds(polylines: Sequence[Sequence[PointLike]]) -> Tuple[float, float, float, float]:
    all_points = [p for polyline in polylines for p in polyline]
    if not all_points:
        return 0.0, 0.0, 100.0, 100.0
    min_x = min(p[0] for p in all_points)
    max_x = max(p[0] for p in all_points)
    min_y = min(p[1] for p in all_points)
    max_y = max(p[1] for p in all_points)
    return min_x, min_y, max_x, max_y


def polyline_to_path_d(points: Sequence[PointLike]) -> str:
    """Convert a list of points to an SVG path 'd' attribute."""
    if not points:
        return ""

    parts = [f"M {points[0][0]},{points[0][1]}"]
    for point in points[1:]:
        parts.append(f"L {point[0]},{point[1]}")
    return " ".join(parts)


def polylines_to_svg(
    polylines: Sequence[Sequence[PointLike]],
    width: Optional[float] = None,
    height: Optional[float] = None,
    units: str = "",
) -> bytes:
    """
    Convert polylines to SVG format.

    Each polyline with at least two points becomes one path made of a move-to
    followed by line-tos. Coordinates are written as-is (SVG space in, SVG
    space out).

    Args:
        polylines: List of polylines, where each polyline is a list of (x, y) points
        width: Optional SVG width (default: width of the bounding box)
        height: Optional SVG height (default: height of the bounding box)
        units: Units for width/height, e.g. "mm"

    Returns:
        SVG file content as bytes
    """
    polylines = [p for p in polylines if len(p) >= 2]
    min_x, min_y, max_x, max_y = _bounds(polylines)
    box_width = max_x - min_x
    box_height = max_y - min_y

    ET.register_namespace('', SVG_NS)

    root = ET.Element('svg')
    root.set('xmlns', SVG_NS)
    root.set('version', '1.1')
    root.set('width', f"{width if width is not None else box_width}{units}")
    root.set('height', f"{height if height is not None else box_height}{units}")
    root.set('viewBox', f"{min_x} {min_y} {box_width} {box_height}")

    for points in polylines:
        path_elem = ET.SubElement(root, 'path')
        path_elem.set('d', polyline_to_path_d(points))
        path_elem.set('stroke', 'black')
        path_elem.set('fill', 'none')
        path_elem.set('stroke-width', '0.5')

    output = '<?xml version="1.0" encoding="UTF-8"?>\n'
    output += ET.tostring(root, encoding='unicode')
    return output.encode('utf-8')


def polylines_to_dxf(polylines: Sequence[Sequence[PointLike]]) -> bytes:
    """
    Convert polylines to DXF format.

    Two-point polylines become LINE entities, longer ones LWPOLYLINE
    entities. SVG's y axis points down and DXF's points up, so every y
    coordinate is negated.

    Args:
        polylines: List of polylines, where each polyline is a list of (x, y) points

    Returns:
        DXF file content as bytes
    """
    doc = ezdxf.new(dxfversion='R2000')
    msp = doc.modelspace()

    for points in polylines:
        flipped = [(x, -y) for x, y in points]
        if len(flipped) == 2:
            msp.add_line(flipped[0], flipped[1])
        elif len(flipped) > 2:
            msp.add_lwpolyline(flipped, format='xy')

    # ezdxf writes strings, so we use StringIO and encode
    output_stream = StringIO()
    doc.write(output_stream)
    return output_stream.getvalue().encode('utf-8')


def _flip(x: float, y: float) -> CoordinatePair:
    return CoordinatePair(float(x), -float(y))


def extract_polylines_from_dxf(dxf_bytes: Union[str, bytes]) -> List[Polyline]:
    """
    Extract polylines from a DXF file.

    LWPOLYLINE, POLYLINE and LINE entities of the modelspace are read in
    drawing order. The y axis is flipped back into SVG orientation, so
    reading the output of ``polylines_to_dxf`` returns the original
    polylines. Closed polylines get their first point appended.

    Args:
        dxf_bytes: DXF file content

    Returns:
        List of polylines, where each polyline is a list of (x, y) points

    Raises:
        ScannerError: if the content is not a readable DXF document
    """
    if isinstance(dxf_bytes, bytes):
        # ezdxf expects text stream, so decode bytes first
        dxf_bytes = dxf_bytes.decode('utf-8', errors='ignore')
    try:
        doc = ezdxf.read(StringIO(dxf_bytes))
    except ezdxf.DXFError as e:
        raise ScannerError(f"Invalid DXF structure: {e}") from e

    polylines: List[Polyline] = []
    for entity in doc.modelspace():
        kind = entity.dxftype()
        if kind == "LWPOLYLINE":
            points = [_flip(x, y) for x, y in entity.get_points(format='xy')]
            closed = entity.closed
        elif kind == "POLYLINE":
            points = [_flip(v.dxf.location.x, v.dxf.location.y) for v in entity.vertices]
            closed = entity.is_closed
        elif kind == "LINE":
            points = [
                _flip(entity.dxf.start.x, entity.dxf.start.y),
                _flip(entity.dxf.end.x, entity.dxf.end.y),
            ]
            closed = False
        else:
            continue

        if closed and points and points[0] != points[-1]:
            points.append(points[0])
        if len(points) >= 2:
            polylines.append(points)

    return polylines


def extract_polylines(
    content: Union[str, bytes],
    file_format: str,
    flattening_tolerance: Optional[float] = None,
    prefilter_tolerance: Optional[float] = None,
    strict: bool = False,
) -> List[Polyline]:
    """
    Read polylines from SVG or DXF content.

    Args:
        content: File content
        file_format: "svg" or "dxf" (a leading dot and upper case are accepted)
        flattening_tolerance: See ``parse``; SVG only
        prefilter_tolerance: See ``parse``; SVG only
        strict: See ``parse``; SVG only

    Raises:
        ValueError: for an unknown format
        ParseError: if the content cannot be read
    """
    file_format = file_format.lower().lstrip('.')
    if file_format == "svg":
        return parse(content, flattening_tolerance, prefilter_tolerance, strict)
    if file_format == "dxf":
        return extract_polylines_from_dxf(content)
    raise ValueError(f"Unsupported input format: {file_format!r}")


def _extract_and_simplify(content: Union[str, bytes], file_format: str,
                          tolerance: Optional[float]) -> List[Polyline]:
    polylines = extract_polylines(content, file_format)
    if tolerance is not None:
        polylines = simplify(polylines, tolerance)
    return polylines


def svg_to_svg(svg_bytes: Union[str, bytes], tolerance: Optional[float] = None) -> bytes:
    """
    Rewrite an SVG file as plain polyline paths.

    Args:
        svg_bytes: SVG file content
        tolerance: Simplification tolerance; no simplification when None

    Returns:
        SVG file content as bytes
    """
    return polylines_to_svg(_extract_and_simplify(svg_bytes, "svg", tolerance))


def svg_to_dxf(svg_bytes: Union[str, bytes], tolerance: Optional[float] = None) -> bytes:
    """
    Convert SVG file to DXF format.

    Args:
        svg_bytes: SVG file content
        tolerance: Simplification tolerance; no simplification when None

    Returns:
        DXF file content as bytes
    """
    return polylines_to_dxf(_extract_and_simplify(svg_bytes, "svg", tolerance))


def dxf_to_svg(dxf_bytes: Union[str, bytes], tolerance: Optional[float] = None) -> bytes:
    """
    Convert DXF file to SVG format.

    Args:
        dxf_bytes: DXF file content
        tolerance: Simplification tolerance; no simplification when None

    Returns:
        SVG file content as bytes
    """
    return polylines_to_svg(_extract_and_simplify(dxf_bytes, "dxf", tolerance))


def dxf_to_dxf(dxf_bytes: Union[str, bytes], tolerance: Optional[float] = None) -> bytes:
    """Rewrite a DXF file as LINE/LWPOLYLINE entities, optionally simplified."""
    return polylines_to_dxf(_extract_and_simplify(dxf_bytes, "dxf", tolerance))
