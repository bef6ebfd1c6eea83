"""
Extract polylines from the path data of an SVG document.

The document is scanned for attributes named ``d``; each one is lexed and fed
through a ``CurrentLine``. A broken path element is logged and skipped, a
broken document raises ``ScannerError``.
"""

import logging
import xml.etree.ElementTree as ET
from typing import Iterator, List, Optional, Tuple, Union

from .config import settings
from .current_line import CurrentLine, check_tolerances
from .errors import PathError, ScannerError
from .geometry import Polyline
from .path_lexer import tokenize_path

logger = logging.getLogger(__name__)

# Bytes fed to the XML parser per step
CHUNK_SIZE = 16 * 1024


def _resolve_tolerances(
    flattening_tolerance: Optional[float],
    prefilter_tolerance: Optional[float],
) -> Tuple[float, Optional[float]]:
    """Fill in defaults from ``settings`` and validate the result."""
    if flattening_tolerance is None:
        flattening_tolerance = settings.flattening_tolerance
    if prefilter_tolerance is None:
        prefilter_tolerance = settings.prefilter_tolerance
    check_tolerances(flattening_tolerance, prefilter_tolerance)
    return flattening_tolerance, prefilter_tolerance


def iter_attributes(svg: Union[str, bytes]) -> Iterator[Tuple[str, str]]:
    """
    Yield ``(name, value)`` for every attribute in document order.

    Namespaced attribute names keep ElementTree's ``{uri}name`` form, so only
    a plain ``d`` attribute has the name ``"d"``.

    Raises:
        ScannerError: if the document is not well-formed XML
    """
    # ElementTree rejects whitespace before the XML declaration
    svg = svg.lstrip()
    parser = ET.XMLPullParser(events=("start",))
    try:
        for offset in range(0, len(svg), CHUNK_SIZE):
            parser.feed(svg[offset:offset + CHUNK_SIZE])
            for _, elem in parser.read_events():
                yield from elem.attrib.items()
        parser.close()
        for _, elem in parser.read_events():
            yield from elem.attrib.items()
    except ET.ParseError as e:
        raise ScannerError(f"Invalid SVG/XML structure: {e}") from e


def parse_path(
    d: str,
    flattening_tolerance: Optional[float] = None,
    prefilter_tolerance: Optional[float] = None,
    strict: bool = False,
) -> List[Polyline]:
    """
    Parse one SVG path 'd' attribute into polylines.

    Args:
        d: SVG path data string
        flattening_tolerance: Maximum deviation of flattened curves
            (default: settings.flattening_tolerance)
        prefilter_tolerance: Skip points closer than this in both axes to
            the previous point (default: settings.prefilter_tolerance);
            0 disables the filter for this call
        strict: Raise path errors instead of logging them

    Returns:
        List of polylines with at least two points each. When the path data
        is broken, the polylines completed before the error.

    Raises:
        ToleranceError: if a tolerance is out of range
    """
    flattening_tolerance, prefilter_tolerance = _resolve_tolerances(
        flattening_tolerance, prefilter_tolerance)

    logger.debug("New path")
    lines: List[Polyline] = []
    line = CurrentLine(flattening_tolerance, prefilter_tolerance)
    try:
        for command in tokenize_path(d):
            line.apply(command, lines)
    except PathError as e:
        if strict:
            raise
        logger.warning("Skipping rest of path (%s error): %s", e.kind, e)
        return lines

    # Path parsing is done, keep the line in progress if valid
    if line.is_valid():
        lines.append(line.commit())
    return lines


def parse(
    svg: Union[str, bytes],
    flattening_tolerance: Optional[float] = None,
    prefilter_tolerance: Optional[float] = None,
    strict: bool = False,
) -> List[Polyline]:
    """
    Parse an SVG document into a list of polylines.

    Every attribute named ``d`` is parsed with ``parse_path``; the results
    are concatenated in document order. Styles and transforms are ignored.

    Args:
        svg: SVG document as text or UTF-8 bytes
        flattening_tolerance: See ``parse_path``
        prefilter_tolerance: See ``parse_path``
        strict: Raise path errors instead of skipping the path element

    Returns:
        List of polylines, where each polyline is a list of (x, y) points

    Raises:
        ToleranceError: if a tolerance is out of range; raised before the
            document is read
        ScannerError: if the document cannot be scanned
    """
    flattening_tolerance, prefilter_tolerance = _resolve_tolerances(
        flattening_tolerance, prefilter_tolerance)

    polylines: List[Polyline] = []
    path_count = 0
    for name, value in iter_attributes(svg):
        # Process only 'd' attributes
        if name != "d":
            continue
        path_count += 1
        polylines.extend(parse_path(value, flattening_tolerance, prefilter_tolerance, strict))

    logger.debug("Parsed %d paths into %d polylines", path_count, len(polylines))
    return polylines
