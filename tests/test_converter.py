"""Tests for SVG and DXF output."""

import xml.etree.ElementTree as ET
from io import StringIO

import ezdxf
import pytest

from svg2polylines.converter import (
    SVG_NS,
    dxf_to_dxf,
    dxf_to_svg,
    extract_polylines,
    extract_polylines_from_dxf,
    polyline_to_path_d,
    polylines_to_dxf,
    polylines_to_svg,
    svg_to_dxf,
    svg_to_svg,
)
from svg2polylines.errors import ScannerError
from svg2polylines.parser import parse


def read_dxf(data: bytes):
    return ezdxf.read(StringIO(data.decode("utf-8"))).modelspace()


def test_polyline_to_path_d():
    assert polyline_to_path_d([(1.0, 2.0), (3.0, 4.0)]) == "M 1.0,2.0 L 3.0,4.0"
    assert polyline_to_path_d([]) == ""


def test_polylines_to_svg_paths():
    polylines = [[(0.0, 0.0), (10.0, 5.0), (20.0, 0.0)], [(1.0, 1.0)], [(3.0, 3.0), (4.0, 4.0)]]
    root = ET.fromstring(polylines_to_svg(polylines))
    paths = root.findall(f"{{{SVG_NS}}}path")
    assert len(paths) == 2
    assert paths[0].get("d") == "M 0.0,0.0 L 10.0,5.0 L 20.0,0.0"
    assert root.get("viewBox") == "0.0 0.0 20.0 5.0"


def test_polylines_to_svg_reparses_to_same_polylines():
    polylines = [[(0.0, 0.0), (10.0, 5.0), (20.0, 0.0)], [(3.0, 3.0), (4.0, 4.0)]]
    assert parse(polylines_to_svg(polylines)) == polylines


def test_polylines_to_svg_size_and_units():
    root = ET.fromstring(polylines_to_svg([[(0.0, 0.0), (1.0, 1.0)]], width=210, height=297, units="mm"))
    assert root.get("width") == "210mm"
    assert root.get("height") == "297mm"


def test_polylines_to_dxf_entities_and_y_flip():
    polylines = [
        [(0.0, 1.0), (2.0, 3.0)],
        [(0.0, 0.0), (10.0, 5.0), (20.0, -2.0)],
        [(7.0, 7.0)],
    ]
    msp = read_dxf(polylines_to_dxf(polylines))

    lines = list(msp.query("LINE"))
    assert len(lines) == 1
    assert (lines[0].dxf.start.x, lines[0].dxf.start.y) == (0.0, -1.0)
    assert (lines[0].dxf.end.x, lines[0].dxf.end.y) == (2.0, -3.0)

    lwpolylines = list(msp.query("LWPOLYLINE"))
    assert len(lwpolylines) == 1
    points = [tuple(p) for p in lwpolylines[0].get_points(format="xy")]
    assert points == [(0.0, 0.0), (10.0, -5.0), (20.0, 2.0)]


def test_svg_to_svg_and_dxf(closed_svg):
    assert parse(svg_to_svg(closed_svg)) == parse(closed_svg)
    msp = read_dxf(svg_to_dxf(closed_svg))
    assert len(msp.query("LWPOLYLINE")) == 1


def test_svg_to_dxf_with_simplification():
    svg = '<svg><path d="M 0,0 L 5,5 L 10,10"/></svg>'
    msp = read_dxf(svg_to_dxf(svg, tolerance=0.5))
    assert len(msp.query("LINE")) == 1
    assert len(msp.query("LWPOLYLINE")) == 0


def dxf_document(build) -> bytes:
    """Create a DXF document with ``build(msp)`` and return it as bytes."""
    doc = ezdxf.new(dxfversion='R2000')
    build(doc.modelspace())
    output = StringIO()
    doc.write(output)
    return output.getvalue().encode('utf-8')


def test_extract_polylines_from_dxf_reverses_y_flip():
    polylines = [
        [(0.0, 1.0), (2.0, 3.0)],
        [(0.0, 0.0), (10.0, 5.0), (20.0, -2.0)],
        [(5.5, 5.5), (6.25, 7.0), (8.0, 9.0), (5.5, 5.5)],
    ]
    assert extract_polylines_from_dxf(polylines_to_dxf(polylines)) == polylines


def test_extract_polylines_from_dxf_keeps_drawing_order():
    def build(msp):
        msp.add_lwpolyline([(0, 0), (1, 0), (1, 1)], format='xy')
        msp.add_line((5, 5), (6, 6))
        msp.add_circle((0, 0), radius=3)
        msp.add_polyline2d([(10, 10), (20, 10), (20, 20)])

    assert extract_polylines_from_dxf(dxf_document(build)) == [
        [(0.0, 0.0), (1.0, 0.0), (1.0, -1.0)],
        [(5.0, -5.0), (6.0, -6.0)],
        [(10.0, -10.0), (20.0, -10.0), (20.0, -20.0)],
    ]


def test_extract_polylines_from_dxf_closes_closed_polylines():
    def build(msp):
        msp.add_lwpolyline([(0, 0), (4, 0), (4, 4)], format='xy', close=True)

    assert extract_polylines_from_dxf(dxf_document(build)) == [
        [(0.0, 0.0), (4.0, 0.0), (4.0, -4.0), (0.0, 0.0)],
    ]


def test_extract_polylines_from_invalid_dxf():
    with pytest.raises(ScannerError) as excinfo:
        extract_polylines_from_dxf(b"this is not\na dxf file\n")
    assert excinfo.value.kind == "scanner"
    assert "Invalid DXF structure" in str(excinfo.value)


def test_dxf_svg_dxf_round_trip():
    polylines = [
        [(0.0, 0.0), (10.0, 5.0), (20.0, 0.0)],
        [(3.0, 3.0), (4.0, 8.0)],
    ]
    dxf = polylines_to_dxf(polylines)
    svg = dxf_to_svg(dxf)
    assert parse(svg) == polylines
    assert extract_polylines_from_dxf(svg_to_dxf(svg)) == polylines
    assert extract_polylines_from_dxf(dxf_to_dxf(dxf)) == polylines


def test_dxf_to_svg_with_simplification():
    dxf = polylines_to_dxf([[(0.0, 0.0), (5.0, 5.0), (10.0, 10.0)]])
    assert parse(dxf_to_svg(dxf, tolerance=0.5)) == [[(0.0, 0.0), (10.0, 10.0)]]


def test_extract_polylines_dispatches_on_format(closed_svg):
    dxf = polylines_to_dxf(parse(closed_svg))
    assert extract_polylines(closed_svg, "svg") == parse(closed_svg)
    assert extract_polylines(dxf, ".DXF") == parse(closed_svg)
    with pytest.raises(ValueError):
        extract_polylines(closed_svg, "pdf")
