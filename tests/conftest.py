"""Shared test fixtures."""

import pytest


# The leading whitespace before the XML declaration is intentional: documents
# embedded in source code often look like this.

NONCLOSED_SVG = '''
    <?xml version="1.0" encoding="UTF-8" standalone="no"?>
    <svg xmlns="http://www.w3.org/2000/svg" version="1.1">
        <path d="M 113,35 H 40 L -39,49 H 40" />
    </svg>
'''

CLOSED_SVG = '''
    <?xml version="1.0" encoding="UTF-8" standalone="no"?>
    <svg xmlns="http://www.w3.org/2000/svg" version="1.1">
        <path d="M 10,10 20,15 10,20 Z" />
    </svg>
'''

MULTI_SUBPATH_SVG = '''
    <?xml version="1.0" encoding="UTF-8" standalone="no"?>
    <svg xmlns="http://www.w3.org/2000/svg" version="1.1">
        <path d="M 10,10 20,15 10,20 Z m 0,40 H 0" />
    </svg>
'''

CURVES_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 100 100">
  <path d="M 0,0 C 0,50 50,50 50,0" stroke="black" fill="none"/>
  <path d="M 60,60 q 20,20 40,0" stroke="black" fill="none"/>
</svg>'''

# First path uses an arc, which is not supported; the second path is fine.
UNSUPPORTED_SVG = '''<svg xmlns="http://www.w3.org/2000/svg">
  <path d="M 0,0 L 1,1 M 2,2 L 3,3 A 5 5 0 0 1 10 10 L 20 20"/>
  <path d="M 5,5 L 6,6"/>
</svg>'''

MALFORMED_SVG = '''<svg xmlns="http://www.w3.org/2000/svg">
  <path d="M 0,0 L 1,1">
</svg>'''


@pytest.fixture
def nonclosed_svg() -> str:
    return NONCLOSED_SVG


@pytest.fixture
def closed_svg() -> str:
    return CLOSED_SVG


@pytest.fixture
def multi_subpath_svg() -> str:
    return MULTI_SUBPATH_SVG


@pytest.fixture
def curves_svg() -> str:
    return CURVES_SVG


@pytest.fixture
def unsupported_svg() -> str:
    return UNSUPPORTED_SVG


@pytest.fixture
def malformed_svg() -> str:
    return MALFORMED_SVG


@pytest.fixture
def input_file(tmp_path):
    """Write an SVG or DXF document to a temporary file and return its path."""
    def _write(content: str, name: str = "drawing.svg"):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path
    return _write
