"""
svg2polylines Web Application.

A FastAPI web server that accepts an SVG or DXF upload, extracts its
polylines, optionally simplifies them, and returns them as JSON or as a ZIP
with SVG and DXF renderings.
"""

import io
import json
import zipfile
from pathlib import Path
from typing import List, Optional, Tuple

from fastapi import FastAPI, File, HTTPException, Query, UploadFile
from fastapi.responses import HTMLResponse, StreamingResponse

from . import __version__
from .config import configure_logging, settings
from .converter import extract_polylines, polylines_to_dxf, polylines_to_svg
from .errors import ParseError
from .geometry import Polyline, point_count
from .simplify import simplify

app = FastAPI(
    title="svg2polylines",
    description="Convert SVG path data to polylines for plotters and cutters",
    version=__version__,
)


# HTML template for the upload page
HTML_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>svg2polylines</title>
    <style>
        body {
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            background: #f4f5fb;
            display: flex;
            justify-content: center;
            padding: 40px 20px;
        }

        .container {
            background: white;
            border-radius: 12px;
            box-shadow: 0 10px 30px rgba(0, 0, 0, 0.15);
            padding: 32px;
            max-width: 480px;
            width: 100%;
        }

        h1 {
            margin-top: 0;
            color: #333;
        }

        label {
            display: block;
            margin: 16px 0 6px;
            color: #555;
        }

        .error {
            color: #b00020;
            margin-top: 16px;
        }

        .stats {
            margin-top: 16px;
            color: #333;
            white-space: pre;
            font-family: monospace;
        }
    </style>
</head>
<body>
    <div class="container">
        <h1>svg2polylines</h1>
        <p>Convert SVG paths or DXF line work to polylines and download them as SVG and DXF.</p>
        <p>Supported formats: .svg, .dxf</p>

        <form id="upload-form" enctype="multipart/form-data">
            <input type="file" id="file-input" name="file" accept=".svg,.dxf">

            <label><input type="checkbox" id="simplify" checked> Simplify</label>
            <label for="tolerance">Tolerance</label>
            <input type="number" id="tolerance" step="any" min="0" placeholder="default">

            <p><button type="submit" id="submit-btn">Convert</button></p>
        </form>

        <div class="error" id="error"></div>
        <div class="stats" id="stats"></div>
    </div>

    <script>
        const form = document.getElementById('upload-form');
        const fileInput = document.getElementById('file-input');
        const error = document.getElementById('error');
        const stats = document.getElementById('stats');

        form.addEventListener('submit', async (e) => {
            e.preventDefault();
            error.textContent = '';
            stats.textContent = '';

            if (!fileInput.files.length) {
                error.textContent = 'Please select a file';
                return;
            }

            const formData = new FormData();
            formData.append('file', fileInput.files[0]);

            const params = new URLSearchParams();
            params.set('simplify', document.getElementById('simplify').checked);
            const tolerance = document.getElementById('tolerance').value;
            if (tolerance) {
                params.set('tolerance', tolerance);
            }

            try {
                const response = await fetch('/convert?' + params.toString(), {
                    method: 'POST',
                    body: formData
                });

                if (!response.ok) {
                    const data = await response.json();
                    throw new Error(data.detail || 'Failed to process file');
                }

                const statsHeader = response.headers.get('X-Stats');
                if (statsHeader) {
                    stats.textContent = JSON.stringify(JSON.parse(statsHeader), null, 2);
                }

                const blob = await response.blob();
                const url = window.URL.createObjectURL(blob);
                const a = document.createElement('a');
                a.href = url;
                a.download = response.headers.get('Content-Disposition')?.split('filename=')[1]?.replace(/"/g, '') || 'polylines.zip';
                document.body.appendChild(a);
                a.click();
                window.URL.revokeObjectURL(url);
                a.remove();
            } catch (err) {
                error.textContent = err.message;
            }
        });
    </script>
</body>
</html>
"""


async def _read_upload(file: UploadFile) -> Tuple[str, str, bytes]:
    """Validate an upload and return its base name, format and content."""
    filename = file.filename or "unknown"
    ext = Path(filename).suffix.lower()
    if ext not in ('.svg', '.dxf'):
        raise HTTPException(
            status_code=400,
            detail="Unsupported file format. Please upload a .svg or .dxf file."
        )

    content = await file.read()
    if not content:
        raise HTTPException(status_code=400, detail="Empty file uploaded.")
    return Path(filename).stem, ext.lstrip('.'), content


def _process(content: bytes, file_format: str, do_simplify: bool,
             tolerance: Optional[float]) -> Tuple[List[Polyline], dict]:
    """Read (and optionally simplify) an SVG or DXF document, collecting statistics."""
    try:
        polylines = extract_polylines(content, file_format)
    except ParseError as e:
        raise HTTPException(status_code=400, detail=str(e))

    stats = {
        "polyline_count": len(polylines),
        "point_count": point_count(polylines),
    }

    if do_simplify:
        if tolerance is None:
            tolerance = settings.simplify_tolerance
        simplified = simplify(polylines, tolerance)
        stats.update({
            "tolerance": tolerance,
            "simplified_polyline_count": len(simplified),
            "simplified_point_count": point_count(simplified),
            "reduction_ratio": stats["point_count"] / point_count(simplified) if simplified else 0,
        })
        polylines = simplified

    return polylines, stats


@app.get("/", response_class=HTMLResponse)
@app.head("/")
async def index():
    """Serve the main upload page."""
    return HTML_TEMPLATE


@app.post("/polylines")
async def polylines_json(
    file: UploadFile = File(...),
    simplify: bool = Query(False),
    tolerance: Optional[float] = Query(None, gt=0),
):
    """Return the polylines of an uploaded SVG or DXF file as JSON."""
    _, file_format, content = await _read_upload(file)
    polylines, stats = _process(content, file_format, simplify, tolerance)
    return {
        "polylines": [[[x, y] for x, y in polyline] for polyline in polylines],
        "stats": stats,
    }


@app.post("/convert")
async def convert_file(
    file: UploadFile = File(...),
    simplify: bool = Query(True),
    tolerance: Optional[float] = Query(None, gt=0),
):
    """
    Convert an uploaded SVG or DXF file to polylines.

    Returns a ZIP file containing SVG and DXF renderings of the polylines.
    """
    base_name, file_format, content = await _read_upload(file)
    polylines, stats = _process(content, file_format, simplify, tolerance)

    try:
        svg_output = polylines_to_svg(polylines)
        dxf_output = polylines_to_dxf(polylines)
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Error writing output: {str(e)}"
        )

    zip_buffer = io.BytesIO()
    with zipfile.ZipFile(zip_buffer, 'w', zipfile.ZIP_DEFLATED) as zf:
        zf.writestr(f"{base_name}_polylines.svg", svg_output)
        zf.writestr(f"{base_name}_polylines.dxf", dxf_output)
    zip_buffer.seek(0)

    headers = {
        "Content-Disposition": f'attachment; filename="{base_name}_polylines.zip"',
        "X-Stats": json.dumps(stats)
    }

    return StreamingResponse(
        zip_buffer,
        media_type="application/zip",
        headers=headers
    )


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "svg2polylines"}


def main():
    """Run the application with uvicorn."""
    import uvicorn
    configure_logging()
    uvicorn.run(app, host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
