#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
QR Painter - Flask Web Application

Exports styled QR codes as PNG, JPG or SVG. POST requests may upload a logo
image (raster exports) or an SVG fragment (SVG export) for the center.
"""

import asyncio
import logging
from io import BytesIO
from typing import Optional

from flask import Flask, request, send_file
from PIL import Image

from qr_painter import config
from qr_painter.errors import QrPainterError
from qr_painter.painter import QrPainter
from qr_painter.styles import (
    DataModuleShape,
    DataModuleStyle,
    EmbeddedImageStyle,
    EyeShape,
    EyeStyle,
)

# Configure logging
logging.basicConfig(level=getattr(logging, config.LOG_LEVEL, logging.INFO))
logger = logging.getLogger(__name__)

app = Flask(__name__)


def _flag(value: Optional[str], default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def _read_size(req) -> int:
    try:
        size = int(req.values.get('size') or config.DEFAULT_SIZE)
    except (ValueError, TypeError):
        return config.DEFAULT_SIZE
    if size < 1 or size > config.MAX_SIZE:
        return config.DEFAULT_SIZE
    return size


def _painter_from_request(req, load_logo: bool = True) -> QrPainter:
    """Build a painter from request values and, for raster exports, the uploaded logo."""
    text = (req.values.get('text') or "").strip()
    ecc = (req.values.get('ecc') or "L").strip().upper()
    version = req.values.get('version') or "auto"

    eye_radius = req.values.get('eye_radius')
    eye_style = EyeStyle(
        shape=EyeShape((req.values.get('eye_shape') or 'square').strip().lower()),
        color=req.values.get('eye_color') or '#000000',
        radius=float(eye_radius) if eye_radius else None,
    )
    data_module_style = DataModuleStyle(
        shape=DataModuleShape((req.values.get('module_shape') or 'square').strip().lower()),
        color=req.values.get('module_color') or '#000000',
    )

    logo = None
    if load_logo and 'logo' in req.files and req.files['logo'].filename:
        file = req.files['logo']
        logo = Image.open(file.stream)
        logo.load()
        logger.info(f"Logo uploaded: {file.filename} ({logo.size})")

    logo_color = req.values.get('logo_color')
    return QrPainter(
        text,
        version=version,
        error_correction_level=ecc,
        eye_style=eye_style,
        data_module_style=data_module_style,
        gapless=_flag(req.values.get('gapless')),
        embedded_image=logo,
        embedded_image_style=EmbeddedImageStyle(color=logo_color) if logo_color else None,
        empty_color=req.values.get('empty_color') or None,
    )


def _read_fragment(req) -> Optional[str]:
    if 'svg' in req.files and req.files['svg'].filename:
        return req.files['svg'].read().decode('utf-8')
    return req.values.get('svg') or None


def _export_raster(fmt: str, mimetype: str, filename: str):
    if not (request.values.get('text') or "").strip():
        return "Missing text", 400
    size = _read_size(request)
    try:
        painter = _painter_from_request(request)
        data = asyncio.run(painter.to_image_data((size, size), format=fmt))
    except (QrPainterError, ValueError, OSError) as ex:
        logger.error(f"QR export failed: {ex}")
        return f"Could not generate the QR code: {ex}", 400
    return send_file(BytesIO(data), as_attachment=True,
                     download_name=filename, mimetype=mimetype)


@app.route('/export/png', methods=['GET', 'POST'])
def export_png():
    return _export_raster('png', 'image/png', 'qr.png')


@app.route('/export/jpg', methods=['GET', 'POST'])
def export_jpg():
    return _export_raster('jpeg', 'image/jpeg', 'qr.jpg')


@app.route('/export/svg', methods=['GET', 'POST'])
def export_svg():
    if not (request.values.get('text') or "").strip():
        return "Missing text", 400
    size = _read_size(request)
    try:
        painter = _painter_from_request(request, load_logo=False)
        svg = painter.to_svg((size, size), _read_fragment(request))
    except (QrPainterError, ValueError, UnicodeDecodeError) as ex:
        logger.error(f"SVG export failed: {ex}")
        return f"Could not generate the QR code: {ex}", 400
    return send_file(BytesIO(svg.encode('utf-8')), as_attachment=True,
                     download_name='qr.svg', mimetype='image/svg+xml')


if __name__ == "__main__":
    app.run(debug=True)
