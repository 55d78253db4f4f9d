# -*- coding: utf-8 -*-
"""
QR Painter Errors

Exceptions raised while building a painter. Rendering itself never raises for
degenerate sizes; it logs and draws nothing.
"""


class QrPainterError(ValueError):
    """Base class for all painter errors."""


class QrUnsupportedVersionError(QrPainterError):
    """Raised when the requested QR version is outside 1-40 and not 'auto'."""

    def __init__(self, version):
        self.version = version
        super().__init__(f"Invalid version: {version!r} (expected 1-40 or 'auto')")


class QrInputTooLongError(QrPainterError):
    """Raised when the data does not fit the requested version/error level."""

    def __init__(self, message: str, version=None, ecc: str = None):
        self.version = version
        self.ecc = ecc
        super().__init__(message)


class QrFragmentError(QrPainterError):
    """Raised when an SVG fragment has no usable width/height."""
