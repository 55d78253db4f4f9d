# -*- coding: utf-8 -*-
"""
QR Encoder Module

Thin layer over segno, which does the actual QR encoding, error correction
and version selection. The painter only consumes what comes out of here: a
ModuleMatrix plus the selected version and error correction level.

Functions:
    make_qr: Encode text into a segno QR symbol, raising painter errors
Classes:
    QrVersions: Supported version range
    ModuleMatrix: Read-only boolean module grid
"""

import logging
from typing import Iterable, Optional, Sequence, Union

import numpy as np
import segno

from .errors import QrInputTooLongError, QrPainterError, QrUnsupportedVersionError

logger = logging.getLogger(__name__)

ERROR_LEVELS = ('L', 'M', 'Q', 'H')


class QrVersions:
    """Supported QR versions. 'auto' picks the smallest version that fits."""

    AUTO = 'auto'
    MIN = 1
    MAX = 40

    @classmethod
    def is_supported(cls, version: Union[int, str, None]) -> bool:
        if version is None or version == cls.AUTO:
            return True
        if isinstance(version, bool):
            return False
        try:
            number = int(version)
        except (TypeError, ValueError):
            return False
        return cls.MIN <= number <= cls.MAX


def make_qr(
    text: str,
    ecc: str = 'L',
    version: Optional[Union[int, str]] = None,
    mode: Optional[str] = None,
    mask: Optional[int] = None
) -> segno.QRCode:
    """
    Encode text into a QR symbol with the exact version and error level.

    Args:
        text (str): The data to encode
        ecc (str): Error correction level ('L', 'M', 'Q', 'H')
        version (Optional[Union[int, str]]): QR version (1-40) or 'auto'/None
        mode (Optional[str]): segno encoding mode, None lets segno choose
        mask (Optional[int]): Mask pattern 0-7, None for automatic selection

    Returns:
        segno.QRCode: The encoded symbol

    Raises:
        QrUnsupportedVersionError: If version is not 1-40 or 'auto'
        QrInputTooLongError: If the data exceeds the capacity of the version/level
        QrPainterError: If the error correction level is unknown
    """
    if not QrVersions.is_supported(version):
        raise QrUnsupportedVersionError(version)

    level = (ecc or 'L').upper()
    if level not in ERROR_LEVELS:
        raise QrPainterError(f"Invalid error correction level: {ecc!r}")

    ver_arg = None if version in (None, QrVersions.AUTO) else int(version)

    try:
        # boost_error stays off so the requested level is the one encoded
        return segno.make(
            text,
            error=level,
            version=ver_arg,
            mode=mode,
            mask=mask,
            boost_error=False,
            micro=False
        )
    except segno.DataOverflowError as ex:
        raise QrInputTooLongError(str(ex), version=ver_arg, ecc=level) from ex


class ModuleMatrix:
    """
    Immutable square grid of modules (True = dark).

    Wraps a read-only numpy array. Use from_qr() for segno symbols and
    from_rows() for any square sequence of rows.
    """

    def __init__(self, modules: np.ndarray):
        if modules.ndim != 2 or modules.shape[0] != modules.shape[1]:
            raise ValueError(f"Module grid must be square, got shape {modules.shape}")
        if modules.shape[0] == 0:
            raise ValueError("Module grid must not be empty")
        self._modules = modules.astype(bool)
        self._modules.setflags(write=False)

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence]) -> "ModuleMatrix":
        return cls(np.array([[bool(v) for v in row] for row in rows], dtype=bool))

    @classmethod
    def from_qr(cls, qr: segno.QRCode) -> "ModuleMatrix":
        # segno's matrix has no quiet zone
        return cls.from_rows(qr.matrix)

    @property
    def module_count(self) -> int:
        return self._modules.shape[0]

    @property
    def modules(self) -> np.ndarray:
        return self._modules

    def is_dark(self, row: int, col: int) -> bool:
        return bool(self._modules[row, col])

    def __eq__(self, other) -> bool:
        if not isinstance(other, ModuleMatrix):
            return NotImplemented
        return np.array_equal(self._modules, other._modules)

    def __hash__(self) -> int:
        return hash(self._modules.tobytes())

    def __repr__(self) -> str:
        return f"ModuleMatrix(module_count={self.module_count})"
