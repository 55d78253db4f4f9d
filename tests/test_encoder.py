"""Unit tests for encoding, module matrices and construction errors."""

import numpy as np
import pytest

from qr_painter.encoder import ModuleMatrix, QrVersions, make_qr
from qr_painter.errors import (
    QrInputTooLongError,
    QrPainterError,
    QrUnsupportedVersionError,
)
from qr_painter.painter import QrPainter


def test_make_qr_keeps_requested_version_and_level():
    qr = make_qr("hello", ecc='m', version=3)

    assert qr.version == 3
    assert qr.error == 'M'


def test_painter_auto_version():
    painter = QrPainter("hello")

    assert painter.module_count == 21
    assert painter.calc_version == 1
    assert painter.version == QrVersions.AUTO


@pytest.mark.parametrize("version", [0, 41, -1, "abc", 2.5j])
def test_unsupported_version_raises(version):
    with pytest.raises(QrUnsupportedVersionError):
        QrPainter("hello", version=version)


def test_input_too_long_raises():
    with pytest.raises(QrInputTooLongError) as excinfo:
        QrPainter("a" * 200, version=1, error_correction_level='H')

    assert excinfo.value.ecc == 'H'
    assert isinstance(excinfo.value, ValueError)


def test_unknown_error_level_raises():
    with pytest.raises(QrPainterError):
        make_qr("hello", ecc='X')


def test_supported_versions():
    assert QrVersions.is_supported('auto')
    assert QrVersions.is_supported(None)
    assert QrVersions.is_supported(1)
    assert QrVersions.is_supported("40")
    assert not QrVersions.is_supported(True)
    assert not QrVersions.is_supported(41)


def test_module_matrix_from_rows():
    matrix = ModuleMatrix.from_rows([[1, 0], [0, 1]])

    assert matrix.module_count == 2
    assert matrix.is_dark(0, 0)
    assert not matrix.is_dark(0, 1)
    assert matrix == ModuleMatrix.from_rows([[True, False], [False, True]])


def test_module_matrix_is_read_only():
    matrix = ModuleMatrix.from_rows([[1, 0], [0, 1]])

    assert not matrix.modules.flags.writeable
    with pytest.raises(ValueError):
        matrix.modules[0, 0] = False


@pytest.mark.parametrize("rows", [[[1, 0]], [], [[1], [0, 1]]])
def test_module_matrix_must_be_square(rows):
    with pytest.raises(ValueError):
        ModuleMatrix.from_rows(rows)


def test_module_matrix_from_qr_matches_segno():
    qr = make_qr("hello", version=2)
    matrix = ModuleMatrix.from_qr(qr)

    assert matrix.module_count == 25
    expected = np.array([[bool(v) for v in row] for row in qr.matrix])
    assert np.array_equal(matrix.modules, expected)


def test_with_qr_segno_symbol():
    qr = make_qr("hello", ecc='Q', version=2)
    painter = QrPainter.with_qr(qr)

    assert painter.calc_version == 2
    assert painter.error_correction_level == 'Q'
    assert painter.module_count == 25


@pytest.mark.parametrize("count, version", [(21, 1), (25, 2), (177, 40), (5, None), (23, None), (181, None)])
def test_with_qr_matrix_version_from_module_count(matrix_factory, count, version):
    painter = QrPainter.with_qr(matrix_factory(count))

    assert painter.calc_version == version
    assert painter.module_count == count
