"""Shared fixtures for painter tests."""

import pytest

from qr_painter.encoder import ModuleMatrix


def make_matrix(count, dark=()):
    """Square matrix of `count` modules with the given (row, col) cells dark."""
    dark = set(dark)
    return ModuleMatrix.from_rows(
        [[(row, col) in dark for col in range(count)] for row in range(count)]
    )


@pytest.fixture
def matrix_factory():
    return make_matrix


@pytest.fixture
def sparse_matrix():
    """21x21 matrix: a horizontal pair, a vertical pair and a lone module."""
    return make_matrix(21, dark={(10, 10), (10, 11), (12, 10), (14, 14), (15, 14)})
