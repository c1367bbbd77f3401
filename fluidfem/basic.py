"""Small dense linear-algebra helpers and physical constants."""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

GRAVITY = 9.80665
PI = math.pi

ON = 1
OFF = 0

Matrix = Sequence[Sequence[float]]


def _as_square(a: Matrix, size: int) -> np.ndarray:
    arr = np.asarray(a, dtype=float)
    if arr.shape != (size, size):
        raise ValueError(f"expected a {size}x{size} matrix, got shape {arr.shape}")
    return arr


def inverse_2x2(a: Matrix) -> np.ndarray:
    """Return the inverse of a 2x2 matrix by the closed-form adjugate."""
    m = _as_square(a, 2)
    det = float(m[0, 0] * m[1, 1] - m[0, 1] * m[1, 0])
    if det == 0.0:
        raise ZeroDivisionError("matrix is singular")
    return np.array(
        [
            [m[1, 1] / det, -m[0, 1] / det],
            [-m[1, 0] / det, m[0, 0] / det],
        ]
    )


def determinant_3x3(a: Matrix) -> float:
    """Return the determinant of a 3x3 matrix by the rule of Sarrus."""
    m = _as_square(a, 3)
    return float(
        m[0, 0] * m[1, 1] * m[2, 2]
        + m[1, 0] * m[2, 1] * m[0, 2]
        + m[2, 0] * m[0, 1] * m[1, 2]
        - m[2, 0] * m[1, 1] * m[0, 2]
        - m[1, 0] * m[0, 1] * m[2, 2]
        - m[0, 0] * m[2, 1] * m[1, 2]
    )


def inverse_3x3(a: Matrix) -> np.ndarray:
    """Return the inverse of a 3x3 matrix by the closed-form adjugate."""
    m = _as_square(a, 3)
    det = determinant_3x3(m)
    if det == 0.0:
        raise ZeroDivisionError("matrix is singular")
    adj = np.array(
        [
            [
                m[1, 1] * m[2, 2] - m[1, 2] * m[2, 1],
                m[0, 2] * m[2, 1] - m[0, 1] * m[2, 2],
                m[0, 1] * m[1, 2] - m[0, 2] * m[1, 1],
            ],
            [
                m[1, 2] * m[2, 0] - m[1, 0] * m[2, 2],
                m[0, 0] * m[2, 2] - m[0, 2] * m[2, 0],
                m[0, 2] * m[1, 0] - m[0, 0] * m[1, 2],
            ],
            [
                m[1, 0] * m[2, 1] - m[1, 1] * m[2, 0],
                m[0, 1] * m[2, 0] - m[0, 0] * m[2, 1],
                m[0, 0] * m[1, 1] - m[0, 1] * m[1, 0],
            ],
        ]
    )
    return adj / det