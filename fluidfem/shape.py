"""Shape functions and their natural-coordinate derivatives."""

from __future__ import annotations

import numpy as np


def hex8_n(g1: float, g2: float, g3: float) -> np.ndarray:
    """Trilinear shape functions of the 8-node hexahedron."""
    m1, p1 = 1.0 - g1, 1.0 + g1
    m2, p2 = 1.0 - g2, 1.0 + g2
    m3, p3 = 1.0 - g3, 1.0 + g3
    return 0.125 * np.array(
        [
            m1 * m2 * m3,
            p1 * m2 * m3,
            p1 * p2 * m3,
            m1 * p2 * m3,
            m1 * m2 * p3,
            p1 * m2 * p3,
            p1 * p2 * p3,
            m1 * p2 * p3,
        ]
    )


def hex8_dndr(g1: float, g2: float, g3: float) -> np.ndarray:
    """Derivatives of the hexahedron shape functions, shape (8, 3)."""
    m1, p1 = 1.0 - g1, 1.0 + g1
    m2, p2 = 1.0 - g2, 1.0 + g2
    m3, p3 = 1.0 - g3, 1.0 + g3
    return 0.125 * np.array(
        [
            [-m2 * m3, -m1 * m3, -m1 * m2],
            [m2 * m3, -p1 * m3, -p1 * m2],
            [p2 * m3, p1 * m3, -p1 * p2],
            [-p2 * m3, m1 * m3, -m1 * p2],
            [-m2 * p3, -m1 * p3, m1 * m2],
            [m2 * p3, -p1 * p3, p1 * m2],
            [p2 * p3, p1 * p3, p1 * p2],
            [-p2 * p3, m1 * p3, m1 * p2],
        ]
    )


def tri3_n(l1: float, l2: float, l3: float) -> np.ndarray:
    """Linear triangle shape functions in area coordinates."""
    return np.array([l1, l2, l3], dtype=float)


def quad4_n(g1: float, g2: float) -> np.ndarray:
    """Bilinear shape functions of the 4-node quadrilateral."""
    return 0.25 * np.array(
        [
            (1.0 - g1) * (1.0 - g2),
            (1.0 + g1) * (1.0 - g2),
            (1.0 + g1) * (1.0 + g2),
            (1.0 - g1) * (1.0 + g2),
        ]
    )


def tri6_n(l1: float, l2: float, l3: float) -> np.ndarray:
    """Quadratic triangle shape functions in area coordinates."""
    return np.array(
        [
            l1 * (2.0 * l1 - 1.0),
            l2 * (2.0 * l2 - 1.0),
            l3 * (2.0 * l3 - 1.0),
            4.0 * l1 * l2,
            4.0 * l2 * l3,
            4.0 * l1 * l3,
        ]
    )


def quad8_n(g1: float, g2: float) -> np.ndarray:
    """Serendipity shape functions of the 8-node quadrilateral."""
    return np.array(
        [
            0.25 * (1.0 - g1) * (1.0 - g2) * (-1.0 - g1 - g2),
            0.25 * (1.0 + g1) * (1.0 - g2) * (-1.0 + g1 - g2),
            0.25 * (1.0 + g1) * (1.0 + g2) * (-1.0 + g1 + g2),
            0.25 * (1.0 - g1) * (1.0 + g2) * (-1.0 - g1 + g2),
            0.5 * (1.0 - g1 * g1) * (1.0 - g2),
            0.5 * (1.0 + g1) * (1.0 - g2 * g2),
            0.5 * (1.0 - g1 * g1) * (1.0 + g2),
            0.5 * (1.0 - g1) * (1.0 - g2 * g2),
        ]
    )


def tri3_dndr(l1: float, l2: float, l3: float) -> np.ndarray:
    """Derivatives of the linear triangle functions, shape (3, 2)."""
    return np.array([[-1.0, -1.0], [1.0, 0.0], [0.0, 1.0]])


def quad4_dndr(g1: float, g2: float) -> np.ndarray:
    """Derivatives of the quadrilateral shape functions, shape (4, 2)."""
    return 0.25 * np.array(
        [
            [-(1.0 - g2), -(1.0 - g1)],
            [1.0 - g2, -(1.0 + g1)],
            [1.0 + g2, 1.0 + g1],
            [-(1.0 + g2), 1.0 - g1],
        ]
    )


def tri6_dndr(l1: float, l2: float, l3: float) -> np.ndarray:
    """Derivatives of the quadratic triangle functions, shape (6, 2)."""
    return np.array(
        [
            [-4.0 * l1 + 1.0, -4.0 * l1 + 1.0],
            [4.0 * l2 - 1.0, 0.0],
            [0.0, 4.0 * l3 - 1.0],
            [4.0 * (l1 - l2), -4.0 * l2],
            [4.0 * l3, 4.0 * l2],
            [-4.0 * l3, 4.0 * (l1 - l3)],
        ]
    )