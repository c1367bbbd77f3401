"""Jacobians and physical-coordinate derivatives of shape functions."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from fluidfem.basic import inverse_2x2, inverse_3x3

Array2D = Sequence[Sequence[float]]


def jacobian_2d(dndr: Array2D, x: Array2D) -> np.ndarray:
    """Return dx/dr, where entry (i, j) sums dN_p/dr_j * x_p[i] over nodes."""
    d = np.asarray(dndr, dtype=float)[:, :2]
    coords = np.asarray(x, dtype=float)[:, :2]
    return coords.T @ d


def dndx_2d(dndr: Array2D, dxdr: Array2D) -> np.ndarray:
    """Return dN/dx for every node from dN/dr and the 2x2 Jacobian."""
    d = np.asarray(dndr, dtype=float)[:, :2]
    return d @ inverse_2x2(dxdr)


def jacobian(dndr: Array2D, x: Array2D) -> np.ndarray:
    """Return the 3x3 Jacobian dx/dr of the element mapping."""
    d = np.asarray(dndr, dtype=float)[:, :3]
    coords = np.asarray(x, dtype=float)[:, :3]
    return coords.T @ d


def dndx(dndr: Array2D, dxdr: Array2D) -> np.ndarray:
    """Return dN/dx for every node from dN/dr and the 3x3 Jacobian."""
    d = np.asarray(dndr, dtype=float)[:, :3]
    return d @ inverse_3x3(dxdr)