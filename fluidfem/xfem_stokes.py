"""Element matrices of the steady Stokes equations on elements cut by a wall.

The wall is given by a signed distance function at the nodes: positive in the
fluid, zero or negative in the solid. Velocity shape functions are damped near
the wall and switched off inside it, while pressure shape functions are kept
for the stabilising term.
"""

from __future__ import annotations

import math
import warnings
from itertools import product
from typing import List, Sequence, Tuple

import numpy as np

from fluidfem.basic import determinant_3x3
from fluidfem.gauss import gauss_line
from fluidfem.mathfem import dndx as physical_dndx
from fluidfem.mathfem import jacobian
from fluidfem.model import FluidModel
from fluidfem.shape import hex8_dndr, hex8_n

_DOFS = 4
_GAUSS_ORDER = 2
_FINE_ORDER = 30
_POINTS_PER_SUBCELL = _GAUSS_ORDER**3

Array2D = Sequence[Sequence[float]]


def local_refinement(n: int) -> List[float]:
    """Return the centre offsets of ``n`` equal sub-intervals of [-1, 1], scaled by ``n``.

    A sub-interval centre in natural coordinates is ``offset / n``.
    """
    offsets: List[float] = []
    for k in range(max(n, 0)):
        rest = n - (2 * k + 1)
        if rest > 0:
            offsets.extend((float(rest), float(-rest)))
        elif rest == 0:
            offsets.append(0.0)
        else:
            break
    return offsets


def _element_nodes(model: FluidModel, ic: int) -> np.ndarray:
    element = model.elements[ic]
    return np.asarray(element.node_nums_prev[: model.nodes_per_element], dtype=int)


def _empty_system(model: FluidModel) -> Tuple[np.ndarray, np.ndarray]:
    size = model.nodes_per_element * _DOFS
    return np.zeros((size, size)), np.zeros(size)


def _pspg_tau(model: FluidModel) -> float:
    h = model.dx / 2.0
    return h * h / model.mu / 12.0


def _assemble(
    model: FluidModel,
    ic: int,
    points: Sequence[Tuple[float, float, float]],
    weights: Sequence[float],
    min_sdf: float,
) -> Tuple[np.ndarray, np.ndarray]:
    """Integrate the cut-element Stokes system over the given points."""
    klocal, flocal = _empty_system(model)
    if len(points) == 0:
        return klocal, flocal

    nodes = _element_nodes(model, ic)
    x_current = model.x[nodes]
    sdf_current = np.asarray(model.sdf, dtype=float)[nodes]

    n = np.array([hex8_n(*g) for g in points])
    dndr = np.array([hex8_dndr(*g) for g in points])
    w = np.asarray(weights, dtype=float)

    sdf_gauss = n @ sdf_current
    solid = sdf_gauss <= 0.0
    ratio = sdf_gauss / min_sdf
    damped = ~solid & (ratio < 1.0)

    np_values = n.copy()
    np_values[solid] = 0.0

    dnvdr = dndr.copy()
    if np.any(damped):
        dfdr = np.einsum("pnk,n->pk", dndr[damped], sdf_current) / min_sdf
        dnvdr[damped] = (
            dndr[damped] * ratio[damped][:, None, None]
            + n[damped][:, :, None] * dfdr[:, None, :]
        )

    dxdr = np.einsum("ni,pnj->pij", x_current, dndr)
    det_j = np.linalg.det(dxdr)
    if np.any(det_j == 0.0):
        raise ZeroDivisionError("matrix is singular")
    drdx = np.linalg.inv(dxdr)

    dnpdx = np.einsum("pnj,pji->pni", dndr, drdx)
    dnvdx = np.einsum("pnj,pji->pni", dnvdr, drdx)
    dnvdx[solid] = 0.0

    dw = det_j * w
    k_sum = np.einsum("pak,pbk,p->ab", dnvdx, dnvdx, dw)
    l_sum = np.einsum("pak,pbk,p->ab", dnpdx, dnpdx, dw)
    tau = _pspg_tau(model)

    for c in range(3):
        klocal[c::_DOFS, c::_DOFS] -= model.mu * k_sum
        coupling = np.einsum("pa,pb,p->ab", dnvdx[:, :, c], np_values, dw)
        klocal[c::_DOFS, 3::_DOFS] += coupling
        klocal[3::_DOFS, c::_DOFS] += coupling.T
    klocal[3::_DOFS, 3::_DOFS] += tau * l_sum
    return klocal, flocal


def xfem_stokes_element(model: FluidModel, ic: int) -> Tuple[np.ndarray, np.ndarray]:
    """Return the system of element ``ic`` integrated over ``sub_div``^3 equal sub-cells."""
    sub_div = model.sub_div
    offsets = local_refinement(sub_div)
    rule = gauss_line(_GAUSS_ORDER)
    points: List[Tuple[float, float, float]] = []
    weights: List[float] = []
    for b1, b2, b3 in product(offsets, repeat=3):
        for (g1, w1), (g2, w2), (g3, w3) in product(rule, repeat=3):
            points.append(((g1 + b1) / sub_div, (g2 + b2) / sub_div, (g3 + b3) / sub_div))
            weights.append(w1 * w2 * w3 / sub_div**3)
    min_sdf = math.sqrt(model.dx**2 + model.dy**2 + model.dz**2) / 2.0
    return _assemble(model, ic, points, weights, min_sdf)


def xfem_stokes_element_subcells(model: FluidModel, ic: int) -> Tuple[np.ndarray, np.ndarray]:
    """Return the system of element ``ic`` integrated over its stored sub-cells."""
    points: List[Tuple[float, float, float]] = []
    weights: List[float] = []
    for cell in model.elements[ic].sub_elm:
        for gp in range(_POINTS_PER_SUBCELL):
            points.append((cell.sub_gx[gp], cell.sub_gy[gp], cell.sub_gz[gp]))
            weights.append(cell.sub_weight[gp])
    min_sdf = math.sqrt(model.dx**2 + model.dy**2 + model.dz**2) / 2.0
    return _assemble(model, ic, points, weights, min_sdf)


def xfem_stokes_element_fine(model: FluidModel, ic: int) -> Tuple[np.ndarray, np.ndarray]:
    """Return the system of element ``ic`` integrated with a dense tensor Gauss rule."""
    nodes = _element_nodes(model, ic)
    if np.all(np.asarray(model.sdf, dtype=float)[nodes] <= 0.0):
        warnings.warn(f"element {ic} lies entirely inside the wall", RuntimeWarning)
    rule = gauss_line(_FINE_ORDER)
    points: List[Tuple[float, float, float]] = []
    weights: List[float] = []
    for (g1, w1), (g2, w2), (g3, w3) in product(rule, repeat=3):
        points.append((g1, g2, g3))
        weights.append(w1 * w2 * w3)
    return _assemble(model, ic, points, weights, model.dx / 2.0)


def _point_geometry(
    dnpdr: Array2D, dnvdr: Array2D, x_current: Array2D
) -> Tuple[float, np.ndarray, np.ndarray]:
    dxdr = jacobian(dnpdr, x_current)
    return determinant_3x3(dxdr), physical_dndx(dnpdr, dxdr), physical_dndx(dnvdr, dxdr)


def diffusion_term_xfem(
    model: FluidModel,
    klocal: np.ndarray,
    dnpdr: Array2D,
    dnvdr: Array2D,
    x_current: Array2D,
    weight: float,
) -> np.ndarray:
    """Add the viscous term of one point with damped velocity functions; return ``klocal``."""
    det_j, _, dnvdx = _point_geometry(dnpdr, dnvdr, x_current)
    k = dnvdx @ dnvdx.T
    for c in range(3):
        klocal[c::_DOFS, c::_DOFS] -= model.mu * k * det_j * weight
    return klocal


def pressure_term_xfem(
    klocal: np.ndarray,
    np_values: Sequence[float],
    dnpdr: Array2D,
    dnvdr: Array2D,
    x_current: Array2D,
    weight: float,
) -> np.ndarray:
    """Add the pressure and continuity terms of one point; return ``klocal``."""
    det_j, _, dnvdx = _point_geometry(dnpdr, dnvdr, x_current)
    shape = np.asarray(np_values, dtype=float)
    dw = det_j * weight
    for c in range(3):
        klocal[c::_DOFS, 3::_DOFS] += np.outer(dnvdx[:, c], shape) * dw
        klocal[3::_DOFS, c::_DOFS] += np.outer(shape, dnvdx[:, c]) * dw
    return klocal


def pspg_term_xfem(
    model: FluidModel, klocal: np.ndarray, dnpdr: Array2D, x_current: Array2D, weight: float
) -> np.ndarray:
    """Add the pressure-stabilising term of one point using the element diagonal; return ``klocal``."""
    det_j, dnpdx, _ = _point_geometry(dnpdr, dnpdr, x_current)
    h = math.sqrt(model.dx**2 + model.dy**2 + model.dz**2)
    tau = h * h / (4.0 * model.mu) / 3.0
    klocal[3::_DOFS, 3::_DOFS] += tau * (dnpdx @ dnpdx.T) * det_j * weight
    return klocal