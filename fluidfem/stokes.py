"""Element matrices of the stabilised steady Stokes equations."""

from __future__ import annotations

from itertools import product
from typing import Iterator, Sequence, Tuple

import numpy as np

from fluidfem.basic import determinant_3x3
from fluidfem.gauss import gauss_line
from fluidfem.mathfem import dndx as physical_dndx
from fluidfem.mathfem import jacobian
from fluidfem.model import FluidModel
from fluidfem.shape import hex8_dndr, hex8_n

_DOFS = 4
_GAUSS_ORDER = 2

Array2D = Sequence[Sequence[float]]


def _element_coords(model: FluidModel, ic: int) -> np.ndarray:
    element = model.elements[ic]
    nodes = element.node_nums_prev[: model.nodes_per_element]
    return model.x[np.asarray(nodes, dtype=int)]


def _gauss_points() -> Iterator[Tuple[float, float, float, float]]:
    rule = gauss_line(_GAUSS_ORDER)
    for (g1, w1), (g2, w2), (g3, w3) in product(rule, repeat=3):
        yield g1, g2, g3, w1 * w2 * w3


def _geometry(dndr: Array2D, x_current: Array2D) -> Tuple[float, np.ndarray]:
    dxdr = jacobian(dndr, x_current)
    return determinant_3x3(dxdr), physical_dndx(dndr, dxdr)


def _empty_system(model: FluidModel) -> Tuple[np.ndarray, np.ndarray]:
    size = model.nodes_per_element * _DOFS
    return np.zeros((size, size)), np.zeros(size)


def _pspg_tau(model: FluidModel) -> float:
    h = model.dx / 2.0
    return h * h / model.mu / 12.0


def _add_stokes_point(
    model: FluidModel, klocal: np.ndarray, n: np.ndarray, grads: np.ndarray, dw: float, tau: float
) -> np.ndarray:
    """Add the Stokes terms of one integration point; return the stiffness block."""
    k = grads @ grads.T
    for c in range(3):
        klocal[c::_DOFS, c::_DOFS] -= model.mu * k * dw
        klocal[c::_DOFS, 3::_DOFS] += np.outer(grads[:, c], n) * dw
        klocal[3::_DOFS, c::_DOFS] += np.outer(n, grads[:, c]) * dw
    klocal[3::_DOFS, 3::_DOFS] += tau * k * dw
    return k


def stokes_element(model: FluidModel, ic: int) -> Tuple[np.ndarray, np.ndarray]:
    """Return the element matrix and vector of element ``ic`` in open fluid."""
    klocal, flocal = _empty_system(model)
    x_current = _element_coords(model, ic)
    tau = _pspg_tau(model)
    for g1, g2, g3, weight in _gauss_points():
        n = hex8_n(g1, g2, g3)
        det_j, grads = _geometry(hex8_dndr(g1, g2, g3), x_current)
        _add_stokes_point(model, klocal, n, grads, det_j * weight, tau)
    return klocal, flocal


def darcy_stokes_element(model: FluidModel, ic: int) -> Tuple[np.ndarray, np.ndarray]:
    """Return the element system of ``ic`` with a Darcy resistance from its volume fraction."""
    klocal, flocal = _empty_system(model)
    x_current = _element_coords(model, ic)
    tau = _pspg_tau(model)
    phi = model.phi_vof[ic]
    f = model.resistance * model.alpha * (1.0 - phi) / (model.alpha + phi)
    for g1, g2, g3, weight in _gauss_points():
        n = hex8_n(g1, g2, g3)
        det_j, grads = _geometry(hex8_dndr(g1, g2, g3), x_current)
        dw = det_j * weight
        _add_stokes_point(model, klocal, n, grads, dw, tau)
        mass = np.outer(n, n)
        for c in range(3):
            klocal[c::_DOFS, c::_DOFS] -= f * mass * dw
    return klocal, flocal


def diffusion_term(
    model: FluidModel, klocal: np.ndarray, dndr: Array2D, x_current: Array2D, weight: float
) -> np.ndarray:
    """Add the viscous term of one integration point to ``klocal`` and return it."""
    det_j, grads = _geometry(dndr, x_current)
    k = grads @ grads.T
    for c in range(3):
        klocal[c::_DOFS, c::_DOFS] -= model.mu * k * det_j * weight
    return klocal


def pressure_term(
    klocal: np.ndarray, n: Sequence[float], dndr: Array2D, x_current: Array2D, weight: float
) -> np.ndarray:
    """Add the pressure-gradient and continuity terms of one point and return ``klocal``."""
    det_j, grads = _geometry(dndr, x_current)
    shape = np.asarray(n, dtype=float)
    dw = det_j * weight
    for c in range(3):
        klocal[c::_DOFS, 3::_DOFS] += np.outer(grads[:, c], shape) * dw
        klocal[3::_DOFS, c::_DOFS] += np.outer(shape, grads[:, c]) * dw
    return klocal


def pspg_term(
    model: FluidModel, klocal: np.ndarray, dndr: Array2D, x_current: Array2D, weight: float
) -> np.ndarray:
    """Add the pressure-stabilising term of one point and return ``klocal``."""
    det_j, grads = _geometry(dndr, x_current)
    h = model.dx / 2.0
    tau = h * h / (4.0 * model.mu) / 3.0
    klocal[3::_DOFS, 3::_DOFS] += tau * (grads @ grads.T) * det_j * weight
    return klocal