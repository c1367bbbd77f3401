"""Element systems of the stabilised unsteady Navier-Stokes equations.

Time is advanced with a Crank-Nicolson split of the viscous, advective and
Darcy terms. The advecting velocity is extrapolated from the two stored time
levels ``uf``, ``vf`` and ``wf``, where row 0 holds the latest level and row 1
the one before it.
"""

from __future__ import annotations

from itertools import product
from typing import Iterator, Sequence, Tuple

import numpy as np

from fluidfem.basic import determinant_3x3
from fluidfem.boundary import calc_tau2
from fluidfem.gauss import gauss_line
from fluidfem.mathfem import dndx as physical_dndx
from fluidfem.mathfem import jacobian
from fluidfem.model import FluidModel
from fluidfem.shape import hex8_dndr, hex8_n

_DOFS = 4
_GAUSS_ORDER = 3


def _gauss_points() -> Iterator[Tuple[float, float, float, float]]:
    rule = gauss_line(_GAUSS_ORDER)
    for (g1, w1), (g2, w2), (g3, w3) in product(rule, repeat=3):
        yield g1, g2, g3, w1 * w2 * w3


def _element_nodes(model: FluidModel, ic: int) -> np.ndarray:
    element = model.elements[ic]
    return np.asarray(element.node_nums_prev[: model.nodes_per_element], dtype=int)


def _time_level(model: FluidModel, level: int, nodes: np.ndarray) -> np.ndarray:
    return np.column_stack(
        (model.uf[level][nodes], model.vf[level][nodes], model.wf[level][nodes])
    )


def velocity_values(
    model: FluidModel,
    n: Sequence[float],
    dndx: Sequence[Sequence[float]],
    ic: int,
    t_itr: int,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Return velocity, advecting velocity and velocity gradient at one point.

    At the first step everything is zero; at the second the advecting velocity
    is 1.5 times the latest level; afterwards it is the second-order
    extrapolation ``1.5 * latest - 0.5 * previous``.
    """
    if t_itr == 0:
        return np.zeros(3), np.zeros(3), np.zeros((3, 3))

    shape = np.asarray(n, dtype=float)
    grads = np.asarray(dndx, dtype=float)[:, :3]
    nodes = _element_nodes(model, ic)
    current = _time_level(model, 0, nodes)
    if t_itr == 1:
        advecting = 1.5 * current
    else:
        advecting = 1.5 * current - 0.5 * _time_level(model, 1, nodes)

    vel = shape @ current
    advel = shape @ advecting
    dvdx = current.T @ grads
    return vel, advel, dvdx


def _assemble(model: FluidModel, ic: int, t_itr: int, f: float) -> Tuple[np.ndarray, np.ndarray]:
    """Integrate the system of element ``ic`` at step ``t_itr`` with Darcy coefficient ``f``."""
    nen = model.nodes_per_element
    size = nen * _DOFS
    klocal = np.zeros((size, size))
    flocal = np.zeros(size)

    x_current = model.x[_element_nodes(model, ic)]
    re = model.reynolds
    dt = model.dt

    for g1, g2, g3, weight in _gauss_points():
        n = hex8_n(g1, g2, g3)
        dndr = hex8_dndr(g1, g2, g3)
        dxdr = jacobian(dndr, x_current)
        dw = determinant_3x3(dxdr) * weight
        grads = physical_dndx(dndr, dxdr)

        vel, advel, dvdx = velocity_values(model, n, grads, ic, t_itr)
        tau = calc_tau2(model, advel)

        k = grads @ grads.T
        mass = np.outer(n, n)
        adv = grads @ advel
        test_vel = grads @ vel
        adv_dvdx = dvdx @ advel

        diagonal = (
            mass / dt
            + 0.5 * k / re
            + 0.5 * np.outer(n, adv)
            + 0.5 * f * mass
            + tau * np.outer(adv, n) / dt
            + 0.5 * tau * np.outer(adv, adv)
        )

        for c in range(3):
            rows = slice(c, None, _DOFS)
            klocal[rows, rows] += diagonal * dw
            for d in range(3):
                cols = slice(d, None, _DOFS)
                klocal[rows, cols] += 0.5 * np.outer(grads[:, d], grads[:, c]) / re * dw
            klocal[rows, 3::_DOFS] += (
                -np.outer(grads[:, c], n) + tau * np.outer(adv, grads[:, c])
            ) * dw
            klocal[3::_DOFS, rows] += (
                np.outer(n, grads[:, c])
                + tau * np.outer(grads[:, c], n) / dt
                + 0.5 * tau * np.outer(grads[:, c], adv)
            ) * dw
        klocal[3::_DOFS, 3::_DOFS] += tau * k * dw

        f_vel = (
            np.outer(n, vel) / dt
            - 0.5 * (grads @ dvdx.T + grads @ dvdx) / re
            - 0.5 * np.outer(n, adv_dvdx)
            - 0.5 * f * np.outer(n, vel)
            + tau * np.outer(adv, vel) / dt
            - 0.5 * tau * np.outer(test_vel, adv_dvdx)
        )
        for c in range(3):
            flocal[c::_DOFS] += f_vel[:, c] * dw
        flocal[3::_DOFS] += (tau * test_vel / dt - 0.5 * tau * (grads @ adv_dvdx)) * dw

    return klocal, flocal


def unsteady_ns_element(model: FluidModel, ic: int, t_itr: int) -> Tuple[np.ndarray, np.ndarray]:
    """Return the element matrix and vector of element ``ic`` in open fluid at step ``t_itr``."""
    return _assemble(model, ic, t_itr, 0.0)


def darcy_unsteady_ns_element(
    model: FluidModel, ic: int, t_itr: int
) -> Tuple[np.ndarray, np.ndarray]:
    """Return the element system of ``ic`` at step ``t_itr`` with a Darcy resistance."""
    phi = model.phi_vof[ic]
    f = model.resistance * model.alpha * (1.0 - phi) / (model.alpha + phi)
    return _assemble(model, ic, t_itr, f)