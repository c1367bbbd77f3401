"""Element systems of the stabilised steady Navier-Stokes equations.

The systems are the Newton linearisation about the current nodal fields
``u_fluid``, ``v_fluid``, ``w_fluid`` and ``p_fluid``. The matrix acts on the
increment of the unknowns, and the vector is the residual at the current state.
"""

from __future__ import annotations

from itertools import product
from typing import Iterator, Tuple

import numpy as np

from fluidfem.basic import determinant_3x3
from fluidfem.boundary import calc_tau2
from fluidfem.gauss import gauss_line
from fluidfem.mathfem import dndx as physical_dndx
from fluidfem.mathfem import jacobian
from fluidfem.model import FluidModel
from fluidfem.shape import hex8_dndr, hex8_n

_DOFS = 4
_GAUSS_ORDER = 2


def _gauss_points() -> Iterator[Tuple[float, float, float, float]]:
    rule = gauss_line(_GAUSS_ORDER)
    for (g1, w1), (g2, w2), (g3, w3) in product(rule, repeat=3):
        yield g1, g2, g3, w1 * w2 * w3


def _assemble(model: FluidModel, ic: int, f: float) -> Tuple[np.ndarray, np.ndarray]:
    """Integrate the linearised system of element ``ic`` with Darcy coefficient ``f``."""
    nen = model.nodes_per_element
    size = nen * _DOFS
    klocal = np.zeros((size, size))
    flocal = np.zeros(size)

    nodes = np.asarray(model.elements[ic].node_nums_prev[:nen], dtype=int)
    x_current = model.x[nodes]
    vel_nodes = np.column_stack(
        (model.u_fluid[nodes], model.v_fluid[nodes], model.w_fluid[nodes])
    )
    p_nodes = np.asarray(model.p_fluid, dtype=float)[nodes]
    re = model.reynolds

    for g1, g2, g3, weight in _gauss_points():
        n = hex8_n(g1, g2, g3)
        dndr = hex8_dndr(g1, g2, g3)
        dxdr = jacobian(dndr, x_current)
        dw = determinant_3x3(dxdr) * weight
        grads = physical_dndx(dndr, dxdr)

        vel = n @ vel_nodes
        dvdx = vel_nodes.T @ grads
        vdvdx = dvdx @ vel
        pre = float(n @ p_nodes)
        dpdx = grads.T @ p_nodes
        div = float(dvdx[0, 0] + dvdx[1, 1] + dvdx[2, 2])
        adv = grads @ vel
        tau = calc_tau2(model, vel)

        k = grads @ grads.T
        mass = np.outer(n, n)
        adv_n = np.outer(adv, n)
        diagonal = k / re + np.outer(n, adv) + f * mass + tau * np.outer(adv, adv)

        for c in range(3):
            rows = slice(c, None, _DOFS)
            klocal[rows, rows] += diagonal * dw
            for d in range(3):
                cols = slice(d, None, _DOFS)
                klocal[rows, cols] += (
                    mass * dvdx[c, d]
                    + tau * (dpdx[c] + vdvdx[c]) * np.outer(grads[:, d], n)
                    + tau * dvdx[c, d] * adv_n
                ) * dw
            klocal[rows, 3::_DOFS] += (
                -np.outer(grads[:, c], n) + tau * np.outer(adv, grads[:, c])
            ) * dw
            klocal[3::_DOFS, rows] += (
                np.outer(n, grads[:, c])
                + tau * (np.outer(grads @ dvdx[:, c], n) + np.outer(grads[:, c], adv))
            ) * dw
        klocal[3::_DOFS, 3::_DOFS] += tau * k * dw

        f_vel = (
            -(grads @ dvdx.T) / re
            - np.outer(n, vdvdx)
            + pre * grads
            - f * np.outer(n, vel)
            - tau * np.outer(adv, dpdx + vdvdx)
        )
        for c in range(3):
            flocal[c::_DOFS] += f_vel[:, c] * dw
        flocal[3::_DOFS] += (-n * div - tau * (grads @ dpdx) - tau * (grads @ vdvdx)) * dw

    return klocal, flocal


def steady_ns_element(model: FluidModel, ic: int) -> Tuple[np.ndarray, np.ndarray]:
    """Return the linearised element matrix and residual of element ``ic`` in open fluid."""
    return _assemble(model, ic, 0.0)


def darcy_steady_ns_element(model: FluidModel, ic: int) -> Tuple[np.ndarray, np.ndarray]:
    """Return the element system of ``ic`` with a Darcy resistance from its volume fraction."""
    phi = model.phi_vof[ic]
    f = model.resistance * model.alpha * (1.0 - phi) / (model.alpha + phi)
    return _assemble(model, ic, f)