"""Boundary conditions and stabilisation parameters."""

from __future__ import annotations

import math
from typing import Sequence, Tuple

import numpy as np

from fluidfem.basic import PI, inverse_3x3
from fluidfem.model import Element, FluidModel, SolverKind

_CI = 36.0


def assign_bcs(model: FluidModel) -> None:
    """Spread the Dirichlet table into a vector over all unknowns."""
    bcs = np.zeros(model.dofs_per_node * model.num_nodes)
    for node, dof, value in model.dirichlet_bcs_tmp:
        bcs[int(node) * model.dofs_per_node + int(dof)] = value
    model.dirichlet_bcs = bcs


def assign_pulsatile_bcs(model: FluidModel, t_itr: float) -> None:
    """Scale positive prescribed values by a sinusoidal pulse at step ``t_itr``."""
    time_now = t_itr * model.dt
    pulse = math.sin((2.0 * PI / model.period) * time_now) + 1.0
    for node, dof, value in model.dirichlet_bcs_tmp:
        index = int(node) * model.dofs_per_node + int(dof)
        model.dirichlet_bcs[index] = value * pulse if value > 0 else value


def set_nr_initial_value(model: FluidModel) -> None:
    """Impose prescribed values on the initial guess and clear the BC increments."""
    fixed_u = model.bd_iu == 0
    for k, field_values in enumerate((model.u_fluid, model.v_fluid, model.w_fluid)):
        mask = fixed_u[:, k]
        field_values[mask] = model.bd_u[mask, k]
    fixed_p = model.bd_ip == 0
    model.p_fluid[fixed_p] = model.bd_p[fixed_p]

    size = model.dofs_per_node * model.num_nodes
    if len(model.dirichlet_bcs) < size:
        model.dirichlet_bcs = np.zeros(size)
    else:
        model.dirichlet_bcs[:size] = 0.0


def local_bc_system(model: FluidModel, element: Element) -> Tuple[np.ndarray, np.ndarray]:
    """Return the element matrix and vector that enforce its Dirichlet rows."""
    size = len(element.node_for_assy_bcs)
    klocal = np.zeros((size, size))
    flocal = np.zeros(size)
    for ii, marker in enumerate(element.node_for_assy_bcs):
        if marker == -1:
            klocal[ii, ii] = 1.0
            flocal[ii] = model.dirichlet_bcs[element.global_dofs[ii]]
    return klocal, flocal


def _time_term(model: FluidModel) -> float:
    if model.solver is SolverKind.STEADY_NAVIERSTOKES:
        return 0.0
    if model.solver is SolverKind.UNSTEADY_NAVIERSTOKES:
        return (2.0 / model.dt) ** 2
    raise ValueError("calc_tau solver not defined")


def _max_spacing(model: FluidModel) -> float:
    return max(model.dx, model.dy, model.dz)


def calc_tau(model: FluidModel, dxdr: Sequence[Sequence[float]], vel: Sequence[float]) -> float:
    """Stabilisation parameter from the element metric tensor."""
    term1 = _time_term(model)
    drdx = inverse_3x3(dxdr)
    g = drdx.T @ drdx
    v = np.asarray(vel, dtype=float)
    term2 = float(v @ g @ v)
    term3 = _CI * float(np.sum(g * g)) / model.reynolds
    return (term1 + term2 + term3) ** -0.5


def calc_tau2(model: FluidModel, vel: Sequence[float]) -> float:
    """Stabilisation parameter using the largest grid spacing as element size."""
    term1 = _time_term(model)
    vel_mag = math.sqrt(sum(c * c for c in vel))
    he = _max_spacing(model)
    term2 = (2.0 * vel_mag / he) ** 2
    term3 = (4.0 / (model.reynolds * he * he)) ** 2
    return (term1 + term2 + term3) ** -0.5


def calc_tau3(
    model: FluidModel, dndx: Sequence[Sequence[float]], vel: Sequence[float]
) -> float:
    """Stabilisation parameter with an element size measured along the flow."""
    term1 = (2.0 / model.dt) ** 2
    v = np.asarray(vel, dtype=float)
    vel_mag = math.sqrt(float(v @ v))
    if vel_mag == 0:
        he = _max_spacing(model)
    else:
        grads = np.asarray(dndx, dtype=float)[: model.nodes_per_element, :3]
        he = 2.0 / float(np.sum(np.abs(grads @ (v / vel_mag))))
    term2 = (2.0 * vel_mag / he) ** 2
    term3 = (4.0 / (model.reynolds * he * he)) ** 2
    return (term1 + term2 + term3) ** -0.5