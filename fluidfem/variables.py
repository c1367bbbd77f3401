"""Transfer of solved unknowns into the nodal and grid field arrays."""

from __future__ import annotations

from typing import List

import numpy as np

from fluidfem.model import FluidModel

_COMPONENTS = 4


def _nodal_solution(model: FluidModel) -> List[np.ndarray]:
    """Return the u, v, w and p values of the solution vector, one array per node."""
    n = model.num_nodes
    base = np.asarray(model.node_map[:n], dtype=int) * model.dofs_per_node
    values = model.soln.soln
    return [values[base + k] for k in range(_COMPONENTS)]


def _grid_fields(model: FluidModel):
    return (model.u, model.v, model.w, model.p)


def _fluid_fields(model: FluidModel):
    return (model.u_fluid, model.v_fluid, model.w_fluid, model.p_fluid)


def _scatter_to_grid(model: FluidModel, nodal) -> None:
    targets = np.asarray(model.sort_node[: model.num_nodes], dtype=int)
    for grid, values in zip(_grid_fields(model), nodal):
        grid[targets] = values


def update_from_solution(model: FluidModel) -> None:
    """Copy the solution vector into the fluid fields and the full grid fields."""
    nodal = _nodal_solution(model)
    for target, values in zip(_fluid_fields(model), nodal):
        target[:] = values
    _scatter_to_grid(model, _fluid_fields(model))


def update_with_relaxation(model: FluidModel, loop: int) -> None:
    """Add the relaxed Newton increment of iteration ``loop`` to the fluid fields."""
    if loop < model.nr_itr_initial:
        relax = model.relaxation_param_initial
    else:
        relax = model.relaxation_param
    nodal = _nodal_solution(model)
    for target, increment in zip(_fluid_fields(model), nodal):
        target += increment * relax
    _scatter_to_grid(model, _fluid_fields(model))


def advance_time_level(model: FluidModel) -> None:
    """Shift the current time level to the previous one and store the new solution."""
    nodal = _nodal_solution(model)
    for history, values in zip((model.uf, model.vf, model.wf, model.pf), nodal):
        history[1, :] = history[0, :]
        history[0, :] = values
    _scatter_to_grid(model, (model.uf[0], model.vf[0], model.wf[0], model.pf[0]))