import numpy as np
import pytest

from fluidfem.boundary import (
    assign_bcs,
    assign_pulsatile_bcs,
    calc_tau,
    calc_tau2,
    calc_tau3,
    local_bc_system,
    set_nr_initial_value,
)
from fluidfem.model import Element, FluidModel, SolverKind
from fluidfem.shape import hex8_dndr


def _model(**kwargs):
    defaults = dict(x=np.zeros((2, 3)), dx=1.0, dy=1.0, dz=1.0)
    defaults.update(kwargs)
    return FluidModel(**defaults)


def test_assign_bcs_places_values():
    model = _model(dirichlet_bcs_tmp=[(0, 1, 2.5), (1, 3, -1.0)])
    assign_bcs(model)
    assert model.dirichlet_bcs.shape == (8,)
    assert model.dirichlet_bcs[1] == 2.5
    assert model.dirichlet_bcs[7] == -1.0
    assert np.count_nonzero(model.dirichlet_bcs) == 2


def test_pulsatile_bcs_scale_positive_values():
    model = _model(dirichlet_bcs_tmp=[(0, 1, 2.5), (1, 3, -1.0)], dt=0.25, period=1.0)
    assign_bcs(model)
    assign_pulsatile_bcs(model, 1)
    assert model.dirichlet_bcs[1] == pytest.approx(5.0)
    assert model.dirichlet_bcs[7] == -1.0


def test_pulsatile_bcs_at_time_zero_keep_values():
    model = _model(dirichlet_bcs_tmp=[(0, 0, 1.5)], dt=0.1, period=2.0)
    assign_bcs(model)
    assign_pulsatile_bcs(model, 0)
    assert model.dirichlet_bcs[0] == pytest.approx(1.5)


def test_set_nr_initial_value_imposes_fixed_values():
    bd_iu = np.ones((2, 3), dtype=int)
    bd_iu[0, 0] = 0
    bd_u = np.full((2, 3), 3.0)
    model = _model(bd_iu=bd_iu, bd_u=bd_u, bd_ip=[1, 0], bd_p=[0.0, 7.0])
    model.dirichlet_bcs[:] = 9.0
    set_nr_initial_value(model)
    assert model.u_fluid.tolist() == [3.0, 0.0]
    assert model.v_fluid.tolist() == [0.0, 0.0]
    assert model.p_fluid.tolist() == [0.0, 7.0]
    assert not model.dirichlet_bcs.any()


def test_local_bc_system_marks_dirichlet_rows():
    model = _model(dirichlet_bcs_tmp=[(0, 1, 2.5), (1, 3, -1.0)])
    assign_bcs(model)
    markers = [0] * 32
    markers[1] = -1
    markers[7] = -1
    element = Element(node_for_assy_bcs=markers, global_dofs=list(range(32)))
    klocal, flocal = local_bc_system(model, element)
    assert klocal.shape == (32, 32)
    assert klocal[1, 1] == 1.0 and klocal[7, 7] == 1.0
    assert klocal.sum() == 2.0
    assert flocal[1] == 2.5 and flocal[7] == -1.0
    assert np.count_nonzero(flocal) == 2


def test_calc_tau2_steady_without_velocity():
    model = _model(solver=SolverKind.STEADY_NAVIERSTOKES, reynolds=1.0)
    assert calc_tau2(model, [0.0, 0.0, 0.0]) == pytest.approx(0.25)


def test_calc_tau2_decreases_with_speed_and_time_term():
    steady = _model(solver=SolverKind.STEADY_NAVIERSTOKES)
    unsteady = _model(solver=SolverKind.UNSTEADY_NAVIERSTOKES, dt=0.1)
    still = calc_tau2(steady, [0.0, 0.0, 0.0])
    assert calc_tau2(steady, [1.0, 0.0, 0.0]) < still
    assert calc_tau2(unsteady, [0.0, 0.0, 0.0]) < still


def test_calc_tau_rejects_stokes_solver():
    model = _model(solver=SolverKind.STEADY_STOKES)
    with pytest.raises(ValueError):
        calc_tau(model, np.eye(3), [0.0, 0.0, 0.0])
    with pytest.raises(ValueError):
        calc_tau2(model, [0.0, 0.0, 0.0])


def test_calc_tau_decreases_with_velocity():
    model = _model(solver=SolverKind.STEADY_NAVIERSTOKES, reynolds=10.0)
    slow = calc_tau(model, np.eye(3), [0.1, 0.0, 0.0])
    fast = calc_tau(model, np.eye(3), [5.0, 0.0, 0.0])
    assert 0.0 < fast < slow


def test_calc_tau3_without_velocity_matches_tau2():
    model = _model(solver=SolverKind.UNSTEADY_NAVIERSTOKES, dt=0.05, dx=0.5, dy=0.2, dz=0.3)
    zero = [0.0, 0.0, 0.0]
    assert calc_tau3(model, hex8_dndr(0.0, 0.0, 0.0), zero) == pytest.approx(
        calc_tau2(model, zero)
    )


def test_calc_tau3_bounded_by_time_step():
    model = _model(solver=SolverKind.UNSTEADY_NAVIERSTOKES, dt=0.1)
    tau = calc_tau3(model, hex8_dndr(0.2, -0.3, 0.1), [1.0, 2.0, -0.5])
    assert 0.0 < tau < model.dt / 2.0