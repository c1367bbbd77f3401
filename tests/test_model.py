import numpy as np
import pytest

from fluidfem.model import (
    BoundaryMethod,
    Element,
    FluidModel,
    SolutionData,
    SolverKind,
    SubProperty,
)


def test_enum_values_match_source():
    assert SolverKind.STEADY_STOKES.value == 0
    assert SolverKind.STEADY_NAVIERSTOKES.value == 1
    assert SolverKind.UNSTEADY_NAVIERSTOKES.value == 2
    assert BoundaryMethod(1) is BoundaryMethod.DARCY


def test_solution_data_starts_with_td_of_100():
    data = SolutionData()
    assert len(data.td) == 100
    assert data.vecsize == 0


def test_solution_data_initialize_zeroes_all_vectors():
    data = SolutionData()
    data.initialize(6)
    assert data.vecsize == 6
    for vec in (data.soln, data.soln_prev, data.soln_prev4, data.soln_dot, data.soln_applied):
        assert vec.shape == (6,)
        assert not vec.any()


def test_solution_vectors_are_independent():
    data = SolutionData()
    data.initialize(3)
    data.soln[1] = 2.0
    assert data.soln_prev[1] == 0.0
    assert data.soln_init[1] == 0.0


def test_set_zero_clears_current_solution():
    data = SolutionData()
    data.initialize(4)
    data.soln[:] = [1.0, 2.0, 3.0, 4.0]
    data.set_zero()
    assert data.soln.tolist() == [0.0, 0.0, 0.0, 0.0]


def test_initialize_rejects_negative_size():
    with pytest.raises(ValueError):
        SolutionData().initialize(-1)


def test_element_defaults():
    elem = Element()
    assert elem.dofs_per_node == 4
    assert elem.nodes_per_element == 8
    assert elem.subdomain_id == 0


def test_prepare_elem_data_consecutive_nodes():
    elem = Element(node_nums=list(range(8)))
    elem.prepare_elem_data(32)
    assert elem.global_dofs == list(range(32))


def test_prepare_elem_data_maps_node_numbers():
    nodes = [5, 2, 9, 0, 1, 3, 4, 7]
    elem = Element(node_nums=nodes)
    elem.prepare_elem_data(32)
    for ii, node in enumerate(nodes):
        block = elem.global_dofs[4 * ii : 4 * ii + 4]
        assert block[0] == 4 * node
        assert block == [block[0] + k for k in range(4)]


def test_prepare_adjoint_elem_data_matches_forward():
    nodes = [8, 1, 6, 3, 4, 5, 2, 7]
    elem = Element(node_nums=nodes)
    elem.prepare_elem_data(32)
    elem.prepare_adjoint_elem_data(32)
    assert elem.global_dofs_adjoint == elem.global_dofs


def test_prepare_adjoint_elem_data_bd_extends_boundary_nodes():
    elem = Element(dofs_nums=[0, 7, 11, 15, 19, 23, 27, 31])
    table = [[7, 4, 4, 4, 4, 4, 4, 4]]
    elem.prepare_adjoint_elem_data_bd(table, 35, 0)
    assert elem.global_dofs_adjoint == list(range(35))


def test_prepare_adjoint_elem_data_bd_without_boundary():
    elem = Element(dofs_nums=[4 * k for k in range(8)])
    table = [[0] * 8, [4] * 8]
    elem.prepare_adjoint_elem_data_bd(table, 32, 1)
    assert elem.global_dofs_adjoint == list(range(32))


def test_sub_property_lists_are_separate():
    a, b = SubProperty(), SubProperty()
    a.sub_gx.append(0.5)
    assert b.sub_gx == []


def test_fluid_model_sizes_fields():
    x = np.zeros((3, 3))
    model = FluidModel(nx=1, ny=1, nz=1, x=x, elements=[Element()])
    assert model.num_nodes == 3
    assert model.num_elements == 1
    assert model.u_fluid.shape == (3,)
    assert model.uf.shape == (2, 3)
    assert model.u.shape == (model.num_grid_nodes,)
    assert model.dirichlet_bcs.shape == (12,)
    assert model.soln.vecsize == 12
    assert model.sort_node.tolist() == [0, 1, 2]
    assert model.num_dofs_global == 12


def test_fluid_model_defaults_leave_nodes_free():
    model = FluidModel(x=np.zeros((2, 3)))
    assert (model.bd_iu == 1).all()
    assert (model.bd_ip == 1).all()


def test_fluid_model_rejects_unknown_solver():
    with pytest.raises(ValueError):
        FluidModel(solver=7)