from itertools import product

import numpy as np
import pytest

from fluidfem.gauss import gauss_line
from fluidfem.model import Element, FluidModel, SubProperty
from fluidfem.shape import hex8_dndr, hex8_n
from fluidfem.stokes import diffusion_term, pressure_term, stokes_element
from fluidfem.xfem_stokes import (
    diffusion_term_xfem,
    local_refinement,
    pressure_term_xfem,
    pspg_term_xfem,
    xfem_stokes_element,
    xfem_stokes_element_fine,
    xfem_stokes_element_subcells,
)

CUBE = np.array(
    [
        [0, 0, 0],
        [1, 0, 0],
        [1, 1, 0],
        [0, 1, 0],
        [0, 0, 1],
        [1, 0, 1],
        [1, 1, 1],
        [0, 1, 1],
    ],
    dtype=float,
)


def make_model(sdf, sub_div=1, coords=CUBE, sub_elm=None):
    element = Element(node_nums_prev=list(range(8)), sub_elm=sub_elm or [])
    return FluidModel(
        x=coords,
        elements=[element],
        dx=1.0,
        dy=1.0,
        dz=1.0,
        mu=1.0,
        sdf=np.asarray(sdf, dtype=float),
        sub_div=sub_div,
    )


def test_local_refinement_pinned():
    assert local_refinement(3) == [2.0, -2.0, 0.0]


@pytest.mark.parametrize("n", [1, 2, 3, 4, 5, 6])
def test_local_refinement_invariants(n):
    b = local_refinement(n)
    assert len(b) == n
    assert sum(b) == 0
    centres = sorted(v / n for v in b)
    assert all(-1 < c < 1 for c in centres)
    gaps = np.diff(centres)
    assert np.allclose(gaps, 2.0 / n)


def test_local_refinement_empty_for_nonpositive():
    assert local_refinement(0) == []
    assert local_refinement(-2) == []


@pytest.mark.parametrize("sub_div", [1, 2, 3])
def test_deep_fluid_matches_plain_stokes(sub_div):
    model = make_model(np.full(8, 10.0), sub_div=sub_div)
    k_xfem, f_xfem = xfem_stokes_element(model, 0)
    k_plain, f_plain = stokes_element(model, 0)
    assert np.allclose(k_xfem, k_plain, atol=1e-10)
    assert np.allclose(f_xfem, f_plain)


def test_subcells_match_plain_stokes_in_fluid():
    rule = gauss_line(2)
    cell = SubProperty()
    for (g1, w1), (g2, w2), (g3, w3) in product(rule, repeat=3):
        cell.sub_gx.append(g1)
        cell.sub_gy.append(g2)
        cell.sub_gz.append(g3)
        cell.sub_weight.append(w1 * w2 * w3)
    model = make_model(np.full(8, 10.0), sub_elm=[cell])
    k_sub, _ = xfem_stokes_element_subcells(model, 0)
    k_plain, _ = stokes_element(model, 0)
    assert np.allclose(k_sub, k_plain, atol=1e-10)


def test_subcells_empty_gives_zero_system():
    model = make_model(np.full(8, 10.0))
    klocal, flocal = xfem_stokes_element_subcells(model, 0)
    assert not klocal.any()
    assert not flocal.any()


def test_solid_element_keeps_only_pspg():
    model = make_model(np.full(8, -1.0))
    klocal, _ = xfem_stokes_element(model, 0)
    k_plain, _ = stokes_element(model, 0)
    for c in range(3):
        assert not klocal[c::4, :].any()
        assert not klocal[3::4, c::4].any()
    assert np.allclose(klocal[3::4, 3::4], k_plain[3::4, 3::4])


def test_cut_element_structure():
    sdf = CUBE[:, 2] - 0.3
    model = make_model(sdf, sub_div=2)
    klocal, _ = xfem_stokes_element(model, 0)
    k_plain, _ = stokes_element(model, 0)
    for c in range(3):
        block = klocal[c::4, c::4]
        assert np.allclose(block, block.T)
        assert np.allclose(klocal[c::4, 3::4], klocal[3::4, c::4].T)
    assert np.allclose(klocal[3::4, 3::4], k_plain[3::4, 3::4])
    # Velocity functions of solid nodes are damped but not identical to the open case.
    assert not np.allclose(klocal[0::4, 0::4], k_plain[0::4, 0::4])


def test_fine_rule_matches_plain_stokes_in_fluid():
    model = make_model(np.full(8, 10.0))
    k_fine, _ = xfem_stokes_element_fine(model, 0)
    k_plain, _ = stokes_element(model, 0)
    assert np.allclose(k_fine, k_plain, rtol=1e-6, atol=1e-8)


def test_fine_rule_warns_for_solid_element():
    model = make_model(np.full(8, -1.0))
    with pytest.warns(RuntimeWarning):
        klocal, _ = xfem_stokes_element_fine(model, 0)
    assert not klocal[0::4, :].any()


def test_singular_geometry_raises():
    model = make_model(np.full(8, 10.0), coords=np.zeros((8, 3)))
    with pytest.raises(ZeroDivisionError):
        xfem_stokes_element(model, 0)


def test_diffusion_term_xfem_matches_plain_when_undamped():
    model = make_model(np.full(8, 10.0))
    dndr = hex8_dndr(0.2, -0.4, 0.1)
    k_xfem = diffusion_term_xfem(model, np.zeros((32, 32)), dndr, dndr, CUBE, 0.5)
    k_plain = diffusion_term(model, np.zeros((32, 32)), dndr, CUBE, 0.5)
    assert np.allclose(k_xfem, k_plain)


def test_pressure_term_xfem_matches_plain_when_undamped():
    n = hex8_n(0.2, -0.4, 0.1)
    dndr = hex8_dndr(0.2, -0.4, 0.1)
    k_xfem = pressure_term_xfem(np.zeros((32, 32)), n, dndr, dndr, CUBE, 0.5)
    k_plain = pressure_term(np.zeros((32, 32)), n, dndr, CUBE, 0.5)
    assert np.allclose(k_xfem, k_plain)


def test_pspg_term_xfem_is_symmetric_with_zero_row_sums():
    model = make_model(np.full(8, 10.0))
    dndr = hex8_dndr(0.3, 0.1, -0.5)
    klocal = pspg_term_xfem(model, np.zeros((32, 32)), dndr, CUBE, 1.0)
    block = klocal[3::4, 3::4]
    assert np.allclose(block, block.T)
    assert np.allclose(block.sum(axis=1), 0.0)
    assert np.all(np.linalg.eigvalsh(block) > -1e-12)
    assert block.diagonal().sum() > 0
    assert not klocal[0::4, :].any()