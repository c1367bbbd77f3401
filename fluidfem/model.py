"""Data held by a fluid finite-element model: mesh, elements, fields and solution."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import numpy as np

_SOLUTION_NAMES = (
    "soln",
    "soln_init",
    "soln_prev",
    "soln_prev2",
    "soln_prev3",
    "soln_prev4",
    "soln_cur",
    "soln_dot",
    "soln_dot_prev",
    "soln_dot_cur",
    "soln_applied",
)


class SolverKind(enum.Enum):
    """Which flow equations the model is set up to solve."""

    STEADY_STOKES = 0
    STEADY_NAVIERSTOKES = 1
    UNSTEADY_NAVIERSTOKES = 2


class BoundaryMethod(enum.Enum):
    """How an immersed wall is represented in the fluid mesh."""

    XFEM = 0
    DARCY = 1


@dataclass
class SubProperty:
    """Geometry and integration data of one sub-cell of an element."""

    sub_elm_sdf: List[float] = field(default_factory=list)
    sub_elm_x: List[float] = field(default_factory=list)
    sub_gx: List[float] = field(default_factory=list)
    sub_gy: List[float] = field(default_factory=list)
    sub_gz: List[float] = field(default_factory=list)
    sub_weight: List[float] = field(default_factory=list)


class SolutionData:
    """Solution vectors of the current and previous steps."""

    def __init__(self) -> None:
        self.vecsize = 0
        for name in _SOLUTION_NAMES:
            setattr(self, name, np.zeros(0))
        self.soln_extrap = np.zeros(0)
        self.soln_adjoint = np.zeros(0)
        self.td = np.zeros(100)
        self.node_map: List[int] = []
        self.node_map_prev: List[int] = []

    def initialize(self, size: int) -> None:
        """Size every solution vector to ``size`` and fill it with zeros."""
        if size < 0:
            raise ValueError("solution size must not be negative")
        self.vecsize = size
        for name in _SOLUTION_NAMES:
            setattr(self, name, np.zeros(size))

    def set_zero(self) -> None:
        """Zero the current solution in place."""
        self.soln[:] = 0.0


@dataclass
class Element:
    """Connectivity and assembly bookkeeping of one hexahedral element."""

    subdomain_id: int = 0
    dofs_per_node: int = 4
    nodes_per_element: int = 8
    num_subdomains: int = 1
    node_nums: List[int] = field(default_factory=list)
    node_nums_prev: List[int] = field(default_factory=list)
    dofs_nums: List[int] = field(default_factory=list)
    dofs_nums_prev: List[int] = field(default_factory=list)
    node_for_assy_bcs: List[int] = field(default_factory=list)
    node_for_assy: List[int] = field(default_factory=list)
    global_dofs: List[int] = field(default_factory=list)
    node_for_assy_bcs_adjoint: List[int] = field(default_factory=list)
    node_for_assy_adjoint: List[int] = field(default_factory=list)
    global_dofs_adjoint: List[int] = field(default_factory=list)
    sub_x: List[List[List[float]]] = field(default_factory=list)
    sub_elm_node: List[List[SubProperty]] = field(default_factory=list)
    sub_elm: List[SubProperty] = field(default_factory=list)

    def _node_dofs(self, nsize: int) -> List[int]:
        dofs = [0] * nsize
        for ii, node in enumerate(self.node_nums[: self.nodes_per_element]):
            for k in range(4):
                dofs[ii * self.dofs_per_node + k] = node * self.dofs_per_node + k
        return dofs

    def prepare_elem_data(self, nsize: int) -> None:
        """Fill ``global_dofs`` with the four flow unknowns of every node."""
        self.global_dofs = self._node_dofs(nsize)

    def prepare_adjoint_elem_data(self, nsize: int) -> None:
        """Fill ``global_dofs_adjoint`` with the four unknowns of every node."""
        self.global_dofs_adjoint = self._node_dofs(nsize)

    def prepare_adjoint_elem_data_bd(
        self, dofs_per_node_in_element: Sequence[Sequence[int]], nsize: int, ie: int
    ) -> None:
        """Fill ``global_dofs_adjoint`` where boundary nodes carry three extra unknowns."""
        dofs = [0] * nsize
        pos = 0
        row = dofs_per_node_in_element[ie]
        for p in range(self.nodes_per_element):
            first = self.dofs_nums[p]
            if row[p] > self.dofs_per_node:
                count, step = 7, self.dofs_per_node + 3
            else:
                count, step = 4, self.dofs_per_node
            for k in range(count):
                dofs[pos + k] = first + k
            pos += step
        self.global_dofs_adjoint = dofs


def _filled(value, shape, fill, dtype=float) -> np.ndarray:
    if value is None:
        return np.full(shape, fill, dtype=dtype)
    return np.asarray(value, dtype=dtype)


@dataclass
class FluidModel:
    """State of a fluid simulation on a structured hexahedral grid."""

    solver: SolverKind = SolverKind.STEADY_STOKES
    boundary_method: BoundaryMethod = BoundaryMethod.XFEM
    rank: int = 0
    num_ranks: int = 1

    nx: int = 0
    ny: int = 0
    nz: int = 0
    dx: float = 0.0
    dy: float = 0.0
    dz: float = 0.0
    lx: float = 0.0
    ly: float = 0.0
    lz: float = 0.0

    nodes_per_element: int = 8
    dofs_per_node: int = 4

    x: np.ndarray = field(default_factory=lambda: np.zeros((0, 3)))
    elements: List[Element] = field(default_factory=list)

    bd_u: Optional[np.ndarray] = None
    bd_iu: Optional[np.ndarray] = None
    bd_p: Optional[np.ndarray] = None
    bd_ip: Optional[np.ndarray] = None

    dirichlet_bcs_tmp: List[Tuple[float, float, float]] = field(default_factory=list)
    dirichlet_bcs: Optional[np.ndarray] = None

    rho: float = 1.0
    mu: float = 1.0
    nu: float = 1.0
    reynolds: float = 1.0

    nr_tolerance: float = 1e-6
    nr_itr_initial: int = 0
    nr_itr: int = 1
    relaxation_param: float = 1.0
    relaxation_param_initial: float = 1.0

    dt: float = 1.0
    time_max: int = 0
    pulsatile_flow: bool = False
    pulse_begin_itr: int = 0
    period: float = 1.0

    max_depth: int = 0
    sub_div: int = 1
    sub_div_total: int = 1

    resistance: float = 0.0
    alpha: float = 1.0

    phi: Optional[np.ndarray] = None
    phi_ex: Optional[np.ndarray] = None
    phi_vof: Optional[np.ndarray] = None
    sdf: Optional[np.ndarray] = None

    u: Optional[np.ndarray] = None
    v: Optional[np.ndarray] = None
    w: Optional[np.ndarray] = None
    p: Optional[np.ndarray] = None

    u_fluid: Optional[np.ndarray] = None
    v_fluid: Optional[np.ndarray] = None
    w_fluid: Optional[np.ndarray] = None
    p_fluid: Optional[np.ndarray] = None

    uf: Optional[np.ndarray] = None
    vf: Optional[np.ndarray] = None
    wf: Optional[np.ndarray] = None
    pf: Optional[np.ndarray] = None

    sort_node: Optional[np.ndarray] = None
    sort_elm: Optional[np.ndarray] = None
    node_map: Optional[np.ndarray] = None
    assy_for_soln: Optional[np.ndarray] = None
    num_dofs_global: Optional[int] = None

    soln: SolutionData = field(default_factory=SolutionData)

    def __post_init__(self) -> None:
        self.solver = SolverKind(self.solver)
        self.boundary_method = BoundaryMethod(self.boundary_method)
        self.x = np.asarray(self.x, dtype=float).reshape(-1, 3)
        n = self.num_nodes
        ne = self.num_elements
        ng = self.num_grid_nodes
        ndof = self.dofs_per_node * n

        self.bd_u = _filled(self.bd_u, (n, 3), 0.0)
        self.bd_iu = _filled(self.bd_iu, (n, 3), 1, dtype=int)
        self.bd_p = _filled(self.bd_p, (n,), 0.0)
        self.bd_ip = _filled(self.bd_ip, (n,), 1, dtype=int)
        self.dirichlet_bcs = _filled(self.dirichlet_bcs, (ndof,), 0.0)

        self.phi = _filled(self.phi, (ne,), 1.0)
        self.phi_ex = _filled(self.phi_ex, (ne,), 1.0)
        self.phi_vof = _filled(self.phi_vof, (ne,), 1.0)
        self.sdf = _filled(self.sdf, (n,), 0.0)

        for name in ("u", "v", "w", "p"):
            setattr(self, name, _filled(getattr(self, name), (ng,), 0.0))
        for name in ("u_fluid", "v_fluid", "w_fluid", "p_fluid"):
            setattr(self, name, _filled(getattr(self, name), (n,), 0.0))
        for name in ("uf", "vf", "wf", "pf"):
            setattr(self, name, _filled(getattr(self, name), (2, n), 0.0))

        self.sort_node = (
            np.arange(n) if self.sort_node is None else np.asarray(self.sort_node, dtype=int)
        )
        self.sort_elm = (
            np.arange(ne) if self.sort_elm is None else np.asarray(self.sort_elm, dtype=int)
        )
        self.node_map = (
            np.arange(n) if self.node_map is None else np.asarray(self.node_map, dtype=int)
        )
        self.assy_for_soln = (
            np.arange(ndof)
            if self.assy_for_soln is None
            else np.asarray(self.assy_for_soln, dtype=int)
        )
        if self.num_dofs_global is None:
            self.num_dofs_global = len(self.assy_for_soln)
        if self.soln.vecsize == 0 and ndof > 0:
            self.soln.initialize(ndof)

    @property
    def num_nodes(self) -> int:
        """Number of fluid nodes."""
        return len(self.x)

    @property
    def num_elements(self) -> int:
        """Number of fluid elements."""
        return len(self.elements)

    @property
    def num_bd_nodes(self) -> int:
        """Number of prescribed Dirichlet entries."""
        return len(self.dirichlet_bcs_tmp)

    @property
    def num_grid_nodes(self) -> int:
        """Number of nodes of the full structured grid."""
        return (self.nx + 1) * (self.ny + 1) * (self.nz + 1)