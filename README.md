# fluidfem

Finite element building blocks for incompressible flow on structured
hexahedral (voxel) meshes. The package computes element matrices and
right-hand sides for:

- steady Stokes flow, with PSPG stabilisation;
- steady Navier–Stokes flow in Newton form (the matrix acts on the increment,
  the vector is the residual at the current fields), with SUPG/PSPG
  stabilisation;
- unsteady Navier–Stokes flow, with a Crank–Nicolson split of the viscous,
  advective and Darcy terms, an advecting velocity extrapolated from the two
  stored time levels, and SUPG/PSPG stabilisation.

Walls can be represented either by a signed-distance weighting of the
velocity shape functions on cut elements (XFEM style, Stokes only) or by a
Darcy resistance term driven by an element volume fraction.

## Installation

```
pip install .
```

With what the test suite needs:

```
pip install .[test]
```

## Modules

- `fluidfem.basic`: closed-form `inverse_2x2`, `inverse_3x3` and
  `determinant_3x3`; singular matrices raise `ZeroDivisionError`, wrongly
  shaped input raises `ValueError`. Also the constants `GRAVITY`, `PI`,
  `ON` and `OFF`.
- `fluidfem.gauss`: `QuadratureRule` (points and weights, iterable as
  `(point, weight)` pairs) and `gauss_line`, `gauss_tetra`,
  `gauss_triangle`. An unknown order raises `ValueError`. Line orders 2, 3
  and 4 give the usual Gauss–Legendre rules; orders 5, 6, 7, 20, 30 and 31
  all give the 31-point rule.
- `fluidfem.shape`: shape functions and natural-coordinate derivatives:
  `hex8_n`, `hex8_dndr`, `quad4_n`, `quad4_dndr`, `quad8_n`, `tri3_n`,
  `tri3_dndr`, `tri6_n`, `tri6_dndr`.
- `fluidfem.mathfem`: the element Jacobian and physical gradients:
  `jacobian`, `dndx`, and the 2-D forms `jacobian_2d`, `dndx_2d`.
- `fluidfem.model`: the model state: `FluidModel` (grid size and spacing,
  node coordinates, elements, material, Newton and time parameters, wall
  fields and nodal fields), `Element`, `SubProperty`, `SolutionData`, and the
  enums `SolverKind` and `BoundaryMethod`.
- `fluidfem.boundary`: `assign_bcs`, `assign_pulsatile_bcs`,
  `set_nr_initial_value`, `local_bc_system`, and the stabilisation
  parameters `calc_tau`, `calc_tau2`, `calc_tau3`. `calc_tau` and
  `calc_tau2` raise `ValueError` unless the solver is steady or unsteady
  Navier–Stokes.
- `fluidfem.variables`: copying a solution vector back into the fields:
  `update_from_solution`, `update_with_relaxation` (Newton update with the
  initial or regular relaxation factor), `advance_time_level`.
- `fluidfem.stokes`: `stokes_element`, `darcy_stokes_element`, and the
  single-point terms `diffusion_term`, `pressure_term`, `pspg_term`.
- `fluidfem.xfem_stokes`: `xfem_stokes_element` (equal sub-cells,
  `model.sub_div` per direction), `xfem_stokes_element_subcells` (the
  sub-cells stored on the element), `xfem_stokes_element_fine` (a dense
  tensor Gauss rule), `local_refinement`, and the single-point terms
  `diffusion_term_xfem`, `pressure_term_xfem`, `pspg_term_xfem`.
- `fluidfem.steady_ns`: `steady_ns_element`, `darcy_steady_ns_element`.
- `fluidfem.unsteady_ns`: `velocity_values`, `unsteady_ns_element`,
  `darcy_unsteady_ns_element`.

Every element routine takes a `FluidModel` and an element index and returns
`(klocal, flocal)` as NumPy arrays, ordered with four unknowns per node
(u, v, w, p).

## Example

```python
import numpy as np
from fluidfem.gauss import gauss_line
from fluidfem.shape import hex8_dndr
from fluidfem.mathfem import jacobian

# unit cube element
x = np.array([
    [0, 0, 0], [1, 0, 0], [1, 1, 0], [0, 1, 0],
    [0, 0, 1], [1, 0, 1], [1, 1, 1], [0, 1, 1],
], dtype=float)

rule = gauss_line(2)
volume = 0.0
for g1, w1 in rule:
    for g2, w2 in rule:
        for g3, w3 in rule:
            j = jacobian(hex8_dndr(g1, g2, g3), x)
            volume += np.linalg.det(j) * w1 * w2 * w3
print(volume)  # 1.0
```

## What the package does not do

It builds element systems only. It does not read input or parameter files,
generate or partition meshes, assemble or solve the global sparse system,
run the Newton or time-stepping loops, or write result files. Those are left
to the caller, who adds each `(klocal, flocal)` into a global system with the
solver of their choice and passes the solution back through
`fluidfem.variables`. There is no command-line program.