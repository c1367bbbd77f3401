"""Element systems for incompressible Stokes and Navier-Stokes flow on hexahedral meshes."""

__version__ = "0.1.0"

__all__ = [
    "basic",
    "gauss",
    "shape",
    "mathfem",
    "model",
    "boundary",
    "variables",
    "stokes",
    "xfem_stokes",
    "steady_ns",
    "unsteady_ns",
]