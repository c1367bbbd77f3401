[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fluidfem"
version = "0.1.0"
description = "Finite element building blocks for incompressible flow on hexahedral voxel meshes: Stokes, steady and unsteady Navier-Stokes element systems with XFEM and Darcy wall treatments."
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "finite element",
    "fem",
    "stokes",
    "navier-stokes",
    "xfem",
    "darcy",
    "cfd",
    "supg",
    "pspg",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
    "numpy",
]

[tool.hatch.build.targets.wheel]
packages = ["fluidfem"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
