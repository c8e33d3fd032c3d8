[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "simuverse"
version = "0.2.0"
description = "CPU-side building blocks for particle, fluid, noise and cloth simulations: lattices, meshes, constraints and uniform layouts."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "simulation",
    "lattice-boltzmann",
    "position-based-dynamics",
    "cloth",
    "vector-field",
    "noise",
    "mesh",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
    "Topic :: Multimedia :: Graphics :: 3D Modeling",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["simuverse"]

[tool.hatch.build.targets.sdist]
include = ["simuverse", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
