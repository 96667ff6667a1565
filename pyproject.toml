[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nestgen"
version = "0.1.0"
description = "Stochastic simulation of paper-wasp nest construction on a hexagonal comb lattice"
requires-python = ">=3.10"
keywords = ["simulation", "wasp", "nest", "hexagonal", "comb", "artificial life"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Artificial Life",
]
dependencies = [
    "pymongo",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
nestgen = "nestgen.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["nestgen"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
