[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "graphsplit"
version = "0.1.0"
description = "Graph and mesh file handling, vertex-separator refinement and fill-in computation for sparse-matrix orderings"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "graph",
    "mesh",
    "vertex separator",
    "nested dissection",
    "fill-in",
    "sparse matrix",
    "symbolic factorization",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
graphsplit-cmpfillin = "graphsplit.cmpfillin:main"

[tool.hatch.build.targets.wheel]
packages = ["graphsplit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
