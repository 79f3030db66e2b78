[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "routelab"
version = "0.1.0"
description = "Network topology generators, routing strategies and a discrete-event packet simulator, plus a set of classic combinatorial algorithms"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "network",
    "simulation",
    "routing",
    "jellyfish",
    "fat-tree",
    "k-shortest-paths",
    "discrete-event",
    "algorithms",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
routelab-simulate = "routelab.simulator:main"
routelab-paths = "routelab.pathsim:main"

[tool.hatch.build.targets.wheel]
packages = ["routelab"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
