[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pppi"
version = "0.1.0"
description = "Path-tracking steering controller: pure pursuit plus a PI correction on lateral error, low-pass filtered and clamped."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "pure pursuit",
    "path tracking",
    "steering",
    "PI controller",
    "autonomous vehicle",
    "control",
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
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
pppi-controller = "pppi.node:main"

[tool.hatch.build.targets.wheel]
packages = ["pppi"]

[tool.hatch.build.targets.sdist]
include = ["pppi", "tests", "README.md"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
