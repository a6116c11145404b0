[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tagkit"
version = "0.1.0"
description = "PCG random number generators, point conditioning and small runtime utilities"
requires-python = ">=3.10"
keywords = ["pcg", "random", "rng", "conditioning", "normalisation", "timing"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: Scientific/Engineering :: Mathematics",
]
dependencies = [
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["tagkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
