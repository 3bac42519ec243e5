[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kresilience"
version = "0.1.0"
description = "Application-level checkpoint and restart for iterative computations"
requires-python = ">=3.10"
dependencies = []
keywords = ["checkpoint", "restart", "resilience", "fault-tolerance", "recovery"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Recovery Tools",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
kresilience-demo = "kresilience.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["kresilience"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
