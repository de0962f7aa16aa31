[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bridgesolve"
version = "0.1.0"
description = "Board grouping, thread-slot management, timing statistics and quick-trick estimates for a bridge double dummy solver"
requires-python = ">=3.10"
dependencies = []
keywords = ["bridge", "double dummy", "card games", "quick tricks", "timing"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["bridgesolve"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"
