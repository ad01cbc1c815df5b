[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "terasim"
version = "0.1.0"
description = "Terahertz-band link models: directional antennas, channel link budgets and scenario parameters"
requires-python = ">=3.10"
dependencies = []
keywords = ["terahertz", "thz", "antenna", "channel", "link budget", "wireless"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
terasim-macro = "terasim.macro:main"
terasim-nano = "terasim.nano:main"

[tool.hatch.build.targets.wheel]
packages = ["terasim"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
