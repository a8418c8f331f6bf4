[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "stcrpn"
version = "1.14.0"
description = "An RPN calculator built on an 18-digit decimal floating-point type, with keypad debouncing and a two-line LCD model"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "calculator",
    "rpn",
    "decimal",
    "floating-point",
    "lcd",
    "keypad",
    "debounce",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
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
stcrpn = "stcrpn.calculator:main"

[tool.hatch.build.targets.wheel]
packages = ["stcrpn"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
