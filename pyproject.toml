[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "flexalign"
version = "0.1.0"
description = "Seed and anchor data structures for short-read mapping, with paired-end scoring and MAPQ evaluation helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["bioinformatics", "read mapping", "seeds", "anchors", "paired-end", "mapq"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Bio-Informatics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["flexalign"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
