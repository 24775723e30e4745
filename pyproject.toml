[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "smtterms"
version = "0.1.0"
description = "Hash-consed SMT terms with linear real arithmetic normalization, rewriting and a parser context"
requires-python = ">=3.10"
dependencies = []
keywords = ["smt", "terms", "hash-consing", "linear-arithmetic", "rewriting"]
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
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["smtterms"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
