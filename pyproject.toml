[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ferrodoc"
version = "0.1.0"
description = "FJSON encoding of BSON-style document values, wire protocol errors and SQL condition helpers for a document database front-end"
requires-python = ">=3.10"
dependencies = []
keywords = ["bson", "json", "fjson", "document", "database", "wire-protocol"]
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
    "Topic :: Database",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["ferrodoc"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
