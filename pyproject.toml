[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "clarify"
version = "0.1.0"
description = "Value types, queries, filters and resource views for the Clarify JSON-RPC API."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "clarify",
    "json-rpc",
    "time-series",
    "query-builder",
    "industrial-data",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["clarify"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]
