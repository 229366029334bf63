[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jsonvalue"
version = "2.14.1"
description = "In-memory JSON values with strict UTF-8 checking, copying, equality and format-string pack/unpack"
requires-python = ">=3.10"
dependencies = []
keywords = ["json", "pack", "unpack", "utf-8", "values", "validation"]
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
    "Topic :: Software Development :: Libraries",
    "Topic :: File Formats :: JSON",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["jsonvalue"]

[tool.hatch.build.targets.sdist]
include = ["jsonvalue", "tests", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 90
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
