[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ftslab"
version = "0.1.0"
description = "Command-line tools and helpers for exploring SQLite FTS5 full-text search and BM25 ranking"
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = [
    "sqlite",
    "fts5",
    "full-text search",
    "bm25",
    "ranking",
    "search",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database",
    "Topic :: Text Processing :: Indexing",
    "Topic :: Education",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
setup-validation = "ftslab.setup.cli:main"
fts5-foundation = "ftslab.foundation.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["ftslab"]

[tool.hatch.build.targets.sdist]
include = [
    "ftslab",
    "tests",
    "pyproject.toml",
]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
