[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jmlang"
version = "0.1.0"
description = "A small expression language for building and transforming JSON data"
requires-python = ">=3.10"
dependencies = []
keywords = ["json", "interpreter", "expression-language", "transformation", "dsl"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Interpreters",
    "Topic :: File Formats :: JSON",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[project.scripts]
jml = "jmlang.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["jmlang"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
