[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hydrakit"
version = "0.1.0"
description = "Small utility library: an XML tree and token-driven parser, zlib decompression, configuration parsing and bit-manipulation helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["xml", "tree", "parser", "bit-manipulation", "configuration", "zlib"]
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
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["hydrakit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
