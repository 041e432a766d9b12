[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "yuri"
version = "0.1.0"
description = "Lexer and module parser for the Yuri shading language"
requires-python = ">=3.10"
dependencies = []
keywords = ["shader", "shading-language", "lexer", "tokenizer", "parser", "recursive-descent"]
classifiers = [
    "Development Status :: 2 - Pre-Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
yuri = "yuri.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["yuri"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
