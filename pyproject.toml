[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "minic"
version = "1.0.1"
description = "Building blocks of a small C-subset compiler: IR types and values, an ARM32 instruction sequence, a register allocator and an abstract syntax tree with Graphviz DOT output"
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "arm32", "assembly", "intermediate-representation", "ast", "register-allocation", "graphviz"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["minic"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
