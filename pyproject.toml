[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nachoskit"
version = "0.1.0"
description = "Teaching-kernel building blocks: NOFF executables, COFF conversion, paged address spaces, thread scheduling and command-line options"
requires-python = ">=3.10"
dependencies = []
keywords = ["nachos", "noff", "coff", "operating-system", "kernel", "scheduler", "paging"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
    "Topic :: System :: Operating System Kernels",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
coff2noff = "nachoskit.convert:main"

[tool.hatch.build.targets.wheel]
packages = ["nachoskit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
