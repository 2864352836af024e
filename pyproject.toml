[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "springbase"
version = "0.1.0"
description = "Assertion helpers that report to a recorder, and lock-guarded value holders."
requires-python = ">=3.10"
dependencies = []
keywords = ["assert", "testing", "atomic", "thread-safe", "unit-test"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Testing :: Unit",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["springbase"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
