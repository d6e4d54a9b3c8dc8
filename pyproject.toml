[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bulkasync"
version = "0.0.1"
description = "Thread-backed batching of commands into bulks written to the console and to a log file"
requires-python = ">=3.10"
dependencies = []
keywords = ["logging", "bulk", "batching", "threads", "commands"]
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
    "Topic :: System :: Logging",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
bulkasync = "bulkasync.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["bulkasync"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
