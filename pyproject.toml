[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tcpcore"
version = "0.1.0"
description = "Building blocks of a TCP receiver: bounded byte streams, wrapping sequence numbers, reassembly and segment messages."
requires-python = ">=3.10"
dependencies = []
keywords = ["tcp", "networking", "byte-stream", "reassembler", "sequence-numbers", "protocol"]
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
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = [
    "pytest",
    "hypothesis",
]

[tool.hatch.build.targets.wheel]
packages = ["tcpcore"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
