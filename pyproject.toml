[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "toyredis"
version = "0.1.0"
description = "A tiny line-based key-value server with GET and SET commands, plus a load-test client"
requires-python = ">=3.10"
dependencies = []
keywords = ["key-value", "server", "tcp", "in-memory", "load-test"]
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
    "Topic :: Database :: Database Engines/Servers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
toyredis-server = "toyredis.server:main"
toyredis-loadtest = "toyredis.loadtest:main"

[tool.hatch.build.targets.wheel]
packages = ["toyredis"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
