[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fastqueue"
version = "1.0.0"
description = "Networking core of a partitioned message queue broker: connection pools, socket handling, heartbeats and a request listener."
requires-python = ">=3.10"
dependencies = []
keywords = ["message-queue", "broker", "networking", "connection-pool", "lru-cache", "heap"]
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
    "Topic :: System :: Networking",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["fastqueue"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
