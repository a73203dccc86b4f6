[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "onlineconfig"
version = "0.1.0"
description = "Configuration entities with typed properties, JSON serialization and a small HTTP back end, plus tree and mapping utilities"
requires-python = ">=3.10"
dependencies = []
keywords = ["configuration", "entities", "json", "serialization", "rest", "binary-tree"]
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
    "Topic :: Software Development :: Libraries",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
onlineconfig-server = "onlineconfig.server:main"
onlineconfig-trees = "onlineconfig.trees:main"
onlineconfig-connection-info = "onlineconfig.connection_info:main"

[tool.hatch.build.targets.wheel]
packages = ["onlineconfig"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
