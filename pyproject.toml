[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tuplas"
version = "0.1.0"
description = "An in-memory store of key/tuple records with a threaded TCP server, a matching client and sample workloads"
requires-python = ">=3.10"
dependencies = []
keywords = ["key-value", "tuple store", "tcp", "client-server", "sockets", "binary protocol"]
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
    "Topic :: Database :: Database Engines/Servers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
tuplas-server = "tuplas.server:main"
tuplas-apps = "tuplas.apps:main"
tuplas-keylist = "tuplas.keylist:main"
tuplas-exercises = "tuplas.exercises:main"

[tool.hatch.build.targets.wheel]
packages = ["tuplas"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
