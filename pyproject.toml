[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "multail"
version = "0.1.0"
description = "A terminal-based log viewer"
requires-python = ">=3.10"
dependencies = []
keywords = ["logs", "tail", "viewer", "terminal", "curses"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console :: Curses",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
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
multail = "multail.app:main"

[tool.hatch.build.targets.wheel]
packages = ["multail"]

[tool.pytest.ini_options]
addopts = "-ra"
