[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "taskfile"
version = "0.8.0"
description = "A small task runner that reads tasks from a Taskfile and runs their bodies with bash"
requires-python = ">=3.10"
dependencies = []
keywords = ["task runner", "taskfile", "bash", "build", "automation", "make"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Operating System :: MacOS",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
task = "taskfile.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["taskfile"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
