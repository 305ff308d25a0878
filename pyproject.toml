[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "librarian"
version = "0.4.4"
description = "Command-line tool for validating and querying Tome.gg learning repositories"
requires-python = ">=3.10"
keywords = ["tome", "daily stand-up", "dsu", "self-evaluation", "learning", "validation", "yaml"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
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
]
dependencies = [
    "pyyaml",
    "python-dateutil",
    "click",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
tome = "librarian.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["librarian"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
