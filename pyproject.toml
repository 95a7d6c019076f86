[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "scoreboard-api"
version = "0.1.0"
description = "A small WSGI service for creating, listing, updating and deleting scoreboards."
requires-python = ">=3.10"
keywords = ["wsgi", "rest", "scoreboard", "crud", "werkzeug", "sqlite"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: WSGI :: Application",
    "Typing :: Typed",
]
dependencies = [
    "werkzeug",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
scoreboard-api = "scoreboard_api.app:main"

[tool.hatch.build.targets.wheel]
packages = ["scoreboard_api"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
