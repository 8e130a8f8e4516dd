[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "eventtracker"
version = "0.1.0"
description = "A small HTTP service that records timestamped events in memory and serves them back by time range and type."
requires-python = ">=3.10"
keywords = ["events", "logging", "http", "asgi", "starlette", "rate-limiting"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Framework :: AsyncIO",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: System :: Logging",
]
dependencies = [
    "starlette",
    "sortedcontainers",
    "uvicorn",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
    "httpx",
]

[project.scripts]
eventtracker = "eventtracker.app:main"

[tool.hatch.build.targets.wheel]
packages = ["eventtracker"]

[tool.pytest.ini_options]
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
