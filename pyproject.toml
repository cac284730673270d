[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mangawatch"
version = "0.1.0"
description = "Watch manga portals for new episodes and send notifications when they appear."
requires-python = ">=3.10"
keywords = ["manga", "rss", "crawler", "webdriver", "notification", "discord", "episodes"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Framework :: AsyncIO",
    "Framework :: aiohttp",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP",
]
dependencies = [
    "aiohttp>=3.9",
    "aiosqlite>=0.19",
    "defusedxml>=0.7",
]

[project.optional-dependencies]
test = [
    "pytest>=7.4",
    "pytest-asyncio>=0.23",
]

[tool.hatch.build.targets.wheel]
packages = ["mangawatch"]

[tool.hatch.build.targets.sdist]
include = ["mangawatch", "tests", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
packages = ["mangawatch"]
