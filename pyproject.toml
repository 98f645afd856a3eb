[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bossfight"
version = "0.1.0"
description = "A turn-based terminal boss fight with abilities, items, buffs and damage mitigation."
requires-python = ">=3.10"
keywords = ["game", "rpg", "turn-based", "terminal", "boss-fight"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Role-Playing",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
bossfight = "bossfight.game:main"

[tool.hatch.build.targets.wheel]
packages = ["bossfight"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
