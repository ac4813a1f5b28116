[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "classdash"
version = "0.1.0"
description = "Game logic for Class Dash, a side-scrolling platformer: physics, tile levels, characters, projectiles, timer and sound"
requires-python = ">=3.10"
keywords = ["game", "platformer", "side-scroller", "tiled", "pygame"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Side-Scrolling/Arcade Games",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["classdash"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
