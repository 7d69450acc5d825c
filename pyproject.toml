[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pocketarcade"
version = "0.1.0"
description = "A small 2D game engine with collision, layered rendering, highscores and three arcade games for a 160x128 screen."
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "arcade", "engine", "collision", "snake", "pong", "asteroids"]
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
    "Topic :: Games/Entertainment :: Arcade",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["pocketarcade"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
