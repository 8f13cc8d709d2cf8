[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "simplemenu"
version = "0.1.0"
description = "Game launcher logic for handhelds: themes, sections, favorites, saved state, list navigation and surface zooming"
requires-python = ">=3.10"
dependencies = []
keywords = ["launcher", "frontend", "emulation", "handheld", "theme", "rotozoom"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["simplemenu"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
