[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tomato"
version = "0.1.0"
description = "Chess engine building blocks: evaluations, search limits, transposition tables, time management and UCI messages"
requires-python = ">=3.10"
dependencies = []
keywords = ["chess", "uci", "engine", "transposition-table", "evaluation"]
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
    "Topic :: Games/Entertainment :: Board Games",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["tomato"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
