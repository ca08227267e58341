[build-system]
requires = ["setuptools>=68", "wheel"]
build-backend = "setuptools.build_meta"

[project]
name = "elementfall"
version = "0.1.0"
description = "Game rules for an elemental spell-casting roguelike: spells, items, progression, level generation and boss AI"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "roguelike", "spells", "procedural-generation", "boss-ai"]
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
    "Topic :: Games/Entertainment :: Role-Playing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["elementfall*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
