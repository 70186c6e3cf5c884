[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "syndkit"
version = "0.1.0"
description = "Readers and decoders for the data files of the classic Syndicate game"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "syndicate",
    "game-data",
    "rnc",
    "propack",
    "fli",
    "flc",
    "sprites",
    "palette",
    "isometric",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Real Time Strategy",
    "Topic :: Multimedia :: Graphics",
    "Topic :: System :: Archiving :: Compression",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
syndkit-mission = "syndkit.mission:main"

[tool.hatch.build.targets.wheel]
packages = ["syndkit"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
