[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "patkit"
version = "0.1.0"
description = "A small regular-expression subset and glob matcher, an ordered key:value store, and an allocation tracker"
requires-python = ">=3.10"
dependencies = []
keywords = ["pattern", "regex", "glob", "matching", "key-value", "allocation", "leaks"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: Text Processing :: General",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["patkit"]

[tool.pytest.ini_options]
addopts = "-ra"
