[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "adocparse"
version = "0.1.0"
description = "A parser for AsciiDoc documents that keeps precise source locations for every element"
requires-python = ">=3.10"
dependencies = []
keywords = ["asciidoc", "parser", "markup", "documentation"]
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
    "Topic :: Text Processing :: Markup",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["adocparse"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
