[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "chatmarkup"
version = "0.1.0"
description = "Chat message markup rendering, a region-based line editor and small chat UI models for terminal clients"
requires-python = ">=3.10"
dependencies = []
keywords = ["chat", "markdown", "terminal", "editor", "formatting", "markup"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Chat",
    "Topic :: Text Processing :: Markup",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["chatmarkup"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
