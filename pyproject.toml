[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "notebookmd"
version = "0.1.0"
description = "Markdown syntax-highlighting tokenizer, colour schemes and preview rendering for a lightweight Markdown editor"
requires-python = ">=3.10"
keywords = ["markdown", "editor", "syntax-highlighting", "tokenizer", "preview"]
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
    "Topic :: Text Processing :: Markup :: Markdown",
    "Topic :: Text Editors",
]
dependencies = [
    "mistune>=3.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
    "pytest-asyncio>=0.21",
]

[tool.hatch.build.targets.wheel]
packages = ["notebookmd"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
