[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gmacs"
version = "0.1.0"
description = "Editing core of a small Emacs-style terminal text editor: events, key sequences, minibuffer, modes, windows, split layouts and scrolling."
requires-python = ">=3.10"
dependencies = [
    "wcwidth",
]
keywords = ["editor", "emacs", "terminal", "keybinding", "minibuffer", "window", "text"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Editors",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["gmacs"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
