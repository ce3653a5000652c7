[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vimbrowse"
version = "3.7.0"
description = "Core logic of a keyboard-driven, vim-like web browser: settings, search shortcuts, normal-mode key parsing and text and file utilities"
requires-python = ">=3.10"
dependencies = []
keywords = ["browser", "vim", "keybindings", "settings", "shortcuts", "wildmatch"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: Browsers",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["vimbrowse"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
