[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hanabot"
version = "1.4.0"
description = "Chat bot configuration, message matching engine and plugin logic for group and private chats"
requires-python = ">=3.10"
dependencies = [
    "psutil",
]
keywords = ["bot", "chat", "onebot", "plugins", "base16384", "tea"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Natural Language :: Chinese (Simplified)",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Chat",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
hanabot = "hanabot.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["hanabot"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
