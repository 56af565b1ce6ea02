[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "remstocks"
version = "0.1.0"
description = "A Telegram bot library that tracks product cards per user and notifies them about sales"
requires-python = ">=3.10"
keywords = ["telegram", "bot", "sales", "notifications", "products", "jq"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Chat",
]
dependencies = [
    "requests",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[tool.hatch.build.targets.wheel]
packages = ["remstocks"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
