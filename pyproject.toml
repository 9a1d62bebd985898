[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "packcalc"
version = "0.1.0"
description = "HTTP service that works out the fewest items and packs needed to fill an order"
requires-python = ">=3.10"
keywords = ["packing", "orders", "dynamic-programming", "http", "flask"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]
dependencies = [
    "flask",
    "cachetools",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
packcalc = "packcalc.app:main"

[tool.hatch.build.targets.wheel]
packages = ["packcalc"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
