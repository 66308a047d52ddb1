[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kakeboor"
version = "0.1.0"
description = "Household budget book: a small JSON REST service for categories, transactions and monthly, yearly and per-category reports."
requires-python = ">=3.11"
keywords = ["budget", "household", "finance", "accounting", "rest", "kakeibo"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial :: Accounting",
]
dependencies = [
    "flask",
    "httpx",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
kakeboor-runserver = "kakeboor.server:main"

[tool.hatch.build.targets.wheel]
packages = ["kakeboor"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
