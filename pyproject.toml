[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bptree"
version = "0.1.0"
description = "An in-memory B+ tree keyed by integers, with linked leaves and borrowing and merging on removal"
requires-python = ">=3.10"
dependencies = []
keywords = ["b-tree", "b+ tree", "data structures", "index", "search tree"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[project.scripts]
bptree-demo = "bptree.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["bptree"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
