[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "smartroad"
version = "0.1.0"
description = "A four-way intersection traffic simulation where cars negotiate right of way"
requires-python = ">=3.10"
dependencies = ["pygame"]
keywords = ["simulation", "traffic", "intersection", "pygame", "collision"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Simulation",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
smartroad = "smartroad.main:main"

[tool.hatch.build.targets.wheel]
packages = ["smartroad"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
