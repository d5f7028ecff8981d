[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "windengine"
version = "0.3.0"
description = "Asset bundling pipeline, asset loading and input triggers for a small game engine"
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
    "pillow",
]
keywords = ["game engine", "assets", "bundler", "input", "triggers"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["windengine"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
