[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "edgelines"
version = "0.1.0"
description = "Canny-style edge detection and Hough line detection implemented with NumPy"
requires-python = ">=3.10"
keywords = ["canny", "hough", "edge detection", "line detection", "image processing"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Image Processing",
]
dependencies = [
    "numpy",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
edgelines = "edgelines.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["edgelines"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
