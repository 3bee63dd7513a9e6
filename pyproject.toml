[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "meshview"
version = "0.1.0"
description = "Small vector and matrix math, a Wavefront OBJ mesh reader and viewer interaction state for simple 3D viewing"
requires-python = ">=3.10"
dependencies = []
keywords = ["3d", "obj", "wavefront", "mesh", "vector", "matrix", "projection", "graphics"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
meshview = "meshview.viewer:main"

[tool.hatch.build.targets.wheel]
packages = ["meshview"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
