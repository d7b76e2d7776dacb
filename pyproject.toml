[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gfxkit"
version = "0.1.0"
description = "Small graphics toolkit: vectors, matrices, quaternions, a line-oriented command scripting layer and raster image I/O."
requires-python = ">=3.10"
dependencies = [
    "pillow",
]
keywords = ["graphics", "vector", "matrix", "quaternion", "trackball", "raster", "pnm", "image", "script"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics",
    "Topic :: Scientific/Engineering :: Mathematics",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["gfxkit"]

[tool.pytest.ini_options]
addopts = "-ra"
