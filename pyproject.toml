[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tinyrt"
version = "0.1.0"
description = "A small ray tracer for .rt scene files with spheres, planes, cylinders and Phong shading"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["ray tracing", "rendering", "phong", "3d", "scene", "ppm"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
tinyrt = "tinyrt.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["tinyrt"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
