[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "glacier_rt"
version = "1.0.0"
description = "Building blocks for a path tracer: rays, materials, transforms, primitives, a BVH and a camera."
requires-python = ">=3.10"
keywords = ["path tracing", "ray tracing", "rendering", "bvh", "materials"]
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
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]
dependencies = [
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["glacier_rt"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
