[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "brainnlet"
version = "1.0.0"
description = "A small educational neural network library: tensors, dense layers, losses, MNIST loading, a training loop and a console guide."
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["neural-network", "deep-learning", "mnist", "education", "backpropagation"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
    "Topic :: Education",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
brainnlet = "brainnlet.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["brainnlet"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
