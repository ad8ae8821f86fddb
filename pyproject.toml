[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nnlite"
version = "0.1.0"
description = "A small neural-network library with scalar, vector and matrix tensors and reverse-mode autograd"
requires-python = ">=3.10"
dependencies = []
keywords = ["neural network", "autograd", "tensor", "machine learning", "sgd"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
nnlite = "nnlite.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["nnlite"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
