[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "poseidonhash"
version = "0.1.0"
description = "Poseidon algebraic hash over the BN254 scalar field, with Grain LFSR constant generation and iden3-style domains"
requires-python = ">=3.10"
dependencies = []
keywords = ["poseidon", "hash", "bn254", "zero-knowledge", "sponge", "cryptography"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["poseidonhash"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
