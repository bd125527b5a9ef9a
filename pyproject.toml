[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ethkit"
version = "0.1.3"
description = "Ethereum toolkit: typed chain structures, Keccak-256, hex encodings, keystores, EIP-712 hashing and Solidity compiler helpers"
requires-python = ">=3.10"
keywords = [
    "ethereum",
    "keystore",
    "eip712",
    "eip2335",
    "keccak",
    "solidity",
    "checksum",
]
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
    "Topic :: Software Development :: Libraries",
    "Topic :: Security :: Cryptography",
]
dependencies = [
    "pycryptodome",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
ethkit = "ethkit.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["ethkit"]

[tool.hatch.build.targets.sdist]
include = [
    "ethkit",
    "tests",
]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
