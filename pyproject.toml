[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "crype"
version = "0.1.0"
description = "Crypto payment orders: generate payment addresses, store orders in SQLite and follow their status"
requires-python = ">=3.10"
keywords = ["payments", "cryptocurrency", "orders", "usdc", "secp256k1", "point-of-sale"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial :: Point-Of-Sale",
]
dependencies = [
    "cryptography",
    "pycryptodome",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["crype"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]
