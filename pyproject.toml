[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "phyphoxble"
version = "0.1.0"
description = "Build phyphox experiments and serve them with live measurement data through a NINA-B31 BLE module"
requires-python = ">=3.10"
dependencies = [
    "pyserial",
]
keywords = [
    "phyphox",
    "bluetooth",
    "ble",
    "gatt",
    "experiment",
    "sensor",
    "physics",
    "nina-b31",
    "at-commands",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
    "Topic :: Scientific/Engineering :: Interface Engine/Protocol Translator",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["phyphoxble"]

[tool.hatch.build.targets.sdist]
include = [
    "phyphoxble",
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
