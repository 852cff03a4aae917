[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "btlekit"
version = "0.1.0"
description = "Bluetooth Low Energy building blocks: device addresses, short UUIDs, GATT data types and an async event hub for adapters."
requires-python = ">=3.10"
dependencies = []
keywords = ["bluetooth", "ble", "gatt", "uuid", "asyncio"]
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
    "Framework :: AsyncIO",
    "Topic :: Communications",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["btlekit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
