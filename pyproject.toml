[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "divebot"
version = "0.1.0"
description = "Sensor sampling, state estimation, depth and surface control, and binary logging for a small underwater robot"
requires-python = ">=3.10"
dependencies = []
keywords = ["robotics", "underwater", "control", "gps", "imu", "logging", "embedded"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Embedded Systems",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["divebot"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
