[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "stablepot"
version = "0.1.0"
description = "Two-stage exponential moving average smoothing for jittery potentiometer and ADC readings"
requires-python = ">=3.10"
dependencies = []
keywords = ["potentiometer", "adc", "ema", "filter", "smoothing", "hysteresis"]
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
    "Topic :: Scientific/Engineering :: Human Machine Interfaces",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["stablepot"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
