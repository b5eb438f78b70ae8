[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "chromafp"
version = "1.4.4"
description = "Building blocks for acoustic fingerprints: FFT framing, Bark bands, subfingerprint classifiers, compression and matching"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["audio", "fingerprint", "acoustic", "fft", "simhash", "matching"]
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
    "Topic :: Multimedia :: Sound/Audio :: Analysis",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
    "hypothesis",
]

[tool.hatch.build.targets.wheel]
packages = ["chromafp"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
