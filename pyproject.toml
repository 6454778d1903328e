[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "haribote"
version = "0.1.0"
description = "Components of a small hobby operating system as plain Python objects: FIFOs, timers, a task scheduler, layered windows, a FAT12 reader, a text console, a baseline JPEG decoder, an integer calculator and demo data."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "operating-system",
    "hobby-os",
    "fat12",
    "jpeg",
    "scheduler",
    "framebuffer",
    "calculator",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Operating System",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
haribote-calc = "haribote.calc:main"

[tool.hatch.build.targets.wheel]
packages = ["haribote"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
