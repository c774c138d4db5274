[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "playerclock"
version = "0.1.0"
description = "Date/time arithmetic, a DS1307 real-time clock driver and a DFPlayer Mini serial protocol client"
requires-python = ">=3.10"
dependencies = []
keywords = ["rtc", "ds1307", "dfplayer", "mp3", "serial", "i2c", "datetime", "bcd"]
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
    "Topic :: System :: Hardware",
    "Topic :: Multimedia :: Sound/Audio :: Players :: MP3",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["playerclock"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
