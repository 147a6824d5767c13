[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nanoffmpeg"
version = "0.1.0"
description = "Terminal screens, themes and ffmpeg command building for a keyboard-driven media conversion front-end"
requires-python = ">=3.10"
keywords = ["ffmpeg", "tui", "terminal", "video", "audio", "conversion"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Video :: Conversion",
]
dependencies = [
    "wcwidth",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["nanoffmpeg"]

[tool.pytest.ini_options]
addopts = "-ra"
