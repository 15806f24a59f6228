[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "iglive"
version = "0.1.6"
description = "Download Instagram live streams, including past segments, and merge them into one video file"
requires-python = ">=3.10"
keywords = ["instagram", "live", "stream", "dash", "mpd", "downloader", "ffmpeg"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Framework :: AsyncIO",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Video :: Capture",
]
dependencies = [
    "httpx",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
    "respx",
]

[project.scripts]
iglive = "iglive.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["iglive"]

[tool.pytest.ini_options]
addopts = "-ra"
