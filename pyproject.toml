[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "embystream"
version = "0.1.0"
description = "Core services for an Emby streaming application: backend settings, caching, encrypted tokens and logging."
requires-python = ">=3.10"
keywords = ["emby", "streaming", "cache", "aes", "configuration", "logging"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Video",
]
dependencies = [
    "cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
embystream = "embystream.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["embystream"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
