[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "xfrpclient"
version = "1.0.1"
description = "Building blocks of a lightweight reverse-proxy client: control messages, frames, login state, INI parsing, FTP passive-mode rewriting, compression and key derivation"
requires-python = ">=3.10"
dependencies = []
keywords = ["reverse proxy", "tunnel", "ftp", "pasv", "pbkdf2", "ini", "zlib"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: Proxy Servers",
    "Topic :: System :: Networking",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["xfrpclient"]

[tool.pytest.ini_options]
addopts = "-ra"
