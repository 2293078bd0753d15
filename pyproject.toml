[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ospect"
version = "0.1.0"
description = "Inspect the operating system: extended file attributes, mounted filesystems, network interfaces and connections."
requires-python = ">=3.10"
dependencies = [
    "psutil",
]
keywords = ["xattr", "mounts", "filesystem", "network", "connections", "inspection"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Operating System :: MacOS",
    "Operating System :: Microsoft :: Windows",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
    "Topic :: System :: Filesystems",
    "Topic :: System :: Networking :: Monitoring",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["ospect"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
