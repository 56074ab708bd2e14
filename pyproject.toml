[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "winfs-injector"
version = "0.1.0"
description = "Inject the Windows root file system release into a Windows runtime tile."
requires-python = ">=3.10"
keywords = ["tile", "bosh", "release", "windows", "rootfs"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Software Distribution",
]
dependencies = [
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
winfs-injector = "winfs_injector.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["winfs_injector"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
