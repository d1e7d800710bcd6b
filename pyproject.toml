[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rustrules"
version = "0.1.0"
description = "Helper tools for Rust builds under Bazel: label parsing, runfiles lookup, rustfmt and rust-analyzer drivers, launchers and archive helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["bazel", "rust", "rustfmt", "rust-analyzer", "runfiles", "build"]
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
    "Topic :: Software Development :: Build Tools",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
rustrules-rustfmt = "rustrules.rustfmt:main"
rustrules-rust-analyzer = "rustrules.rust_analyzer:main"
rustrules-launcher = "rustrules.launcher:main"
rustrules-dir-zipper = "rustrules.dir_zipper:main"
rustrules-optional-outputs = "rustrules.optional_outputs:main"

[tool.hatch.build.targets.wheel]
packages = ["rustrules"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
