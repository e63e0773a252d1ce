[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "usersvc"
version = "0.1.0"
description = "Skeleton of a user authentication service: dotenv configuration, coloured logging, SQLite access and a gRPC server"
requires-python = ">=3.10"
keywords = ["users", "authentication", "grpc", "sqlite", "service"]
classifiers = [
    "Development Status :: 2 - Pre-Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration :: Authentication/Directory",
]
dependencies = [
    "python-dotenv",
    "termcolor",
    "grpcio",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
usersvc = "usersvc.app:main"

[tool.hatch.build.targets.wheel]
packages = ["usersvc"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
