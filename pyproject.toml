[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gosqlcgen"
version = "0.1.0"
description = "Type mapping, naming and query modelling for generating Go database access code from SQL catalogs"
requires-python = ">=3.10"
dependencies = []
keywords = ["sql", "codegen", "go", "sqlite", "type-mapping"]
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
    "Topic :: Software Development :: Code Generators",
    "Topic :: Database",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["gosqlcgen"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
