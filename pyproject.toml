[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sniffcheck"
version = "0.2.1"
description = "Opinionated TypeScript/Next.js development toolkit: type checks, performance audits and configuration"
requires-python = ">=3.11"
keywords = ["typescript", "nextjs", "code-quality", "cli", "development", "lighthouse"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Quality Assurance",
]
dependencies = [
    "tomli-w",
    "termcolor",
    "tqdm",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
sniff = "sniffcheck.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["sniffcheck"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
