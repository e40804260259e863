[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tlssni"
version = "0.1.0"
description = "Read the SNI hostname from a TLS ClientHello; classic 32-bit string hashes and an ordered hash table"
requires-python = ">=3.10"
dependencies = []
keywords = ["tls", "sni", "client-hello", "proxy", "hash", "hash-table", "merge-sort"]
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
    "Topic :: Internet :: Proxy Servers",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["tlssni"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
