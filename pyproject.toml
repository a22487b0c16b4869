[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "oidfed"
version = "0.1.0"
description = "Building blocks for OpenID Federation: metadata policy operators and verifiers, trust chains, trust chain filters and trust mark payloads"
requires-python = ">=3.10"
dependencies = []
keywords = ["openid", "federation", "oidc", "trust-chain", "metadata-policy", "trust-mark"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["oidfed"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
