[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "shootinfra"
version = "0.1.0"
description = "Provider-specific infrastructure, control plane and worker configuration for Gardener shoot clusters"
requires-python = ">=3.10"
dependencies = []
keywords = ["gardener", "kubernetes", "shoot", "aws", "azure", "gcp", "openstack", "cidr"]
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
    "Topic :: System :: Clustering",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["shootinfra"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]
