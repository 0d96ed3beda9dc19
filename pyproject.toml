[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sweatclaim"
version = "1.0.0"
description = "Deferred token accrual ledger with claim and burn periods, oracle-controlled recording and claim events"
requires-python = ">=3.10"
dependencies = []
keywords = ["tokens", "accrual", "claim", "burn", "ledger", "oracle"]
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
    "Topic :: Office/Business :: Financial :: Accounting",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sweatclaim"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
