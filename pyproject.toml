[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rdapkit"
version = "0.1.0"
description = "Registration Data Access Protocol (RDAP) request URLs, response decoding, jCard parsing and WHOIS-style text output"
requires-python = ">=3.10"
keywords = ["rdap", "whois", "jcard", "vcard", "dns", "registration data"]
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
    "Topic :: Internet :: Name Service (DNS)",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["rdapkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
