"""
brewversion - Homebrew-style version detection

A Python library and CLI for detecting which software version a download
URL or filename refers to, and for ordering the detected versions the way
a package manager does.

brewversion provides:
  - An ordered cascade of extraction rules for URLs and archive names
  - Tokenized versions with alpha/beta/pre/rc/patch/post awareness
  - Total ordering with NULL and HEAD (development) versions
  - Source URL compatibility checks for formula authors
  - Optional lookup of the currently published formula version

Quick Start
-----------
Detect a version from a download URL:

    $ brewversion detect https://example.com/tool-2.4.1.tar.gz

Compare two versions:

    $ brewversion compare 1.0.0-rc1 1.0.0

For full CLI documentation:

    $ brewversion --help

Package Structure
-----------------
cli : module
    Command-line interface with argparse.
core : module
    String-in, string-out entry points.
checks : module
    Source URL compatibility checks.
formulae : module
    Formula API client (the only network access).
config : package
    YAML configuration loading and merging.
versioning : package
    Tokenizer, Version type and the extraction rule cascade.

Public API
----------
    from brewversion import detect_version, parse_version, compare_versions
    from brewversion import Version, run_checks

For more details, see the individual module docstrings.

Project Information
-------------------
Author: Roger Cibrian
License: Apache-2.0
"""

__version__ = "0.1.0"
__author__ = "Roger Cibrian"
__license__ = "Apache-2.0"
__description__ = "Homebrew-style version detection from download URLs"

# Re-export commonly used functions for convenience
from brewversion.checks import run_checks
from brewversion.config import load_config
from brewversion.core import compare_versions, detect_version, parse_version
from brewversion.exceptions import (
    BrewVersionError,
    ConfigError,
    IncomparableOperands,
    InvalidCommitMutation,
    InvalidVersion,
    MalformedSpec,
    NetworkError,
    NoVersionDetected,
)
from brewversion.results import CheckReport, CheckResult
from brewversion.versioning import Version

__all__ = [
    "__version__",
    "__author__",
    "__license__",
    "__description__",
    "detect_version",
    "parse_version",
    "compare_versions",
    "Version",
    "run_checks",
    "load_config",
    "CheckReport",
    "CheckResult",
    "BrewVersionError",
    "ConfigError",
    "IncomparableOperands",
    "InvalidCommitMutation",
    "InvalidVersion",
    "MalformedSpec",
    "NetworkError",
    "NoVersionDetected",
]
