# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Exception hierarchy for brewversion.

This module defines a custom exception hierarchy that allows library users
to distinguish "no version information" from caller mistakes:

- MalformedSpec: A URL spec could not be percent-decoded (always recovered
  internally by falling back to the raw spec)
- NoVersionDetected: No extraction rule matched (only raised on request)
- InvalidVersion: A Version was constructed from an empty string
- IncomparableOperands: An ordering operator was applied to unordered operands
- InvalidCommitMutation: A commit was attached to a non-HEAD version
- ConfigError: Configuration-related errors (YAML parse, invalid structure)
- NetworkError: Formula API failures

All exceptions inherit from BrewVersionError, allowing users to catch all
brewversion errors with a single except clause if needed. Most also inherit
from the closest builtin (ValueError, TypeError, LookupError) so generic
handlers keep working.

Example:
    Catching specific error types:
        ```python
        from brewversion.exceptions import InvalidVersion
        from brewversion.versioning import Version

        try:
            Version("")
        except InvalidVersion as e:
            print(f"Bad version: {e}")
        ```

    Catching all brewversion errors:
        ```python
        from brewversion.exceptions import BrewVersionError

        try:
            report = run_checks(url, formula_name="wget")
        except BrewVersionError as e:
            print(f"brewversion error: {e}")
        ```
"""

from __future__ import annotations

__all__ = [
    "BrewVersionError",
    "MalformedSpec",
    "NoVersionDetected",
    "InvalidVersion",
    "IncomparableOperands",
    "InvalidCommitMutation",
    "ConfigError",
    "NetworkError",
]


class BrewVersionError(Exception):
    """Base exception for all brewversion errors."""

    pass


class MalformedSpec(BrewVersionError, ValueError):
    """Raised when a URL-sourced spec has invalid percent-encoding.

    Never surfaces to callers of the detection API: the spec normalizer
    catches it and continues with the raw, undecoded spec.
    """

    pass


class NoVersionDetected(BrewVersionError, LookupError):
    """Raised when no extraction rule produced a version.

    Detection normally reports this as an absent result (``None`` or the
    NULL version); the exception is only raised when the caller asks for
    strict behavior.
    """

    pass


class InvalidVersion(BrewVersionError, ValueError):
    """Raised when a Version is constructed from an empty or blank string.

    Example:
        ```python
        from brewversion.versioning import Version

        Version("   ")  # raises InvalidVersion
        ```
    """

    pass


class IncomparableOperands(BrewVersionError, TypeError):
    """Raised by ordering operators when two operands have no defined order.

    ``Version.compare_to`` reports the same situation as ``None``.
    """

    pass


class InvalidCommitMutation(BrewVersionError, ValueError):
    """Raised when attaching a commit to a version that is not a HEAD form."""

    pass


class ConfigError(BrewVersionError):
    """Raised for configuration-related errors.

    This exception is raised when there are problems with:

    - YAML parsing (syntax errors, invalid structure)
    - An explicit config file that does not exist
    - Empty config files or a non-mapping top level

    Example:
        Catching configuration errors:
            ```python
            from brewversion.config import load_config
            from brewversion.exceptions import ConfigError

            try:
                config = load_config(Path("broken.yaml"))
            except ConfigError as e:
                print(f"Config error: {e}")
            ```
    """

    pass


class NetworkError(BrewVersionError):
    """Raised for formula API failures.

    This exception is raised when there are problems with:

    - HTTP errors or connection timeouts against the formula API
    - Responses that are not JSON or carry no stable version
    """

    pass
