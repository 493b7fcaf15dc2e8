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

"""String-in, string-out operations for host applications.

These three functions are the contract offered to outer tooling (the CLI,
the compatibility checker, or any other caller that only deals in plain
strings). They never raise for "no information": an undetectable URL, an
unparseable version or an unordered comparison all come back as ``None``.

Operations:

- detect_version: URL (or tag) -> version string
- parse_version: literal version text -> normalized version string
- compare_versions: two version strings -> -1 / 0 / 1

Example:
    Programmatic usage:
        ```python
        from brewversion.core import compare_versions, detect_version

        detected = detect_version("https://example.com/tool-2.4.1.tar.gz")
        print(detected)  # 2.4.1
        print(compare_versions(detected, "2.4.0"))  # 1
        ```

"""

from __future__ import annotations

from brewversion.exceptions import InvalidVersion, NoVersionDetected
from brewversion.logging import get_global_logger
from brewversion.versioning import Version

__all__ = ["detect_version", "parse_version", "compare_versions"]


def detect_version(
    spec: str, *, tag: str | None = None, strict: bool = False
) -> str | None:
    """Detect the version a download URL points at.

    Args:
        spec: Download URL or filename. Percent-encoding is decoded first.
        tag: Optional tag name; when given it is used instead of ``spec``.
        strict: If True, raise instead of returning None.

    Returns:
        The detected version string, or None if no extraction rule matched.

    Raises:
        NoVersionDetected: If ``strict`` is True and nothing was detected.

    Example:
        ```python
        detect_version("https://example.com/premake-5.0.0-alpha10-src.zip")
        # returns: '5.0.0-alpha10'
        ```
    """
    version = Version.detect(spec, tag=tag)
    if version.is_null:
        if strict:
            raise NoVersionDetected(f"Could not detect a version from {spec!r}")
        return None
    return str(version)


def parse_version(text: str | None) -> str | None:
    """Normalize a literal version string through the extraction cascade.

    The text is treated like a filename, so "v1.2.3" becomes "1.2.3" and
    "1_2_3" becomes "1.2.3".

    Returns:
        The parsed version string, or None for blank or unparseable input.
    """
    if text is None or not text.strip():
        return None
    version = Version.parse(text)
    return None if version.is_null else str(version)


def compare_versions(left: str | None, right: str | None) -> int | None:
    """Compare two version strings.

    Returns:
        -1, 0 or 1 as ``left`` is older than, equal to or newer than
        ``right``; None when either side is missing or blank, or the pair has
        no defined order.
    """
    if left is None or right is None:
        return None
    try:
        result = Version(left).compare_to(Version(right))
    except InvalidVersion as err:
        get_global_logger().debug("COMPARE", f"Unordered operands: {err}")
        return None
    return result
