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

"""Source URL compatibility checks.

Runs a fixed sequence of checks against a candidate formula source URL and
collects them into a CheckReport:

1. A version can be detected from the URL (fail otherwise)
2. The URL uses HTTPS (warn otherwise)
3. The URL ends in a common source archive extension (warn otherwise)
4. A declared version, if given, parses and matches the detected one
5. A formula name, if given, is looked up and its stable version compared
   against the detected one (any problem here is only a warning)

The report status is the worst individual status: any "fail" makes the
report fail, otherwise any "warn" makes it warn.

Example:
    ```python
    from brewversion.checks import run_checks

    report = run_checks(
        "https://example.com/tool-2.4.1.tar.gz",
        declared_version="2.4.1",
    )
    print(report.title)  # Compatible
    ```
"""

from __future__ import annotations

from functools import partial
import re
from typing import Any, Callable

from brewversion.config import DEFAULT_CONFIG
from brewversion.core import compare_versions, detect_version, parse_version
from brewversion.exceptions import NetworkError
from brewversion.formulae import fetch_stable_version
from brewversion.logging import get_global_logger
from brewversion.results import CheckReport, CheckResult, CheckStatus

__all__ = ["run_checks", "overall_status"]

_TITLES: dict[str, str] = {
    "ok": "Compatible",
    "warn": "Compatible with Warnings",
    "fail": "Not Compatible",
}


def _archive_pattern(extensions: list[str]) -> re.Pattern[str]:
    alternatives = "|".join(re.escape(ext.lstrip(".")) for ext in extensions)
    return re.compile(rf"\.(?:{alternatives})(?:\?.*)?$", re.IGNORECASE)


def overall_status(checks: list[CheckResult] | tuple[CheckResult, ...]) -> CheckStatus:
    """Return the worst status among ``checks`` ("ok" when empty)."""
    statuses = {check.status for check in checks}
    if "fail" in statuses:
        return "fail"
    if "warn" in statuses:
        return "warn"
    return "ok"


def _summary(status: CheckStatus, detected: str | None) -> str:
    if status == "ok":
        if detected:
            return f"All checks passed. Detected version {detected}."
        return "All checks passed."
    if status == "warn":
        return (
            "Core compatibility checks passed, but review warnings before "
            "using this in a formula."
        )
    return "One or more required checks failed."


def _check_formula(
    formula_name: str,
    detected: str | None,
    fetch_stable: Callable[[str], str],
) -> CheckResult:
    try:
        stable = fetch_stable(formula_name)
    except NetworkError as err:
        get_global_logger().verbose("CHECK", f"Formula lookup failed: {err}")
        return CheckResult(
            "warn",
            f"Could not fetch formula metadata for {formula_name!r}: {err}",
        )

    if not detected:
        return CheckResult(
            "warn",
            f"Current stable for {formula_name!r} is {stable}; "
            "URL version could not be compared.",
        )

    cmp = compare_versions(detected, stable)
    if cmp is None:
        return CheckResult(
            "warn",
            f"Could not compare detected version with {formula_name!r} "
            f"stable ({stable}).",
        )
    if cmp == 0:
        return CheckResult(
            "ok",
            f"Detected version matches current stable {formula_name!r} "
            f"version ({stable}).",
        )
    direction = "older" if cmp < 0 else "newer"
    return CheckResult(
        "warn",
        f"Detected version ({detected}) is {direction} than current stable "
        f"{formula_name!r} ({stable}).",
    )


def run_checks(
    url: str,
    declared_version: str | None = None,
    formula_name: str | None = None,
    *,
    config: dict[str, Any] | None = None,
    fetch_stable: Callable[[str], str] | None = None,
) -> CheckReport:
    """Check whether a source URL is usable for a formula.

    Args:
        url: Candidate source URL.
        declared_version: Version the formula author intends to declare.
        formula_name: Existing formula to compare against (network lookup).
        config: Merged configuration (see ``brewversion.config``). Defaults
            to the built-in defaults.
        fetch_stable: Callable returning a formula's stable version. Defaults
            to ``fetch_stable_version`` bound to the configured API.

    Returns:
        The report, with checks in execution order.

    Note:
        A NetworkError from the formula lookup becomes a "warn" check; it is
        never raised to the caller.
    """
    logger = get_global_logger()
    cfg = config if config is not None else DEFAULT_CONFIG
    check_cfg = cfg.get("checks", {})
    api_cfg = cfg.get("formula_api", {})

    url = (url or "").strip()
    if not url:
        return CheckReport(
            status="fail",
            title="Source URL required",
            summary="Enter a URL so the checker can run version detection.",
            checks=(CheckResult("fail", "No URL provided."),),
        )

    total = 3 + bool(declared_version) + bool(formula_name)
    checks: list[CheckResult] = []

    logger.step(1, total, "Detecting version from URL...")
    detected = detect_version(url)
    if detected is None:
        checks.append(
            CheckResult("fail", "Could not detect a version from this URL.")
        )
    else:
        checks.append(CheckResult("ok", f"Detected version from URL: {detected}"))

    logger.step(2, total, "Checking URL scheme...")
    if url.startswith("https://"):
        checks.append(CheckResult("ok", "URL uses HTTPS."))
    elif check_cfg.get("require_https", True):
        checks.append(
            CheckResult(
                "warn",
                "URL does not use HTTPS. Formula sources are generally "
                "expected to use secure URLs.",
            )
        )
    else:
        logger.verbose("CHECK", "HTTPS requirement disabled by config")

    logger.step(3, total, "Checking archive extension...")
    extensions = check_cfg.get(
        "archive_extensions", DEFAULT_CONFIG["checks"]["archive_extensions"]
    )
    if _archive_pattern(extensions).search(url):
        checks.append(
            CheckResult(
                "ok", "URL appears to target a common source archive extension."
            )
        )
    else:
        checks.append(
            CheckResult(
                "warn",
                "URL extension is uncommon for source archives; verify the "
                "download strategy supports it.",
            )
        )

    step = 3
    if declared_version:
        step += 1
        logger.step(step, total, "Checking declared version...")
        declared = parse_version(declared_version)
        if declared is None:
            checks.append(
                CheckResult("fail", "Declared version is not parseable.")
            )
        elif detected is not None:
            if compare_versions(detected, declared) == 0:
                checks.append(
                    CheckResult(
                        "ok",
                        f"Declared version matches detected URL version ({declared}).",
                    )
                )
            else:
                checks.append(
                    CheckResult(
                        "fail",
                        f"Declared version ({declared}) does not match detected "
                        f"URL version ({detected}).",
                    )
                )

    if formula_name:
        step += 1
        logger.step(step, total, f"Comparing with formula {formula_name}...")
        if fetch_stable is None:
            fetch_stable = partial(
                fetch_stable_version,
                base_url=api_cfg.get(
                    "base_url", DEFAULT_CONFIG["formula_api"]["base_url"]
                ),
                timeout=api_cfg.get(
                    "timeout", DEFAULT_CONFIG["formula_api"]["timeout"]
                ),
            )
        checks.append(_check_formula(formula_name, detected, fetch_stable))

    status = overall_status(checks)
    logger.verbose("CHECK", f"Overall status: {status}")
    return CheckReport(
        status=status,
        title=_TITLES[status],
        summary=_summary(status, detected),
        checks=tuple(checks),
        detected_version=detected,
    )
