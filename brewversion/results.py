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

"""Public API return types for brewversion.

All dataclasses are frozen (immutable) to prevent accidental mutation of
return values.

Example:
    Using result types:
        ```python
        from brewversion.checks import run_checks
        from brewversion.results import CheckReport

        report: CheckReport = run_checks("https://example.com/tool-2.4.1.tar.gz")
        print(report.status)  # Attribute access, not dict access
        ```

Note:
    Only public API return types belong in this module. Domain types
    (like Version or RuleMatch) remain co-located with their related logic.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

CheckStatus = Literal["ok", "warn", "fail"]


@dataclass(frozen=True)
class CheckResult:
    """Outcome of one compatibility check.

    Attributes:
        status: "ok", "warn" or "fail".
        message: Human-readable explanation.
    """

    status: CheckStatus
    message: str


@dataclass(frozen=True)
class CheckReport:
    """Result from running compatibility checks against a source URL.

    Attributes:
        status: Worst status across all checks.
        title: Short verdict ("Compatible", ...).
        summary: One-sentence summary.
        checks: Individual check results in execution order.
        detected_version: Version detected from the URL, if any.
    """

    status: CheckStatus
    title: str
    summary: str
    checks: tuple[CheckResult, ...] = field(default_factory=tuple)
    detected_version: str | None = None
