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

"""Formula API client.

Looks up the stable version a package registry currently publishes for a
formula, so a detected URL version can be compared against it. This is the
only module that touches the network; version detection itself never does.

Example:
    ```python
    from brewversion.formulae import fetch_stable_version

    stable = fetch_stable_version("wget")
    print(stable)  # e.g. '1.25.0'
    ```
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import requests

from brewversion.config import DEFAULT_CONFIG
from brewversion.exceptions import NetworkError
from brewversion.logging import get_global_logger

DEFAULT_BASE_URL: str = DEFAULT_CONFIG["formula_api"]["base_url"]
DEFAULT_TIMEOUT: int = DEFAULT_CONFIG["formula_api"]["timeout"]


def formula_url(name: str, base_url: str = DEFAULT_BASE_URL) -> str:
    """Return the JSON metadata URL for formula ``name``."""
    return f"{base_url.rstrip('/')}/{quote(name, safe='')}.json"


def fetch_formula(
    name: str,
    *,
    base_url: str = DEFAULT_BASE_URL,
    timeout: float = DEFAULT_TIMEOUT,
) -> dict[str, Any]:
    """Fetch the raw JSON metadata for a formula.

    Raises:
        NetworkError: On HTTP errors, transport failures or a non-JSON body.
    """
    logger = get_global_logger()
    url = formula_url(name, base_url)
    logger.verbose("FORMULA", f"Fetching formula metadata: {url}")

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.HTTPError as err:
        if response.status_code == 404:
            raise NetworkError(f"Formula {name!r} not found") from err
        raise NetworkError(
            f"Formula API request failed: {response.status_code} {response.reason}"
        ) from err
    except requests.exceptions.RequestException as err:
        raise NetworkError(f"Failed to fetch formula {name!r}: {err}") from err

    try:
        data = response.json()
    except ValueError as err:
        raise NetworkError(f"Formula API returned invalid JSON for {name!r}") from err
    if not isinstance(data, dict):
        raise NetworkError(f"Formula API returned unexpected payload for {name!r}")

    logger.debug("FORMULA", f"Response keys: {', '.join(sorted(data))}")
    return data


def fetch_stable_version(
    name: str,
    *,
    base_url: str = DEFAULT_BASE_URL,
    timeout: float = DEFAULT_TIMEOUT,
) -> str:
    """Return the published stable version of a formula.

    Args:
        name: Formula name (e.g., "wget", "python@3.12").
        base_url: Formula API root.
        timeout: Request timeout in seconds.

    Returns:
        The ``versions.stable`` field.

    Raises:
        NetworkError: If the request fails or the formula has no stable
            version.
    """
    data = fetch_formula(name, base_url=base_url, timeout=timeout)
    versions = data.get("versions") or {}
    stable = versions.get("stable") if isinstance(versions, dict) else None
    if not stable:
        raise NetworkError(f"Formula {name!r} has no stable version")

    get_global_logger().verbose("FORMULA", f"Stable version of {name}: {stable}")
    return str(stable)
