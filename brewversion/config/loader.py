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

"""
Configuration loading and merging for brewversion.

Only the outer layers (compatibility checks and the formula API client) are
configurable; version detection and comparison take no settings.

Configuration Layers
--------------------
1. **Built-in defaults** (``DEFAULT_CONFIG``)
   - Formula API location and timeout
   - Which checks warn, and which archive extensions are expected

2. **Project file** (``brewversion.yaml``)
   - Found by walking upward from the start directory (default: cwd)
   - Optional; overrides the built-in defaults

3. **Explicit file** (``--config PATH``)
   - Optional; must exist when given
   - Overrides everything else

Merge Behavior
--------------
The loader performs deep merging with "last wins" semantics:
  - **Dicts**: Recursively merged (keys from overlay override base)
  - **Lists**: Completely replaced (NOT appended/extended)
  - **Scalars**: Overwritten (strings, numbers, booleans)

Error Handling
--------------
- ConfigError: Explicit file missing, YAML parse errors, empty files or a
  top level that is not a mapping
- All errors are chained with "from err" for better debugging

Examples
--------
Basic usage:

    >>> from brewversion.config import load_config
    >>> cfg = load_config()
    >>> cfg["formula_api"]["base_url"]
    'https://formulae.brew.sh/api/formula'

Explicit file:

    >>> cfg = load_config(Path("ci/brewversion.yaml"))
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

import yaml

from brewversion.exceptions import ConfigError

CONFIG_FILENAME = "brewversion.yaml"

DEFAULT_CONFIG: dict[str, Any] = {
    "formula_api": {
        "base_url": "https://formulae.brew.sh/api/formula",
        "timeout": 30,
    },
    "checks": {
        "require_https": True,
        "archive_extensions": [
            "tar.gz",
            "tgz",
            "tar.bz2",
            "tbz",
            "tbz2",
            "tar.xz",
            "txz",
            "zip",
            "gem",
            "jar",
            "war",
            "gz",
            "xz",
            "bz2",
        ],
    },
}

# -------------------------------
# YAML helpers
# -------------------------------


def _load_yaml_file(p: Path) -> Any:
    """
    Load a YAML file and return the parsed Python object.

    Raises:
      ConfigError - when the file does not exist, cannot be parsed or is empty
    """
    if not p.exists():
        raise ConfigError(f"file not found: {p}")
    try:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as err:
        raise ConfigError(f"Error parsing YAML: {p}: {err}") from err
    if data is None:
        raise ConfigError(f"YAML file is empty: {p}")
    if not isinstance(data, dict):
        raise ConfigError(f"top-level YAML must be a mapping (dict): {p}")
    return data


# -------------------------------
# Merge logic
# -------------------------------


def _deep_merge_dicts(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """
    Deep-merge two dicts with "overlay wins".

    Rules:
      - dict + dict -> deep merge
      - list + list -> overlay REPLACES base (not concatenated)
      - everything else -> overlay overwrites base

    This function does not mutate inputs; returns a new dict.
    """
    result: dict[str, Any] = dict(base)
    for k, v in overlay.items():
        if k in result and isinstance(result[k], dict) and isinstance(v, dict):
            result[k] = _deep_merge_dicts(result[k], v)
        else:
            result[k] = v
    return result


# -------------------------------
# Discovery
# -------------------------------


def _find_project_config(start_dir: Path) -> Path | None:
    """
    Walk upward from 'start_dir' looking for a 'brewversion.yaml'.
    Returns the file path or None if not found.
    """
    for parent in [start_dir] + list(start_dir.parents):
        candidate = parent / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


# -------------------------------
# Public API
# -------------------------------


def load_config(
    path: Path | None = None,
    *,
    start_dir: Path | None = None,
    discover: bool = True,
) -> dict[str, Any]:
    """
    Load and merge the effective configuration.

    Steps
      1) Start from a copy of DEFAULT_CONFIG.
      2) If 'discover', find brewversion.yaml upward from 'start_dir' (cwd
         by default) and merge it.
      3) If 'path' is given, load it and merge it last.

    Returns
      A merged configuration dict.

    Raises
      ConfigError if 'path' is missing, or any loaded file is invalid YAML,
      empty, or not a mapping.
    """
    from brewversion.logging import get_global_logger

    logger = get_global_logger()
    merged: dict[str, Any] = copy.deepcopy(DEFAULT_CONFIG)
    layers_merged = 1

    if discover:
        search_from = (start_dir or Path.cwd()).resolve()
        project_path = _find_project_config(search_from)
        if project_path is not None:
            logger.verbose("CONFIG", f"Loading: {project_path}")
            merged = _deep_merge_dicts(merged, _load_yaml_file(project_path))
            layers_merged += 1

    if path is not None:
        explicit = Path(path).resolve()
        logger.verbose("CONFIG", f"Loading: {explicit}")
        merged = _deep_merge_dicts(merged, _load_yaml_file(explicit))
        layers_merged += 1

    for key in merged:
        if key not in DEFAULT_CONFIG:
            logger.warning("CONFIG", f"Ignoring unknown top-level key: {key}")

    logger.verbose("CONFIG", f"Deep merged {layers_merged} layer(s)")
    logger.debug("CONFIG", "--- Final Merged Configuration ---")
    logger.debug(
        "CONFIG", yaml.safe_dump(merged, default_flow_style=False, sort_keys=False)
    )
    return merged
