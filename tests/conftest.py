"""
Pytest configuration and shared fixtures for brewversion tests.

This module provides reusable fixtures and test utilities used across
the test suite.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import yaml

from brewversion.logging import SilentLogger, set_global_logger


@pytest.fixture(autouse=True)
def reset_global_logger():
    """
    Restore the silent global logger after every test.

    CLI tests install a printing logger; later tests must not inherit it.
    """
    yield
    set_global_logger(SilentLogger())


@pytest.fixture
def tmp_test_dir(tmp_path: Path) -> Path:
    """
    Provide a temporary directory for test artifacts.

    Automatically cleaned up after test completion.
    """
    return tmp_path


@pytest.fixture
def formula_payload() -> dict[str, Any]:
    """
    Provide a trimmed formula API response.

    Mirrors the shape of https://formulae.brew.sh/api/formula/<name>.json.
    """
    return {
        "name": "wget",
        "full_name": "wget",
        "desc": "Internet file retriever",
        "versions": {"stable": "1.25.0", "head": "HEAD", "bottle": True},
        "urls": {
            "stable": {
                "url": "https://ftp.gnu.org/gnu/wget/wget-1.25.0.tar.gz",
            }
        },
    }


@pytest.fixture
def create_yaml_file(tmp_test_dir: Path):
    """
    Factory fixture for creating temporary YAML files.

    Usage:
        yaml_path = create_yaml_file("brewversion.yaml", {"key": "value"})
    """

    def _create(filename: str, data: dict[str, Any]) -> Path:
        path = tmp_test_dir / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.dump(data, f)
        return path

    return _create
