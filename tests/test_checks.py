"""
Tests for brewversion.checks module.

Tests the source URL compatibility checks including:
- Version detection, HTTPS and archive extension checks
- Declared version matching
- Formula comparison (injected lookup and mocked HTTP)
- Overall status and titles
- Configuration overrides
"""

from __future__ import annotations

import requests_mock

from brewversion.checks import overall_status, run_checks
from brewversion.config import load_config
from brewversion.exceptions import NetworkError
from brewversion.results import CheckResult

URL = "https://example.com/tool-2.4.1.tar.gz"
FORMULA_API_WGET = "https://formulae.brew.sh/api/formula/wget.json"


def statuses(report) -> list[str]:
    return [check.status for check in report.checks]


class TestOverallStatus:
    """Tests for combining individual statuses."""

    def test_worst_status_wins(self):
        """Test fail > warn > ok."""
        ok = CheckResult("ok", "fine")
        warn = CheckResult("warn", "hmm")
        fail = CheckResult("fail", "no")
        assert overall_status([ok, ok]) == "ok"
        assert overall_status([ok, warn]) == "warn"
        assert overall_status([warn, fail, ok]) == "fail"
        assert overall_status([]) == "ok"


class TestBasicChecks:
    """Tests for checks that need only the URL."""

    def test_empty_url(self):
        """Test that a blank URL fails immediately."""
        report = run_checks("   ")
        assert report.status == "fail"
        assert report.title == "Source URL required"
        assert [c.message for c in report.checks] == ["No URL provided."]
        assert report.detected_version is None

    def test_compatible_url(self):
        """Test a detectable HTTPS tarball URL."""
        report = run_checks(URL)
        assert report.status == "ok"
        assert report.title == "Compatible"
        assert report.detected_version == "2.4.1"
        assert statuses(report) == ["ok", "ok", "ok"]
        assert report.checks[0].message == "Detected version from URL: 2.4.1"
        assert report.summary == "All checks passed. Detected version 2.4.1."

    def test_http_url_warns(self):
        """Test that plain HTTP produces a warning."""
        report = run_checks("http://example.com/tool-2.4.1.tar.gz")
        assert report.status == "warn"
        assert report.title == "Compatible with Warnings"
        assert statuses(report) == ["ok", "warn", "ok"]

    def test_https_requirement_can_be_disabled(self, create_yaml_file):
        """Test that require_https: false skips the HTTPS warning."""
        path = create_yaml_file("cfg.yaml", {"checks": {"require_https": False}})
        config = load_config(path, discover=False)

        report = run_checks("http://example.com/tool-2.4.1.tar.gz", config=config)

        assert report.status == "ok"
        assert len(report.checks) == 2

    def test_undetectable_url_fails(self):
        """Test that a URL with no version fails."""
        report = run_checks("https://example.com/download")
        assert report.status == "fail"
        assert report.title == "Not Compatible"
        assert report.checks[0].status == "fail"
        assert report.checks[2].status == "warn"
        assert report.detected_version is None

    def test_archive_extension_with_query(self):
        """Test that a query string after the extension is accepted."""
        report = run_checks("https://example.com/tool-2.4.1.zip?raw=true")
        assert report.checks[2].status == "ok"

    def test_custom_archive_extensions(self, create_yaml_file):
        """Test that configured extensions replace the defaults."""
        path = create_yaml_file("cfg.yaml", {"checks": {"archive_extensions": ["zip"]}})
        config = load_config(path, discover=False)

        report = run_checks(URL, config=config)

        assert report.checks[2].status == "warn"


class TestDeclaredVersion:
    """Tests for the declared version check."""

    def test_matching_declared_version(self):
        """Test that a matching declared version passes."""
        report = run_checks(URL, declared_version="2.4.1")
        assert report.status == "ok"
        assert report.checks[-1].message == (
            "Declared version matches detected URL version (2.4.1)."
        )

    def test_equivalent_declared_version(self):
        """Test that equivalent spellings match ('v2.4.1', '2.4.1.0')."""
        assert run_checks(URL, declared_version="v2.4.1").status == "ok"
        assert run_checks(URL, declared_version="2.4.1.0").status == "ok"

    def test_mismatched_declared_version(self):
        """Test that a different declared version fails."""
        report = run_checks(URL, declared_version="2.4.0")
        assert report.status == "fail"
        assert "does not match" in report.checks[-1].message

    def test_unparseable_declared_version(self):
        """Test that a declared version without digits fails."""
        report = run_checks(URL, declared_version="latest")
        assert report.status == "fail"
        assert report.checks[-1].message == "Declared version is not parseable."


class TestFormulaComparison:
    """Tests for comparing against the published formula."""

    def test_matches_stable(self):
        """Test that an equal stable version passes."""
        report = run_checks(URL, formula_name="tool", fetch_stable=lambda name: "2.4.1")
        assert report.status == "ok"
        assert "matches current stable" in report.checks[-1].message

    def test_older_than_stable(self):
        """Test that an older detected version warns."""
        report = run_checks(URL, formula_name="tool", fetch_stable=lambda name: "2.5.0")
        assert report.status == "warn"
        assert "is older than current stable" in report.checks[-1].message

    def test_newer_than_stable(self):
        """Test that a newer detected version warns."""
        report = run_checks(URL, formula_name="tool", fetch_stable=lambda name: "2.0")
        assert report.status == "warn"
        assert "is newer than current stable" in report.checks[-1].message

    def test_lookup_failure_warns(self):
        """Test that a NetworkError becomes a warning, not an exception."""

        def failing(name: str) -> str:
            raise NetworkError(f"Formula {name!r} not found")

        report = run_checks(URL, formula_name="tool", fetch_stable=failing)
        assert report.status == "warn"
        assert "Could not fetch formula metadata" in report.checks[-1].message

    def test_undetected_version_with_formula(self):
        """Test that an undetectable URL still reports the stable version."""
        report = run_checks(
            "https://example.com/download",
            formula_name="tool",
            fetch_stable=lambda name: "2.4.1",
        )
        assert report.status == "fail"
        assert report.checks[-1].status == "warn"
        assert "Current stable for 'tool' is 2.4.1" in report.checks[-1].message

    def test_live_lookup_is_mocked(self, formula_payload):
        """Test the default lookup against a mocked formula API."""
        url = "https://ftp.gnu.org/gnu/wget/wget-1.25.0.tar.gz"
        with requests_mock.Mocker() as m:
            m.get(FORMULA_API_WGET, json=formula_payload)

            report = run_checks(url, declared_version="1.25.0", formula_name="wget")

        assert report.status == "ok"
        assert report.detected_version == "1.25.0"
        assert statuses(report) == ["ok", "ok", "ok", "ok", "ok"]

    def test_configured_api_location(self, create_yaml_file, formula_payload):
        """Test that formula_api.base_url from config is used."""
        path = create_yaml_file(
            "cfg.yaml", {"formula_api": {"base_url": "https://mirror.example/f"}}
        )
        config = load_config(path, discover=False)
        with requests_mock.Mocker() as m:
            m.get("https://mirror.example/f/wget.json", status_code=404)

            report = run_checks(URL, formula_name="wget", config=config)

        assert report.status == "warn"
        assert "not found" in report.checks[-1].message
