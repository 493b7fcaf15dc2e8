"""
Tests for brewversion.formulae module.

Tests the formula API client including:
- URL construction
- Stable version lookup
- HTTP and transport errors mapped to NetworkError
- Malformed payloads
"""

from __future__ import annotations

import pytest
import requests
import requests_mock

from brewversion.exceptions import NetworkError
from brewversion.formulae import fetch_formula, fetch_stable_version, formula_url

WGET_URL = "https://formulae.brew.sh/api/formula/wget.json"


class TestFormulaUrl:
    """Tests for formula_url."""

    def test_default_base(self):
        """Test the default API location."""
        assert formula_url("wget") == WGET_URL

    def test_name_is_quoted(self):
        """Test that versioned formula names are URL-encoded."""
        assert formula_url("python@3.12").endswith("/python%403.12.json")

    def test_custom_base_with_trailing_slash(self):
        """Test that a trailing slash on the base is tolerated."""
        assert (
            formula_url("wget", "https://mirror.example/api/formula/")
            == "https://mirror.example/api/formula/wget.json"
        )


class TestFetchStableVersion:
    """Tests for stable version lookup."""

    def test_returns_stable_version(self, formula_payload):
        """Test that versions.stable is returned."""
        with requests_mock.Mocker() as m:
            m.get(WGET_URL, json=formula_payload)

            assert fetch_stable_version("wget") == "1.25.0"

    def test_fetch_formula_returns_payload(self, formula_payload):
        """Test that the raw payload is returned as a dict."""
        with requests_mock.Mocker() as m:
            m.get(WGET_URL, json=formula_payload)

            data = fetch_formula("wget")

        assert data["name"] == "wget"
        assert data["versions"]["stable"] == "1.25.0"

    def test_custom_base_url_and_timeout(self, formula_payload):
        """Test that the base URL and timeout are passed through."""
        with requests_mock.Mocker() as m:
            m.get("https://mirror.example/api/wget.json", json=formula_payload)

            stable = fetch_stable_version(
                "wget", base_url="https://mirror.example/api", timeout=3
            )

            assert stable == "1.25.0"
            assert m.last_request.timeout == 3

    def test_missing_stable_raises(self):
        """Test that a payload without versions.stable raises NetworkError."""
        with requests_mock.Mocker() as m:
            m.get(WGET_URL, json={"name": "wget", "versions": {}})

            with pytest.raises(NetworkError, match="has no stable version"):
                fetch_stable_version("wget")


class TestErrorHandling:
    """Tests for HTTP and payload failures."""

    def test_not_found(self):
        """Test that 404 raises NetworkError naming the formula."""
        with requests_mock.Mocker() as m:
            m.get(WGET_URL, status_code=404)

            with pytest.raises(NetworkError, match="Formula 'wget' not found"):
                fetch_formula("wget")

    def test_server_error(self):
        """Test that other HTTP errors include the status code."""
        with requests_mock.Mocker() as m:
            m.get(WGET_URL, status_code=500, reason="Internal Server Error")

            with pytest.raises(NetworkError, match="500"):
                fetch_formula("wget")

    def test_connection_error(self):
        """Test that transport failures raise NetworkError."""
        with requests_mock.Mocker() as m:
            m.get(WGET_URL, exc=requests.exceptions.ConnectionError("refused"))

            with pytest.raises(NetworkError, match="Failed to fetch formula"):
                fetch_formula("wget")

    def test_error_is_chained(self):
        """Test that the original requests exception is preserved."""
        with requests_mock.Mocker() as m:
            m.get(WGET_URL, exc=requests.exceptions.Timeout("slow"))

            with pytest.raises(NetworkError) as exc_info:
                fetch_formula("wget")

        assert isinstance(exc_info.value.__cause__, requests.exceptions.Timeout)

    def test_invalid_json(self):
        """Test that a non-JSON body raises NetworkError."""
        with requests_mock.Mocker() as m:
            m.get(WGET_URL, text="<html>not json</html>")

            with pytest.raises(NetworkError, match="invalid JSON"):
                fetch_formula("wget")

    def test_non_object_payload(self):
        """Test that a JSON list payload raises NetworkError."""
        with requests_mock.Mocker() as m:
            m.get(WGET_URL, json=["wget"])

            with pytest.raises(NetworkError, match="unexpected payload"):
                fetch_formula("wget")
