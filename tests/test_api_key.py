"""Tests for validation/api_key.py: local API key normalisation."""

from __future__ import annotations

import pytest

from spectator_mcp.errors import ApiKeyFormatError
from spectator_mcp.validation.api_key import (
    extract_api_key_from_url,
    format_api_url,
    normalize_api_key,
)


class TestExtractFromUrl:
    def test_key_in_url(self):
        url = "https://spectatorcontext.com/mcp-server/mcp/sk_abc12345"
        assert extract_api_key_from_url(url) == "sk_abc12345"

    def test_trailing_slash(self):
        url = "https://spectatorcontext.com/mcp-server/mcp/sk_abc12345/"
        assert extract_api_key_from_url(url) == "sk_abc12345"

    def test_no_key(self):
        assert extract_api_key_from_url("https://spectatorcontext.com/mcp-server/mcp") is None
        assert extract_api_key_from_url("https://example.com/other/path") is None


class TestFormatApiUrl:
    def test_default(self):
        assert format_api_url("sk_abc12345") == (
            "https://api.spectatorcontext.com/mcp-server/mcp/sk_abc12345"
        )

    def test_override(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("SPECTATOR_MCP_API_URL", "http://localhost:9000/mcp-server/mcp/")
        assert format_api_url("k") == "http://localhost:9000/mcp-server/mcp/k"


class TestNormalizeApiKey:
    def test_strips_whitespace(self):
        assert normalize_api_key("  sk_abc12345\n") == "sk_abc12345"

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_empty(self, raw: str | None):
        with pytest.raises(ApiKeyFormatError, match="required"):
            normalize_api_key(raw)

    def test_pasted_url(self):
        url = "https://spectatorcontext.com/mcp-server/mcp/sk_abc12345"
        assert normalize_api_key(url) == "sk_abc12345"

    def test_url_without_key(self):
        with pytest.raises(ApiKeyFormatError, match="Could not find an API key"):
            normalize_api_key("https://spectatorcontext.com/dashboard")

    def test_too_short(self):
        with pytest.raises(ApiKeyFormatError, match="too short"):
            normalize_api_key("abc")

    @pytest.mark.parametrize("raw", ["sk_abc 12345", "sk_abc/12345"])
    def test_rejects_spaces_and_slashes(self, raw: str):
        with pytest.raises(ApiKeyFormatError, match="must not contain"):
            normalize_api_key(raw)
