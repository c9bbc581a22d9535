"""Local API key checks. No network access."""

from __future__ import annotations

import re

from spectator_mcp import settings
from spectator_mcp.errors import ApiKeyFormatError

MIN_API_KEY_LENGTH = 8

_KEY_IN_URL = re.compile(r"/mcp-server/mcp/([^/\s]+)/?$")


def extract_api_key_from_url(url: str) -> str | None:
    """Pull the key out of an endpoint URL like ``https://.../mcp-server/mcp/<KEY>``."""
    match = _KEY_IN_URL.search(url.strip())
    return match.group(1) if match else None


def format_api_url(api_key: str) -> str:
    """Return the endpoint URL used by the remote check and custom connectors."""
    return f"{settings.api_url()}/{api_key}"


def normalize_api_key(raw: str | None) -> str:
    """Return a cleaned API key or raise ApiKeyFormatError.

    Users often paste the whole endpoint URL; the key is extracted from it.
    """
    key = (raw or "").strip()
    if not key:
        raise ApiKeyFormatError("API key is required.")

    if key.startswith(("https://", "http://")):
        extracted = extract_api_key_from_url(key)
        if extracted is None:
            raise ApiKeyFormatError(
                "Could not find an API key in that URL. Expected .../mcp-server/mcp/<API_KEY>."
            )
        key = extracted

    if len(key) < MIN_API_KEY_LENGTH:
        raise ApiKeyFormatError(
            f"API key looks too short ({len(key)} characters, "
            f"expected at least {MIN_API_KEY_LENGTH}). Copy it again from spectatorcontext.com."
        )
    if any(ch.isspace() for ch in key) or "/" in key:
        raise ApiKeyFormatError("API key must not contain spaces or '/' characters.")
    return key
