"""Optional remote API key check against the Spectator endpoint."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from spectator_mcp import settings
from spectator_mcp.models import ApiKeyCheck
from spectator_mcp.validation.base import ApiKeyVerifierPort
from spectator_mcp.validation.api_key import format_api_url

logger = logging.getLogger(__name__)

_INVALID_KEY_MSG = "Invalid API key, please get a new one at spectatorcontext.com"
_UNREACHABLE_MSG = "Cannot connect to Spectator API. Please check your internet connection."


@dataclass
class DefaultApiKeyVerifier:
    """Async verifier over a shared httpx client."""

    http: httpx.AsyncClient

    async def verify(self, api_key: str) -> ApiKeyCheck:
        if not api_key.strip():
            return ApiKeyCheck(valid=False, error="API key is required")

        try:
            response = await self.http.get(format_api_url(api_key))
        except httpx.TimeoutException as exc:
            logger.warning("API key check timed out: %s", exc)
            return ApiKeyCheck(valid=False, error=f"{_UNREACHABLE_MSG} (timed out)")
        except httpx.HTTPError as exc:
            logger.warning("API key check failed: %s", exc)
            return ApiKeyCheck(valid=False, error=_UNREACHABLE_MSG)

        if response.status_code == 200:
            return ApiKeyCheck(valid=True)
        if response.status_code in (401, 403):
            return ApiKeyCheck(valid=False, error=_INVALID_KEY_MSG)
        return ApiKeyCheck(valid=False, error=f"Unexpected response: {response.status_code}")


async def check_api_key(api_key: str, *, timeout: float | None = None) -> ApiKeyCheck:
    """Run a one-off check with a short-lived client."""
    seconds = timeout if timeout is not None else settings.http_timeout()
    async with httpx.AsyncClient(
        timeout=httpx.Timeout(seconds),
        follow_redirects=True,
    ) as http_client:
        verifier: ApiKeyVerifierPort = DefaultApiKeyVerifier(http_client)
        return await verifier.verify(api_key)
