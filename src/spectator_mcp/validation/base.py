"""Port: remote API key verification."""

from __future__ import annotations

from typing import Protocol

from spectator_mcp.models import ApiKeyCheck


class ApiKeyVerifierPort(Protocol):
    """Port for asking the Spectator API whether a key is accepted."""

    async def verify(self, api_key: str) -> ApiKeyCheck:
        """Return the verdict; failures are reported, never raised."""
        ...
