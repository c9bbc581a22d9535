"""Port: detection of installed client applications."""

from __future__ import annotations

from typing import Protocol

from spectator_mcp.models import Platform


class PresenceDetectorPort(Protocol):
    """Port for answering whether a client application is installed."""

    def is_installed(self, platform: Platform) -> bool:
        """Return True when the application (or its config dir) is present."""
        ...

    def list_installed(self) -> list[Platform]:
        """Return installed platforms in the fixed platform order."""
        ...
