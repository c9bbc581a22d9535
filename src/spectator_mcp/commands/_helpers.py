"""Shared helpers for the command modules."""

from __future__ import annotations

from spectator_mcp.config.base import PresenceDetectorPort
from spectator_mcp.console import PrompterPort
from spectator_mcp.errors import NoPlatformsDetectedError, SpectatorMcpError
from spectator_mcp.models import Platform
from spectator_mcp.platforms.registry import display_name, parse_platform_list
from spectator_mcp.validation.api_key import normalize_api_key

EXIT_SUCCESS = 0
EXIT_FAILURE = 1

NO_PLATFORMS_MSG = (
    "No supported platforms detected. Please install Claude Desktop, Claude Code, "
    "Cursor, Windsurf, VS Code, or Cline first."
)


def resolve_api_key(explicit: str | None, prompter: PrompterPort) -> str:
    """Return a usable key from the flag/positional value or an interactive prompt.

    Raises ApiKeyFormatError when the key fails the local checks.
    """
    raw = explicit
    if not raw:
        raw = prompter.ask_secret("Enter your Spectator API key")
    return normalize_api_key(raw)


def detect_or_fail(detector: PresenceDetectorPort) -> list[Platform]:
    installed = detector.list_installed()
    if not installed:
        raise NoPlatformsDetectedError(NO_PLATFORMS_MSG)
    return installed


def select_targets(
    requested: str | None,
    installed: list[Platform],
    *,
    require_installed: bool = True,
) -> list[Platform]:
    """Resolve the platforms a command should act on.

    ``requested`` is a comma-separated list or "all"; empty means every
    detected platform. Unknown names raise UnknownPlatformError.
    """
    parsed = parse_platform_list(requested or "")
    if parsed is None:
        return list(installed)

    if require_installed:
        missing = [p for p in parsed if p not in installed]
        if missing:
            names = ", ".join(p.value for p in missing)
            raise SpectatorMcpError(f"Platform(s) not installed: {names}")
    return parsed


def names(platforms: list[Platform]) -> str:
    return ", ".join(display_name(p) for p in platforms)
