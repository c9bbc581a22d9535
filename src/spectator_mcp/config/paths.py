"""Resolve client config file paths per platform, scope, and OS.

Resolution is pure: nothing here touches the filesystem beyond reading
the home and working directories. ``system`` defaults to ``sys.platform``
and exists so callers can resolve paths for another OS family.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Callable
from pathlib import Path

from spectator_mcp.errors import PathResolutionError
from spectator_mcp.models import Platform, Scope

logger = logging.getLogger(__name__)

_CLINE_EXTENSION_ID = "saoudrizwan.claude-dev"
_CLINE_SETTINGS_FILE = "cline_mcp_settings.json"

# ─── OS helpers ─────────────────────────────────────────────────


def _os_family(system: str | None) -> str:
    name = system if system is not None else sys.platform
    if name.startswith("linux"):
        return "linux"
    return name


def _appdata() -> Path:
    return Path(os.environ.get("APPDATA", str(Path.home() / "AppData" / "Roaming")))


def _xdg_config_home() -> Path:
    return Path(os.environ.get("XDG_CONFIG_HOME", str(Path.home() / ".config")))


# ─── Global (machine-wide) config paths ─────────────────────────


def _claude_desktop_config(system: str | None) -> Path | None:
    match _os_family(system):
        case "darwin":
            return (
                Path.home()
                / "Library"
                / "Application Support"
                / "Claude"
                / "claude_desktop_config.json"
            )
        case "linux":
            return _xdg_config_home() / "Claude" / "claude_desktop_config.json"
        case "win32":
            return _appdata() / "Claude" / "claude_desktop_config.json"
    return None


def _claude_code_config(system: str | None) -> Path:
    return Path.home() / ".claudecode" / "settings.json"


def _cursor_global_config(system: str | None) -> Path:
    return Path.home() / ".cursor" / "mcp.json"


def _windsurf_config(system: str | None) -> Path:
    return Path.home() / ".codeium" / "windsurf" / "mcp_config.json"


def _vscode_global_config(system: str | None) -> Path:
    return Path.home() / ".mcp.json"


def _cline_config(system: str | None) -> Path | None:
    match _os_family(system):
        case "darwin":
            base = Path.home() / "Library" / "Application Support"
        case "linux":
            base = _xdg_config_home()
        case "win32":
            base = _appdata()
        case _:
            return None
    return base / "Code" / "User" / "globalStorage" / _CLINE_EXTENSION_ID / _CLINE_SETTINGS_FILE


_GLOBAL_CONFIGS: dict[Platform, Callable[[str | None], Path | None]] = {
    Platform.CLAUDE_DESKTOP: _claude_desktop_config,
    Platform.CLAUDE_CODE: _claude_code_config,
    Platform.CURSOR: _cursor_global_config,
    Platform.WINDSURF: _windsurf_config,
    Platform.VSCODE: _vscode_global_config,
    Platform.CLINE: _cline_config,
}

# ─── Project-scoped config paths ────────────────────────────────

# Relative to the current working directory.
# Platforms missing here only have a global config.
_PROJECT_CONFIGS: dict[Platform, str] = {
    Platform.CURSOR: ".cursor/mcp.json",
    Platform.VSCODE: ".vscode/mcp.json",
}


# ─── Public API ─────────────────────────────────────────────────


def supports_project_scope(platform: Platform | str) -> bool:
    """Return True when the platform reads a project-scoped config file."""
    try:
        return Platform(platform) in _PROJECT_CONFIGS
    except ValueError:
        return False


def resolve_config_path(
    platform: Platform | str,
    scope: Scope | str = Scope.GLOBAL,
    *,
    system: str | None = None,
) -> Path | None:
    """Resolve the config file for a platform and scope.

    Returns None for an unrecognised platform id, or when the platform has
    no known config location on this OS. Platforms without a project config
    ignore ``scope`` and always return their global path.
    """
    try:
        platform_enum = Platform(platform)
    except ValueError:
        logger.debug("No config path for unknown platform %r", platform)
        return None

    try:
        scope_enum = Scope(scope)
    except ValueError as exc:
        raise PathResolutionError(
            f"Unknown scope '{scope}'. Use 'global' or 'project'."
        ) from exc

    if scope_enum is Scope.PROJECT and platform_enum in _PROJECT_CONFIGS:
        return Path.cwd() / _PROJECT_CONFIGS[platform_enum]

    return _GLOBAL_CONFIGS[platform_enum](system)
