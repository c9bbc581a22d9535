"""The fixed table of supported platforms."""

from __future__ import annotations

from functools import partial

from spectator_mcp.config.paths import resolve_config_path, supports_project_scope
from spectator_mcp.errors import UnknownPlatformError
from spectator_mcp.models import Platform, PlatformDescriptor, Scope
from spectator_mcp.platforms import instructions

_DISPLAY_NAMES: dict[Platform, str] = {
    Platform.CLAUDE_DESKTOP: "Claude Desktop",
    Platform.CLAUDE_CODE: "Claude Code",
    Platform.CURSOR: "Cursor",
    Platform.WINDSURF: "Windsurf",
    Platform.VSCODE: "VS Code",
    Platform.CLINE: "Cline (VS Code Extension)",
}

# VS Code favours per-workspace servers.
_DEFAULT_SCOPES: dict[Platform, Scope] = {Platform.VSCODE: Scope.PROJECT}

_TEMPLATES = {
    Platform.CLAUDE_DESKTOP: instructions.claude_desktop,
    Platform.CLAUDE_CODE: instructions.claude_code,
    Platform.CURSOR: instructions.cursor,
    Platform.WINDSURF: instructions.windsurf,
    Platform.VSCODE: instructions.vscode,
    Platform.CLINE: instructions.cline,
}


def _descriptor(platform: Platform) -> PlatformDescriptor:
    return PlatformDescriptor(
        platform=platform,
        display_name=_DISPLAY_NAMES[platform],
        resolve_path=partial(resolve_config_path, platform),
        instructions=_TEMPLATES[platform],
        default_scope=_DEFAULT_SCOPES.get(platform, Scope.GLOBAL),
        has_project_scope=supports_project_scope(platform),
    )


_DESCRIPTORS: dict[Platform, PlatformDescriptor] = {p: _descriptor(p) for p in Platform}


def all_descriptors() -> list[PlatformDescriptor]:
    """Return every supported platform in the fixed order."""
    return list(_DESCRIPTORS.values())


def get_descriptor(platform: Platform | str) -> PlatformDescriptor:
    """Look up a platform by id; raise UnknownPlatformError for anything else."""
    try:
        return _DESCRIPTORS[Platform(str(platform).strip().lower())]
    except ValueError as exc:
        supported = ", ".join(p.value for p in Platform)
        raise UnknownPlatformError(
            f"Unknown platform '{platform}'. Supported platforms: {supported}."
        ) from exc


def display_name(platform: Platform | str) -> str:
    try:
        return _DISPLAY_NAMES[Platform(platform)]
    except ValueError:
        return str(platform)


def parse_platform_list(text: str) -> list[Platform] | None:
    """Parse a comma-separated platform list.

    Returns None for "all" or a list naming no platform at all, meaning
    "every detected platform". Duplicates are dropped, order is kept.
    """
    cleaned = text.strip().lower()
    if not cleaned or cleaned == "all":
        return None
    result: list[Platform] = []
    for name in cleaned.split(","):
        name = name.strip()
        if not name:
            continue
        platform = get_descriptor(name).platform
        if platform not in result:
            result.append(platform)
    return result or None
