"""Domain models for spectator-mcp. All frozen dataclasses -- no mutation after creation."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

# ─── Enumerations ─────────────────────────────────────────────


class Platform(StrEnum):
    CLAUDE_DESKTOP = "claude"
    CLAUDE_CODE = "claudecode"
    CURSOR = "cursor"
    WINDSURF = "windsurf"
    VSCODE = "vscode"
    CLINE = "cline"


class Scope(StrEnum):
    GLOBAL = "global"
    PROJECT = "project"


class AuthStyle(StrEnum):
    """How the API key reaches the remote endpoint."""

    URL = "url"  # key embedded as the last URL path segment
    HEADER = "header"  # bearer token via --header and an env var


# ─── Config Models ────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class ServerEntry:
    """A single MCP server entry in a client config file."""

    command: str
    args: list[str] = field(default_factory=list)
    env: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, object]:
        result: dict[str, object] = {"command": self.command, "args": list(self.args)}
        if self.env:
            result["env"] = dict(self.env)
        return result


@dataclass(frozen=True, slots=True)
class PlatformDescriptor:
    """Static description of one supported application.

    ``resolve_path`` maps a scope to the config file for this platform;
    platforms without a project config return the global path for both.
    ``instructions`` renders the manual setup text for an API key.
    """

    platform: Platform
    display_name: str
    resolve_path: Callable[[Scope], Path | None]
    instructions: Callable[[PlatformDescriptor, str], str]
    default_scope: Scope = Scope.GLOBAL
    has_project_scope: bool = False

    @property
    def scopes(self) -> tuple[Scope, ...]:
        if self.has_project_scope:
            return (Scope.GLOBAL, Scope.PROJECT)
        return (Scope.GLOBAL,)


@dataclass(frozen=True, slots=True)
class UpsertResult:
    document: dict[str, object]
    was_update: bool
    had_other_servers: bool


@dataclass(frozen=True, slots=True)
class RemoveEntryResult:
    document: dict[str, object]
    removed: bool


# ─── Operation Results ────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class ConfigureResult:
    platform: Platform
    config_path: str
    scope: Scope
    updated: bool
    had_other_servers: bool
    backup_path: str = ""


@dataclass(frozen=True, slots=True)
class ValidationResult:
    valid: bool
    error: str = ""
    scope: Scope | None = None
    config_path: str = ""


@dataclass(frozen=True, slots=True)
class PlatformOutcome:
    """Per-platform record collected by the command layer."""

    platform: Platform
    display_name: str
    success: bool
    updated: bool = False
    had_other_servers: bool = False
    config_path: str = ""
    backup_path: str = ""
    error: str = ""


@dataclass(frozen=True, slots=True)
class RunSummary:
    outcomes: list[PlatformOutcome] = field(default_factory=list)

    @property
    def succeeded(self) -> list[PlatformOutcome]:
        return [o for o in self.outcomes if o.success]

    @property
    def failed(self) -> list[PlatformOutcome]:
        return [o for o in self.outcomes if not o.success]

    @property
    def all_failed(self) -> bool:
        return not self.succeeded


@dataclass(frozen=True, slots=True)
class ApiKeyCheck:
    valid: bool
    error: str = ""


@dataclass(frozen=True, slots=True)
class RuntimeCheck:
    ok: bool
    node_version: str = ""
    npx_version: str = ""
    error: str = ""
