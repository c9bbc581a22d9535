"""Generic platform adapter: configure, validate, remove, and instructions.

Every platform shares the same document shape, so one set of functions
parameterised by a PlatformDescriptor covers them all.
"""

from __future__ import annotations

import logging
from pathlib import Path

from spectator_mcp import settings
from spectator_mcp.config.matching import build_server_entry, entry_is_well_formed
from spectator_mcp.config.reader import get_servers, has_entry, read_config
from spectator_mcp.config.writer import backup_config, remove_entry, upsert_entry, write_config
from spectator_mcp.errors import PathResolutionError, SpectatorMcpError
from spectator_mcp.models import (
    AuthStyle,
    ConfigureResult,
    PlatformDescriptor,
    Scope,
    ValidationResult,
)

logger = logging.getLogger(__name__)


def _require_path(descriptor: PlatformDescriptor, scope: Scope) -> Path:
    path = descriptor.resolve_path(scope)
    if path is None:
        raise PathResolutionError(
            f"Could not determine the {descriptor.display_name} configuration path "
            "on this operating system."
        )
    return path


def _effective_scope(descriptor: PlatformDescriptor, scope: Scope | str | None) -> Scope:
    if scope is None:
        return descriptor.default_scope
    try:
        chosen = Scope(scope)
    except ValueError as exc:
        raise PathResolutionError(f"Unknown scope '{scope}'. Use 'global' or 'project'.") from exc
    if chosen is Scope.PROJECT and not descriptor.has_project_scope:
        return Scope.GLOBAL
    return chosen


def configure(
    descriptor: PlatformDescriptor,
    api_key: str,
    *,
    scope: Scope | str | None = None,
    auth_style: AuthStyle = AuthStyle.URL,
) -> ConfigureResult:
    """Write the Spectator entry into the platform's config file.

    Steps: resolve path, read, back up when the entry already exists,
    upsert, write. Errors from any step propagate to the caller.
    """
    effective = _effective_scope(descriptor, scope)
    path = _require_path(descriptor, effective)

    document = read_config(path)
    already_configured = has_entry(document, settings.SERVER_NAME, str(path))

    backup = backup_config(path) if already_configured else None

    result = upsert_entry(document, settings.SERVER_NAME, build_server_entry(api_key, auth_style))
    write_config(path, result.document)

    logger.info(
        "%s %s (%s) at %s",
        "Updated" if result.was_update else "Configured",
        descriptor.display_name,
        effective,
        path,
    )
    return ConfigureResult(
        platform=descriptor.platform,
        config_path=str(path),
        scope=effective,
        updated=result.was_update,
        had_other_servers=result.had_other_servers,
        backup_path=str(backup) if backup is not None else "",
    )


def _validate_scope(descriptor: PlatformDescriptor, scope: Scope) -> ValidationResult | None:
    """Check one scope; None when that scope has no config file at all."""
    path = descriptor.resolve_path(scope)
    if path is None or not path.exists():
        return None

    try:
        servers = get_servers(read_config(path), str(path))
    except SpectatorMcpError as exc:
        return ValidationResult(valid=False, error=str(exc), scope=scope, config_path=str(path))

    entry = servers.get(settings.SERVER_NAME)
    if entry is None:
        return ValidationResult(
            valid=False,
            error="Spectator MCP server not configured",
            scope=scope,
            config_path=str(path),
        )
    if not entry_is_well_formed(entry):
        return ValidationResult(
            valid=False,
            error="Invalid Spectator MCP configuration",
            scope=scope,
            config_path=str(path),
        )
    return ValidationResult(valid=True, scope=scope, config_path=str(path))


def validate(descriptor: PlatformDescriptor) -> ValidationResult:
    """Report whether the entry is present in any scope. Never raises.

    Scopes are checked global first; the first valid result wins, otherwise
    the first result checked is reported.
    """
    results: list[ValidationResult] = []
    for scope in descriptor.scopes:
        try:
            checked = _validate_scope(descriptor, scope)
        except SpectatorMcpError as exc:
            checked = ValidationResult(valid=False, error=str(exc), scope=scope)
        if checked is not None:
            results.append(checked)

    if not results:
        return ValidationResult(valid=False, error="Configuration file not found")

    for checked in results:
        if checked.valid:
            return checked
    return results[0]


def remove(descriptor: PlatformDescriptor) -> bool:
    """Remove the entry from every scope. Returns True if any file changed.

    Missing files and files without the entry are skipped without writing.
    """
    removed_any = False
    for scope in descriptor.scopes:
        path = descriptor.resolve_path(scope)
        if path is None or not path.exists():
            continue

        result = remove_entry(read_config(path), settings.SERVER_NAME)
        if not result.removed:
            continue

        write_config(path, result.document)
        logger.info("Removed Spectator from %s (%s) at %s", descriptor.display_name, scope, path)
        removed_any = True

    if not removed_any:
        logger.debug("Spectator was not configured in %s", descriptor.display_name)
    return removed_any


def manual_instructions(descriptor: PlatformDescriptor, api_key: str) -> str:
    """Render the manual setup text for this platform."""
    return descriptor.instructions(descriptor, api_key)
