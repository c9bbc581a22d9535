"""validate command -- report which platforms have a working Spectator entry."""

from __future__ import annotations

from spectator_mcp import settings
from spectator_mcp.commands._helpers import (
    EXIT_FAILURE,
    EXIT_SUCCESS,
    detect_or_fail,
    select_targets,
)
from spectator_mcp.config.base import PresenceDetectorPort
from spectator_mcp.config.matching import entry_auth_style, extract_api_key, mask_key
from spectator_mcp.config.reader import get_servers, read_config
from spectator_mcp.console import ReporterPort
from spectator_mcp.errors import SpectatorMcpError
from spectator_mcp.models import PlatformDescriptor, ValidationResult
from spectator_mcp.platforms import adapter
from spectator_mcp.platforms.registry import get_descriptor


def _describe_entry(result: ValidationResult) -> str:
    """Return e.g. ' (url form, key abcd...wxyz)' for a valid result."""
    try:
        entry = get_servers(read_config(result.config_path)).get(settings.SERVER_NAME)
    except SpectatorMcpError:
        return ""
    if not isinstance(entry, dict):
        return ""
    style = entry_auth_style(entry)
    key = extract_api_key(entry)
    parts = []
    if style is not None:
        parts.append(f"{style} form")
    if key:
        parts.append(f"key {mask_key(key)}")
    return f" ({', '.join(parts)})" if parts else ""


def _label(descriptor: PlatformDescriptor, result: ValidationResult) -> str:
    if descriptor.has_project_scope and result.scope is not None:
        return f"{descriptor.display_name} [{result.scope}]"
    return descriptor.display_name


def run_validate(
    *,
    detector: PresenceDetectorPort,
    reporter: ReporterPort,
    platforms: str | None = None,
) -> int:
    """Execute the validate command and return the process exit code."""
    reporter.header("Validating Spectator MCP Configurations")

    try:
        installed = detect_or_fail(detector)
        targets = select_targets(platforms, installed, require_installed=False)
    except SpectatorMcpError as exc:
        reporter.error(str(exc))
        return EXIT_FAILURE

    reporter.section("Validation Results:")
    valid_count = 0
    for platform in targets:
        descriptor = get_descriptor(platform)
        result = adapter.validate(descriptor)
        if result.valid:
            valid_count += 1
            reporter.success(
                f"{_label(descriptor, result)}: Configured correctly{_describe_entry(result)}"
            )
        else:
            reporter.error(f"{_label(descriptor, result)}: {result.error or 'Not configured'}")

    if valid_count == 0:
        reporter.info("Run `spectator-mcp setup` to configure your platforms.")
        return EXIT_FAILURE
    return EXIT_SUCCESS
