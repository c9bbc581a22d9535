"""config command -- print manual configuration instructions."""

from __future__ import annotations

from spectator_mcp import settings
from spectator_mcp.commands._helpers import EXIT_FAILURE, EXIT_SUCCESS
from spectator_mcp.config.base import PresenceDetectorPort
from spectator_mcp.console import PrompterPort, ReporterPort
from spectator_mcp.errors import SpectatorMcpError
from spectator_mcp.models import PlatformDescriptor
from spectator_mcp.platforms import adapter
from spectator_mcp.platforms.registry import all_descriptors, get_descriptor
from spectator_mcp.validation.api_key import normalize_api_key


def _instruction_key(api_key: str | None, prompter: PrompterPort) -> str:
    raw = api_key
    if not raw:
        raw = prompter.ask_text(
            f"Enter your Spectator API key (or press enter to use {settings.API_KEY_PLACEHOLDER})",
            default=settings.API_KEY_PLACEHOLDER,
        )
    raw = (raw or "").strip()
    if not raw or raw == settings.API_KEY_PLACEHOLDER:
        return settings.API_KEY_PLACEHOLDER
    return normalize_api_key(raw)


def _targets(platform: str | None, detector: PresenceDetectorPort) -> list[PlatformDescriptor]:
    if platform:
        return [get_descriptor(platform)]
    installed = detector.list_installed()
    if not installed:
        return all_descriptors()
    return [get_descriptor(p) for p in installed]


def run_config(
    api_key: str | None,
    *,
    detector: PresenceDetectorPort,
    reporter: ReporterPort,
    prompter: PrompterPort,
    platform: str | None = None,
) -> int:
    """Execute the config command and return the process exit code."""
    reporter.header("Manual Configuration Instructions")
    try:
        key = _instruction_key(api_key, prompter)
        descriptors = _targets(platform, detector)
    except SpectatorMcpError as exc:
        reporter.error(str(exc))
        return EXIT_FAILURE

    for descriptor in descriptors:
        reporter.text(adapter.manual_instructions(descriptor, key))
    return EXIT_SUCCESS
