"""remove command -- delete the Spectator entry from target platforms."""

from __future__ import annotations

import logging

from spectator_mcp.commands._helpers import (
    EXIT_FAILURE,
    EXIT_SUCCESS,
    detect_or_fail,
    names,
)
from spectator_mcp.config.base import PresenceDetectorPort
from spectator_mcp.console import PrompterPort, ReporterPort
from spectator_mcp.errors import SpectatorMcpError
from spectator_mcp.models import Platform, PlatformOutcome, RunSummary
from spectator_mcp.platforms import adapter
from spectator_mcp.platforms.registry import get_descriptor, parse_platform_list

logger = logging.getLogger(__name__)


def _resolve_targets(platforms: str | None, detector: PresenceDetectorPort) -> list[Platform]:
    explicit = parse_platform_list(platforms or "")
    if explicit is not None:
        return explicit
    return detect_or_fail(detector)


def remove_from_platforms(targets: list[Platform], reporter: ReporterPort) -> RunSummary:
    """Remove the entry from each target; failures are recorded, not raised."""
    outcomes: list[PlatformOutcome] = []
    for platform in targets:
        descriptor = get_descriptor(platform)
        try:
            removed = adapter.remove(descriptor)
        except SpectatorMcpError as exc:
            reporter.error(f"Failed to remove from {descriptor.display_name}: {exc}")
            outcomes.append(
                PlatformOutcome(
                    platform=platform,
                    display_name=descriptor.display_name,
                    success=False,
                    error=str(exc),
                )
            )
            continue
        except Exception as exc:
            logger.debug("Unexpected error removing from %s", platform, exc_info=True)
            reporter.error(
                f"Failed to remove from {descriptor.display_name}: {type(exc).__name__}: {exc}"
            )
            outcomes.append(
                PlatformOutcome(
                    platform=platform,
                    display_name=descriptor.display_name,
                    success=False,
                    error=f"Internal error: {type(exc).__name__}: {exc}",
                )
            )
            continue

        if removed:
            reporter.success(f"Removed Spectator from {descriptor.display_name}")
        else:
            reporter.warning(f"Spectator was not configured in {descriptor.display_name}")
        outcomes.append(
            PlatformOutcome(
                platform=platform,
                display_name=descriptor.display_name,
                success=True,
                updated=removed,
            )
        )
    return RunSummary(outcomes=outcomes)


def run_remove(
    *,
    detector: PresenceDetectorPort,
    reporter: ReporterPort,
    prompter: PrompterPort,
    platforms: str | None = None,
    assume_yes: bool = False,
) -> int:
    """Execute the remove command and return the process exit code."""
    reporter.header("Remove Spectator MCP")

    try:
        targets = _resolve_targets(platforms, detector)
    except SpectatorMcpError as exc:
        reporter.error(str(exc))
        return EXIT_FAILURE

    if not assume_yes and not prompter.confirm(
        f"Remove Spectator MCP from {names(targets)}?", default=False
    ):
        reporter.info("Removal cancelled")
        return EXIT_SUCCESS

    summary = remove_from_platforms(targets, reporter)
    if targets and summary.all_failed:
        reporter.error("Removal failed on every platform.")
        return EXIT_FAILURE
    reporter.success("Removal complete")
    return EXIT_SUCCESS
