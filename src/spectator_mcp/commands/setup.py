"""setup command -- write the Spectator entry into every target platform."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from spectator_mcp import settings
from spectator_mcp.commands._helpers import (
    EXIT_FAILURE,
    EXIT_SUCCESS,
    detect_or_fail,
    names,
    resolve_api_key,
    select_targets,
)
from spectator_mcp.config.base import PresenceDetectorPort
from spectator_mcp.console import PrompterPort, ReporterPort
from spectator_mcp.errors import ApiKeyFormatError, SpectatorMcpError
from spectator_mcp.models import (
    ApiKeyCheck,
    AuthStyle,
    Platform,
    PlatformOutcome,
    RunSummary,
    RuntimeCheck,
    Scope,
)
from spectator_mcp.platforms import adapter
from spectator_mcp.platforms.registry import get_descriptor
from spectator_mcp.validation.api_key import format_api_url
from spectator_mcp.validation.remote import check_api_key
from spectator_mcp.validation.runtime import check_runtime

logger = logging.getLogger(__name__)


def configure_platforms(
    targets: list[Platform],
    api_key: str,
    *,
    scope: Scope | str | None,
    auth_style: AuthStyle,
    reporter: ReporterPort,
) -> RunSummary:
    """Configure each target in turn, recording failures and carrying on."""
    outcomes: list[PlatformOutcome] = []
    for platform in targets:
        descriptor = get_descriptor(platform)
        reporter.step(f"Setting up {descriptor.display_name}...")
        try:
            result = adapter.configure(descriptor, api_key, scope=scope, auth_style=auth_style)
        except SpectatorMcpError as exc:
            outcomes.append(
                PlatformOutcome(
                    platform=platform,
                    display_name=descriptor.display_name,
                    success=False,
                    error=str(exc),
                )
            )
            reporter.error(f"{descriptor.display_name}: {exc}")
            continue
        except Exception as exc:
            logger.debug("Unexpected error configuring %s", platform, exc_info=True)
            outcomes.append(
                PlatformOutcome(
                    platform=platform,
                    display_name=descriptor.display_name,
                    success=False,
                    error=f"Internal error: {type(exc).__name__}: {exc}",
                )
            )
            reporter.error(f"{descriptor.display_name}: {type(exc).__name__}: {exc}")
            continue

        outcomes.append(
            PlatformOutcome(
                platform=platform,
                display_name=descriptor.display_name,
                success=True,
                updated=result.updated,
                had_other_servers=result.had_other_servers,
                config_path=result.config_path,
                backup_path=result.backup_path,
            )
        )
    return RunSummary(outcomes=outcomes)


def _report_summary(summary: RunSummary, api_key: str, reporter: ReporterPort) -> None:
    if summary.succeeded:
        reporter.section("Configured Platforms:")
        for outcome in summary.succeeded:
            status = "Updated" if outcome.updated else "Added"
            reporter.success(f"{status}: {outcome.display_name}")
            reporter.code(f"    Config: {outcome.config_path}")
            if outcome.backup_path:
                reporter.code(f"    Backup: {outcome.backup_path}")
            if outcome.had_other_servers:
                reporter.code("    Note: Preserved existing MCP servers")

    if summary.failed:
        reporter.section("Failed to Configure:")
        for outcome in summary.failed:
            reporter.error(f"{outcome.display_name}: {outcome.error}")

    if summary.all_failed:
        reporter.error("No platforms were successfully configured. Please check the errors above.")
        return

    reporter.section("Next Steps:")
    reporter.step("Restart the configured applications to activate MCP")
    if any(o.platform is Platform.CLAUDE_DESKTOP for o in summary.succeeded):
        reporter.step("For Claude Pro/Team/Enterprise, you can also use a custom connector:")
        reporter.code(f"   Name: {settings.CONNECTOR_DISPLAY_NAME}")
        reporter.code(f"   URL: {format_api_url(api_key)}")
    reporter.section("To verify setup:")
    reporter.code("   spectator-mcp validate")
    reporter.success("You're all set! Your AI assistants now have access to your Spectator context.")


def run_setup(
    api_key: str | None,
    *,
    detector: PresenceDetectorPort,
    reporter: ReporterPort,
    prompter: PrompterPort,
    platforms: str | None = None,
    scope: Scope | str | None = Scope.GLOBAL,
    auth_style: AuthStyle = AuthStyle.URL,
    check_key: bool = False,
    verify_key: Callable[[str], Awaitable[ApiKeyCheck]] = check_api_key,
    runtime_check: Callable[[], RuntimeCheck] = check_runtime,
) -> int:
    """Execute the setup command and return the process exit code."""
    reporter.header("Spectator MCP Setup")

    try:
        key = resolve_api_key(api_key, prompter)
    except ApiKeyFormatError as exc:
        reporter.error(str(exc))
        return EXIT_FAILURE

    if check_key:
        reporter.step("Checking API key with Spectator...")
        verdict = asyncio.run(verify_key(key))
        if verdict.valid:
            reporter.success("API key accepted")
        else:
            reporter.warning(f"Could not verify API key: {verdict.error}. Continuing anyway.")

    runtime = runtime_check()
    if not runtime.ok:
        reporter.warning(runtime.error)

    reporter.step("Detecting installed AI platforms...")
    try:
        installed = detect_or_fail(detector)
        reporter.code(f"   Found: {names(installed)}")
        targets = select_targets(platforms, installed)
    except SpectatorMcpError as exc:
        reporter.error(str(exc))
        return EXIT_FAILURE

    reporter.step("Configuring platforms...")
    summary = configure_platforms(
        targets, key, scope=scope, auth_style=auth_style, reporter=reporter
    )
    _report_summary(summary, key, reporter)
    return EXIT_FAILURE if summary.all_failed else EXIT_SUCCESS
