"""Command-line entry point: argument parsing and verb dispatch."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import NoReturn

from spectator_mcp import __version__, settings
from spectator_mcp.commands._helpers import EXIT_FAILURE
from spectator_mcp.commands.config import run_config
from spectator_mcp.commands.remove import run_remove
from spectator_mcp.commands.setup import run_setup
from spectator_mcp.commands.validate import run_validate
from spectator_mcp.config.base import PresenceDetectorPort
from spectator_mcp.config.detection import DefaultPresenceDetector
from spectator_mcp.console import (
    ConsolePrompter,
    ConsoleReporter,
    PrompterPort,
    ReporterPort,
    configure_logging,
)
from spectator_mcp.errors import SpectatorMcpError
from spectator_mcp.models import AuthStyle, Scope

logger = logging.getLogger(__name__)

COMMANDS = ("setup", "validate", "config", "remove")
_RESERVED = (*COMMANDS, "help")


class _Parser(argparse.ArgumentParser):
    """ArgumentParser whose usage errors exit with status 1."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(EXIT_FAILURE, f"{self.prog}: error: {message}\n")


def _key_options() -> argparse.ArgumentParser:
    # SUPPRESS keeps subcommand defaults from clobbering values given before the verb.
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument(
        "-k",
        "--api-key",
        default=argparse.SUPPRESS,
        help="Your Spectator API key",
    )
    return parent


def _target_options() -> argparse.ArgumentParser:
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument(
        "-p",
        "--platforms",
        default=argparse.SUPPRESS,
        help="Comma-separated platforms (claude, claudecode, cursor, windsurf, vscode, cline) "
        "or 'all' (default: all detected)",
    )
    parent.add_argument(
        "-s",
        "--scope",
        choices=[s.value for s in Scope],
        default=argparse.SUPPRESS,
        help="Configuration scope for platforms that support it (default: global)",
    )
    return parent


def _setup_options() -> argparse.ArgumentParser:
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument(
        "--check-key",
        action="store_true",
        default=argparse.SUPPRESS,
        help="Verify the API key with Spectator before configuring (warning only)",
    )
    parent.add_argument(
        "--auth-style",
        choices=[s.value for s in AuthStyle],
        default=argparse.SUPPRESS,
        help="Embed the key in the URL (default) or pass it as a bearer header",
    )
    return parent


def build_parser() -> argparse.ArgumentParser:
    key_opts = _key_options()
    target_opts = _target_options()
    setup_opts = _setup_options()

    parser = _Parser(
        prog="spectator-mcp",
        description="Connect Claude, Cursor, Windsurf, VS Code and Cline to Spectator voice memory",
        parents=[key_opts, target_opts, setup_opts],
    )
    parser.add_argument("--version", "-V", action="version", version=f"spectator-mcp v{__version__}")
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Show debug logging on stderr"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    subparsers.add_parser(
        "setup",
        parents=[key_opts, target_opts, setup_opts],
        help="Set up Spectator MCP for your AI platforms (default)",
    )
    subparsers.add_parser(
        "validate",
        parents=[key_opts, target_opts],
        help="Validate existing Spectator MCP configurations",
    )
    config_parser = subparsers.add_parser(
        "config",
        parents=[key_opts],
        help="Show manual configuration instructions",
    )
    config_parser.add_argument(
        "-p",
        "--platform",
        default=None,
        help="Show instructions for a single platform",
    )
    remove_parser = subparsers.add_parser(
        "remove",
        parents=[key_opts, target_opts],
        help="Remove Spectator MCP from configured platforms",
    )
    remove_parser.add_argument(
        "-y",
        "--yes",
        action="store_true",
        help="Do not ask for confirmation",
    )
    return parser


def shorthand_api_key(argv: list[str]) -> str | None:
    """Return the key for ``spectator-mcp <KEY>``, the one-argument shorthand."""
    if len(argv) == 1 and not argv[0].startswith("-") and argv[0] not in _RESERVED:
        return argv[0]
    return None


def dispatch(
    args: argparse.Namespace,
    *,
    detector: PresenceDetectorPort,
    reporter: ReporterPort,
    prompter: PrompterPort,
) -> int:
    command = args.command or "setup"
    api_key = getattr(args, "api_key", None)
    platforms = getattr(args, "platforms", None)

    match command:
        case "setup":
            return run_setup(
                api_key,
                detector=detector,
                reporter=reporter,
                prompter=prompter,
                platforms=platforms,
                scope=getattr(args, "scope", Scope.GLOBAL),
                auth_style=AuthStyle(getattr(args, "auth_style", AuthStyle.URL)),
                check_key=getattr(args, "check_key", False),
            )
        case "validate":
            return run_validate(detector=detector, reporter=reporter, platforms=platforms)
        case "config":
            return run_config(
                api_key,
                detector=detector,
                reporter=reporter,
                prompter=prompter,
                platform=args.platform,
            )
        case "remove":
            return run_remove(
                detector=detector,
                reporter=reporter,
                prompter=prompter,
                platforms=platforms,
                assume_yes=args.yes,
            )
    raise SpectatorMcpError(f"Unknown command '{command}'")


def main(
    argv: list[str] | None = None,
    *,
    detector: PresenceDetectorPort | None = None,
    reporter: ReporterPort | None = None,
    prompter: PrompterPort | None = None,
) -> int:
    """Parse arguments, run one command, and return the exit code."""
    argv = list(sys.argv[1:] if argv is None else argv)
    parser = build_parser()

    key = shorthand_api_key(argv)
    if key is not None:
        argv = ["setup", "--api-key", key]
    elif argv == ["help"]:
        argv = ["--help"]

    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        # --help and --version exit 0; usage errors exit 1 via _Parser.error.
        return exc.code if isinstance(exc.code, int) else EXIT_FAILURE

    configure_logging(logging.DEBUG if args.verbose else settings.log_level())

    reporter = reporter or ConsoleReporter()
    try:
        return dispatch(
            args,
            detector=detector or DefaultPresenceDetector(),
            reporter=reporter,
            prompter=prompter or ConsolePrompter(),
        )
    except KeyboardInterrupt:
        reporter.error("Cancelled")
        return EXIT_FAILURE
    except SpectatorMcpError as exc:
        reporter.error(str(exc))
        return EXIT_FAILURE
    except Exception as exc:
        logger.debug("Unhandled error", exc_info=True)
        reporter.error(f"Unexpected error: {type(exc).__name__}: {exc}")
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
