"""Detect which supported client applications are installed."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import sys
from pathlib import Path

from spectator_mcp.config.paths import resolve_config_path
from spectator_mcp.models import Platform

logger = logging.getLogger(__name__)

_PROBE_TIMEOUT_SECONDS = 5


def _app_path(system: str, candidates: dict[str, Path]) -> Path | None:
    family = "linux" if system.startswith("linux") else system
    return candidates.get(family)


def _program_files() -> Path:
    return Path(os.environ.get("ProgramFiles", r"C:\Program Files"))


def _local_appdata() -> Path:
    return Path(os.environ.get("LOCALAPPDATA", str(Path.home() / "AppData" / "Local")))


def probe_command(command: str, *, system: str | None = None) -> bool:
    """Return True when ``command`` is found on the search path.

    Runs ``which`` (``where`` on Windows) in a subprocess. A nonzero exit and
    a probe that cannot be executed at all both count as "not found".
    """
    finder = "where" if (system or sys.platform) == "win32" else "which"
    try:
        completed = subprocess.run(
            [finder, command],
            capture_output=True,
            text=True,
            timeout=_PROBE_TIMEOUT_SECONDS,
            check=False,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        logger.debug("Probe `%s %s` could not run: %s", finder, command, exc)
        return False
    return completed.returncode == 0


class DefaultPresenceDetector:
    """Filesystem and PATH based detection of the six supported applications."""

    def __init__(self, system: str | None = None) -> None:
        self._system = system if system is not None else sys.platform

    def is_installed(self, platform: Platform) -> bool:
        checks = {
            Platform.CLAUDE_DESKTOP: self._claude_desktop,
            Platform.CLAUDE_CODE: self._claude_code,
            Platform.CURSOR: self._cursor,
            Platform.WINDSURF: self._windsurf,
            Platform.VSCODE: self._vscode,
            Platform.CLINE: self._cline,
        }
        try:
            check = checks[Platform(platform)]
        except (KeyError, ValueError):
            return False
        installed = check()
        logger.debug("Detected %s: %s", platform, installed)
        return installed

    def list_installed(self) -> list[Platform]:
        return [platform for platform in Platform if self.is_installed(platform)]

    # ─── Per-platform checks ────────────────────────────────────

    def _config_dir_exists(self, platform: Platform) -> bool:
        path = resolve_config_path(platform, system=self._system)
        return path is not None and path.parent.is_dir()

    def _claude_desktop(self) -> bool:
        app = _app_path(
            self._system,
            {
                "darwin": Path("/Applications/Claude.app"),
                "win32": _program_files() / "Claude",
                "linux": Path("/usr/bin/claude"),
            },
        )
        if app is not None and app.exists():
            return True
        return self._config_dir_exists(Platform.CLAUDE_DESKTOP)

    def _claude_code(self) -> bool:
        if probe_command("claude", system=self._system):
            return True
        return (Path.home() / ".claudecode").is_dir()

    def _cursor(self) -> bool:
        if (Path.home() / ".cursor").is_dir():
            return True
        app = _app_path(
            self._system,
            {
                "darwin": Path("/Applications/Cursor.app"),
                "win32": _local_appdata() / "Programs" / "cursor",
                "linux": Path("/usr/bin/cursor"),
            },
        )
        return app is not None and app.exists()

    def _windsurf(self) -> bool:
        return (Path.home() / ".codeium" / "windsurf").is_dir()

    def _vscode(self) -> bool:
        app = _app_path(
            self._system,
            {
                "darwin": Path("/Applications/Visual Studio Code.app"),
                "win32": _program_files() / "Microsoft VS Code",
                "linux": Path("/usr/bin/code"),
            },
        )
        if app is not None and app.exists():
            return True
        return shutil.which("code") is not None

    def _cline(self) -> bool:
        return self._config_dir_exists(Platform.CLINE)
