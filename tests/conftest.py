"""Shared test fixtures."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import pytest

from spectator_mcp.models import Platform


@pytest.fixture(autouse=True)
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point HOME at an empty directory and run each test from a project dir."""
    home_dir = tmp_path / "home"
    project_dir = tmp_path / "project"
    home_dir.mkdir()
    project_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    monkeypatch.setenv("USERPROFILE", str(home_dir))
    for var in (
        "XDG_CONFIG_HOME",
        "APPDATA",
        "SPECTATOR_MCP_SERVER_URL",
        "SPECTATOR_MCP_API_URL",
        "SPECTATOR_MCP_LOG_LEVEL",
        "SPECTATOR_MCP_HTTP_TIMEOUT",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(project_dir)
    return home_dir


@pytest.fixture
def project_dir(home: Path) -> Path:
    return home.parent / "project"


@dataclass
class FakeDetector:
    installed: list[Platform] = field(default_factory=list)

    def is_installed(self, platform: Platform) -> bool:
        return platform in self.installed

    def list_installed(self) -> list[Platform]:
        return [p for p in Platform if p in self.installed]


@dataclass
class RecordingReporter:
    lines: list[tuple[str, str]] = field(default_factory=list)

    def _record(self, kind: str, message: str) -> None:
        self.lines.append((kind, message))

    def header(self, title: str) -> None:
        self._record("header", title)

    def section(self, title: str) -> None:
        self._record("section", title)

    def step(self, message: str) -> None:
        self._record("step", message)

    def info(self, message: str) -> None:
        self._record("info", message)

    def success(self, message: str) -> None:
        self._record("success", message)

    def warning(self, message: str) -> None:
        self._record("warning", message)

    def error(self, message: str) -> None:
        self._record("error", message)

    def code(self, message: str) -> None:
        self._record("code", message)

    def text(self, message: str) -> None:
        self._record("text", message)

    def of(self, kind: str) -> list[str]:
        return [message for k, message in self.lines if k == kind]

    @property
    def output(self) -> str:
        return "\n".join(message for _, message in self.lines)


@dataclass
class FakePrompter:
    secret: str = ""
    text_answer: str = ""
    confirm_answer: bool = True
    asked: list[str] = field(default_factory=list)

    def ask_secret(self, message: str) -> str:
        self.asked.append(message)
        return self.secret

    def ask_text(self, message: str, default: str = "") -> str:
        self.asked.append(message)
        return self.text_answer or default

    def confirm(self, message: str, default: bool = False) -> bool:
        self.asked.append(message)
        return self.confirm_answer


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def prompter() -> FakePrompter:
    return FakePrompter()


@pytest.fixture
def make_detector():
    def _make(*platforms: Platform) -> FakeDetector:
        return FakeDetector(installed=list(platforms))

    return _make
