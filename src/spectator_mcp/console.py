"""Terminal presentation: reporting, prompts, and log handler setup.

Commands talk to the ReporterPort/PrompterPort protocols so they can run
against fakes in tests; the rich-backed classes here are the defaults.
"""

from __future__ import annotations

import logging
from typing import Protocol

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.prompt import Confirm, Prompt


class ReporterPort(Protocol):
    def header(self, title: str) -> None: ...
    def section(self, title: str) -> None: ...
    def step(self, message: str) -> None: ...
    def info(self, message: str) -> None: ...
    def success(self, message: str) -> None: ...
    def warning(self, message: str) -> None: ...
    def error(self, message: str) -> None: ...
    def code(self, message: str) -> None: ...
    def text(self, message: str) -> None: ...


class PrompterPort(Protocol):
    def ask_secret(self, message: str) -> str: ...
    def ask_text(self, message: str, default: str = "") -> str: ...
    def confirm(self, message: str, default: bool = False) -> bool: ...


class ConsoleReporter:
    """Colored status lines on stdout."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(highlight=False)

    def header(self, title: str) -> None:
        self.console.print()
        self.console.print(f"[bold underline]{escape(title)}[/bold underline]")
        self.console.print()

    def section(self, title: str) -> None:
        self.console.print()
        self.console.print(f"[bold]{escape(title)}[/bold]")

    def step(self, message: str) -> None:
        self.console.print(f"[cyan]→[/cyan] {escape(message)}")

    def info(self, message: str) -> None:
        self.console.print(f"[blue]ℹ[/blue] {escape(message)}")

    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]⚠[/yellow] {escape(message)}")

    def error(self, message: str) -> None:
        self.console.print(f"[red]✗[/red] {escape(message)}")

    def code(self, message: str) -> None:
        self.console.print(f"[dim]{escape(message)}[/dim]")

    def text(self, message: str) -> None:
        self.console.print(escape(message))


class ConsolePrompter:
    """Interactive prompts; the secret prompt does not echo input."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console

    def ask_secret(self, message: str) -> str:
        return Prompt.ask(message, password=True, console=self.console)

    def ask_text(self, message: str, default: str = "") -> str:
        return Prompt.ask(message, default=default, console=self.console)

    def confirm(self, message: str, default: bool = False) -> bool:
        return Confirm.ask(message, default=default, console=self.console)


def configure_logging(level: str | int) -> None:
    """Send library logs to stderr through rich."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )
