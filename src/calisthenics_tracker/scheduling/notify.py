"""User-visible notification sinks (fire-and-forget)."""

from dataclasses import dataclass, field
from typing import Protocol

from rich.console import Console


class Notifier(Protocol):
    def notify(self, title: str, body: str) -> None: ...


class ConsoleNotifier:
    """Print notifications to a Rich console."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def notify(self, title: str, body: str) -> None:
        self.console.print(f"[bold cyan]{title}[/bold cyan] {body}")


@dataclass
class RecordingNotifier:
    """Keep notifications in memory instead of showing them."""

    sent: list[tuple[str, str]] = field(default_factory=list)

    def notify(self, title: str, body: str) -> None:
        self.sent.append((title, body))
