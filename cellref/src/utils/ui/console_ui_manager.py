from datetime import datetime
from rich.console import Console
from rich.text import Text
from typing import Dict

class ConsoleUIManager:
    """A console-based UI manager for status lines and run statistics."""

    def __init__(self, console: Console = None):
        """Initialize Console UI Manager.

        Args:
            console: rich Console to print to (defaults to stderr)
        """
        self.console = console or Console(stderr=True)

    def print_overall_stats(self, stats: Dict[str, int]):
        """Print conversion statistics."""
        total = stats.get('total', 0)
        if total > 0:
            success_rate = (stats.get('successful', 0) / total) * 100
            fail_rate = (stats.get('failed', 0) / total) * 100
        else:
            success_rate = fail_rate = 0.0

        self.console.print("\n📊 Conversion Statistics", style="green bold")
        self.console.print("─" * 40, style="dim")
        self.console.print(f"Total values: {total}", style="cyan")
        self.console.print(f"Converted: {stats.get('successful', 0)} ({success_rate:.1f}%)", style="cyan")
        self.console.print(f"Invalid: {stats.get('failed', 0)} ({fail_rate:.1f}%)", style="cyan")

    def add_status(self, message: str, level: str = "info"):
        """Print a timestamped status message."""
        time = datetime.now().strftime("%H:%M:%S")
        style = {
            "debug": "dim",
            "info": "white",
            "warning": "yellow",
            "error": "red bold",
        }.get(level, "white")

        msg = Text()
        msg.append(f"[{time}] ", style="cyan")
        msg.append(message, style=style)

        self.console.print(msg)

    def info(self, message: str):
        self.add_status(message, "info")

    def warning(self, message: str):
        self.add_status(message, "warning")

    def error(self, message: str):
        self.add_status(message, "error")

    def debug(self, message: str):
        self.add_status(message, "debug")
