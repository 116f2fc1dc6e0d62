from functools import cache

from rich.console import Console as _Console
from rich.theme import Theme


class Console(_Console):
    def error(self, text: str) -> None:
        self.print(f"[error]{text}[/]")

    def success(self, text: str) -> None:
        self.print(f"[success]{text}[/]")

    def warning(self, text: str) -> None:
        self.print(f"[warning]{text}[/]")

    def stranger(self, text: str) -> None:
        self.print(f"[stranger]Stranger:[/] {text}")


DEFAULT_THEME = Theme(
    {
        "error": "red",
        "success": "green",
        "accent": "cyan",
        "warning": "yellow",
        "stranger": "bold magenta",
    }
)


@cache
def get_console() -> Console:
    return Console(theme=DEFAULT_THEME, highlight=False)
