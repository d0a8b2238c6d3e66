"""Common UI utilities shared across modules."""

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

# Create a custom theme for consistent styling
theme = Theme(
    {
        "error": "red",
        "success": "green",
        "title": "bold cyan",
    }
)

console = Console(theme=theme, soft_wrap=True, emoji=False, highlight=False)
err_console = Console(theme=theme, stderr=True, soft_wrap=True, emoji=False, highlight=False)


def print_error(message: str, details: str | None = None) -> None:
    """Print error message to stderr."""
    err_console.print(f"[error]Error:[/error] {escape(message)}")
    if details:
        err_console.print(f"[dim]{escape(details)}[/dim]")


def print_info(message: str) -> None:
    """Print plain informational output."""
    console.print(escape(message))


def print_success(message: str) -> None:
    """Print success message."""
    console.print(f"[success]{escape(message)}[/success]")
