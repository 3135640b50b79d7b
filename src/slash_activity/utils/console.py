"""Rich console output helpers."""

from rich.console import Console

console = Console()
error_console = Console(stderr=True)


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {message}")


def print_error(message: str) -> None:
    """Print an error message to stderr."""
    error_console.print(f"[red]✗ {message}[/red]")


def print_info(message: str) -> None:
    """Print an informational message."""
    console.print(f"[cyan]{message}[/cyan]")
