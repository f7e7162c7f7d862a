from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

# Everything but the commit message itself goes to stderr
error_console = Console(stderr=True)


def show_progress(message: str) -> Progress:
    """Create and return a progress spinner rendered on stderr.

    Args:
        message: Message to display with spinner

    Returns:
        Progress context manager
    """
    progress = Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=error_console,
        transient=True,
    )
    progress.add_task(description=message, total=None)
    return progress


def print_error(message: str) -> None:
    error_console.print(f"[red]Error:[/red] {message}")
