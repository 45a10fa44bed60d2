"""Rich console abstraction layer for mediamover CLI output.

All operator-facing transcript output (per-bucket counts, per-object
success/failure markers, run summaries) goes through this module so that the
commands never call print or click.echo directly. Handles the NO_COLOR
environment variable and CI/CD compatibility.
"""

from __future__ import annotations

import os
from typing import Any, List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table
from rich.text import Text

from mediamover.objects.storage_object import TransferStatus

# Singleton console instance
_console: Optional[Console] = None


def get_console() -> Console:
    """Get or create the singleton Rich Console instance.

    Respects NO_COLOR environment variable and detects CI environments.

    Returns:
        Console: Rich Console instance
    """
    global _console
    if _console is None:
        no_color = os.getenv("NO_COLOR", "").lower() in ("1", "true", "yes")
        is_ci = os.getenv("CI", "").lower() in ("1", "true", "yes")
        force_terminal = not (no_color or is_ci)

        _console = Console(
            force_terminal=force_terminal,
            no_color=no_color,
            highlight=False,  # Prevent auto-highlighting of object keys
        )
    return _console


# ============================================================================
# STATUS MESSAGES
# ============================================================================


def success(message: str, emoji: bool = True) -> None:
    """Display success message in green with checkmark.

    Args:
        message: Success message to display
        emoji: Include ✓ emoji (default: True)
    """
    console = get_console()
    prefix = "✓ " if emoji else ""
    console.print(f"[green]{prefix}{message}[/green]")


def error(message: str, emoji: bool = True) -> None:
    """Display error message in red with cross.

    Args:
        message: Error message to display
        emoji: Include ✗ emoji (default: True)
    """
    console = get_console()
    prefix = "✗ " if emoji else ""
    console.print(f"[red]{prefix}{message}[/red]")


def warning(message: str, emoji: bool = True) -> None:
    """Display warning message in yellow with warning symbol.

    Args:
        message: Warning message to display
        emoji: Include ⚠ emoji (default: True)
    """
    console = get_console()
    prefix = "⚠ " if emoji else ""
    console.print(f"[yellow]{prefix}{message}[/yellow]")


def info(message: str, bold: bool = False) -> None:
    """Display informational message.

    Args:
        message: Info message to display
        bold: Make text bold (default: False)
    """
    console = get_console()
    style = "bold" if bold else ""
    console.print(message, style=style)


def newline() -> None:
    """Print a blank line."""
    console = get_console()
    console.print()


# ============================================================================
# STRUCTURAL ELEMENTS
# ============================================================================


def header(title: str, style: str = "cyan") -> None:
    """Display section header with decorative border.

    Args:
        title: Header title text
        style: Rich color style (default: cyan)
    """
    console = get_console()
    console.print(Rule(title, style=style))


def panel(
    content: str,
    title: Optional[str] = None,
    style: str = "cyan",
    border_style: str = "cyan",
) -> None:
    """Display content in a bordered panel.

    Args:
        content: Content to display in panel
        title: Optional panel title
        style: Content style
        border_style: Border color style
    """
    console = get_console()
    console.print(
        Panel(
            content,
            title=title,
            border_style=border_style,
            style=style,
        )
    )


def table(
    data: List[List[Any]],
    headers: List[str],
    title: Optional[str] = None,
    show_lines: bool = False,
) -> None:
    """Display data in a formatted Rich table with borders.

    Args:
        data: List of rows (each row is a list of values)
        headers: Column headers
        title: Optional table title
        show_lines: Show lines between rows (default: False)
    """
    console = get_console()

    rich_table = Table(
        title=title,
        show_header=True,
        header_style="bold cyan",
        show_lines=show_lines,
        border_style="dim",
    )

    for column in headers:
        # Right-align numeric-looking headers
        if "count" in column.lower() or "size" in column.lower():
            rich_table.add_column(column, justify="right")
        else:
            rich_table.add_column(column, justify="left")

    for row in data:
        rich_table.add_row(*[str(cell) for cell in row])

    console.print(rich_table)


# ============================================================================
# TRANSFER TRANSCRIPT
# ============================================================================

_TRANSFER_MARKERS = {
    TransferStatus.UPLOADED: ("green", "✓", "Uploaded to"),
    TransferStatus.DOWNLOAD_FAILED: ("red", "✗", "Download failed:"),
    TransferStatus.UPLOAD_FAILED: ("red", "✗", "Upload failed:"),
}


def transfer_marker(object_name: str, status: TransferStatus, detail: str = "") -> None:
    """Print one transcript line for a transferred object.

    Skipped entries print nothing. `detail` is the destination key for an
    upload, or the error message for a failure, and is printed verbatim.

    Example output:
        hamlet.png  ✓ Uploaded to play-images/hamlet.png
    """
    if status not in _TRANSFER_MARKERS:
        return
    color, symbol, label = _TRANSFER_MARKERS[status]
    line = Text("  ")
    line.append(object_name)
    line.append(f"  {symbol} {label} ", style=color)
    line.append(detail, style=color)
    get_console().print(line)


def transfer_counts(uploaded: int, skipped: int, failed: int) -> None:
    """Print the uploaded/skipped/failed totals of a run as a one-row table."""
    counts = Table(show_header=True, header_style="bold cyan", border_style="dim")
    counts.add_column("Uploaded count", justify="right", style="green")
    counts.add_column("Skipped count", justify="right")
    counts.add_column("Failed count", justify="right", style="red" if failed else "")
    counts.add_row(str(uploaded), str(skipped), str(failed))
    get_console().print(counts)


# ============================================================================
# USER INTERACTION
# ============================================================================


def confirm(message: str, default: bool = False, abort: bool = True) -> bool:
    """Prompt user for confirmation (wraps click.confirm).

    Args:
        message: Confirmation prompt
        default: Default value if user just hits enter
        abort: Abort on 'no' response

    Returns:
        User's response
    """
    import click

    return click.confirm(message, default=default, abort=abort)
