"""Rich console utilities for eolcheck.

Standard output is reserved for CSV rows, so the shared console writes to
stderr. Highlighting and emoji codes are off on that console, and
``ERROR:`` lines bypass rich rendering entirely.
"""

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

ERROR_PREFIX = "ERROR:"

custom_theme = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
    }
)

# Shared console instance
console = Console(
    theme=custom_theme,
    stderr=True,
    highlight=False,
    emoji=False,
    soft_wrap=True,
)


def print_error(message: str) -> None:
    """
    Print an ``ERROR:``-prefixed line on stderr.

    The line is written to the console file directly, so rich never rewrites
    the product and version text.
    """
    stream = console.file
    stream.write(f"{ERROR_PREFIX} {message}\n")
    stream.flush()


def print_row_error(product: str, version: str, reason: str) -> None:
    """Print the diagnostic for a failed row as ``ERROR: product,version,reason``."""
    print_error(f"{product},{version},{reason}")


def print_lookup_summary(processed: int, emitted: int, not_found: int, failed: int) -> None:
    """
    Print a summary table of a lookup run.

    Args:
        processed: Requests read from the input
        emitted: Rows written to stdout
        not_found: Rows whose version matched no release
        failed: Requests that produced no row
    """
    table = Table(title="EOL Lookup Summary", show_header=True, header_style="bold")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row("Requests", str(processed))
    table.add_row("Rows written", str(emitted))
    table.add_row("No matching release", str(not_found))
    table.add_row("Failed", f"[error]{failed}[/error]" if failed else "0")

    console.print(table)

    if failed:
        console.print(f"[error]✗ {failed} lookup(s) failed[/error]")
    else:
        console.print("[success]✓ All lookups succeeded[/success]")
