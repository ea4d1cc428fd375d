"""Central UI handler for tblanalyzer.

Single source of truth for Rich console styling. Import this instead of
instantiating Console() in every command file.

Usage:
    from tblanalyzer.pipeline.ui import console, print_error

    console.print("[success]All tasks written[/success]")
    print_error("Config not found")
"""

import sys

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from tblanalyzer.models import TaskSummary

ANALYZER_THEME = Theme({
    "info": "bold cyan",
    "warning": "bold yellow",
    "error": "bold red",
    "success": "bold green",
    "cmd": "bold magenta",
    "path": "bold cyan",
    "dim": "dim white",
})

# Single console instance - import this, don't create your own
console = Console(
    theme=ANALYZER_THEME,
    force_terminal=sys.stdout.isatty()
)


def print_error(msg: str) -> None:
    """Print an error message in red."""
    console.print(f"[error]ERROR:[/error] {msg}")


def print_success(msg: str) -> None:
    """Print a success message in green."""
    console.print(f"[success]OK:[/success] {msg}")


def print_summary_table(summaries: list[TaskSummary]) -> None:
    """Print one row per finished task."""
    table = Table(title="Tasks", expand=False)
    table.add_column("Task", style="cmd", no_wrap=True)
    table.add_column("Tables", justify="right")
    table.add_column("Indexes", justify="right")
    table.add_column("Skipped", justify="right")
    table.add_column("Time", justify="right")
    table.add_column("Output", style="path")

    for summary in summaries:
        table.add_row(
            summary.name,
            str(summary.tables),
            str(summary.unique_indexes),
            str(summary.skipped),
            f"{summary.elapsed:.1f}s",
            str(summary.output_dir),
        )
    console.print(table)


def print_run_complete_panel(summaries: list[TaskSummary], elapsed: float) -> None:
    """Print the RUN COMPLETE panel."""
    tables = sum(s.tables for s in summaries)
    panel = Panel(
        Text.assemble(
            (f"{len(summaries)} tasks, {tables} tables written\n", "bold green"),
            (f"Total time: {elapsed:.1f}s", "dim"),
        ),
        title="[bold]RUN COMPLETE[/bold]",
        border_style="green",
        expand=False,
    )
    console.print(panel)
