"""Console presentation: shared Rich console and progress rendering."""
from .renderer import RichProgressRenderer
from .ui import console, print_error, print_run_complete_panel, print_success, print_summary_table

__all__ = [
    "RichProgressRenderer",
    "console", "print_error", "print_success",
    "print_summary_table", "print_run_complete_panel",
]
