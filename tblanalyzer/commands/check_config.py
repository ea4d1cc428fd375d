"""Validate a task configuration without running it."""

import click

from tblanalyzer.utils.constants import DEFAULT_CONFIG_PATH
from tblanalyzer.utils.error_handler import handle_exceptions


@click.command("check-config")
@handle_exceptions
@click.option(
    "--config", "config_path",
    default=str(DEFAULT_CONFIG_PATH),
    show_default=True,
    type=click.Path(dir_okay=False),
    help="YAML task configuration",
)
def check_config(config_path):
    """Validate the configuration and list its tasks.

    Reports whether each configured directory exists; missing directories
    make 'run' fail, so they are flagged here as well.
    """
    import sys
    from pathlib import Path

    from rich.table import Table

    from tblanalyzer.config import load_config
    from tblanalyzer.pipeline.ui import console, print_error, print_success
    from tblanalyzer.utils.exit_codes import ExitCodes

    config = load_config(config_path)

    table = Table(title=f"Tasks in {config_path}")
    table.add_column("Task", style="cmd", no_wrap=True)
    table.add_column("Recursive")
    table.add_column("Directories")

    missing = []
    for task in config.tasks:
        lines = []
        for directory in task.directories:
            if Path(directory).is_dir():
                lines.append(directory)
            else:
                lines.append(f"[error]{directory} (missing)[/error]")
                missing.append(directory)
        table.add_row(task.name, "yes" if task.recursive else "no", "\n".join(lines))

    console.print(table)
    console.print(f"Output root: [path]{config.output_dir}[/path]  Workers: {config.workers}  "
                  f"Table names: {config.table_name}")

    if missing:
        print_error(f"{len(missing)} configured director{'y is' if len(missing) == 1 else 'ies are'} missing")
        sys.exit(ExitCodes.TASK_FAILED)
    print_success(f"{len(config.tasks)} task(s) valid")
