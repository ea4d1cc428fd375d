"""Run configured scan-and-report tasks."""

import time

import click

from tblanalyzer.utils.constants import DEFAULT_CONFIG_PATH
from tblanalyzer.utils.error_handler import handle_exceptions


@click.command()
@handle_exceptions
@click.option(
    "--config", "config_path",
    default=str(DEFAULT_CONFIG_PATH),
    show_default=True,
    type=click.Path(dir_okay=False),
    help="YAML task configuration",
)
@click.option("--task", "task_names", multiple=True, help="Run only this task (repeatable)")
@click.option("--workers", type=click.IntRange(min=1), default=None, help="Concurrent extractions per task")
@click.option("--quiet", is_flag=True, help="Minimal output")
def run(config_path, task_names, workers, quiet):
    """Run every configured task and write its two reports.

    Tasks run one at a time in configured order. For each task the files
    under its directories are scanned, and two CSV files are written to
    <output_dir>/<task name>/:

    \b
      table_info.csv            One row per table (path, modified at,
                                size in MB, name, indexes, column keys)
      table_index_analysis.csv  Table x index pivot of 1/0 cells

    Only .fac, .txt and .csv files are read; other files are skipped.
    The first error aborts the whole run with a non-zero exit code and
    no report is written for the failing task.

    Examples:
      tblanalyzer run
      tblanalyzer run --config inputs/prod.yaml --task warehouse
      tblanalyzer run --workers 16 --quiet
    """
    from tblanalyzer.config import load_config
    from tblanalyzer.pipeline.renderer import RichProgressRenderer
    from tblanalyzer.pipeline.ui import print_run_complete_panel, print_summary_table
    from tblanalyzer.runner import run_tasks

    config = load_config(config_path)

    start = time.time()
    renderer = RichProgressRenderer(quiet=quiet)
    renderer.start()
    try:
        summaries = run_tasks(config, task_names=task_names, observer=renderer, workers=workers)
    finally:
        renderer.stop()

    if not quiet:
        print_summary_table(summaries)
        print_run_complete_panel(summaries, time.time() - start)
