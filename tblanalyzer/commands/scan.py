"""Scan directories as a single ad hoc task, without a config file."""

import click

from tblanalyzer.utils.error_handler import handle_exceptions


@click.command()
@handle_exceptions
@click.argument("directories", nargs=-1, required=True, type=click.Path(file_okay=False))
@click.option("--name", required=True, help="Task name (output subdirectory)")
@click.option("--out", "output_dir", required=True, type=click.Path(file_okay=False), help="Output root directory")
@click.option("--recursive", is_flag=True, help="Descend into subdirectories")
@click.option(
    "--table-name",
    type=click.Choice(["stem", "basename"]),
    default="stem",
    show_default=True,
    help="Derive table names from the file stem or the full file name",
)
@click.option("--workers", type=click.IntRange(min=1), default=None, help="Concurrent extractions")
@click.option("--quiet", is_flag=True, help="Minimal output")
def scan(directories, name, output_dir, recursive, table_name, workers, quiet):
    """Scan directories once and write reports to <out>/<name>/.

    Same reports as 'run', for one task given on the command line.

    Examples:
      tblanalyzer scan ./exports --name exports --out ./outputs
      tblanalyzer scan /data/a /data/b --name nightly --out ./outputs --recursive
    """
    from tblanalyzer.config import parse_config
    from tblanalyzer.pipeline.renderer import RichProgressRenderer
    from tblanalyzer.pipeline.ui import print_summary_table
    from tblanalyzer.runner import TaskRunner

    raw = {
        "output_dir": output_dir,
        "table_name": table_name,
        "tasks": [{"name": name, "dirs": list(directories), "recursive": recursive}],
    }
    if workers is not None:
        raw["workers"] = workers
    config = parse_config(raw, source="scan")

    renderer = RichProgressRenderer(quiet=quiet)
    renderer.start()
    try:
        summaries = TaskRunner.from_config(config, observer=renderer, workers=workers).run(config.tasks)
    finally:
        renderer.stop()

    if not quiet:
        print_summary_table(summaries)
