"""Show what the schema extractor reports for one file."""

import click

from tblanalyzer.utils.error_handler import handle_exceptions


@click.command("inspect")
@handle_exceptions
@click.argument("file", type=click.Path(dir_okay=False))
def inspect_file(file):
    """Print the declared indexes and column keys of a table file.

    Useful to check a file's '#index' / '#key' preamble before a full run.
    Files with unsupported extensions are still read, but flagged.
    """
    from tblanalyzer.indexer import DirectiveSchemaExtractor, is_supported_table, stat_file, table_name
    from tblanalyzer.pipeline.ui import console
    from tblanalyzer.reports import format_size_mb

    schema = DirectiveSchemaExtractor().extract(file)
    stat = stat_file(file)

    console.print(f"[bold]Table:[/bold] {table_name(file)}  [dim]({file})[/dim]")
    console.print(f"[bold]Size:[/bold] {format_size_mb(stat.size_bytes)} MB")
    if not is_supported_table(file):
        console.print("[warning]Unsupported extension: this file is skipped by 'run'[/warning]")
    console.print(f"[bold]Indexes ({len(schema.indexes)}):[/bold] {', '.join(schema.indexes) or '-'}")
    console.print(f"[bold]ColKeys ({len(schema.col_keys)}):[/bold] {', '.join(schema.col_keys) or '-'}")
