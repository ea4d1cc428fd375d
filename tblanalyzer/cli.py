"""tblanalyzer CLI - main entry point and command registration hub."""
# ruff: noqa: E402 - commands imported after cli group definition

import click
from rich.table import Table

from tblanalyzer import __version__
from tblanalyzer.pipeline.ui import console


class VerboseGroup(click.Group):
    """Categorized help built from the registered commands."""

    COMMAND_CATEGORIES = {
        "REPORTS": {
            "title": "REPORTS",
            "description": "Scan table files and write inventory and index pivot reports",
            "commands": ["run", "scan"],
        },
        "DIAGNOSTICS": {
            "title": "DIAGNOSTICS",
            "description": "Check configuration and single files before a full run",
            "commands": ["check-config", "inspect"],
        },
    }

    def format_commands(self, ctx, formatter):
        """Suppress the default listing; format_help prints categories instead."""
        pass

    def format_help(self, ctx, formatter):
        super().format_help(ctx, formatter)

        registered = {
            name: cmd
            for name, cmd in self.commands.items()
            if not getattr(cmd, "hidden", False)
        }

        console.print()
        console.rule("[bold]COMMANDS[/bold]")

        for category in self.COMMAND_CATEGORIES.values():
            console.print(f"\n[bold cyan]{category['title']}[/bold cyan]")
            console.print(f"[dim]{category['description']}[/dim]")

            table = Table(show_header=False, box=None, padding=(0, 2, 0, 0))
            table.add_column("Command", style="cmd", width=16)
            table.add_column("Description", style="white")

            for cmd_name in category["commands"]:
                if cmd_name not in registered:
                    continue
                first_line = (registered[cmd_name].help or "").split("\n")[0].strip()
                table.add_row(cmd_name, first_line.rstrip("."))

            console.print(table)

        console.print()
        console.rule()
        console.print("For detailed options: [cmd]tblanalyzer <command> --help[/cmd]")


@click.group(cls=VerboseGroup)
@click.version_option(version=__version__, prog_name="tblanalyzer")
@click.help_option("-h", "--help")
def cli():
    """tblanalyzer - index coverage reports for flat table files

    \b
    QUICK START:
      tblanalyzer check-config                # Validate inputs/config.yaml
      tblanalyzer run                         # Run every configured task
      tblanalyzer scan ./data --name adhoc --out ./outputs
    """
    pass


from tblanalyzer.commands.check_config import check_config
from tblanalyzer.commands.inspect_table import inspect_file
from tblanalyzer.commands.run import run
from tblanalyzer.commands.scan import scan

cli.add_command(run)
cli.add_command(scan)
cli.add_command(check_config)
cli.add_command(inspect_file)


def main():
    """Main entry point for console script."""
    cli()


if __name__ == "__main__":
    main()
