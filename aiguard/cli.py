"""aiguard CLI - Main entry point and command registration hub."""
# ruff: noqa: E402 - Intentional lazy loading: commands imported after cli group definition

import click
from rich.table import Table

from aiguard import __version__
from aiguard.ui import console
from aiguard.utils.logging import set_level


class VerboseGroup(click.Group):
    """Categorized help generated from the registered commands."""

    def format_commands(self, ctx, formatter):
        """Suppress the default command listing (categorized in format_help)."""
        pass

    COMMAND_CATEGORIES = {
        "SCANNING": {
            "title": "SCANNING",
            "description": "Audit local AI coding tools for exposed ports and unsafe configs",
            "commands": ["scan"],
            "command_meta": {
                "scan": {
                    "use_when": "Checking this machine for AI tool exposure",
                },
            },
        },
        "CATALOG": {
            "title": "CATALOG",
            "description": "Inspect the built-in tool rules",
            "commands": ["tools"],
            "command_meta": {
                "tools": {
                    "use_when": "Finding a tool id for 'scan --tool'",
                },
            },
        },
    }

    def format_help(self, ctx, formatter):
        """Generate Rich-styled categorized help."""
        super().format_help(ctx, formatter)

        registered = {
            name: cmd
            for name, cmd in self.commands.items()
            if not name.startswith("_") and not getattr(cmd, "hidden", False)
        }

        console.print()
        console.rule("[bold]COMMANDS[/bold]")

        for category_data in self.COMMAND_CATEGORIES.values():
            console.print(f"\n[bold cyan]{category_data['title']}[/bold cyan]")
            console.print(f"[dim]{category_data['description']}[/dim]")

            table = Table(show_header=False, box=None, padding=(0, 2, 0, 0))
            table.add_column("Command", style="cmd", width=12)
            table.add_column("Description", style="white")
            table.add_column("Hint", style="dim", width=40)

            for cmd_name in category_data["commands"]:
                if cmd_name not in registered:
                    continue
                cmd = registered[cmd_name]

                first_line = (cmd.help or "").split("\n")[0].strip()
                period_idx = first_line.find(".")
                short_help = first_line[:period_idx] if period_idx > 0 else first_line

                cmd_meta = category_data.get("command_meta", {}).get(cmd_name, {})
                hint = f"USE: {cmd_meta['use_when']}" if "use_when" in cmd_meta else ""

                table.add_row(cmd_name, short_help, hint)

            console.print(table)

        console.print()
        console.rule()
        console.print("For detailed options: [cmd]aiguard <command> --help[/cmd]")


@click.group(cls=VerboseGroup)
@click.version_option(version=__version__, prog_name="aiguard")
@click.help_option("-h", "--help")
@click.option("-v", "--verbose", count=True, help="Increase log output (-v info, -vv debug)")
def cli(verbose):
    """aiguard - Security audit for local AI coding tools

    \b
    QUICK START:
      aiguard scan                  # Scan all known tools
      aiguard scan --tool cursor    # Scan one tool
      aiguard tools                 # List supported tools"""
    if verbose == 1:
        set_level("INFO")
    elif verbose >= 2:
        set_level("DEBUG")


from aiguard.commands.scan import scan
from aiguard.commands.tools import tools

cli.add_command(scan)
cli.add_command(tools)


def main():
    """Main entry point for console script."""
    cli()


if __name__ == "__main__":
    main()
