"""List the AI tools aiguard knows how to audit."""

import json

import click
from rich.table import Table

from aiguard.rules.registry import default_registry
from aiguard.scanner.processes import running_tools
from aiguard.ui import console
from aiguard.utils.error_handler import handle_exceptions


@click.command("tools")
@click.option("--running", is_flag=True, help="Also report whether each tool's process is running")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@handle_exceptions
def tools(running, as_json):
    """List supported tools with their port and config check counts.

    \b
    EXAMPLES:
      aiguard tools               # Table of supported tools
      aiguard tools --running     # Include process liveness
      aiguard tools --json        # Machine-readable listing
    """
    registry = default_registry()
    infos = registry.tool_infos()
    liveness = running_tools(registry.list_rules()) if running else {}

    if as_json:
        rows = []
        for info in infos:
            row = info.to_dict()
            if running:
                row["running"] = liveness.get(info.id, False)
            rows.append(row)
        click.echo(json.dumps(rows, indent=2))
        return

    table = Table(title="Supported AI tools", show_lines=False)
    table.add_column("ID", style="cmd")
    table.add_column("Name")
    table.add_column("Ports", justify="right")
    table.add_column("Config checks", justify="right")
    if running:
        table.add_column("Running")
    table.add_column("Description", style="dim")

    for info in infos:
        cells = [info.id, info.name, str(info.port_count), str(info.config_check_count)]
        if running:
            cells.append("[success]yes[/success]" if liveness.get(info.id) else "no")
        cells.append(info.description)
        table.add_row(*cells)

    console.print(table)
