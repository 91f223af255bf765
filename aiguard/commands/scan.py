"""AI tool security scan command."""

import json
from pathlib import Path

import click
from rich.markup import escape

from aiguard.config_runtime import load_runtime_config
from aiguard.rules.base import SecurityScanResult
from aiguard.scanner.aggregator import filter_result
from aiguard.scanner.orchestrator import SecurityScanner
from aiguard.scanner.ports import get_ports_in_use
from aiguard.scanner.probe import probe_port
from aiguard.ui import console, print_error, print_header, print_summary_panel, risk_style
from aiguard.utils.error_handler import handle_exceptions
from aiguard.utils.exit_codes import ExitCodes
from aiguard.utils.logging import logger


@click.command("scan")
@click.option("--tool", "tool_id", default=None, help="Scan a single tool by id (see 'aiguard tools')")
@click.option(
    "--risk",
    type=click.Choice(["all", "critical", "high", "medium", "low"], case_sensitive=False),
    default="all",
    help="Minimum risk level to report",
)
@click.option("--output", type=click.Path(dir_okay=False), help="Write the JSON report to this file")
@click.option("--save", is_flag=True, help="Write the JSON report to the configured report path")
@click.option("--json", "as_json", is_flag=True, help="Print the JSON report to stdout instead of a table")
@click.option(
    "--home",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Home directory to audit (default: HOME / USERPROFILE)",
)
@click.option("--workers", type=click.IntRange(min=1), default=None, help="Concurrent tool checks")
@click.option(
    "--probe-timeout",
    type=click.IntRange(min=1),
    default=None,
    help="Loopback probe timeout in milliseconds",
)
@click.pass_context
@handle_exceptions
def scan(ctx, tool_id, risk, output, save, as_json, home, workers, probe_timeout):
    """Scan the workstation for exposure introduced by local AI coding tools.

    Checks every known tool (or only --tool) for declared ports that are open
    without a loopback-only binding, and for secrets or missing hardening in
    the tool's config files under the home directory. Nothing is modified.

    \b
    EXAMPLES:
      aiguard scan                        # Full scan, table output
      aiguard scan --tool opencode        # One tool only
      aiguard scan --risk high            # Only critical and high findings
      aiguard scan --json > report.json   # Machine-readable report
      aiguard scan --save                 # Report to .aiguard/security_report.json

    \b
    EXIT CODES:
      0 = No critical or high findings
      1 = High risk findings detected
      2 = Critical risk findings detected
      3 = Unknown tool id
    """
    cfg = load_runtime_config()
    scanner = SecurityScanner(
        port_source=get_ports_in_use,
        probe=probe_port,
        home=home,
        max_workers=workers or cfg["limits"]["max_workers"],
        probe_timeout=(probe_timeout or cfg["timeouts"]["probe_ms"]) / 1000,
        max_file_size=cfg["limits"]["max_file_size"],
    )

    if tool_id:
        result = scanner.scan_tool(tool_id)
        if result is None:
            known = ", ".join(rule.id for rule in scanner.registry.list_rules())
            print_error(f"Unknown tool '{tool_id}'. Known tools: {known}")
            ctx.exit(ExitCodes.TASK_INCOMPLETE)
    else:
        result = scanner.scan_all()

    result = filter_result(result, risk)

    if save and not output:
        output = cfg["paths"]["report"]

    if output:
        write_report(result, Path(output))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        render_result(result)
        if output:
            console.print(f"\nReport saved to: [path]{output}[/path]", highlight=False)

    code = ExitCodes.from_summary(result.summary)
    logger.info("Exit {}: {}", code, ExitCodes.get_description(code))
    ctx.exit(code)


def write_report(result: SecurityScanResult, path: Path) -> None:
    """Write ``result`` as JSON to ``path``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(result.to_dict(), f, indent=2)
    logger.info("Report written to {}", path)


def render_result(result: SecurityScanResult) -> None:
    """Print a scan result to the console."""
    print_header("AI TOOL SECURITY SCAN")
    console.print(f"Scan time: {result.scan_time}", highlight=False)
    console.print(f"Tools scanned: {', '.join(result.tools_scanned)}", highlight=False)

    for finding in result.findings:
        level = finding.risk_level.value
        style = risk_style(level)
        console.print(
            f"\n[{style}]\\[{level.upper()}][/{style}] {escape(finding.tool_name)}: {escape(finding.issue)}",
            highlight=False,
        )
        console.print(f"  {escape(finding.description)}", highlight=False)
        console.print(f"  [dim]{escape(finding.details)}[/dim]", highlight=False)
        console.print(f"  Fix: {escape(finding.remediation)}", highlight=False)

    console.print()
    print_summary_panel(result.summary, len(result.tools_scanned))
