"""Central UI handler for aiguard.

Single source of truth for Rich console styling. Import this instead of
instantiating Console() in every command file.

Usage:
    from aiguard.ui import console, print_header, print_error

    print_header("AI TOOL SECURITY SCAN")
    console.print("[critical]CRITICAL[/critical] Port 4096 is exposed")
    print_error("Unknown tool")
"""

import sys

from rich.console import Console
from rich.panel import Panel
from rich.text import Text
from rich.theme import Theme

from aiguard.rules.base import SecuritySummary

AIGUARD_THEME = Theme({
    "error": "bold red",
    "success": "bold green",
    "critical": "bold white on red",
    "high": "bold red",
    "medium": "bold yellow",
    "low": "cyan",
    "cmd": "bold magenta",
    "path": "underline cyan",
    "dim": "dim white",
})

# Panel border colour per worst risk level
RISK_BORDERS = {
    "critical": "red",
    "high": "red",
    "medium": "yellow",
    "low": "cyan",
}

# Single console instance - import this, don't create your own
console = Console(
    theme=AIGUARD_THEME,
    force_terminal=sys.stdout.isatty()
)

err_console = Console(theme=AIGUARD_THEME, stderr=True)


def risk_style(level_name: str) -> str:
    """Theme style for a risk level name ("Critical", "high", ...)."""
    return level_name.lower()


def print_header(title: str) -> None:
    """Print a styled section header with horizontal rules."""
    console.rule(f"[bold]{title}[/bold]")


def print_error(msg: str) -> None:
    """Print an error message in red to stderr."""
    err_console.print(f"[error]ERROR:[/error] {msg}", highlight=False)


def worst_level(summary: SecuritySummary) -> str | None:
    """Style name of the most severe level present, or None when clean."""
    for level in ("critical", "high", "medium", "low"):
        if getattr(summary, level):
            return level
    return None


def print_summary_panel(summary: SecuritySummary, tools_checked: int) -> None:
    """Boxed per-level tally, bordered in the colour of the worst finding."""
    worst = worst_level(summary)
    if worst is None:
        body = Text.assemble(
            ("CLEAN\n", "success"),
            (f"No security issues found across {tools_checked} tool(s)", "green"),
        )
        console.print(Panel(body, title="aiguard", border_style="green", expand=False))
        return

    body = Text(f"{summary.total_findings} finding(s) in {tools_checked} tool(s)\n")
    for level in ("critical", "high", "medium", "low"):
        count = getattr(summary, level)
        body.append(f"\n{level.upper():<9}", style=level if count else "dim")
        body.append(str(count), style=level if count else "dim")

    panel = Panel(
        body,
        title=f"aiguard: {worst.upper()}",
        border_style=RISK_BORDERS[worst],
        expand=False,
    )
    console.print(panel)
