"""Process-table liveness check for tools (diagnostic only)."""

from collections.abc import Iterable

import psutil

from aiguard.rules.base import ToolRule
from aiguard.utils.logging import logger


def _process_names() -> list[str]:
    names = []
    for proc in psutil.process_iter(["name"]):
        name = proc.info.get("name")
        if name:
            names.append(name.lower())
    return names


def is_tool_running(tool: ToolRule, process_names: Iterable[str] | None = None) -> bool:
    """Whether any running process name contains one of the tool's markers."""
    names = _process_names() if process_names is None else [n.lower() for n in process_names]
    return any(marker in name for name in names for marker in tool.process_names)


def running_tools(tools: Iterable[ToolRule]) -> dict[str, bool]:
    """Liveness per tool id, reading the process table once."""
    try:
        names = _process_names()
    except psutil.Error as e:
        logger.warning("Process enumeration unavailable: {}", e)
        names = []
    return {tool.id: is_tool_running(tool, names) for tool in tools}
