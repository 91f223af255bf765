"""Scan orchestrator: runs the port and config checks for every tool.

Per-tool checks only read shared immutable rule data plus tool-scoped files and
ports, so they fan out to a bounded thread pool. Results are collected in
registry order before the stable risk sort, so worker completion order never
shows up in the output.
"""

from collections.abc import Callable, Mapping
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from aiguard.rules.base import SecurityFinding, SecurityScanResult, ToolRule
from aiguard.rules.registry import RuleRegistry, default_registry
from aiguard.scanner.aggregator import build_result
from aiguard.scanner.config_auditor import check_config_files
from aiguard.scanner.port_correlator import Probe, check_exposed_ports
from aiguard.scanner.ports import PortInfo, get_ports_in_use
from aiguard.scanner.probe import probe_port
from aiguard.scanner.processes import running_tools
from aiguard.utils.constants import (
    DEFAULT_MAX_FILE_SIZE,
    DEFAULT_MAX_WORKERS,
    DEFAULT_PROBE_TIMEOUT_MS,
)
from aiguard.utils.logging import logger

PortSource = Callable[[], list[PortInfo]]


class SecurityScanner:
    """Entry point for full-catalog and single-tool scans."""

    def __init__(
        self,
        registry: RuleRegistry | None = None,
        *,
        port_source: PortSource = get_ports_in_use,
        probe: Probe = probe_port,
        home: Path | None = None,
        environ: Mapping[str, str] | None = None,
        max_workers: int = DEFAULT_MAX_WORKERS,
        probe_timeout: float = DEFAULT_PROBE_TIMEOUT_MS / 1000,
        max_file_size: int = DEFAULT_MAX_FILE_SIZE,
    ):
        """Initialize the scanner.

        Args:
            registry: Rule registry (defaults to the bundled catalog)
            port_source: Callable returning the listening-port snapshot
            probe: Loopback probe, called as probe(port, timeout)
            home: Home directory override for config checks
            environ: Environment mapping for home resolution and EnvVar rules
            max_workers: Upper bound on concurrent per-tool checks
            probe_timeout: Probe timeout in seconds
            max_file_size: Config files larger than this are not read
        """
        if probe_timeout <= 0:
            raise ValueError(f"probe_timeout must be positive, got {probe_timeout}")
        if max_file_size <= 0:
            raise ValueError(f"max_file_size must be positive, got {max_file_size}")

        self.registry = registry if registry is not None else default_registry()
        self.port_source = port_source
        self.probe = probe
        self.home = home
        self.environ = environ
        self.max_workers = max(1, max_workers)
        self.probe_timeout = probe_timeout
        self.max_file_size = max_file_size

    def scan_all(self) -> SecurityScanResult:
        """Scan every tool in the registry."""
        tools = list(self.registry.list_rules())
        return self._scan(tools)

    def scan_tool(self, tool_id: str) -> SecurityScanResult | None:
        """Scan one tool by id. Returns None if the id is unknown."""
        tool = self.registry.find_rule(tool_id)
        if tool is None:
            logger.info("Unknown tool id: {}", tool_id)
            return None
        return self._scan([tool])

    def running_tools(self) -> dict[str, bool]:
        """Liveness per tool id. Diagnostic only, never gates findings."""
        return running_tools(self.registry.list_rules())

    def _scan(self, tools: list[ToolRule]) -> SecurityScanResult:
        ports = self._snapshot()
        logger.info("Scanning {} tool(s) against {} listening port(s)", len(tools), len(ports))

        workers = min(self.max_workers, len(tools)) or 1
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="aiguard") as executor:
            per_tool = list(executor.map(lambda tool: self._check_tool(tool, ports), tools))

        findings = [finding for tool_findings in per_tool for finding in tool_findings]
        result = build_result(findings, [tool.name for tool in tools])
        logger.info(
            "Scan complete: {} finding(s), {} critical",
            result.summary.total_findings,
            result.summary.critical,
        )
        return result

    def _snapshot(self) -> list[PortInfo]:
        try:
            return list(self.port_source())
        except Exception as e:
            logger.warning("Port snapshot failed, continuing without it: {}", e)
            return []

    def _check_tool(self, tool: ToolRule, ports: list[PortInfo]) -> list[SecurityFinding]:
        findings: list[SecurityFinding] = []
        try:
            findings.extend(
                check_exposed_ports(
                    tool, ports, probe=self.probe, probe_timeout=self.probe_timeout
                )
            )
        except Exception as e:
            logger.opt(exception=True).warning("Port checks failed for {}: {}", tool.id, e)

        try:
            findings.extend(
                check_config_files(
                    tool,
                    home=self.home,
                    environ=self.environ,
                    max_file_size=self.max_file_size,
                )
            )
        except Exception as e:
            logger.opt(exception=True).warning("Config checks failed for {}: {}", tool.id, e)

        logger.debug("{}: {} finding(s)", tool.id, len(findings))
        return findings


def scan_all(**kwargs) -> SecurityScanResult:
    """Full scan with the default registry."""
    return SecurityScanner(**kwargs).scan_all()


def scan_tool(tool_id: str, **kwargs) -> SecurityScanResult | None:
    """Single-tool scan with the default registry."""
    return SecurityScanner(**kwargs).scan_tool(tool_id)
