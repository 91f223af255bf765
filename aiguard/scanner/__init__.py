"""Scanning engine: port correlation, config auditing and aggregation."""

from aiguard.scanner.aggregator import build_result, filter_by_risk, filter_result, sort_findings
from aiguard.scanner.config_auditor import check_config_files, resolve_home_dir
from aiguard.scanner.orchestrator import SecurityScanner, scan_all, scan_tool
from aiguard.scanner.port_correlator import check_exposed_ports
from aiguard.scanner.ports import PortInfo, get_ports_in_use
from aiguard.scanner.probe import probe_port

__all__ = [
    "PortInfo",
    "SecurityScanner",
    "build_result",
    "check_config_files",
    "check_exposed_ports",
    "filter_by_risk",
    "filter_result",
    "get_ports_in_use",
    "probe_port",
    "resolve_home_dir",
    "scan_all",
    "scan_tool",
    "sort_findings",
]
