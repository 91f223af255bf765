"""Correlate declared tool ports with the live port snapshot.

Two independent signals are combined per PortRule:

1. The port snapshot. Matching entries not recognised as safely bound produce
   a finding at the rule's declared risk.
2. A direct loopback probe. Enumeration APIs miss sockets on some platforms, so
   a successful connect produces a secondary finding one level lower, unless
   the port was already reported in this pass.

Safe-binding detection is a best-effort heuristic. Where the snapshot carries
the bind host, or its state string names one, that host must equal one of the
rule's safe markers (or 127.0.0.1). Without any address only a process name
containing "localhost" counts as loopback. Anything not positively recognised
as loopback is flagged.
"""

from collections.abc import Callable

from aiguard.rules.base import PortRule, SecurityFinding, ToolRule
from aiguard.scanner.ports import PortInfo
from aiguard.scanner.probe import probe_port
from aiguard.utils.constants import DEFAULT_PROBE_TIMEOUT_MS
from aiguard.utils.logging import logger

Probe = Callable[[int, float], str | None]


def state_host(state: str) -> str:
    """Bind host from a ``"<STATUS> <host>:<port>"`` state string.

    Returns "" when the state carries no address. IPv6 brackets are stripped.
    """
    parts = state.split()
    if not parts or ":" not in parts[-1]:
        return ""
    host = parts[-1].rsplit(":", 1)[0]
    return host.strip("[]")


def is_safe_binding(port_rule: PortRule, info: PortInfo) -> bool:
    """Whether ``info`` looks bound to one of the rule's safe addresses."""
    markers = port_rule.safe_bindings
    if not markers:
        return False

    host = info.local_address or state_host(info.state)
    if host:
        return host in markers or host == "127.0.0.1"

    # No address at all: only the process name can vouch for loopback
    return "localhost" in info.process_name.lower()


def check_exposed_ports(
    tool: ToolRule,
    ports_in_use: list[PortInfo],
    *,
    probe: Probe = probe_port,
    probe_timeout: float = DEFAULT_PROBE_TIMEOUT_MS / 1000,
) -> list[SecurityFinding]:
    """Findings for every declared port of ``tool`` that looks exposed."""
    findings: list[SecurityFinding] = []

    for port_rule in tool.ports:
        for info in ports_in_use:
            if info.port != port_rule.port:
                continue
            if is_safe_binding(port_rule, info):
                continue
            findings.append(
                SecurityFinding(
                    tool_id=tool.id,
                    tool_name=tool.name,
                    issue=f"Port {port_rule.port} ({port_rule.name}) is exposed",
                    description=port_rule.description,
                    risk_level=port_rule.risk_if_exposed,
                    remediation=(
                        f"Bind {port_rule.name} to localhost only (127.0.0.1) or use a firewall"
                    ),
                    details=f"Process: {info.process_name}, State: {info.state}, PID: {info.pid}",
                    port=port_rule.port,
                )
            )

        try:
            status = probe(port_rule.port, probe_timeout)
        except Exception as e:
            logger.warning("Probe of port {} failed for {}: {}", port_rule.port, tool.id, e)
            continue
        if status is None:
            continue

        if any(f.port == port_rule.port for f in findings):
            continue

        findings.append(
            SecurityFinding(
                tool_id=tool.id,
                tool_name=tool.name,
                issue=f"Port {port_rule.port} ({port_rule.name}) is active",
                description=port_rule.description,
                risk_level=port_rule.risk_if_exposed.downgraded(),
                remediation=f"Verify {port_rule.name} is only accessible from trusted networks",
                details=status,
                port=port_rule.port,
                from_probe=True,
            )
        )

    return findings
