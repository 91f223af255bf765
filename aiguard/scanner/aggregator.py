"""Merge, order and summarize findings from the per-tool checks."""

from collections.abc import Iterable
from dataclasses import replace
from datetime import datetime

from aiguard.rules.base import RiskLevel, SecurityFinding, SecurityScanResult, SecuritySummary


def get_sort_key(finding: SecurityFinding) -> int:
    """Generate sort key for a finding."""
    return finding.risk_level.rank


def sort_findings(findings: Iterable[SecurityFinding]) -> list[SecurityFinding]:
    """Order by risk level, most severe first; ties keep encounter order."""
    # sorted() is stable, which is what keeps repeated scans byte-identical
    return sorted(findings, key=get_sort_key)


def suppress_duplicate_ports(findings: Iterable[SecurityFinding]) -> list[SecurityFinding]:
    """Drop probe findings for ports the snapshot already reported.

    Snapshot findings for the same port (several sockets, one per address) are
    all kept. A probe-derived finding is dropped when an earlier finding of the
    same tool names that port.
    """
    kept: list[SecurityFinding] = []
    reported: set[tuple[str, int]] = set()
    for finding in findings:
        if finding.port is None:
            kept.append(finding)
            continue
        key = (finding.tool_id, finding.port)
        if key in reported and finding.from_probe:
            continue
        reported.add(key)
        kept.append(finding)
    return kept


def filter_by_risk(
    findings: Iterable[SecurityFinding], minimum: RiskLevel | str | None
) -> list[SecurityFinding]:
    """Keep findings at ``minimum`` or more severe. None or "all" keeps everything."""
    if minimum is None or (isinstance(minimum, str) and minimum.lower() == "all"):
        return list(findings)
    threshold = RiskLevel.parse(minimum).rank
    return [f for f in findings if f.risk_level.rank <= threshold]


def filter_result(
    result: SecurityScanResult, minimum: RiskLevel | str | None
) -> SecurityScanResult:
    """Copy of ``result`` restricted to ``minimum`` risk, with a matching summary."""
    kept = filter_by_risk(result.findings, minimum)
    return replace(result, findings=kept, summary=SecuritySummary.from_findings(kept))


def build_result(
    findings: Iterable[SecurityFinding],
    tools_scanned: list[str],
    now: datetime | None = None,
) -> SecurityScanResult:
    """Deduplicate, sort and summarize collected findings into a scan result."""
    ordered = sort_findings(suppress_duplicate_ports(findings))
    return SecurityScanResult.create(ordered, tools_scanned, now=now)
