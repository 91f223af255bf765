"""Base contracts for AI tool security rules and scan results."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Union

SCAN_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


class RiskLevel(Enum):
    """Standardized risk levels, most severe first."""

    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @property
    def rank(self) -> int:
        """Sort position: 0 for Critical through 3 for Low."""
        return _RISK_RANK[self]

    def downgraded(self) -> "RiskLevel":
        """Severity used when exposure is only confirmed by a loopback probe."""
        if self is RiskLevel.CRITICAL:
            return RiskLevel.HIGH
        return RiskLevel.MEDIUM

    @classmethod
    def parse(cls, value: "RiskLevel | str") -> "RiskLevel":
        """Accept an enum member or a case-insensitive level name."""
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower()
        for level in cls:
            if level.value.lower() == normalized:
                return level
        raise ValueError(f"Unknown risk level: {value!r}")


_RISK_RANK = {
    RiskLevel.CRITICAL: 0,
    RiskLevel.HIGH: 1,
    RiskLevel.MEDIUM: 2,
    RiskLevel.LOW: 3,
}


@dataclass(frozen=True)
class FileExists:
    """Presence of a config path is itself the problem."""

    path_pattern: str = ""


@dataclass(frozen=True)
class FileContains:
    """Pattern found in a config file is the problem.

    The pattern may list alternatives joined by ``|``; each is tested as a
    plain substring.
    """

    pattern: str
    path_pattern: str = ""

    def alternatives(self) -> list[str]:
        return [alt for alt in self.pattern.split("|") if alt]


@dataclass(frozen=True)
class FileMissing:
    """Expected hardening token absent from a config file is the problem."""

    pattern: str
    path_pattern: str = ""


@dataclass(frozen=True)
class EnvVar:
    """Environment variable set to a known-bad value is the problem."""

    name: str
    insecure_value: str | None = None


CheckKind = Union[FileExists, FileContains, FileMissing, EnvVar]


@dataclass(frozen=True)
class PortRule:
    """A network port a tool is known to open."""

    port: int
    name: str
    description: str
    risk_if_exposed: RiskLevel
    safe_bindings: tuple[str, ...] = ()


@dataclass(frozen=True)
class ConfigRule:
    """A named check against a tool's configuration surface."""

    name: str
    description: str
    check: CheckKind
    risk_level: RiskLevel
    remediation: str


@dataclass(frozen=True)
class ToolRule:
    """Everything the scanner knows about one AI tool."""

    id: str
    name: str
    description: str
    docs_url: str
    process_names: tuple[str, ...] = ()
    ports: tuple[PortRule, ...] = ()
    configs: tuple[ConfigRule, ...] = ()
    config_paths: tuple[str, ...] = ()


@dataclass(frozen=True)
class ToolInfo:
    """Short description of a supported tool for listings."""

    id: str
    name: str
    description: str
    docs_url: str
    port_count: int
    config_check_count: int

    @classmethod
    def from_rule(cls, tool: ToolRule) -> "ToolInfo":
        return cls(
            id=tool.id,
            name=tool.name,
            description=tool.description,
            docs_url=tool.docs_url,
            port_count=len(tool.ports),
            config_check_count=len(tool.configs),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "docs_url": self.docs_url,
            "port_count": self.port_count,
            "config_check_count": self.config_check_count,
        }


@dataclass(frozen=True)
class SecurityFinding:
    """One concrete issue detected for a tool."""

    tool_id: str
    tool_name: str
    issue: str
    description: str
    risk_level: RiskLevel
    remediation: str
    details: str

    # Set on port-derived findings only; used to suppress duplicate port reports.
    port: int | None = field(default=None, compare=False)
    from_probe: bool = field(default=False, compare=False)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "tool_id": self.tool_id,
            "tool_name": self.tool_name,
            "issue": self.issue,
            "description": self.description,
            "risk_level": self.risk_level.value,
            "remediation": self.remediation,
            "details": self.details,
        }


@dataclass(frozen=True)
class SecuritySummary:
    """Per-level finding counts."""

    total_findings: int = 0
    critical: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0

    @classmethod
    def from_findings(cls, findings: list[SecurityFinding]) -> "SecuritySummary":
        counts = {level: 0 for level in RiskLevel}
        for finding in findings:
            counts[finding.risk_level] += 1
        return cls(
            total_findings=len(findings),
            critical=counts[RiskLevel.CRITICAL],
            high=counts[RiskLevel.HIGH],
            medium=counts[RiskLevel.MEDIUM],
            low=counts[RiskLevel.LOW],
        )

    def to_dict(self) -> dict[str, int]:
        return {
            "total_findings": self.total_findings,
            "critical": self.critical,
            "high": self.high,
            "medium": self.medium,
            "low": self.low,
        }


@dataclass(frozen=True)
class SecurityScanResult:
    """Outcome of one scan invocation."""

    scan_time: str
    tools_scanned: list[str]
    findings: list[SecurityFinding]
    summary: SecuritySummary

    @classmethod
    def create(
        cls,
        findings: list[SecurityFinding],
        tools_scanned: list[str],
        now: datetime | None = None,
    ) -> "SecurityScanResult":
        """Build a result whose summary is derived from ``findings``."""
        stamp = (now or datetime.now()).strftime(SCAN_TIME_FORMAT)
        return cls(
            scan_time=stamp,
            tools_scanned=list(tools_scanned),
            findings=list(findings),
            summary=SecuritySummary.from_findings(findings),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "scan_time": self.scan_time,
            "tools_scanned": list(self.tools_scanned),
            "findings": [f.to_dict() for f in self.findings],
            "summary": self.summary.to_dict(),
        }
