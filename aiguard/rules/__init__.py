"""Tool security rule model, catalog and registry."""

from aiguard.rules.base import (
    CheckKind,
    ConfigRule,
    EnvVar,
    FileContains,
    FileExists,
    FileMissing,
    PortRule,
    RiskLevel,
    SecurityFinding,
    SecurityScanResult,
    SecuritySummary,
    ToolInfo,
    ToolRule,
)
from aiguard.rules.registry import RuleRegistry, default_registry

__all__ = [
    "CheckKind",
    "ConfigRule",
    "EnvVar",
    "FileContains",
    "FileExists",
    "FileMissing",
    "PortRule",
    "RiskLevel",
    "RuleRegistry",
    "SecurityFinding",
    "SecurityScanResult",
    "SecuritySummary",
    "ToolInfo",
    "ToolRule",
    "default_registry",
]
