"""Centralized exit codes for the aiguard CLI."""

from aiguard.rules.base import SecuritySummary


class ExitCodes:
    """Standard exit codes for aiguard CLI commands."""

    SUCCESS = 0

    HIGH_SEVERITY = 1
    CRITICAL_SEVERITY = 2

    TASK_INCOMPLETE = 3

    @classmethod
    def get_description(cls, code: int) -> str:
        """Get human-readable description for an exit code."""
        descriptions = {
            cls.SUCCESS: "Success - No critical or high findings",
            cls.HIGH_SEVERITY: "High risk findings detected",
            cls.CRITICAL_SEVERITY: "Critical risk findings detected",
            cls.TASK_INCOMPLETE: "Scan could not be completed (unknown tool or bad input)",
        }
        return descriptions.get(code, f"Unknown exit code: {code}")

    @classmethod
    def from_summary(cls, summary: SecuritySummary) -> int:
        """Exit code for a set of findings, worst level first."""
        if summary.critical > 0:
            return cls.CRITICAL_SEVERITY
        if summary.high > 0:
            return cls.HIGH_SEVERITY
        return cls.SUCCESS
