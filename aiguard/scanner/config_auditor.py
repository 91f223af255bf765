"""Evaluate tool config rules against files under the user's home directory."""

import os
import platform
from collections.abc import Mapping
from pathlib import Path

from aiguard.rules.base import (
    ConfigRule,
    EnvVar,
    FileContains,
    FileExists,
    FileMissing,
    SecurityFinding,
    ToolRule,
)
from aiguard.utils.constants import DEFAULT_MAX_FILE_SIZE, HOME_ENV_POSIX, HOME_ENV_WINDOWS
from aiguard.utils.logging import logger


def resolve_home_dir(environ: Mapping[str, str] | None = None) -> Path | None:
    """Home directory from USERPROFILE on Windows, HOME elsewhere."""
    env = os.environ if environ is None else environ
    var = HOME_ENV_WINDOWS if platform.system() == "Windows" else HOME_ENV_POSIX
    value = env.get(var)
    if not value:
        return None
    return Path(value)


def read_text(path: Path, max_size: int = DEFAULT_MAX_FILE_SIZE) -> str | None:
    """UTF-8 content of ``path``, or None if it cannot be used as evidence."""
    try:
        size = path.stat().st_size
        if size > max_size:
            logger.warning(
                "Not inspecting {} ({} bytes, limit {}); raise limits.max_file_size to include it",
                path,
                size,
                max_size,
            )
            return None
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Skipping unreadable file {}: {}", path, e)
        return None


def _child_files(directory: Path) -> list[Path]:
    try:
        children = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as e:
        logger.debug("Cannot list {}: {}", directory, e)
        return []
    files = []
    for child in children:
        try:
            if child.is_file():
                files.append(child)
        except OSError:
            continue
    return files


def _finding(tool: ToolRule, rule: ConfigRule, details: str) -> SecurityFinding:
    return SecurityFinding(
        tool_id=tool.id,
        tool_name=tool.name,
        issue=rule.name,
        description=rule.description,
        risk_level=rule.risk_level,
        remediation=rule.remediation,
        details=details,
    )


def _check_contains(
    tool: ToolRule, rule: ConfigRule, check: FileContains, path: Path, max_size: int
) -> list[SecurityFinding]:
    candidates = _child_files(path) if path.is_dir() else [path]
    alternatives = check.alternatives()
    findings = []
    for candidate in candidates:
        content = read_text(candidate, max_size)
        if content is None:
            continue
        if any(alt in content for alt in alternatives):
            findings.append(_finding(tool, rule, f"Found in: {candidate}"))
    return findings


def _check_missing(
    tool: ToolRule, rule: ConfigRule, check: FileMissing, path: Path, max_size: int
) -> list[SecurityFinding]:
    if not path.is_dir():
        return []
    findings = []
    for candidate in _child_files(path):
        content = read_text(candidate, max_size)
        if content is None:
            continue
        if check.pattern not in content:
            findings.append(
                _finding(tool, rule, f"Missing '{check.pattern}' in: {candidate}")
            )
    return findings


def _check_env(
    tool: ToolRule, rule: ConfigRule, check: EnvVar, environ: Mapping[str, str]
) -> list[SecurityFinding]:
    if check.insecure_value is None:
        return []
    value = environ.get(check.name)
    if value is not None and value == check.insecure_value:
        return [_finding(tool, rule, f"Env var {check.name} has insecure value")]
    return []


def check_config_files(
    tool: ToolRule,
    *,
    home: Path | None = None,
    environ: Mapping[str, str] | None = None,
    max_file_size: int = DEFAULT_MAX_FILE_SIZE,
) -> list[SecurityFinding]:
    """
    Findings for every config rule of ``tool``.

    Args:
        tool: Rule set for one tool
        home: Home directory override (resolved from the environment if None)
        environ: Environment mapping (defaults to os.environ)
        max_file_size: Files larger than this are not read

    Returns:
        Findings in rule order, then config path order, then file name order.
        Empty if the home directory cannot be resolved.
    """
    env = os.environ if environ is None else environ
    home_dir = home if home is not None else resolve_home_dir(env)
    if home_dir is None:
        logger.debug("No home directory; skipping config checks for {}", tool.id)
        return []

    findings: list[SecurityFinding] = []

    for rule in tool.configs:
        check = rule.check

        if isinstance(check, EnvVar):
            findings.extend(_check_env(tool, rule, check, env))
            continue

        for config_path in tool.config_paths:
            full_path = home_dir / config_path
            try:
                if not full_path.exists():
                    continue
            except OSError:
                continue

            if isinstance(check, FileExists):
                findings.append(_finding(tool, rule, f"File exists: {full_path}"))
            elif isinstance(check, FileContains):
                findings.extend(_check_contains(tool, rule, check, full_path, max_file_size))
            elif isinstance(check, FileMissing):
                findings.extend(_check_missing(tool, rule, check, full_path, max_file_size))

    return findings
