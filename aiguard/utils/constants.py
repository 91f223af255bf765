"""Centralized constants for aiguard.

Single source of truth for paths, environment variable names and tuning
defaults used across the scanner and the CLI.
"""

from pathlib import Path

# ============================================================================
# OUTPUT DIRECTORIES
# ============================================================================

# Project-local directory for aiguard config and reports
AIGUARD_DIR = Path("./.aiguard")

CONFIG_FILE = AIGUARD_DIR / "config.json"
REPORT_FILE = AIGUARD_DIR / "security_report.json"

# ============================================================================
# SCAN LIMITS
# ============================================================================

# Loopback probe timeout (milliseconds)
DEFAULT_PROBE_TIMEOUT_MS = 100

# Worker threads for per-tool checks
DEFAULT_MAX_WORKERS = 8

# Config files larger than this are not read (default: 1MB)
DEFAULT_MAX_FILE_SIZE = 1024 * 1024

# Loopback address probed for listening ports
PROBE_HOST = "127.0.0.1"

# ============================================================================
# ENVIRONMENT VARIABLES
# ============================================================================

ENV_PREFIX = "AIGUARD"
ENV_LOG_LEVEL = "AIGUARD_LOG_LEVEL"
ENV_LOG_JSON = "AIGUARD_LOG_JSON"
ENV_LOG_FILE = "AIGUARD_LOG_FILE"

# Home directory variable per OS family
HOME_ENV_WINDOWS = "USERPROFILE"
HOME_ENV_POSIX = "HOME"
