"""Centralized logging configuration using Loguru.

Usage:
    from aiguard.utils.logging import logger
    logger.info("Message")
    logger.debug("Debug message")  # Only shows if AIGUARD_LOG_LEVEL=DEBUG

Environment Variables:
    AIGUARD_LOG_LEVEL: DEBUG|INFO|WARNING|ERROR (default: WARNING)
    AIGUARD_LOG_JSON: 0|1 (default: 0, human-readable)
    AIGUARD_LOG_FILE: path to an NDJSON log file (optional)

Logs go to stderr so that report output on stdout stays machine-readable.
"""

import json
import os
import sys

from loguru import logger

from aiguard.utils.constants import ENV_LOG_FILE, ENV_LOG_JSON, ENV_LOG_LEVEL

# Remove default handler
logger.remove()

_log_level = os.environ.get(ENV_LOG_LEVEL, "WARNING").upper()
_json_mode = os.environ.get(ENV_LOG_JSON, "0") == "1"
_log_file = os.environ.get(ENV_LOG_FILE)


def _ndjson_line(record) -> str:
    payload = {
        "level": record["level"].name,
        "time": record["time"].isoformat(),
        "msg": record["message"],
        "module": record["name"],
        "pid": record["process"].id,
    }
    for key, value in record["extra"].items():
        payload[key] = value
    if record["exception"]:
        exc = record["exception"]
        payload["err"] = {
            "type": exc.type.__name__ if exc.type else "Error",
            "message": str(exc.value) if exc.value else "",
        }
    return json.dumps(payload, default=str)


def ndjson_sink(message):
    """Write one JSON object per record to stderr."""
    # Never call logger.* inside a sink - causes infinite recursion
    sys.stderr.write(_ndjson_line(message.record) + "\n")
    sys.stderr.flush()


_human_format = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}:{function}:{line}</cyan> - "
    "<level>{message}</level>"
)

logger.level("DEBUG", color="<blue>")
logger.level("WARNING", color="<yellow>")
logger.level("ERROR", color="<red>")


def _add_console_handler(level: str) -> int:
    if _json_mode:
        return logger.add(ndjson_sink, level=level, colorize=False)
    return logger.add(
        sys.stderr,
        level=level,
        format=_human_format,
        colorize=None,  # Auto-detect: colors if TTY, plain if piped
    )


_console_handler_id = _add_console_handler(_log_level)

if _log_file:

    def _file_sink(message):
        with open(_log_file, "a", encoding="utf-8") as f:
            f.write(_ndjson_line(message.record) + "\n")

    logger.add(_file_sink, level="DEBUG")


def set_level(level: str) -> None:
    """Swap the console handler for one at ``level`` (CLI ``--verbose``)."""
    global _console_handler_id

    logger.remove(_console_handler_id)
    _console_handler_id = _add_console_handler(level.upper())


__all__ = ["logger", "ndjson_sink", "set_level"]
