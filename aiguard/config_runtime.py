"""Runtime configuration for aiguard - centralized configuration management."""

import copy
import json
import os
from pathlib import Path
from typing import Any

from aiguard.utils.constants import (
    DEFAULT_MAX_FILE_SIZE,
    DEFAULT_MAX_WORKERS,
    DEFAULT_PROBE_TIMEOUT_MS,
    CONFIG_FILE,
    ENV_PREFIX,
    REPORT_FILE,
)
from aiguard.utils.logging import logger

DEFAULTS = {
    "paths": {
        "report": str(REPORT_FILE),
    },
    "limits": {
        "max_workers": DEFAULT_MAX_WORKERS,
        "max_file_size": DEFAULT_MAX_FILE_SIZE,
    },
    "timeouts": {
        "probe_ms": DEFAULT_PROBE_TIMEOUT_MS,
    },
}

# Smallest accepted value per numeric setting; anything lower falls back to the default
MINIMUMS = {
    ("limits", "max_workers"): 1,
    ("limits", "max_file_size"): 1,
    ("timeouts", "probe_ms"): 1,
}


def load_runtime_config(root: str = ".", environ: dict[str, str] | None = None) -> dict[str, Any]:
    """
    Load runtime configuration from .aiguard/config.json and environment variables.

    Config priority (highest to lowest):
    1. Environment variables (AIGUARD_<SECTION>_<KEY>)
    2. .aiguard/config.json file
    3. Built-in defaults

    Args:
        root: Root directory to look for config file
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Configuration dictionary with merged values
    """
    env = os.environ if environ is None else environ
    cfg = copy.deepcopy(DEFAULTS)

    path = Path(root) / CONFIG_FILE
    try:
        if path.exists():
            with open(path, encoding="utf-8") as f:
                user = json.load(f)

            if isinstance(user, dict):
                for section in cfg:
                    if section in user and isinstance(user[section], dict):
                        for key, value in user[section].items():
                            if key in cfg[section] and isinstance(value, type(cfg[section][key])):
                                cfg[section][key] = value
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Could not load config file from {}: {}", path, e)
        logger.info("Continuing with default configuration")

    for section in cfg:
        for key in cfg[section]:
            env_var = f"{ENV_PREFIX}_{section.upper()}_{key.upper()}"
            if env_var in env:
                value = env[env_var]
                try:
                    default_value = cfg[section][key]
                    if isinstance(default_value, int):
                        cfg[section][key] = int(value)
                    elif isinstance(default_value, float):
                        cfg[section][key] = float(value)
                    else:
                        cfg[section][key] = value
                except ValueError as e:
                    logger.warning(
                        "Invalid value for environment variable {}: '{}' - {}", env_var, value, e
                    )
                    logger.info("Using default value: {}", cfg[section][key])

    for (section, key), minimum in MINIMUMS.items():
        if cfg[section][key] < minimum:
            logger.warning(
                "{}.{}={} is below the minimum of {}; using default {}",
                section,
                key,
                cfg[section][key],
                minimum,
                DEFAULTS[section][key],
            )
            cfg[section][key] = DEFAULTS[section][key]

    return cfg
