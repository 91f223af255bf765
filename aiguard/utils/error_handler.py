"""Centralized error handler for aiguard commands."""

from collections.abc import Callable
from functools import wraps
from typing import Any

import click

from aiguard.utils.logging import logger


def handle_exceptions(func: Callable[..., Any]) -> Callable[..., Any]:
    """Log unexpected command failures and surface them as ClickException."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except (click.ClickException, click.exceptions.Exit, click.Abort):
            raise
        except Exception as e:
            error_type = type(e).__name__
            logger.opt(exception=True).error(
                "Command '{cmd}' failed: {err}",
                cmd=func.__name__,
                err=str(e),
            )
            raise click.ClickException(
                f"{error_type}: {e}\n\nRe-run with AIGUARD_LOG_LEVEL=DEBUG for the full traceback."
            ) from e

    return wrapper
