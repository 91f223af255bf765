"""Direct loopback connection probe."""

import socket

from aiguard.utils.constants import DEFAULT_PROBE_TIMEOUT_MS, PROBE_HOST
from aiguard.utils.logging import logger


def probe_port(
    port: int,
    timeout: float = DEFAULT_PROBE_TIMEOUT_MS / 1000,
    host: str = PROBE_HOST,
) -> str | None:
    """Return a status string if something accepts connections on ``host:port``.

    Refusals, timeouts and unreachable hosts all return None; the socket is
    closed before returning.
    """
    try:
        with socket.create_connection((host, port), timeout=timeout):
            return "Listening on localhost"
    except (OSError, ValueError) as e:
        logger.debug("Probe {}:{} -> {}", host, port, e)
        return None
