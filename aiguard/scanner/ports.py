"""Snapshot of listening TCP ports with owning-process metadata."""

from dataclasses import dataclass

import psutil

from aiguard.utils.logging import logger


@dataclass(frozen=True)
class PortInfo:
    """One listening socket as reported by the OS."""

    port: int
    process_name: str
    pid: int
    state: str
    # Bind host when the OS reports it (e.g. "0.0.0.0", "127.0.0.1")
    local_address: str | None = None


def get_ports_in_use() -> list[PortInfo]:
    """
    Enumerate TCP sockets in LISTEN state.

    Returns an empty list when the platform refuses enumeration (macOS without
    root, sandboxed environments). Process names that cannot be resolved are
    reported as "unknown".
    """
    try:
        connections = psutil.net_connections(kind="tcp")
    except (psutil.AccessDenied, PermissionError, NotImplementedError) as e:
        logger.warning("Port enumeration unavailable: {}", e)
        return []

    names: dict[int, str] = {}
    ports: list[PortInfo] = []
    seen: set[tuple[int, str | None, int]] = set()

    for conn in connections:
        if conn.status != psutil.CONN_LISTEN or not conn.laddr:
            continue

        host, port = conn.laddr.ip, conn.laddr.port
        pid = conn.pid or 0
        key = (port, host, pid)
        if key in seen:
            continue
        seen.add(key)

        if pid not in names:
            names[pid] = _process_name(pid)

        ports.append(
            PortInfo(
                port=port,
                process_name=names[pid],
                pid=pid,
                state=f"{conn.status} {host}:{port}",
                local_address=host,
            )
        )

    ports.sort(key=lambda p: (p.port, p.pid, p.local_address or ""))
    logger.debug("Port snapshot: {} listening sockets", len(ports))
    return ports


def _process_name(pid: int) -> str:
    if not pid:
        return "unknown"
    try:
        return psutil.Process(pid).name()
    except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess):
        return "unknown"
