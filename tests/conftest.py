"""Pytest configuration and fixtures."""
import pytest

from aiguard.rules.base import (
    ConfigRule,
    EnvVar,
    FileContains,
    FileExists,
    FileMissing,
    PortRule,
    RiskLevel,
    ToolRule,
)
from aiguard.rules.registry import RuleRegistry
from aiguard.scanner.ports import PortInfo


class FakeProbe:
    """Probe stub that reports the given ports as listening and records calls."""

    def __init__(self, *listening):
        self.listening = set(listening)
        self.calls = []

    def __call__(self, port, timeout):
        self.calls.append((port, timeout))
        if port in self.listening:
            return "Listening on localhost"
        return None


@pytest.fixture
def no_probe():
    """Probe stub: nothing is listening anywhere."""
    return FakeProbe()


@pytest.fixture
def probe_factory():
    """Build probe stubs: probe_factory(4096, 8080)."""
    return FakeProbe


@pytest.fixture
def home(tmp_path):
    """Empty fake home directory."""
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def gateway_tool():
    """Tool with two ports, a secret check and a hardening check."""
    return ToolRule(
        id="gateway",
        name="Gateway",
        description="Test gateway",
        docs_url="https://example.invalid/gateway",
        process_names=("gatewayd",),
        ports=(
            PortRule(
                port=18789,
                name="Gateway API",
                description="Primary API port",
                risk_if_exposed=RiskLevel.CRITICAL,
                safe_bindings=("127.0.0.1", "localhost", "::1"),
            ),
            PortRule(
                port=18790,
                name="Gateway UI",
                description="Admin UI",
                risk_if_exposed=RiskLevel.HIGH,
                safe_bindings=("127.0.0.1",),
            ),
        ),
        configs=(
            ConfigRule(
                name="API Keys in Config",
                description="Keys stored in plaintext",
                check=FileContains(pattern="sk-ant-|sk-"),
                risk_level=RiskLevel.HIGH,
                remediation="Use environment variables",
            ),
            ConfigRule(
                name="Missing trustedProxies",
                description="No proxy allowlist",
                check=FileMissing(pattern="trustedProxies"),
                risk_level=RiskLevel.MEDIUM,
                remediation="Set trustedProxies",
            ),
        ),
        config_paths=(".gateway/",),
    )


@pytest.fixture
def marker_tool():
    """Tool with a presence check on a single file and an env var check."""
    return ToolRule(
        id="marker",
        name="Marker",
        description="Test marker tool",
        docs_url="https://example.invalid/marker",
        configs=(
            ConfigRule(
                name="Debug token file present",
                description="Token file left on disk",
                check=FileExists(),
                risk_level=RiskLevel.LOW,
                remediation="Delete the token file",
            ),
            ConfigRule(
                name="Insecure mode enabled",
                description="Insecure mode enabled through the environment",
                check=EnvVar(name="MARKER_INSECURE", insecure_value="1"),
                risk_level=RiskLevel.CRITICAL,
                remediation="Unset MARKER_INSECURE",
            ),
        ),
        config_paths=(".marker-token",),
    )


@pytest.fixture
def registry(gateway_tool, marker_tool):
    return RuleRegistry([gateway_tool, marker_tool])


@pytest.fixture
def exposed_gateway_port():
    """Snapshot entry for the gateway bound to all interfaces."""
    return PortInfo(
        port=18789,
        process_name="gatewayd",
        pid=4242,
        state="LISTEN 0.0.0.0:18789",
        local_address="0.0.0.0",
    )
