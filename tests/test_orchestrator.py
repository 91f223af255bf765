"""Tests for full and single-tool scans."""

import pytest

from aiguard.rules.base import RiskLevel
from aiguard.scanner.orchestrator import SecurityScanner, scan_all, scan_tool


@pytest.fixture
def populated_home(home):
    """Home with a leaked key, a missing hardening token and a token file."""
    gateway = home / ".gateway"
    gateway.mkdir()
    (gateway / "config.json").write_text('{"apiKey": "sk-live-123"}')
    (home / ".marker-token").write_text("debug")
    return home


def make_scanner(registry, home, ports=(), probe=None, **kwargs):
    return SecurityScanner(
        registry,
        port_source=lambda: list(ports),
        probe=probe or (lambda port, timeout: None),
        home=home,
        environ={},
        **kwargs,
    )


class TestScanAll:
    """Full registry scans."""

    def test_lists_every_tool(self, registry, home):
        result = make_scanner(registry, home).scan_all()
        assert result.tools_scanned == ["Gateway", "Marker"]
        assert result.findings == []
        assert result.summary.total_findings == 0

    def test_findings_sorted_and_summarized(self, registry, populated_home, exposed_gateway_port):
        result = make_scanner(registry, populated_home, ports=[exposed_gateway_port]).scan_all()

        levels = [f.risk_level for f in result.findings]
        assert levels == [RiskLevel.CRITICAL, RiskLevel.HIGH, RiskLevel.MEDIUM, RiskLevel.LOW]
        assert result.summary.critical == 1
        assert result.summary.total_findings == 4

    def test_repeat_scans_identical(self, registry, populated_home, exposed_gateway_port):
        scanner = make_scanner(registry, populated_home, ports=[exposed_gateway_port])
        first = scanner.scan_all()
        second = scanner.scan_all()
        assert first.findings == second.findings
        assert first.summary == second.summary

    def test_worker_count_does_not_change_output(
        self, registry, populated_home, exposed_gateway_port, probe_factory
    ):
        serial = make_scanner(
            registry,
            populated_home,
            ports=[exposed_gateway_port],
            probe=probe_factory(18790),
            max_workers=1,
        ).scan_all()
        parallel = make_scanner(
            registry,
            populated_home,
            ports=[exposed_gateway_port],
            probe=probe_factory(18790),
            max_workers=8,
        ).scan_all()
        assert [f.to_dict() for f in serial.findings] == [f.to_dict() for f in parallel.findings]

    def test_snapshot_failure_tolerated(self, registry, populated_home):
        def broken():
            raise RuntimeError("netstat exploded")

        scanner = SecurityScanner(
            registry,
            port_source=broken,
            probe=lambda port, timeout: None,
            home=populated_home,
            environ={},
        )
        result = scanner.scan_all()
        assert result.summary.total_findings == 3
        assert all(f.port is None for f in result.findings)

    def test_crashing_connect_check_keeps_other_findings(
        self, registry, populated_home, exposed_gateway_port
    ):
        """Exposed-port and config findings survive a connect check that raises."""

        def crashing(port, timeout):
            raise RuntimeError("boom")

        result = make_scanner(
            registry, populated_home, ports=[exposed_gateway_port], probe=crashing
        ).scan_all()
        assert result.summary.total_findings == 4
        assert result.summary.critical == 1

    @pytest.mark.parametrize(
        "kwargs", [{"probe_timeout": 0}, {"probe_timeout": -0.005}, {"max_file_size": 0}]
    )
    def test_rejects_non_positive_limits(self, registry, kwargs):
        with pytest.raises(ValueError):
            SecurityScanner(registry, **kwargs)

    def test_module_level_scan_all(self, home):
        result = scan_all(
            port_source=lambda: [],
            probe=lambda port, timeout: None,
            home=home,
            environ={},
        )
        assert len(result.tools_scanned) == 10
        assert result.tools_scanned[0] == "Clawdbot"
        assert result.findings == []


class TestScanTool:
    """Single-tool scans."""

    def test_single_tool(self, registry, populated_home):
        result = make_scanner(registry, populated_home).scan_tool("marker")
        assert result.tools_scanned == ["Marker"]
        assert [f.tool_id for f in result.findings] == ["marker"]

    def test_unknown_tool_returns_none(self, registry, home):
        assert make_scanner(registry, home).scan_tool("does-not-exist") is None

    def test_module_level_helper_uses_default_catalog(self, home):
        result = scan_tool(
            "cursor",
            port_source=lambda: [],
            probe=lambda port, timeout: None,
            home=home,
            environ={},
        )
        assert result.tools_scanned == ["Cursor"]
        assert result.findings == []


class TestRunningTools:
    """Process liveness reporting."""

    def test_running_tools(self, registry, monkeypatch):
        monkeypatch.setattr(
            "aiguard.scanner.processes._process_names", lambda: ["gatewayd", "bash"]
        )
        scanner = make_scanner(registry, None)
        assert scanner.running_tools() == {"gateway": True, "marker": False}
