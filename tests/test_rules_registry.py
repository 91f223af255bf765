"""Tests for the rule model and the tool rule registry."""

import pytest

from aiguard.rules.base import RiskLevel, SecurityFinding, SecuritySummary, ToolInfo
from aiguard.rules.catalog import TOOL_RULES
from aiguard.rules.registry import RuleRegistry, default_registry


class TestRiskLevel:
    """Ordering, downgrade and parsing of risk levels."""

    def test_rank_order(self):
        ranks = [level.rank for level in RiskLevel]
        assert ranks == [0, 1, 2, 3]
        assert RiskLevel.CRITICAL.rank < RiskLevel.LOW.rank

    def test_downgraded(self):
        """Critical drops to High, everything else lands on Medium."""
        assert RiskLevel.CRITICAL.downgraded() is RiskLevel.HIGH
        assert RiskLevel.HIGH.downgraded() is RiskLevel.MEDIUM
        assert RiskLevel.MEDIUM.downgraded() is RiskLevel.MEDIUM
        assert RiskLevel.LOW.downgraded() is RiskLevel.MEDIUM

    @pytest.mark.parametrize("raw", ["critical", "CRITICAL", " Critical "])
    def test_parse_case_insensitive(self, raw):
        assert RiskLevel.parse(raw) is RiskLevel.CRITICAL

    def test_parse_unknown(self):
        with pytest.raises(ValueError):
            RiskLevel.parse("severe")


class TestSerialization:
    """JSON shape of findings and summaries."""

    def test_finding_to_dict_omits_internal_fields(self):
        finding = SecurityFinding(
            tool_id="x",
            tool_name="X",
            issue="Port 1 (a) is active",
            description="d",
            risk_level=RiskLevel.HIGH,
            remediation="r",
            details="Listening on localhost",
            port=1,
            from_probe=True,
        )
        data = finding.to_dict()
        assert data["risk_level"] == "High"
        assert "port" not in data
        assert "from_probe" not in data

    def test_empty_summary(self):
        summary = SecuritySummary.from_findings([])
        assert summary.to_dict() == {
            "total_findings": 0,
            "critical": 0,
            "high": 0,
            "medium": 0,
            "low": 0,
        }


class TestRuleRegistry:
    """Lookup and uniqueness behavior of RuleRegistry."""

    def test_find_rule(self, registry, gateway_tool):
        assert registry.find_rule("gateway") == gateway_tool
        assert "gateway" in registry

    def test_unknown_id_returns_none(self, registry):
        assert registry.find_rule("no-such-tool") is None
        assert "no-such-tool" not in registry

    def test_list_preserves_order(self, registry):
        assert [rule.id for rule in registry.list_rules()] == ["gateway", "marker"]
        assert len(registry) == 2

    def test_duplicate_id_rejected(self, gateway_tool):
        with pytest.raises(ValueError, match="gateway"):
            RuleRegistry([gateway_tool, gateway_tool])

    def test_tool_infos(self, registry):
        infos = registry.tool_infos()
        assert [info.id for info in infos] == ["gateway", "marker"]
        gateway = infos[0]
        assert isinstance(gateway, ToolInfo)
        assert gateway.port_count == 2
        assert gateway.config_check_count == 2


class TestBundledCatalog:
    """Sanity checks on the built-in tool catalog."""

    def test_ids_unique(self):
        ids = [rule.id for rule in TOOL_RULES]
        assert len(ids) == len(set(ids))

    def test_catalog_size(self):
        assert len(TOOL_RULES) == 10

    def test_known_tools_present(self):
        registry = default_registry()
        for tool_id in ("clawdbot", "opencode", "cursor", "mcp-servers"):
            assert registry.find_rule(tool_id) is not None

    def test_default_registry_built_once(self):
        assert default_registry() is default_registry()

    def test_every_rule_has_docs_and_remediation(self):
        for rule in TOOL_RULES:
            assert rule.docs_url.startswith("https://")
            for port_rule in rule.ports:
                assert 0 < port_rule.port < 65536
            for config in rule.configs:
                assert config.remediation

    def test_clawdbot_gateway_is_critical(self):
        clawdbot = default_registry().find_rule("clawdbot")
        gateway = next(p for p in clawdbot.ports if p.port == 18789)
        assert gateway.risk_if_exposed is RiskLevel.CRITICAL
        assert "127.0.0.1" in gateway.safe_bindings
