"""Read-only registry of tool security rules."""

import threading
from collections.abc import Iterable, Iterator

from aiguard.rules.base import ToolInfo, ToolRule


class RuleRegistry:
    """Immutable, ordered collection of ToolRule values keyed by tool id."""

    def __init__(self, rules: Iterable[ToolRule]):
        ordered = tuple(rules)
        by_id: dict[str, ToolRule] = {}
        for rule in ordered:
            if rule.id in by_id:
                raise ValueError(f"Duplicate tool id in rule registry: {rule.id!r}")
            by_id[rule.id] = rule
        self._rules = ordered
        self._by_id = by_id

    def list_rules(self) -> tuple[ToolRule, ...]:
        """All rules in catalog order."""
        return self._rules

    def find_rule(self, tool_id: str) -> ToolRule | None:
        """Rule for ``tool_id``, or None if the tool is unknown."""
        return self._by_id.get(tool_id)

    def tool_infos(self) -> list[ToolInfo]:
        return [ToolInfo.from_rule(rule) for rule in self._rules]

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[ToolRule]:
        return iter(self._rules)

    def __contains__(self, tool_id: object) -> bool:
        return tool_id in self._by_id


_default: RuleRegistry | None = None
_default_lock = threading.Lock()


def default_registry() -> RuleRegistry:
    """Registry built from the bundled catalog, constructed once per process."""
    global _default

    if _default is None:
        with _default_lock:
            if _default is None:
                from aiguard.rules.catalog import TOOL_RULES

                _default = RuleRegistry(TOOL_RULES)
    return _default
