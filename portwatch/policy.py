"""Decide whether a port change should raise an alert.

Rules are evaluated top-down; the first rule that matches a port decides.
When no rule matches, the change is allowed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from portwatch.snapshot import DiffResult

ALLOW = "allow"
DENY = "deny"


@dataclass
class Rule:
    """A single policy rule; empty ports matches every port."""

    ports: list[int] = field(default_factory=list)
    action: str = DENY

    def matches(self, port: int) -> bool:
        """Report whether this rule applies to port."""
        return not self.ports or port in self.ports


class Policy:
    """An ordered list of rules."""

    def __init__(self, rules: Iterable[Rule] | None = None) -> None:
        self.rules = list(rules or ())

    def allow(self, port: int) -> bool:
        """Report whether a change on port should produce an alert."""
        for rule in self.rules:
            if rule.matches(port):
                return rule.action == ALLOW
        return True

    def filter(self, diff: DiffResult) -> DiffResult:
        """Return diff without the entries the policy suppresses."""
        if not self.rules:
            return diff
        return DiffResult(
            opened=[entry for entry in diff.opened if self.allow(_port(entry))],
            closed=[entry for entry in diff.closed if self.allow(_port(entry))],
        )


def _port(entry: Any) -> int:
    return getattr(entry, "port", entry)


def default_policy() -> Policy:
    """Return a policy that allows every port change."""
    return Policy()