"""Rule registry for the analyzer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Protocol

from authlint.result import Finding, Location
from authlint.severity import Severity

if TYPE_CHECKING:  # pragma: no cover
    from authlint.host import AnalysisContext


@dataclass(frozen=True)
class RuleDescriptor:
    """Immutable identity shared by every finding a rule reports."""

    id: str
    title: str
    message: str
    category: str
    severity: Severity
    description: str = ""
    enabled_by_default: bool = True

    def create_finding(self, location: Location, path: str = "") -> Finding:
        return Finding(
            rule_id=self.id,
            title=self.title,
            message=self.message,
            category=self.category,
            severity=self.severity,
            location=location,
            path=path,
        )


class Rule(Protocol):
    """Protocol implemented by all rule evaluators."""

    descriptor: RuleDescriptor

    def initialize(self, context: "AnalysisContext") -> None:
        """Register node actions with the analysis host."""

    def evaluate(self, node: object) -> Optional[Finding]:
        """Return a finding for ``node`` or ``None`` when it does not match."""
