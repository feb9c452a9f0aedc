"""Analysis host: parses sources, walks trees and dispatches node actions."""

from __future__ import annotations

import ast
import logging
from dataclasses import dataclass, replace
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from .fixes import DeclineFixProvider, FixProvider
from .result import Finding, ScanResult
from .rules import Rule, no_literal_strings
from .syntax import NodeKind, classify, iter_nodes
from .utils import iter_code_files, read_text_file

logger = logging.getLogger(__name__)

NodeAction = Callable[[ast.AST], Optional[Finding]]


def load_rules() -> List[Rule]:
    return [
        no_literal_strings.get_rule(),
    ]


class AnalysisContext:
    """Registry of node actions that rules hook into during initialization."""

    def __init__(self) -> None:
        self._actions: Dict[NodeKind, List[NodeAction]] = {}

    def register_node_action(self, action: NodeAction, *kinds: NodeKind) -> None:
        if not kinds:
            raise ValueError("At least one node kind is required")
        for kind in kinds:
            self._actions.setdefault(kind, []).append(action)

    def actions_for(self, kind: NodeKind) -> Sequence[NodeAction]:
        return self._actions.get(kind, ())


@dataclass
class ScanContext:
    """Bundle inputs for a scan over source paths."""

    source_paths: Iterable[str]
    exclude: Sequence[str] = ()


class Analyzer:
    """Run registered rules over syntax trees and collect their findings."""

    def __init__(
        self,
        rules: Optional[Iterable[Rule]] = None,
        fix_provider: Optional[FixProvider] = None,
    ) -> None:
        self.rules = list(rules) if rules is not None else load_rules()
        self.fix_provider = fix_provider or DeclineFixProvider()
        self._context = AnalysisContext()
        for rule in self.rules:
            rule.initialize(self._context)

    def analyze_tree(self, tree: ast.AST, path: str = "") -> List[Finding]:
        findings: List[Finding] = []
        for node in iter_nodes(tree):
            for action in self._context.actions_for(classify(node)):
                finding = action(node)
                if finding is None:
                    continue
                findings.append(self._complete(finding, tree, path))
        findings.sort(key=lambda finding: (finding.location.line, finding.location.column))
        return findings

    def analyze_source(self, source: str, path: str = "<string>") -> List[Finding]:
        """Parse ``source`` and analyze it; ``SyntaxError`` propagates."""

        tree = ast.parse(source, filename=path)
        return self.analyze_tree(tree, path)

    def scan(self, context: ScanContext, result: ScanResult) -> None:
        for path in iter_code_files(context.source_paths, exclude=context.exclude):
            try:
                source = read_text_file(path)
                findings = self.analyze_source(source, str(path))
            except (OSError, UnicodeDecodeError, SyntaxError, ValueError) as exc:
                logger.debug("Skipping %s: %s", path, exc)
                result.files_skipped.append(str(path))
                continue
            result.files_scanned += 1
            for finding in findings:
                result.add_finding(finding)
        logger.info(
            "Scanned %d files (%d skipped), %d findings",
            result.files_scanned,
            len(result.files_skipped),
            result.summary.total,
        )

    def _complete(self, finding: Finding, tree: ast.AST, path: str) -> Finding:
        if path:
            finding = replace(finding, path=path)
        proposal = self.fix_provider.propose_fix(finding, tree)
        if proposal is not None and proposal.replacement is not None:
            finding = replace(finding, fix=proposal.to_dict())
        return finding
