"""Core result data structures for the analyzer."""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .severity import Severity

SEVERITY_ORDER: Sequence[Severity] = (
    Severity.ERROR,
    Severity.WARNING,
    Severity.INFO,
    Severity.HIDDEN,
)


@dataclass(frozen=True)
class Location:
    """Source span of a syntax node; columns are 1-based, end column exclusive."""

    line: int
    column: int
    end_line: int
    end_column: int

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


@dataclass(frozen=True)
class Finding:
    """Capture a single rule violation reported against a call site."""

    rule_id: str
    title: str
    message: str
    category: str
    severity: Severity
    location: Location
    path: str = ""
    fix: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["severity"] = self.severity.value
        if self.fix is None:
            data.pop("fix")
        return data


@dataclass
class Summary:
    """Aggregate finding counts by severity."""

    error: int = 0
    warning: int = 0
    info: int = 0
    hidden: int = 0

    def increment(self, severity: Severity) -> None:
        attr = severity.value.lower()
        setattr(self, attr, getattr(self, attr) + 1)

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)

    def as_rows(self) -> List[Tuple[str, int]]:
        """Return severity/count pairs ordered for reporting."""

        return [(severity.value, getattr(self, severity.value.lower())) for severity in SEVERITY_ORDER]

    @property
    def total(self) -> int:
        return sum(getattr(self, severity.value.lower()) for severity in SEVERITY_ORDER)


@dataclass
class ScanResult:
    """Diagnostic sink collecting findings and per-severity counts."""

    summary: Summary = field(default_factory=Summary)
    findings: List[Finding] = field(default_factory=list)
    files_scanned: int = 0
    files_skipped: List[str] = field(default_factory=list)
    fail_on: Severity = Severity.WARNING

    @property
    def passed(self) -> bool:
        return not any(finding.severity.rank >= self.fail_on.rank for finding in self.findings)

    def add_finding(self, finding: Finding) -> None:
        self.summary.increment(finding.severity)
        self.findings.append(finding)

    def to_dict(self) -> Dict[str, object]:
        return {
            "summary": self.summary.to_dict(),
            "findings": [finding.to_dict() for finding in self.findings],
            "files_scanned": self.files_scanned,
            "files_skipped": list(self.files_skipped),
            "passed": self.passed,
        }

    def exit_code(self) -> int:
        return 0 if self.passed else 1

    def top_findings(self, limit: int = 5) -> List[Finding]:
        """Return findings ordered by severity, then by position."""

        severity_rank = {severity: idx for idx, severity in enumerate(SEVERITY_ORDER)}
        ordered = sorted(
            self.findings,
            key=lambda finding: (
                severity_rank[finding.severity],
                finding.path,
                finding.location.line,
                finding.location.column,
            ),
        )
        return ordered[:limit]


def format_summary_table(result: ScanResult, max_findings: int = 5) -> str:
    """Create a human-readable summary table for console output."""

    lines: List[str] = []
    lines.append("Scan Summary")
    lines.append("=" * 40)
    header = f"{'Severity':<10} | {'Count':>5}"
    lines.append(header)
    lines.append("-" * len(header))
    for severity, count in result.summary.as_rows():
        lines.append(f"{severity:<10} | {count:>5}")
    lines.append("-" * len(header))
    status = "PASS" if result.passed else "FAIL"
    lines.append(f"Status    : {status}")
    lines.append(f"Files     : {result.files_scanned}")
    lines.append(f"Findings  : {result.summary.total}")

    findings = result.top_findings(max_findings)
    if findings:
        lines.append("")
        lines.append("Top Findings")
        lines.append("-" * 40)
        for finding in findings:
            lines.append(f"[{finding.severity.value}] {finding.rule_id} {finding.message} ({finding.category})")
            lines.append(f"  Location: {finding.path}:{finding.location}")
    return "\n".join(lines)
