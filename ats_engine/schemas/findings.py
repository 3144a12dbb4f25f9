from __future__ import annotations

from collections import defaultdict
from typing import Iterable, Literal

from pydantic import BaseModel, ConfigDict

FindingCategory = Literal[
    "extraction",
    "layout",
    "contact",
    "structure",
    "keyword",
    "formatting",
    "knockout",
    "search",
    "semantic",
]
FindingSeverity = Literal["critical", "high", "medium", "low", "info"]

SEVERITY_ORDER: dict[str, int] = {
    "critical": 0,
    "high": 1,
    "medium": 2,
    "low": 3,
    "info": 4,
}


class Finding(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    category: FindingCategory
    severity: FindingSeverity
    title: str
    description: str
    impact: str
    suggestion: str | None = None


def sort_findings(findings: Iterable[Finding]) -> list[Finding]:
    """Order findings critical first; ties keep their emission order."""
    return sorted(findings, key=lambda finding: SEVERITY_ORDER[finding.severity])


def group_findings_by_category(findings: Iterable[Finding]) -> dict[str, list[Finding]]:
    grouped: dict[str, list[Finding]] = defaultdict(list)
    for finding in findings:
        grouped[finding.category].append(finding)
    return dict(grouped)


def count_by_severity(findings: Iterable[Finding]) -> dict[str, int]:
    counts = {severity: 0 for severity in SEVERITY_ORDER}
    for finding in findings:
        counts[finding.severity] += 1
    return counts
