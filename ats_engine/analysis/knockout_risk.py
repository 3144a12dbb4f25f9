from __future__ import annotations

from typing import Sequence

from ats_engine.core.config.scoring import get_scoring_int
from ats_engine.schemas.findings import Finding
from ats_engine.schemas.knockouts import EnhancedKnockoutItem, KnockoutItem, KnockoutRiskResult

_RISK_LABELS = {"low": "Low Risk", "medium": "Medium Risk", "high": "High Risk"}


def risk_label(risk: str) -> str:
    return _RISK_LABELS.get(risk, "Unknown")


def calculate_knockout_risk(
    knockouts: Sequence[KnockoutItem | EnhancedKnockoutItem],
) -> KnockoutRiskResult:
    """Blockers dominate: one confirmed miss makes the risk high."""
    if not knockouts:
        return KnockoutRiskResult(
            risk="low",
            label=risk_label("low"),
            explanation="No specific disqualifier requirements were detected in this job posting.",
            findings=(
                Finding(
                    id="no-knockouts",
                    category="knockout",
                    severity="info",
                    title="No Disqualifiers Detected",
                    description=(
                        "No hard requirements like work authorization, certifications, "
                        "or location restrictions were found."
                    ),
                    impact="You are less likely to be auto-rejected for missing basic qualifications.",
                ),
            ),
        )

    confirmed = [item for item in knockouts if item.user_confirmed is True]
    blockers = [item for item in knockouts if item.user_confirmed is False]
    unclear = [item for item in knockouts if item.user_confirmed is None]
    unclear_high = get_scoring_int("knockouts.risk.unclear_high_threshold", 3)

    if blockers:
        risk = "high"
        explanation = (
            f"You indicated you don't meet {len(blockers)} requirement(s). "
            "This may disqualify you from consideration."
        )
    elif len(unclear) >= unclear_high:
        risk = "high"
        explanation = (
            f"{len(unclear)} requirements haven't been confirmed. "
            "Please review them to understand your eligibility."
        )
    elif unclear:
        risk = "medium"
        explanation = (
            f"{len(unclear)} requirement(s) still need your confirmation. "
            "Review them to ensure you qualify."
        )
    else:
        risk = "low"
        explanation = "You confirmed that you meet all detected requirements."

    findings: list[Finding] = []
    if risk == "high":
        findings.append(
            Finding(
                id="knockout-risk-high",
                category="knockout",
                severity="critical",
                title="High Disqualification Risk",
                description=explanation,
                impact="Your application may be automatically rejected before reaching a human reviewer.",
                suggestion=(
                    "Consider whether this role is a good match given the requirements you cannot meet."
                    if blockers
                    else "Please confirm your eligibility for each requirement below."
                ),
            )
        )
    elif risk == "medium":
        findings.append(
            Finding(
                id="knockout-risk-medium",
                category="knockout",
                severity="medium",
                title="Unconfirmed Requirements",
                description=explanation,
                impact="You should verify you meet these requirements before applying.",
                suggestion="Review each requirement and confirm whether you qualify.",
            )
        )
    else:
        findings.append(
            Finding(
                id="knockout-risk-low",
                category="knockout",
                severity="info",
                title="Requirements Confirmed",
                description=explanation,
                impact="You are unlikely to be auto-rejected for missing basic qualifications.",
            )
        )

    for blocker in blockers:
        findings.append(
            Finding(
                id=f"blocker-{blocker.id}",
                category="knockout",
                severity="critical",
                title=f"Potential Disqualifier: {blocker.label}",
                description=f'You indicated you don\'t meet this requirement: "{blocker.evidence}"',
                impact="This requirement is typically a hard filter in ATS systems.",
                suggestion=(
                    "If this is accurate, you may want to reconsider applying "
                    "or address this in your cover letter."
                ),
            )
        )

    return KnockoutRiskResult(
        risk=risk,
        label=risk_label(risk),
        explanation=explanation,
        confirmed=tuple(confirmed),
        blockers=tuple(blockers),
        unclear=tuple(unclear),
        findings=tuple(findings),
    )
