from __future__ import annotations

from ats_engine.core.config.scoring import get_scoring_float, get_scoring_int
from ats_engine.schemas.findings import Finding
from ats_engine.schemas.keywords import CoverageResult, KeywordSet
from ats_engine.taxonomy import SkillTaxonomy
from ats_engine.taxonomy.tables import UNIVERSAL_SOFT_SKILLS

from .common import clamp, normalize_for_matching, round_half_up
from .matching import COVERAGE_MATCH, partition_keywords


def coverage_grade(score: int) -> str:
    if score >= 90:
        return "Excellent"
    if score >= 75:
        return "Good"
    if score >= 50:
        return "Fair"
    return "Low"


def _soft_skill_matches(normalized_resume: str) -> list[str]:
    found: list[str] = []
    for skill in UNIVERSAL_SOFT_SKILLS:
        if skill in normalized_resume:
            found.append(" ".join(word[:1].upper() + word[1:] for word in skill.split(" ")))
    return found


def _preview(items: list[str], limit: int) -> str:
    text = ", ".join(items[:limit])
    return text + "..." if len(items) > limit else text


def _summary_finding(score: int, found: int, total: int) -> Finding:
    thresholds = {
        "excellent": get_scoring_int("coverage.thresholds.excellent", 90),
        "good": get_scoring_int("coverage.thresholds.good", 70),
        "moderate": get_scoring_int("coverage.thresholds.moderate", 40),
        "low": get_scoring_int("coverage.thresholds.low", 20),
    }
    if score >= thresholds["excellent"]:
        return Finding(
            id="excellent-keyword-match",
            category="keyword",
            severity="info",
            title="Excellent Keyword Match",
            description=f"Found {found} of {total} critical keywords. Strong alignment with this role.",
            impact="Your resume is well-aligned with this job posting.",
        )
    if score >= thresholds["good"]:
        return Finding(
            id="good-keyword-match",
            category="keyword",
            severity="info",
            title="Good Keyword Coverage",
            description=f"Found {found} of {total} critical keywords ({score}% match).",
            impact="Your resume covers most key requirements.",
        )
    if score >= thresholds["moderate"]:
        return Finding(
            id="moderate-keyword-match",
            category="keyword",
            severity="medium",
            title="Moderate Keyword Coverage",
            description=f"Found {found} of {total} critical keywords ({score}% match).",
            impact="Consider adding missing keywords if they match your experience.",
        )
    if score >= thresholds["low"]:
        return Finding(
            id="low-keyword-match",
            category="keyword",
            severity="high",
            title="Low Keyword Coverage",
            description=f"Found only {found} of {total} critical keywords ({score}% match).",
            impact="Your resume may not be surfaced by ATS for this role. Consider if this job is a good match.",
        )
    return Finding(
        id="minimal-keyword-match",
        category="keyword",
        severity="high",
        title="Minimal Keyword Match",
        description=(
            f"Found only {found} of {total} critical keywords. "
            "This role may not align with your background."
        ),
        impact=(
            "This job appears to be in a different field from your experience. "
            "Consider roles that better match your skills."
        ),
    )


def calculate_coverage(
    resume_text: str,
    keywords: KeywordSet,
    *,
    taxonomy: SkillTaxonomy | None = None,
) -> CoverageResult:
    if not resume_text or not resume_text.strip():
        return CoverageResult(
            score=0,
            grade=coverage_grade(0),
            missing_keywords=keywords.critical,
            findings=(
                Finding(
                    id="empty-resume",
                    category="extraction",
                    severity="critical",
                    title="No Resume Text",
                    description="No text was extracted from your resume.",
                    impact="Cannot calculate keyword coverage without resume content.",
                ),
            ),
        )

    if keywords.is_empty:
        return CoverageResult(
            score=100,
            grade=coverage_grade(100),
            findings=(
                Finding(
                    id="no-keywords",
                    category="keyword",
                    severity="info",
                    title="No Specific Keywords Identified",
                    description="No specific keywords were extracted from the job description.",
                    impact="This may indicate a generic job posting or one without technical requirements.",
                ),
            ),
        )

    normalized = normalize_for_matching(resume_text)
    found_critical, missing_critical = partition_keywords(
        normalized, keywords.critical, COVERAGE_MATCH, taxonomy=taxonomy
    )
    found_optional, _ = partition_keywords(normalized, keywords.optional, COVERAGE_MATCH, taxonomy=taxonomy)
    soft_skills = _soft_skill_matches(normalized)

    total_critical = len(keywords.critical)
    base = (len(found_critical) / total_critical) * 100 if total_critical else 100.0
    optional_bonus_max = get_scoring_float("coverage.optional_bonus_max", 10)
    optional_bonus = (
        (len(found_optional) / len(keywords.optional)) * optional_bonus_max if keywords.optional else 0.0
    )
    soft_bonus = min(
        len(soft_skills) * get_scoring_float("coverage.soft_skill_point", 1),
        get_scoring_float("coverage.soft_skill_bonus_max", 5),
    )
    floor = get_scoring_float("coverage.floor", 8)
    score = round_half_up(clamp(base + optional_bonus + soft_bonus, floor, 100))

    findings: list[Finding] = [_summary_finding(score, len(found_critical), total_critical)]
    for index, keyword in enumerate(missing_critical):
        findings.append(
            Finding(
                id=f"missing-keyword-{index}",
                category="keyword",
                severity="medium",
                title=f'Missing Keyword: "{keyword}"',
                description=f'The keyword "{keyword}" was not found in your resume.',
                impact="ATS systems may not surface your resume if this is a key requirement.",
                suggestion=f'If you have this skill or experience, add the exact phrase "{keyword}" to your resume.',
            )
        )
    if found_optional:
        findings.append(
            Finding(
                id="bonus-keywords-found",
                category="keyword",
                severity="info",
                title="Nice-to-Have Keywords Found",
                description=(
                    f"Your resume includes {len(found_optional)} preferred qualifications: "
                    f"{_preview(found_optional, 5)}."
                ),
                impact="These additional matches strengthen your application.",
            )
        )
    if soft_skills:
        findings.append(
            Finding(
                id="soft-skills-found",
                category="keyword",
                severity="info",
                title="Transferable Skills Detected",
                description=f"Found {len(soft_skills)} universal soft skills: {_preview(soft_skills, 4)}.",
                impact="Soft skills are valued across all roles and contribute to your match score.",
            )
        )

    return CoverageResult(
        score=score,
        grade=coverage_grade(score),
        found_keywords=tuple(found_critical),
        missing_keywords=tuple(missing_critical),
        bonus_keywords=tuple(found_optional + soft_skills),
        findings=tuple(findings),
    )
