"""Map a completed analysis onto a short, prioritized list of next steps.

Rules are evaluated top to bottom so earlier items carry higher priority.
"""

from __future__ import annotations

from dataclasses import dataclass

from ats_engine.schemas.guidance import GuidanceItem


@dataclass(frozen=True)
class GuidanceInput:
    parse_health: int
    has_job_description: bool
    has_api_key: bool
    knockout_risk: str | None = None
    knockout_count: int = 0
    keyword_coverage: int | None = None
    semantic_match: int | None = None
    recruiter_search: int | None = None


def generate_guidance(data: GuidanceInput) -> list[GuidanceItem]:
    items: list[GuidanceItem] = []

    if data.parse_health < 40:
        items.append(
            GuidanceItem(
                id="parse-critical",
                priority="critical",
                title="Major parsing issues detected",
                description=(
                    "ATS software will struggle to read your resume. "
                    "Fix layout and formatting issues before submitting applications."
                ),
                action_label="View issues",
                action_target="findings",
            )
        )

    if data.knockout_risk == "high" and data.knockout_count > 0:
        plural = "s" if data.knockout_count > 1 else ""
        items.append(
            GuidanceItem(
                id="knockout-critical",
                priority="critical",
                title=f"{data.knockout_count} potential disqualifier{plural} found",
                description="These requirements could auto-reject your application. Review them before applying.",
                action_label="Review knockouts",
                action_target="jobmatch",
            )
        )

    if 40 <= data.parse_health < 60:
        items.append(
            GuidanceItem(
                id="parse-moderate",
                priority="important",
                title="Moderate parsing issues",
                description="Some parts of your resume may not parse correctly. Fix the critical findings first.",
                action_label="View findings",
                action_target="findings",
            )
        )

    if not data.has_job_description and data.parse_health >= 60:
        items.append(
            GuidanceItem(
                id="add-jd",
                priority="important",
                title="Add a job description",
                description="Paste the job posting to unlock keyword matching, knockout detection and match scores.",
                action_label="Add job description",
                action_target="jobmatch",
            )
        )

    if data.keyword_coverage is not None and data.keyword_coverage < 50:
        items.append(
            GuidanceItem(
                id="keyword-low",
                priority="important",
                title=f"Only {data.keyword_coverage}% keyword match",
                description=(
                    "Your resume is missing many terms from the job description. "
                    "Add relevant skills and experience."
                ),
                action_label="See keywords",
                action_target="jobmatch",
            )
        )

    if data.parse_health >= 60 and data.has_job_description and not data.has_api_key:
        items.append(
            GuidanceItem(
                id="unlock-ai",
                priority="suggested",
                title="Get deeper AI insights",
                description="Configure an AI provider to unlock semantic matching and AI-powered suggestions.",
                action_label="Configure AI",
                action_target="ai-settings",
            )
        )

    if data.semantic_match is not None and data.semantic_match < 60:
        items.append(
            GuidanceItem(
                id="semantic-low",
                priority="suggested",
                title="Low conceptual alignment",
                description=(
                    "Your experience descriptions don't closely match the job's language. "
                    "Rewrite bullets to mirror the posting."
                ),
                action_label="See match details",
                action_target="jobmatch",
            )
        )

    if data.recruiter_search is not None and data.recruiter_search < 50:
        items.append(
            GuidanceItem(
                id="recruiter-low",
                priority="suggested",
                title="Low searchability score",
                description=(
                    "Recruiters searching for this role may not find you. "
                    "Use industry-standard job titles and terms."
                ),
                action_label="See search score",
                action_target="jobmatch",
            )
        )

    if data.parse_health >= 80 and not items:
        if data.has_job_description:
            items.append(
                GuidanceItem(
                    id="looking-good",
                    priority="suggested",
                    title="Resume is in great shape",
                    description="Your resume parses well and matches the job description. Fine-tune with AI for the best results.",
                    action_label="Fine-tune with AI",
                    action_target="ai-settings",
                )
            )
        else:
            items.append(
                GuidanceItem(
                    id="looking-good",
                    priority="suggested",
                    title="Resume is in great shape",
                    description="Your resume parses well. Add a job description to see how it matches specific roles.",
                    action_label="Add job description",
                    action_target="jobmatch",
                )
            )

    return items
