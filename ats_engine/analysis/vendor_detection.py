from __future__ import annotations

import logging
import re
from urllib.parse import urlsplit

from ats_engine.schemas.vendor import ATSVendor, ScoreName, VendorDetectionResult, VendorGuidance, VendorType

logger = logging.getLogger(__name__)

_SEARCH_FOCUS: tuple[ScoreName, ...] = ("parse_health", "recruiter_search")
_BOARD_FOCUS: tuple[ScoreName, ...] = ("parse_health", "recruiter_search", "knockout_risk")


def _vendor(
    vendor_id: str,
    name: str,
    vendor_type: VendorType,
    description: str,
    focus: tuple[ScoreName, ...],
    explanation: str,
    ai_addon: str | None = None,
) -> ATSVendor:
    return ATSVendor(
        id=vendor_id,
        name=name,
        type=vendor_type,
        description=description,
        guidance=VendorGuidance(focus=focus, explanation=explanation),
        ai_addon=ai_addon,
    )


ATS_VENDORS: dict[str, ATSVendor] = {
    vendor.id: vendor
    for vendor in (
        _vendor(
            "greenhouse", "Greenhouse", "processor",
            "Pure database system. Recruiters manually search and review candidates.",
            _SEARCH_FOCUS,
            "Greenhouse does not auto-rank candidates. Recruiters use Boolean search to filter, "
            "so clean parsing and exact keyword matches matter most.",
        ),
        _vendor(
            "workday", "Workday", "sorter",
            "AI-powered ranking system. Candidates are scored A/B/C/D based on fit.",
            ("semantic_match", "parse_health"),
            "Workday uses HiredScore AI to rank candidates. Semantic alignment with the job "
            "description is critical because recruiters see AI-generated scores.",
            ai_addon="HiredScore",
        ),
        _vendor(
            "lever", "Lever", "processor",
            "CRM-style system. Recruiters manually review candidates or search.",
            _SEARCH_FOCUS,
            "Lever is a recruiting CRM with no AI ranking. Be findable via search and make sure "
            "the resume parses cleanly.",
        ),
        _vendor(
            "icims", "iCIMS", "sorter",
            "Enterprise ATS with AI-powered Role Fit scoring.",
            ("semantic_match", "parse_health"),
            "iCIMS compares candidates to ideal profiles with Role Fit AI. Skills and experience "
            "alignment are weighted heavily.",
            ai_addon="Talent Cloud AI",
        ),
        _vendor(
            "taleo", "Taleo", "sorter",
            "Legacy Oracle ATS with automated scoring features.",
            _SEARCH_FOCUS,
            "Taleo relies on exact keyword matching more than semantic understanding. Make sure "
            "key terms appear verbatim.",
            ai_addon="ACE (Automated Candidate Evaluation)",
        ),
        _vendor(
            "ashby", "Ashby", "processor",
            "Modern ATS focused on recruiter workflow. No AI ranking.",
            _SEARCH_FOCUS,
            "Ashby prioritizes clean data and recruiter experience; humans make every decision.",
        ),
        _vendor(
            "bamboohr", "BambooHR", "processor",
            "HR software with basic ATS functionality. No AI scoring.",
            _SEARCH_FOCUS,
            "BambooHR offers simple filtering and manual review. Clean formatting matters most.",
        ),
        _vendor(
            "jazzhr", "JazzHR", "processor",
            "SMB-focused ATS. Simple applicant tracking without AI.",
            _SEARCH_FOCUS,
            "JazzHR is built for small businesses where manual review is the norm. Make sure the "
            "resume parses cleanly and contains relevant keywords.",
        ),
        _vendor(
            "jobvite", "Jobvite", "processor",
            "Recruiting platform focused on referrals and CRM.",
            _SEARCH_FOCUS,
            "Jobvite emphasizes referrals and candidate relationships with no AI ranking by default. "
            "Searchability matters most.",
        ),
        _vendor(
            "smartrecruiters", "SmartRecruiters", "processor",
            "Enterprise recruiting platform with optional AI features.",
            ("parse_health", "semantic_match"),
            "SmartRecruiters can score candidates with AI when the employer enables it. Cover both "
            "semantic alignment and exact keywords.",
            ai_addon="SmartAssistant (optional)",
        ),
        _vendor(
            "indeed", "Indeed", "processor",
            "Job board with Easy Apply. Applications go to the employer's email or their ATS.",
            _BOARD_FOCUS,
            "Indeed forwards your application to the employer, who may use any ATS. Match keywords "
            "and meet every stated requirement.",
        ),
        _vendor(
            "linkedin", "LinkedIn", "processor",
            "Professional network with Easy Apply. Applications are forwarded to the employer.",
            _BOARD_FOCUS,
            "LinkedIn Easy Apply sends your profile to the employer, who may use any ATS. Focus on "
            "keywords and requirements.",
        ),
        _vendor(
            "ziprecruiter", "ZipRecruiter", "sorter",
            "Job board with AI matching that ranks candidates for employers.",
            ("semantic_match", "parse_health"),
            "ZipRecruiter ranks candidates with AI matching. Semantic alignment with the requirements "
            "improves visibility to employers.",
            ai_addon="TrafficBoost AI",
        ),
        _vendor(
            "glassdoor", "Glassdoor", "processor",
            "Job board with company reviews. Applications are forwarded to the employer.",
            _BOARD_FOCUS,
            "Glassdoor forwards applications to employers on many different systems. Follow "
            "universal best practices.",
        ),
    )
}

# First match wins, so host-specific patterns precede broader ones.
URL_PATTERNS: tuple[tuple[str, re.Pattern[str], str], ...] = tuple(
    (vendor_id, re.compile(source, re.IGNORECASE), confidence)
    for vendor_id, source, confidence in (
        ("greenhouse", r"boards\.greenhouse\.io", "high"),
        ("greenhouse", r"job-boards\.greenhouse\.io", "high"),
        ("greenhouse", r"greenhouse\.io/embed/job_board", "high"),
        ("workday", r"\.wd\d+\.myworkdayjobs\.com", "high"),
        ("workday", r"myworkdayjobs\.com", "high"),
        ("workday", r"workday\.com/.*/job", "medium"),
        ("lever", r"jobs\.lever\.co", "high"),
        ("lever", r"lever\.co/.*/postings", "high"),
        ("icims", r"careers.*\.icims\.com", "high"),
        ("icims", r"\.icims\.com", "high"),
        ("taleo", r"\.taleo\.net", "high"),
        ("taleo", r"taleo\.com", "medium"),
        ("ashby", r"jobs\.ashbyhq\.com", "high"),
        ("ashby", r"ashbyhq\.com.*/jobs", "high"),
        ("bamboohr", r"\.bamboohr\.com/careers", "high"),
        ("bamboohr", r"\.bamboohr\.com/jobs", "high"),
        ("jazzhr", r"\.applytojob\.com", "high"),
        ("jazzhr", r"app\.jazz\.co", "high"),
        ("jobvite", r"jobs\.jobvite\.com", "high"),
        ("jobvite", r"\.jobvite\.com", "medium"),
        ("smartrecruiters", r"jobs\.smartrecruiters\.com", "high"),
        ("smartrecruiters", r"\.smartrecruiters\.com", "medium"),
        ("indeed", r"indeed\.com/viewjob", "high"),
        ("indeed", r"indeed\.com/job/", "high"),
        ("indeed", r"indeed\.com/cmp/", "high"),
        ("indeed", r"indeed\.com/jobs", "medium"),
        ("indeed", r"\.indeed\.com", "medium"),
        ("linkedin", r"linkedin\.com/jobs/view", "high"),
        ("linkedin", r"linkedin\.com/job/", "high"),
        ("ziprecruiter", r"ziprecruiter\.com/jobs", "high"),
        ("ziprecruiter", r"ziprecruiter\.com/c/", "high"),
        ("glassdoor", r"glassdoor\.com/job-listing", "high"),
        ("glassdoor", r"glassdoor\.com/job", "medium"),
    )
)

UNKNOWN_VENDOR_GUIDANCE = VendorGuidance(
    focus=("parse_health", "recruiter_search", "knockout_risk"),
    explanation=(
        "The applicant tracking system could not be identified. Follow universal best practices: "
        "clean formatting for parsing, exact keyword matches, and meeting every stated requirement."
    ),
)

# Hosts whose first path segment names the employer.
_PATH_COMPANY_HOSTS = ("greenhouse.io", "lever.co", "ashbyhq.com", "smartrecruiters.com")
_ICIMS_COMPANY = re.compile(r"^careers-?([^.]+)")


def relevant_scores(vendor_type: VendorType | None) -> tuple[ScoreName, ...]:
    if vendor_type == "sorter":
        return ("parse_health", "semantic_match", "knockout_risk")
    if vendor_type == "processor":
        return ("parse_health", "recruiter_search", "knockout_risk")
    return ("parse_health", "knockout_risk", "semantic_match", "recruiter_search")


def is_semantic_match_relevant(vendor: ATSVendor | None) -> bool:
    return vendor is None or vendor.type == "sorter"


def is_recruiter_search_relevant(vendor: ATSVendor | None) -> bool:
    return vendor is None or vendor.type == "processor"


def extract_company_from_url(url: str | None) -> str | None:
    """Employer slug for the vendors that put it in the host or the first path segment."""
    if not url or not url.strip():
        return None
    candidate = url.strip()
    if "://" not in candidate:
        candidate = f"https://{candidate}"
    try:
        parts = urlsplit(candidate)
    except ValueError:
        return None
    host = (parts.hostname or "").lower()
    segments = [segment for segment in parts.path.split("/") if segment]

    if any(marker in host for marker in _PATH_COMPANY_HOSTS):
        return segments[0] if segments else None
    if "myworkdayjobs.com" in host:
        return host.split(".", 1)[0] or None
    if "icims.com" in host:
        match = _ICIMS_COMPANY.match(host)
        return match.group(1) if match else None
    return None


def detect_ats_vendor(url: str | None) -> VendorDetectionResult:
    """Identify the applicant tracking system behind a job posting URL."""
    normalized = (url or "").strip().lower()
    if normalized:
        for vendor_id, pattern, confidence in URL_PATTERNS:
            if not pattern.search(normalized):
                continue
            vendor = ATS_VENDORS[vendor_id]
            logger.debug("ats_vendor_detected vendor=%s confidence=%s", vendor_id, confidence)
            return VendorDetectionResult(
                detected=True,
                confidence=confidence,
                vendor=vendor,
                matched_pattern=pattern.pattern,
                company=extract_company_from_url(url),
                guidance=vendor.guidance,
                relevant_scores=relevant_scores(vendor.type),
            )

    return VendorDetectionResult(
        detected=False,
        confidence="low",
        company=extract_company_from_url(url),
        guidance=UNKNOWN_VENDOR_GUIDANCE,
        relevant_scores=relevant_scores(None),
    )
