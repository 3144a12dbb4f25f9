from __future__ import annotations

import re
from collections import Counter

from ats_engine.core.config.scoring import get_scoring_float, get_scoring_int
from ats_engine.schemas.findings import Finding, sort_findings
from ats_engine.schemas.resume import ParseHealthResult, PdfLayoutSignals, ResumeArtifact, Scores
from ats_engine.taxonomy.tables import ACTION_VERBS

EMAIL_PATTERN = re.compile(r"[\w.-]+@[\w.-]+\.\w{2,}")
PHONE_PATTERN = re.compile(r"(\+\d{1,3}[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}")
LINKEDIN_PATTERN = re.compile(r"linkedin\.com/in/[\w-]+", re.IGNORECASE)
LOCATION_PATTERN = re.compile(r"\b[A-Z][a-z]+,?\s*[A-Z]{2}\b|\b[A-Z][a-z]+,\s*[A-Z][a-z]+\b")


def _patterns(*sources: str) -> tuple[re.Pattern[str], ...]:
    return tuple(re.compile(source, re.IGNORECASE) for source in sources)


SECTION_PATTERNS: dict[str, tuple[re.Pattern[str], ...]] = {
    "experience": _patterns(
        r"\b(work\s+)?experience\b",
        r"\bwork\s+history\b",
        r"\bemployment(\s+history)?\b",
        r"\bprofessional\s+(experience|background|history)\b",
        r"\bcareer\s+(history|summary)\b",
        r"\bjob\s+history\b",
    ),
    "education": _patterns(
        r"\beducation(al)?\s*(background|history)?\b",
        r"\bacademic\s*(background|history|credentials)?\b",
        r"\bdegrees?\b",
        r"\bqualifications?\b",
        r"\bcertifications?\s*(and|&)?\s*education\b",
    ),
    "skills": _patterns(
        r"\b(technical\s+)?skills\b",
        r"\bcore\s+competenc(y|ies)\b",
        r"\btechnolog(y|ies)\b",
        r"\btools?\s*(and|&)?\s*technolog(y|ies)\b",
        r"\bproficienc(y|ies)\b",
        r"\bexpertise\b",
        r"\bcapabilities\b",
        r"\bareas?\s+of\s+(expertise|knowledge)\b",
    ),
    "summary": _patterns(
        r"\b(professional\s+)?summary\b",
        r"\bobjective\b",
        r"\bprofile\b",
        r"\babout\s+me\b",
        r"\bcareer\s+objective\b",
        r"\bpersonal\s+statement\b",
    ),
}
CORE_SECTIONS: tuple[tuple[str, str], ...] = (
    ("Experience", "experience"),
    ("Education", "education"),
    ("Skills", "skills"),
)

_MONTHS = r"(Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)[a-z]*\.?"
STANDARD_DATE_PATTERNS = _patterns(
    r"\b\d{1,2}/\d{4}\b",
    r"\b\d{1,2}-\d{4}\b",
    rf"\b{_MONTHS}\s*\d{{4}}\b",
    r"\b\d{4}\s*[-–]\s*(Present|Current)\b",
    rf"\b{_MONTHS}\s*\d{{4}}\s*[-–]\s*(Present|Current)\b",
)
AMBIGUOUS_DATE_PATTERNS = _patterns(
    r"\b(Summer|Fall|Winter|Spring)\s*\d{4}\b",
    r"\b\d{4}\b",
)
_STANDARD_DATE_ANCHOR = re.compile(rf"\b\d{{1,2}}/\d{{4}}\b|\b{_MONTHS}\s*\d{{4}}\b", re.IGNORECASE)


def _penalty(name: str, default: float) -> float:
    return get_scoring_float(f"parse_health.penalties.{name}", default)


def _has_section(text: str, section: str) -> bool:
    return any(pattern.search(text) for pattern in SECTION_PATTERNS[section])


class _PenaltyLedger:
    def __init__(self) -> None:
        self.total = 0.0
        self.findings: list[Finding] = []

    def add(self, finding: Finding, penalty: float = 0.0) -> None:
        self.findings.append(finding)
        self.total += penalty


def _content_length(text: str, ledger: _PenaltyLedger) -> None:
    char_count = len(text)
    word_count = len(text.split())
    if char_count < get_scoring_int("parse_health.content.very_short_chars", 200):
        ledger.add(
            Finding(
                id="very-short-content",
                category="extraction",
                severity="critical",
                title="Very Little Text Extracted",
                description=f"Only {char_count} characters were extracted from your resume.",
                impact=(
                    "ATS systems may not be able to parse your resume at all. "
                    "This often indicates an image-based or scanned PDF."
                ),
                suggestion=(
                    "Ensure your resume is a text-based PDF, not a scanned image. "
                    "Try re-exporting from your original document."
                ),
            ),
            _penalty("very_short_content", 25),
        )
        return

    if char_count < get_scoring_int("parse_health.content.short_chars", 500) or word_count < get_scoring_int(
        "parse_health.content.short_words", 100
    ):
        ledger.add(
            Finding(
                id="short-content",
                category="extraction",
                severity="high",
                title="Limited Text Content",
                description=f"Only {word_count} words were extracted from your resume.",
                impact="Your resume may appear sparse to ATS systems, potentially missing key qualifications.",
                suggestion=(
                    "Check that all your experience and skills are being extracted. "
                    "Content inside images or graphics cannot be parsed."
                ),
            ),
            _penalty("short_content", 10),
        )
        return

    if word_count >= get_scoring_int("parse_health.content.healthy_words", 300):
        ledger.add(
            Finding(
                id="good-content-length",
                category="extraction",
                severity="info",
                title="Good Content Length",
                description=f"{word_count} words extracted - sufficient detail for ATS analysis.",
                impact="Your resume has enough content for thorough ATS parsing and keyword extraction.",
            )
        )


def _layout(signals: PdfLayoutSignals, ledger: _PenaltyLedger) -> None:
    if signals.estimated_columns == 3:
        ledger.add(
            Finding(
                id="three-column-layout",
                category="layout",
                severity="high",
                title="Three-Column Layout Detected",
                description="Your resume appears to use a three-column layout.",
                impact=(
                    "Multi-column layouts often cause text from adjacent columns to merge "
                    '(e.g., "Python Manager Java Engineer").'
                ),
                suggestion="Convert to a single-column layout. Move sidebar content into the main body.",
            ),
            _penalty("three_column", 25),
        )
    elif signals.estimated_columns == 2:
        ledger.add(
            Finding(
                id="two-column-layout",
                category="layout",
                severity="medium",
                title="Two-Column Layout Detected",
                description="Your resume appears to use a two-column layout.",
                impact="The parser may read across columns, mixing skills with job titles.",
                suggestion="Consider a single-column layout, or keep column content clearly separated.",
            ),
            _penalty("two_column", 15),
        )
    else:
        ledger.add(
            Finding(
                id="single-column-layout",
                category="layout",
                severity="info",
                title="Single-Column Layout",
                description="Your resume uses a single-column layout.",
                impact="Single-column layouts have the highest parsing accuracy across ATS systems.",
            )
        )

    if signals.column_merge_risk == "high":
        ledger.add(
            Finding(
                id="high-column-merge-risk",
                category="layout",
                severity="high",
                title="High Risk of Text Merging",
                description="The layout has a high risk of text from different sections being merged.",
                impact="Job titles may merge with dates and skills with descriptions, breaking keyword matching.",
                suggestion="Use clear separation between columns, or restructure to a single column.",
            ),
            _penalty("high_merge_risk", 20),
        )
    elif signals.column_merge_risk == "medium":
        ledger.add(
            Finding(
                id="medium-column-merge-risk",
                category="layout",
                severity="medium",
                title="Moderate Risk of Text Merging",
                description="Some text elements may be merged incorrectly during parsing.",
                impact="Certain sections may not parse cleanly in all ATS systems.",
                suggestion="Increase spacing between layout elements or simplify the design.",
            ),
            _penalty("medium_merge_risk", 10),
        )

    if signals.header_contact_risk == "high":
        ledger.add(
            Finding(
                id="high-header-risk",
                category="contact",
                severity="high",
                title="Contact Info May Be In Header/Footer",
                description="Important content appears to be in the document header or footer.",
                impact="Many parsers skip headers and footers, so your contact details may be discarded.",
                suggestion="Move all contact information into the main document body.",
            ),
            _penalty("high_header_risk", 15),
        )
    elif signals.header_contact_risk == "medium":
        ledger.add(
            Finding(
                id="medium-header-risk",
                category="contact",
                severity="medium",
                title="Some Content May Be In Header",
                description="Some content appears to be positioned in header regions.",
                impact="This content may not be extracted by all ATS systems.",
                suggestion="Consider moving important information lower on the page.",
            ),
            _penalty("medium_header_risk", 8),
        )

    if signals.text_density == "low":
        ledger.add(
            Finding(
                id="low-text-density",
                category="extraction",
                severity="high",
                title="Low Text Density",
                description="Very little text relative to file size was extracted.",
                impact="Content in images, text boxes or skill bars cannot be read by an ATS.",
                suggestion="Keep important content as real text. Replace skill bar graphics with text.",
            ),
            _penalty("low_text_density", 20),
        )
    elif signals.text_density == "medium":
        ledger.add(
            Finding(
                id="medium-text-density",
                category="extraction",
                severity="low",
                title="Moderate Text Density",
                description="Some content may be in non-text elements.",
                impact="Minor content might be missed by ATS parsers.",
                suggestion="Review for any important text in images or graphics.",
            ),
            _penalty("medium_text_density", 5),
        )


def _contact(text: str, ledger: _PenaltyLedger) -> None:
    has_email = EMAIL_PATTERN.search(text) is not None
    has_phone = PHONE_PATTERN.search(text) is not None

    if not has_email:
        ledger.add(
            Finding(
                id="missing-email",
                category="contact",
                severity="critical",
                title="No Email Address Found",
                description="No email address was detected in the extracted text.",
                impact="Recruiters cannot contact you and the application may be flagged as incomplete.",
                suggestion="Add your email address in plain text in the document body.",
            ),
            _penalty("missing_email", 15),
        )
    if not has_phone:
        ledger.add(
            Finding(
                id="missing-phone",
                category="contact",
                severity="high",
                title="No Phone Number Found",
                description="No phone number was detected in the extracted text.",
                impact="Some ATS systems require a phone number and recruiters often call to screen.",
                suggestion="Add your phone number in a standard format: (555) 123-4567 or 555-123-4567.",
            ),
            _penalty("missing_phone", 10),
        )
    if LINKEDIN_PATTERN.search(text) is None:
        ledger.add(
            Finding(
                id="missing-linkedin",
                category="contact",
                severity="low",
                title="No LinkedIn Profile Found",
                description="No LinkedIn URL was detected in the extracted text.",
                impact="Recruiters often check LinkedIn profiles.",
                suggestion="Consider adding your LinkedIn profile URL (e.g., linkedin.com/in/yourname).",
            ),
            _penalty("missing_linkedin", 5),
        )
    if LOCATION_PATTERN.search(text) is None:
        ledger.add(
            Finding(
                id="missing-location",
                category="contact",
                severity="low",
                title="No Location Found",
                description="No city/state location was detected.",
                impact="Some recruiters filter by location.",
                suggestion='Add your city and state (e.g., "Orlando, FL") in your contact section.',
            ),
            _penalty("missing_location", 3),
        )
    if has_email and has_phone:
        ledger.add(
            Finding(
                id="contact-info-complete",
                category="contact",
                severity="info",
                title="Essential Contact Info Found",
                description="Your email and phone number were successfully extracted.",
                impact="Recruiters can easily reach you through multiple channels.",
            )
        )


def _sections(text: str, ledger: _PenaltyLedger) -> None:
    found = [name for name, key in CORE_SECTIONS if _has_section(text, key)]
    missing = [name for name, key in CORE_SECTIONS if name not in found]

    if not found:
        ledger.add(
            Finding(
                id="no-section-headers",
                category="structure",
                severity="high",
                title="No Standard Section Headers Found",
                description="Could not identify standard resume sections like Experience, Education, or Skills.",
                impact="ATS systems segment resumes by header keywords. Unsegmented text may be excluded from scoring.",
                suggestion='Use clear, standard section headers: "Experience", "Education", "Skills".',
            ),
            _penalty("missing_section_headers", 10),
        )
    elif missing:
        ledger.add(
            Finding(
                id="missing-some-sections",
                category="structure",
                severity="medium",
                title="Some Standard Sections Not Detected",
                description=f"Found: {', '.join(found)}. Not found: {', '.join(missing)}.",
                impact="ATS may not properly categorize all your information.",
                suggestion=f'Add a clear "{missing[0]}" section header if applicable to your background.',
            ),
            _penalty("unclear_section_structure", 5),
        )
    else:
        ledger.add(
            Finding(
                id="sections-complete",
                category="structure",
                severity="info",
                title="All Core Sections Detected",
                description=f"Found all three core sections: {', '.join(found)}.",
                impact="ATS systems should be able to properly categorize and index your information.",
            )
        )

    if _has_section(text, "summary"):
        ledger.add(
            Finding(
                id="has-summary",
                category="structure",
                severity="info",
                title="Summary/Objective Section Found",
                description="Your resume includes a summary or objective section.",
                impact="This helps recruiters quickly understand your background.",
            )
        )


def _dates(text: str, ledger: _PenaltyLedger) -> None:
    standard = sum(len(pattern.findall(text)) for pattern in STANDARD_DATE_PATTERNS)
    ambiguous = sum(len(pattern.findall(text)) for pattern in AMBIGUOUS_DATE_PATTERNS)

    if standard == 0 and ambiguous == 0:
        ledger.add(
            Finding(
                id="no-date-anchors",
                category="structure",
                severity="high",
                title="No Date Information Found",
                description="Could not detect any employment or education dates.",
                impact="ATS systems calculate years of experience from dates.",
                suggestion='Add dates to your experience entries in MM/YYYY format (e.g., "06/2023 - Present").',
            ),
            _penalty("no_date_anchors", 8),
        )
    elif standard < ambiguous:
        ledger.add(
            Finding(
                id="inconsistent-dates",
                category="structure",
                severity="medium",
                title="Inconsistent Date Formats",
                description='Found ambiguous date formats (e.g., "Summer 2023" instead of "06/2023").',
                impact="ATS parsers may fail to calculate accurate experience duration.",
                suggestion="Use a consistent MM/YYYY format for all dates.",
            ),
            _penalty("inconsistent_dates", 5),
        )
    else:
        ledger.add(
            Finding(
                id="good-date-formats",
                category="structure",
                severity="info",
                title="Date Formats Look Good",
                description=f"Found {standard} well-formatted dates.",
                impact="ATS systems should accurately calculate your experience duration.",
            )
        )


def _content_quality(text: str, ledger: _PenaltyLedger) -> None:
    lowered = text.lower()
    words = lowered.split()
    word_count = len(words)

    verb_count = sum(1 for verb in ACTION_VERBS if verb in lowered)
    if word_count > get_scoring_int("parse_health.action_verbs.min_words", 100) and verb_count == 0:
        ledger.add(
            Finding(
                id="no-action-verbs",
                category="structure",
                severity="low",
                title="Few Action Verbs Detected",
                description="Your resume may lack strong action verbs.",
                impact="Action verbs help ATS and recruiters identify your accomplishments.",
                suggestion='Start bullet points with action verbs: "Developed...", "Implemented...", "Led..."',
            ),
            _penalty("no_action_verbs", 5),
        )
    elif verb_count >= get_scoring_int("parse_health.action_verbs.strong_count", 5):
        ledger.add(
            Finding(
                id="good-action-verbs",
                category="structure",
                severity="info",
                title="Strong Action Verbs Found",
                description=f"Found {verb_count} action verbs in your resume.",
                impact="Good use of action verbs helps convey accomplishments clearly.",
            )
        )

    if word_count:
        min_repeats = get_scoring_int("parse_health.stuffing.min_repeats", 5)
        max_density = get_scoring_float("parse_health.stuffing.max_density", 0.05)
        counts = Counter(word for word in words if len(word) > 3)
        stuffed = [word for word, count in counts.items() if count > min_repeats and count / word_count > max_density]
        if stuffed:
            ledger.add(
                Finding(
                    id="keyword-stuffing",
                    category="structure",
                    severity="medium",
                    title="Potential Keyword Stuffing Detected",
                    description=f"Some words appear unusually frequently: {', '.join(stuffed)}.",
                    impact="ATS systems may flag resumes with abnormally high keyword density as spam.",
                    suggestion="Use keywords naturally within context.",
                ),
                _penalty("keyword_stuffing", 10),
            )

    line_limit = get_scoring_int("parse_health.table_line_chars", 200)
    long_lines = sum(1 for line in text.split("\n") if len(line) > line_limit)
    if long_lines > get_scoring_int("parse_health.table_min_long_lines", 3):
        ledger.add(
            Finding(
                id="potential-table-content",
                category="extraction",
                severity="medium",
                title="Possible Table or Complex Layout",
                description=f"Found {long_lines} unusually long text lines.",
                impact="Linearized tables can scramble dates with job titles.",
                suggestion="If you used tables in your resume, consider converting to a simple list format.",
            ),
            _penalty("table_detected", 8),
        )


def _extraction_warnings(warnings: tuple[str, ...], ledger: _PenaltyLedger) -> None:
    for index, warning in enumerate(warnings):
        ledger.add(
            Finding(
                id=f"extraction-warning-{index}",
                category="extraction",
                severity="medium",
                title="Extraction Warning",
                description=warning,
                impact="Some content may not have been extracted correctly.",
            ),
            _penalty("extraction_warning", 5),
        )


def _sub_score_penalty(table: str, key: str, default: float) -> float:
    return get_scoring_float(f"parse_health.{table}.{key}", default)


def layout_score(signals: PdfLayoutSignals | None) -> int:
    if signals is None:
        return 100
    score = 100.0
    if signals.estimated_columns == 3:
        score -= _sub_score_penalty("layout_sub_score", "three_column", 30)
    elif signals.estimated_columns == 2:
        score -= _sub_score_penalty("layout_sub_score", "two_column", 15)
    if signals.column_merge_risk == "high":
        score -= _sub_score_penalty("layout_sub_score", "high_merge_risk", 25)
    elif signals.column_merge_risk == "medium":
        score -= _sub_score_penalty("layout_sub_score", "medium_merge_risk", 10)
    if signals.header_contact_risk == "high":
        score -= _sub_score_penalty("layout_sub_score", "high_header_risk", 15)
    elif signals.header_contact_risk == "medium":
        score -= _sub_score_penalty("layout_sub_score", "medium_header_risk", 8)
    if signals.text_density == "low":
        score -= _sub_score_penalty("layout_sub_score", "low_text_density", 25)
    elif signals.text_density == "medium":
        score -= _sub_score_penalty("layout_sub_score", "medium_text_density", 10)
    return int(max(0, score))


def contact_score(text: str) -> int:
    score = 100.0
    if EMAIL_PATTERN.search(text) is None:
        score -= _sub_score_penalty("contact_sub_score", "missing_email", 40)
    if PHONE_PATTERN.search(text) is None:
        score -= _sub_score_penalty("contact_sub_score", "missing_phone", 30)
    if LINKEDIN_PATTERN.search(text) is None:
        score -= _sub_score_penalty("contact_sub_score", "missing_linkedin", 15)
    if LOCATION_PATTERN.search(text) is None:
        score -= _sub_score_penalty("contact_sub_score", "missing_location", 10)
    return int(max(0, score))


def section_score(text: str) -> int:
    score = 100.0
    found = sum(1 for _name, key in CORE_SECTIONS if _has_section(text, key))
    deductions = {
        0: _sub_score_penalty("section_sub_score", "none_found", 40),
        1: _sub_score_penalty("section_sub_score", "one_found", 25),
        2: _sub_score_penalty("section_sub_score", "two_found", 10),
    }
    score -= deductions.get(found, 0)
    if _STANDARD_DATE_ANCHOR.search(text) is None:
        score -= _sub_score_penalty("section_sub_score", "no_standard_dates", 10)
    return int(max(0, score))


def calculate_parse_health(artifact: ResumeArtifact) -> ParseHealthResult:
    """Penalty model: start at 100, subtract per detected parsing hazard."""
    text = artifact.text or ""
    ledger = _PenaltyLedger()

    _content_length(text, ledger)
    if artifact.file_type == "pdf" and artifact.pdf_signals is not None:
        _layout(artifact.pdf_signals, ledger)
    _contact(text, ledger)
    _sections(text, ledger)
    _dates(text, ledger)
    _content_quality(text, ledger)
    _extraction_warnings(artifact.extraction_warnings, ledger)

    scores = Scores(
        parse_health=int(max(0, 100 - ledger.total)),
        layout_score=layout_score(artifact.pdf_signals if artifact.file_type == "pdf" else None),
        contact_score=contact_score(text),
        section_score=section_score(text),
    )
    return ParseHealthResult(scores=scores, findings=tuple(sort_findings(ledger.findings)))
