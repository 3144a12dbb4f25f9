from .findings import Finding, count_by_severity, group_findings_by_category, sort_findings
from .keywords import CoverageResult, KeywordSet
from .knockouts import (
    AnyKnockoutItem,
    AutoAssessment,
    EnhancedKnockoutItem,
    KnockoutItem,
    KnockoutRiskResult,
    ResumeProfile,
)
from .resume import ParseHealthResult, PdfLayoutSignals, ResumeArtifact, Scores
from .search import RecruiterSearchBreakdown, RecruiterSearchResult
from .semantic import (
    QualitativeAnalysis,
    RewriteResult,
    RewriteSuggestion,
    SemanticKeywordMatch,
    SemanticMatchResult,
    SubScore,
)
from .vendor import ATSVendor, VendorDetectionResult, VendorGuidance

__all__ = [
    "ATSVendor",
    "AnyKnockoutItem",
    "AutoAssessment",
    "CoverageResult",
    "EnhancedKnockoutItem",
    "Finding",
    "KeywordSet",
    "KnockoutItem",
    "KnockoutRiskResult",
    "ParseHealthResult",
    "PdfLayoutSignals",
    "QualitativeAnalysis",
    "RecruiterSearchBreakdown",
    "RecruiterSearchResult",
    "ResumeArtifact",
    "ResumeProfile",
    "RewriteResult",
    "RewriteSuggestion",
    "Scores",
    "SemanticKeywordMatch",
    "SemanticMatchResult",
    "SubScore",
    "VendorDetectionResult",
    "VendorGuidance",
    "count_by_severity",
    "group_findings_by_category",
    "sort_findings",
]
