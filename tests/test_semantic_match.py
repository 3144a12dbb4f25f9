import asyncio
import json
import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from ats_engine.ai.errors import LLMError  # noqa: E402
from ats_engine.schemas.keywords import KeywordSet  # noqa: E402
from ats_engine.semantic import calculate_semantic_match, semantic_label  # noqa: E402
from ats_engine.semantic.analysis_parser import OVERLOADED_SUMMARY  # noqa: E402
from ats_engine.semantic.embeddings import cosine_similarity, similarity_to_score  # noqa: E402
from ats_engine.semantic.keyword_matches import find_local_keyword_matches  # noqa: E402

RESUME_TEXT = (
    "Skills: Python, Salesforce, Docker\n"
    "Experience: Software developer building internal tools, 2018 - 2024\n"
    "Education: B.S. in Computer Science"
)
JOB_TEXT = (
    "Python Developer\n"
    "Requirements: Python, CRM tooling, Docker\n"
    "Responsibilities: build internal tools for the sales team"
)
ANALYSIS_JSON = json.dumps(
    {
        "strengths": ["Python experience"],
        "gaps": ["No CRM administration"],
        "recommendations": ["Mention Salesforce integrations"],
        "summary": "Strong technical fit.",
    }
)
MATCHES_JSON = json.dumps(
    {
        "semanticMatches": [
            {"jdKeyword": "CRM", "resumeMatch": "Salesforce", "confidence": 0.9, "explanation": "CRM tool"},
            {"jdKeyword": "Docker", "resumeMatch": "containers", "confidence": 0.8, "explanation": "same"},
        ]
    }
)


class FakeClient:
    def __init__(self, *, embed_error=None, generate_error=None):
        self.embed_error = embed_error
        self.generate_error = generate_error
        self.embed_calls = 0
        self.generate_calls = 0

    async def embed(self, text):
        self.embed_calls += 1
        if self.embed_error is not None:
            raise self.embed_error
        return [1.0, 0.0, 0.5]

    async def generate_json(self, prompt):
        self.generate_calls += 1
        if self.generate_error is not None:
            raise self.generate_error
        if "semanticMatches" in prompt:
            return MATCHES_JSON
        return ANALYSIS_JSON


def _run(client, *, has_consented=True, keywords=None):
    return asyncio.run(
        calculate_semantic_match(
            RESUME_TEXT,
            JOB_TEXT,
            client=client,
            has_consented=has_consented,
            keywords=keywords,
        )
    )


class EmbeddingMathTests(unittest.TestCase):
    def test_cosine_similarity(self):
        self.assertAlmostEqual(cosine_similarity([1.0, 0.0], [1.0, 0.0]), 1.0)
        self.assertAlmostEqual(cosine_similarity([1.0, 0.0], [0.0, 1.0]), 0.0)
        self.assertEqual(cosine_similarity([1.0], [1.0, 2.0]), 0.0)
        self.assertEqual(cosine_similarity([0.0, 0.0], [1.0, 1.0]), 0.0)

    def test_similarity_maps_to_percent(self):
        self.assertEqual(similarity_to_score(1.0), 100.0)
        self.assertEqual(similarity_to_score(0.0), 50.0)
        self.assertEqual(similarity_to_score(-1.0), 0.0)

    def test_labels(self):
        self.assertEqual(semantic_label(80), "Excellent Match")
        self.assertEqual(semantic_label(65), "Strong Match")
        self.assertEqual(semantic_label(50), "Good Match")
        self.assertEqual(semantic_label(35), "Moderate Match")
        self.assertEqual(semantic_label(34), "Limited Match")


class SemanticMatchTests(unittest.TestCase):
    def test_consent_is_checked_before_any_call(self):
        client = FakeClient()
        result = _run(client, has_consented=False)
        self.assertFalse(result.success)
        self.assertEqual(result.error_code, "consent_required")
        self.assertEqual(result.score, 0)
        self.assertEqual(client.embed_calls + client.generate_calls, 0)

    def test_missing_client(self):
        result = _run(None)
        self.assertFalse(result.success)
        self.assertEqual(result.error_code, "missing_api_key")
        self.assertEqual(result.findings[0].id, "semantic-unavailable")

    def test_blank_resume_skips_provider(self):
        client = FakeClient()
        result = asyncio.run(calculate_semantic_match("  \n ", JOB_TEXT, client=client, has_consented=True))
        self.assertFalse(result.success)
        self.assertEqual(result.error_code, "empty_input")
        self.assertEqual(result.score, 0)
        self.assertEqual(result.findings[0].id, "semantic-empty-input")
        self.assertEqual(result.findings[0].severity, "info")
        self.assertEqual(client.embed_calls + client.generate_calls, 0)

    def test_blank_job_description_skips_provider(self):
        client = FakeClient()
        result = asyncio.run(calculate_semantic_match(RESUME_TEXT, "", client=client, has_consented=True))
        self.assertEqual(result.error_code, "empty_input")
        self.assertIn("job description", result.error)
        self.assertEqual(client.embed_calls, 0)

    def test_consent_still_checked_before_blank_input(self):
        result = asyncio.run(calculate_semantic_match("", "", client=FakeClient(), has_consented=False))
        self.assertEqual(result.error_code, "consent_required")

    def test_embedding_failure_zeroes_result(self):
        client = FakeClient(embed_error=LLMError("overloaded", code="model_overloaded"))
        result = _run(client)
        self.assertFalse(result.success)
        self.assertEqual(result.error_code, "model_overloaded")
        self.assertEqual(result.score, 0)
        self.assertEqual(result.sub_scores.skills.score, 0)
        self.assertEqual(result.sub_scores.role.score, 0)

    def test_successful_match(self):
        keywords = KeywordSet(critical=("python", "crm"), optional=(), all=("python", "crm"))
        result = _run(FakeClient(), keywords=keywords)
        self.assertTrue(result.success)
        self.assertIsNone(result.error_code)
        self.assertEqual(result.sub_scores.skills.score, 100)
        self.assertGreaterEqual(result.score, 80)
        self.assertEqual(result.label, "Excellent Match")
        self.assertEqual(result.analysis.summary, "Strong technical fit.")
        self.assertEqual(
            [(match.jd_keyword, match.source) for match in result.keyword_matches],
            [("crm", "synonym"), ("Docker", "model")],
        )
        self.assertEqual(result.keyword_matches[0].resume_match, "salesforce")
        self.assertEqual(result.keyword_matches[0].confidence, 0.75)

    def test_generation_failure_only_degrades_analysis(self):
        keywords = KeywordSet(critical=("crm",), optional=(), all=("crm",))
        client = FakeClient(generate_error=LLMError("busy", code="model_overloaded"))
        result = _run(client, keywords=keywords)
        self.assertTrue(result.success)
        self.assertEqual(result.analysis.summary, OVERLOADED_SUMMARY)
        self.assertEqual([match.source for match in result.keyword_matches], ["synonym"])


class LocalKeywordMatchTests(unittest.TestCase):
    def test_reverse_lookup_matches_base_term(self):
        matches = find_local_keyword_matches("Built dashboards with advanced Excel models.", ["spreadsheets"])
        self.assertEqual([(match.jd_keyword, match.resume_match) for match in matches], [("spreadsheets", "excel")])

    def test_no_match(self):
        self.assertEqual(find_local_keyword_matches("Barista", ["sql"]), [])


if __name__ == "__main__":
    unittest.main()
