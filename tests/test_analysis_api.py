import sys
import unittest
from pathlib import Path
from unittest.mock import patch

from fastapi.testclient import TestClient

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from ats_engine.ai.providers.local_provider import LocalProvider  # noqa: E402
from ats_engine.core.rate_limit import limiter  # noqa: E402
from ats_engine.main import app  # noqa: E402

RESUME_TEXT = (
    "Jane Doe\n"
    "jane.doe@example.com | (555) 123-4567 | linkedin.com/in/janedoe | Austin, TX\n"
    "Experience\n"
    "Senior Software Engineer, Jan 2019 - Present\n"
    "- Built Python services on Docker and AWS.\n"
    "Education\n"
    "B.S. in Computer Science\n"
    "Skills\n"
    "Python, Docker, AWS, PostgreSQL\n"
)
JOB_TEXT = (
    "Senior Software Engineer\n"
    "Requirements: Python, Docker, Kubernetes and AWS. Bachelor's degree required.\n"
    "Must be authorized to work in the United States.\n"
)


class AnalysisApiTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def setUp(self):
        limiter.reset()

    def test_health(self):
        response = self.client.get("/v1/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "healthy"})

    def test_keywords_contract(self):
        response = self.client.post("/v1/keywords", json={"job_description_text": JOB_TEXT})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertIn("Python", body["all"])
        self.assertFalse(set(body["critical"]) & set(body["optional"]))

    def test_empty_job_description_is_rejected(self):
        response = self.client.post("/v1/keywords", json={"job_description_text": ""})
        self.assertEqual(response.status_code, 422)

    def test_coverage_with_explicit_keywords(self):
        response = self.client.post(
            "/v1/coverage",
            json={
                "resume_text": RESUME_TEXT,
                "keywords": {"critical": ["Python", "Kubernetes"], "optional": [], "all": ["Python", "Kubernetes"]},
            },
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["found_keywords"], ["Python"])
        self.assertEqual(body["missing_keywords"], ["Kubernetes"])

    def test_knockouts_with_resume_are_enhanced(self):
        response = self.client.post(
            "/v1/knockouts",
            json={"job_description_text": JOB_TEXT, "resume_text": RESUME_TEXT},
        )
        self.assertEqual(response.status_code, 200)
        items = response.json()["items"]
        self.assertEqual([item["category"] for item in items], ["authorization", "degree"])
        self.assertTrue(all(item["kind"] == "enhanced" for item in items))
        self.assertTrue(items[1]["auto_assessment"]["likely"])

    def test_knockout_risk_round_trip(self):
        response = self.client.post(
            "/v1/knockouts/risk",
            json={
                "items": [
                    {
                        "kind": "base",
                        "id": "ko-1",
                        "label": "Bachelor's degree required",
                        "category": "degree",
                        "evidence": "Bachelor's degree required",
                        "user_confirmed": False,
                    }
                ]
            },
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["risk"], "high")
        self.assertIn("blocker-ko-1", [finding["id"] for finding in body["findings"]])

    def test_parse_health(self):
        response = self.client.post("/v1/parse-health", json={"text": "", "file_type": "txt"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["scores"]["parse_health"], 24)

    def test_semantic_match_requires_consent(self):
        response = self.client.post(
            "/v1/semantic-match",
            json={"resume_text": RESUME_TEXT, "job_description_text": JOB_TEXT, "has_consented": False},
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertFalse(body["success"])
        self.assertEqual(body["error_code"], "consent_required")

    def test_semantic_match_with_local_provider(self):
        with patch("ats_engine.services.analysis_service.configured_ai_client", return_value=LocalProvider()):
            response = self.client.post(
                "/v1/semantic-match",
                json={"resume_text": RESUME_TEXT, "job_description_text": JOB_TEXT, "has_consented": True},
            )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body["success"])
        self.assertGreaterEqual(body["score"], 0)
        self.assertLessEqual(body["score"], 100)
        self.assertTrue(body["analysis"]["summary"])

    def test_semantic_match_whitespace_resume(self):
        with patch("ats_engine.services.analysis_service.configured_ai_client", return_value=LocalProvider()):
            response = self.client.post(
                "/v1/semantic-match",
                json={"resume_text": "   ", "job_description_text": JOB_TEXT, "has_consented": True},
            )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertFalse(body["success"])
        self.assertEqual(body["error_code"], "empty_input")
        self.assertEqual(body["findings"][0]["id"], "semantic-empty-input")

    def test_analyze_without_job_description(self):
        response = self.client.post("/v1/analyze", json={"resume_text": RESUME_TEXT})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertIsNone(body["keywords"])
        self.assertIsNone(body["coverage"])
        self.assertIn("add-jd", [item["id"] for item in body["guidance"]])

    def test_analyze_full(self):
        response = self.client.post(
            "/v1/analyze",
            json={"resume_text": RESUME_TEXT, "job_description_text": JOB_TEXT, "file_type": "txt"},
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertIsNotNone(body["coverage"])
        self.assertIsNotNone(body["recruiter_search"])
        self.assertEqual(body["knockout_risk"]["risk"], "medium")
        self.assertIsNone(body["semantic_match"])
        self.assertTrue(body["guidance"])

    def test_analyze_reports_ats_vendor(self):
        response = self.client.post(
            "/v1/analyze",
            json={
                "resume_text": RESUME_TEXT,
                "job_description_text": JOB_TEXT,
                "job_url": "https://jobs.lever.co/globex/8f2c",
            },
        )
        self.assertEqual(response.status_code, 200)
        vendor = response.json()["ats_vendor"]
        self.assertEqual(vendor["vendor"]["id"], "lever")
        self.assertEqual(vendor["company"], "globex")

    def test_ats_vendor_endpoint(self):
        response = self.client.post("/v1/ats-vendor", json={"url": "https://boards.greenhouse.io/acme/jobs/1"})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body["detected"])
        self.assertEqual(body["vendor"]["type"], "processor")
        self.assertEqual(body["relevant_scores"], ["parse_health", "recruiter_search", "knockout_risk"])

        unknown = self.client.post("/v1/ats-vendor", json={"url": "https://example.com/jobs/1"}).json()
        self.assertFalse(unknown["detected"])

    def test_rewrite_suggestions_require_consent(self):
        response = self.client.post(
            "/v1/rewrite-suggestions",
            json={
                "bullet_text": "Built Python services.",
                "resume_text": RESUME_TEXT,
                "job_description_text": JOB_TEXT,
                "has_consented": False,
            },
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["error_code"], "consent_required")

    def test_rewrite_suggestions_report_provider_error(self):
        with patch("ats_engine.services.analysis_service.configured_ai_client", return_value=LocalProvider()):
            response = self.client.post(
                "/v1/rewrite-suggestions",
                json={
                    "bullet_text": "Built Python services.",
                    "resume_text": RESUME_TEXT,
                    "job_description_text": JOB_TEXT,
                    "has_consented": True,
                },
            )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertFalse(body["success"])
        self.assertEqual(body["error_code"], "provider_error")

    def test_invalid_file_type(self):
        response = self.client.post("/v1/analyze", json={"resume_text": RESUME_TEXT, "file_type": "rtf"})
        self.assertEqual(response.status_code, 422)


if __name__ == "__main__":
    unittest.main()
