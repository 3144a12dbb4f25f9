import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from ats_engine.analysis.vendor_detection import (  # noqa: E402
    ATS_VENDORS,
    UNKNOWN_VENDOR_GUIDANCE,
    URL_PATTERNS,
    detect_ats_vendor,
    extract_company_from_url,
    is_recruiter_search_relevant,
    is_semantic_match_relevant,
    relevant_scores,
)


class VendorDetectionTests(unittest.TestCase):
    def test_greenhouse_board(self):
        result = detect_ats_vendor("https://boards.greenhouse.io/acme/jobs/4012")
        self.assertTrue(result.detected)
        self.assertEqual(result.vendor.id, "greenhouse")
        self.assertEqual(result.confidence, "high")
        self.assertEqual(result.company, "acme")
        self.assertEqual(result.relevant_scores, ("parse_health", "recruiter_search", "knockout_risk"))
        self.assertEqual(result.guidance, result.vendor.guidance)

    def test_workday_is_a_sorter(self):
        result = detect_ats_vendor("https://acme.wd5.myworkdayjobs.com/en-US/careers/job/Remote/Engineer_R123")
        self.assertEqual(result.vendor.id, "workday")
        self.assertEqual(result.vendor.type, "sorter")
        self.assertEqual(result.vendor.ai_addon, "HiredScore")
        self.assertEqual(result.company, "acme")
        self.assertEqual(result.relevant_scores, ("parse_health", "semantic_match", "knockout_risk"))

    def test_url_without_scheme(self):
        result = detect_ats_vendor("careers-initech.icims.com/jobs/55/job")
        self.assertEqual(result.vendor.id, "icims")
        self.assertEqual(result.company, "initech")

        lever = detect_ats_vendor("  JOBS.LEVER.CO/globex/8f2c  ")
        self.assertEqual(lever.vendor.id, "lever")
        self.assertEqual(lever.company, "globex")

    def test_job_boards(self):
        indeed = detect_ats_vendor("https://www.indeed.com/viewjob?jk=abc123")
        self.assertEqual(indeed.vendor.id, "indeed")
        self.assertEqual(indeed.confidence, "high")
        self.assertIsNone(indeed.company)

        glassdoor = detect_ats_vendor("https://www.glassdoor.com/Job/new-york-engineer-jobs.htm")
        self.assertEqual(glassdoor.vendor.id, "glassdoor")
        self.assertEqual(glassdoor.confidence, "medium")

    def test_unknown_url_gets_universal_guidance(self):
        result = detect_ats_vendor("https://example.com/careers/engineer")
        self.assertFalse(result.detected)
        self.assertEqual(result.confidence, "low")
        self.assertIsNone(result.vendor)
        self.assertIsNone(result.matched_pattern)
        self.assertEqual(result.guidance, UNKNOWN_VENDOR_GUIDANCE)
        self.assertEqual(len(result.relevant_scores), 4)

    def test_blank_url(self):
        self.assertFalse(detect_ats_vendor("").detected)
        self.assertFalse(detect_ats_vendor(None).detected)
        self.assertIsNone(extract_company_from_url("   "))

    def test_every_pattern_points_at_a_known_vendor(self):
        self.assertTrue(all(vendor_id in ATS_VENDORS for vendor_id, _pattern, _confidence in URL_PATTERNS))


class VendorRelevanceTests(unittest.TestCase):
    def test_relevant_scores_by_type(self):
        self.assertIn("semantic_match", relevant_scores("sorter"))
        self.assertNotIn("recruiter_search", relevant_scores("sorter"))
        self.assertIn("recruiter_search", relevant_scores("processor"))
        self.assertEqual(
            relevant_scores(None),
            ("parse_health", "knockout_risk", "semantic_match", "recruiter_search"),
        )

    def test_relevance_helpers(self):
        self.assertTrue(is_semantic_match_relevant(ATS_VENDORS["workday"]))
        self.assertFalse(is_semantic_match_relevant(ATS_VENDORS["lever"]))
        self.assertTrue(is_recruiter_search_relevant(ATS_VENDORS["lever"]))
        self.assertTrue(is_semantic_match_relevant(None))
        self.assertTrue(is_recruiter_search_relevant(None))


if __name__ == "__main__":
    unittest.main()
