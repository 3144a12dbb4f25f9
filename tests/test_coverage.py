import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from ats_engine.analysis.coverage import calculate_coverage, coverage_grade  # noqa: E402
from ats_engine.schemas.keywords import KeywordSet  # noqa: E402

KEYWORDS = KeywordSet(
    critical=("Python", "Docker", "Kubernetes", "PostgreSQL"),
    optional=("Figma", "Terraform"),
    all=("Python", "Docker", "Kubernetes", "PostgreSQL", "Figma", "Terraform"),
)


class CoverageScorerTests(unittest.TestCase):
    def test_empty_keyword_set_scores_full_with_info_finding(self):
        result = calculate_coverage("Some resume text", KeywordSet())
        self.assertEqual(result.score, 100)
        self.assertEqual(result.findings[0].severity, "info")

    def test_empty_resume_scores_zero(self):
        result = calculate_coverage("", KEYWORDS)
        self.assertEqual(result.score, 0)
        self.assertEqual(result.missing_keywords, KEYWORDS.critical)
        self.assertEqual(result.findings[0].id, "empty-resume")
        self.assertEqual(result.findings[0].severity, "critical")

    def test_unrelated_resume_is_floored(self):
        result = calculate_coverage("Pastry chef with a decade in fine dining kitchens.", KEYWORDS)
        self.assertEqual(result.score, 8)
        self.assertEqual(len(result.missing_keywords), 4)

    def test_literal_and_synonym_matches_are_found(self):
        resume = "Backend developer: Python services on k8s, data in Postgres, shipped with Docker."
        result = calculate_coverage(resume, KEYWORDS)
        self.assertEqual(set(result.found_keywords), {"Python", "Docker", "Kubernetes", "PostgreSQL"})
        self.assertEqual(result.score, 100)
        self.assertEqual(result.grade, "Excellent")

    def test_optional_and_soft_skill_bonuses(self):
        resume = "Python and Docker. Designed in Figma. Strong communication and leadership."
        result = calculate_coverage(resume, KEYWORDS)
        # 50 base + 5 optional bonus + 2 soft skills
        self.assertEqual(result.score, 57)
        self.assertIn("Figma", result.bonus_keywords)
        ids = [finding.id for finding in result.findings]
        self.assertIn("missing-keyword-0", ids)
        self.assertIn("bonus-keywords-found", ids)
        self.assertIn("soft-skills-found", ids)

    def test_found_keywords_include_every_literal_hit(self):
        resume = "python docker kubernetes postgresql"
        result = calculate_coverage(resume, KEYWORDS)
        for keyword in KEYWORDS.critical:
            self.assertIn(keyword, result.found_keywords)

    def test_grades(self):
        self.assertEqual(coverage_grade(92), "Excellent")
        self.assertEqual(coverage_grade(75), "Good")
        self.assertEqual(coverage_grade(50), "Fair")
        self.assertEqual(coverage_grade(49), "Low")


if __name__ == "__main__":
    unittest.main()
