import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from ats_engine.analysis.guidance import GuidanceInput, generate_guidance  # noqa: E402


def _ids(items):
    return [item.id for item in items]


class GuidanceTests(unittest.TestCase):
    def test_healthy_resume_without_job_description(self):
        items = generate_guidance(GuidanceInput(parse_health=85, has_job_description=False, has_api_key=False))
        self.assertEqual(_ids(items), ["add-jd"])

    def test_critical_items_come_first(self):
        items = generate_guidance(
            GuidanceInput(
                parse_health=30,
                has_job_description=True,
                has_api_key=True,
                knockout_risk="high",
                knockout_count=2,
                keyword_coverage=20,
                semantic_match=40,
                recruiter_search=30,
            )
        )
        self.assertEqual(
            _ids(items),
            ["parse-critical", "knockout-critical", "keyword-low", "semantic-low", "recruiter-low"],
        )
        self.assertEqual(items[1].title, "2 potential disqualifiers found")
        self.assertEqual(items[2].title, "Only 20% keyword match")

    def test_moderate_parse_health(self):
        items = generate_guidance(GuidanceInput(parse_health=50, has_job_description=False, has_api_key=False))
        self.assertEqual(_ids(items), ["parse-moderate"])
        self.assertEqual(items[0].priority, "important")

    def test_unlock_ai_without_credentials(self):
        items = generate_guidance(
            GuidanceInput(parse_health=90, has_job_description=True, has_api_key=False, keyword_coverage=80)
        )
        self.assertEqual(_ids(items), ["unlock-ai"])
        self.assertEqual(items[0].action_target, "ai-settings")

    def test_looking_good_with_job_description(self):
        items = generate_guidance(
            GuidanceInput(
                parse_health=95,
                has_job_description=True,
                has_api_key=True,
                knockout_risk="low",
                keyword_coverage=90,
                semantic_match=80,
                recruiter_search=75,
            )
        )
        self.assertEqual(_ids(items), ["looking-good"])
        self.assertEqual(items[0].action_label, "Fine-tune with AI")

    def test_single_knockout_title_is_singular(self):
        items = generate_guidance(
            GuidanceInput(
                parse_health=70,
                has_job_description=True,
                has_api_key=True,
                knockout_risk="high",
                knockout_count=1,
            )
        )
        self.assertEqual(items[0].title, "1 potential disqualifier found")

    def test_nothing_for_middling_scores_without_triggers(self):
        items = generate_guidance(
            GuidanceInput(parse_health=70, has_job_description=True, has_api_key=True, keyword_coverage=70)
        )
        self.assertEqual(items, [])


if __name__ == "__main__":
    unittest.main()
