import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from ats_engine.analysis.keywords import extract_keywords  # noqa: E402

JOB_TEXT = (
    "Senior Python Developer\n"
    "Requirements: Python, Docker and Kubernetes are required. Experience with Jira.\n"
    "Nice to have: Figma and strong communication."
)
FILLER = "x " * 150
MANY_TOOLS = (
    "zendesk", "intercom", "freshdesk", "salesforce", "hubspot", "zoho", "helpscout",
    "drift", "crisp", "tawk", "livechat", "olark", "kayako", "gorgias", "gladly",
    "kustomer", "jira", "asana", "trello", "notion", "clickup", "basecamp", "wrike",
    "smartsheet", "airtable", "slack", "zoom", "discord", "webex", "skype", "heroku",
    "vercel", "netlify", "firebase", "mysql",
)


class KeywordExtractorTests(unittest.TestCase):
    def test_extracts_dictionary_terms_with_display_names(self):
        keywords = extract_keywords(JOB_TEXT)
        self.assertTrue({"Python", "Docker", "Kubernetes", "Jira"}.issubset(set(keywords.critical)))
        self.assertIn("Communication", keywords.all)

    def test_critical_and_optional_never_overlap(self):
        keywords = extract_keywords(JOB_TEXT)
        self.assertFalse({k.lower() for k in keywords.critical} & {k.lower() for k in keywords.optional})
        self.assertEqual(list(keywords.all[: len(keywords.critical)]), list(keywords.critical))

    def test_extraction_is_deterministic(self):
        first = extract_keywords(JOB_TEXT)
        second = extract_keywords(JOB_TEXT)
        self.assertEqual(first.critical, second.critical)
        self.assertEqual(first.optional, second.optional)

    def test_empty_text_yields_empty_set(self):
        keywords = extract_keywords("   ")
        self.assertTrue(keywords.is_empty)
        self.assertEqual(keywords.all, ())

    def test_substring_terms_are_suppressed(self):
        keywords = extract_keywords("We use JavaScript every day. JavaScript is required.")
        self.assertIn("JavaScript", keywords.all)
        self.assertNotIn("Java", keywords.all)

    def test_frequency_raises_rank_logarithmically(self):
        # tech base 7 at three mentions (7 * (1 + ln 3) ~ 14.7) outranks a single tool hit (10)
        repeated = extract_keywords("Python, Python and Python. Jira.")
        self.assertEqual(list(repeated.critical), ["Python", "Jira"])

        single = extract_keywords("Python. Jira.")
        self.assertEqual(list(single.critical), ["Jira", "Python"])

    def test_requirement_zone_boosts_nearby_terms(self):
        inside = extract_keywords("Ruby is used on our legacy tools. " + FILLER + "Requirements: Rust.")
        self.assertEqual(list(inside.critical), ["Rust", "Ruby"])

    def test_terms_beyond_requirement_window_are_not_boosted(self):
        outside = extract_keywords("Requirements: see below. " + FILLER + "Rust. Ruby is a plus.")
        self.assertEqual(list(outside.critical), ["Ruby", "Rust"])

    def test_boost_uses_whole_term_position(self):
        # "go" inside "good" sits in the zone; the real mention does not
        keywords = extract_keywords("Requirements: good communication. " + FILLER + "Go and Docker.")
        ranked = list(keywords.all)
        self.assertLess(ranked.index("Docker"), ranked.index("Go"))
        self.assertLess(ranked.index("Communication"), ranked.index("Go"))

    def test_large_posting_splits_fifteen_and_fifteen(self):
        keywords = extract_keywords("Tools: " + ", ".join(MANY_TOOLS) + ".")
        self.assertEqual(len(keywords.all), 35)
        self.assertEqual(len(keywords.critical), 15)
        self.assertEqual(len(keywords.optional), 15)
        self.assertEqual(keywords.critical, keywords.all[:15])
        self.assertEqual(keywords.optional, keywords.all[15:30])
        self.assertEqual(keywords.critical[0], "Zendesk")

    def test_alias_spellings_collapse_to_one_display_name(self):
        keywords = extract_keywords("Node.js services. Experience with nodejs required.")
        lowered = [keyword.lower() for keyword in keywords.all]
        self.assertEqual(len(lowered), len(set(lowered)))


if __name__ == "__main__":
    unittest.main()
