import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from ats_engine.core.ids import SequentialIdFactory, UuidIdFactory  # noqa: E402
from ats_engine.taxonomy import get_synonyms  # noqa: E402
from ats_engine.taxonomy.local_taxonomy import LocalTaxonomy  # noqa: E402


class TaxonomyTests(unittest.TestCase):
    def test_synonyms_resolve_from_canonical_and_alias(self):
        self.assertEqual(get_synonyms("Kubernetes")[0], "kubernetes")
        self.assertIn("k8s", get_synonyms("kubernetes"))
        self.assertEqual(get_synonyms("k8s")[0], "kubernetes")

    def test_unknown_term_returns_itself(self):
        self.assertEqual(get_synonyms("Underwater Basket Weaving"), ["underwater basket weaving"])

    def test_display_names_use_canonical_capitalization(self):
        taxonomy = LocalTaxonomy()
        self.assertEqual(taxonomy.display_name("aws"), "AWS")
        self.assertEqual(taxonomy.display_name("project management"), "Project Management")
        self.assertEqual(taxonomy.display_name("rest api"), "Rest API")

    def test_known_skill_lookup(self):
        taxonomy = LocalTaxonomy()
        self.assertTrue(taxonomy.is_known_skill("Machine Learning"))
        self.assertFalse(taxonomy.is_known_skill("stakeholder management"))


class IdFactoryTests(unittest.TestCase):
    def test_sequential_ids_are_deterministic(self):
        factory = SequentialIdFactory()
        self.assertEqual([factory.new_id() for _ in range(3)], ["ko-1", "ko-2", "ko-3"])

    def test_uuid_ids_are_unique(self):
        factory = UuidIdFactory()
        self.assertNotEqual(factory.new_id(), factory.new_id())


if __name__ == "__main__":
    unittest.main()
