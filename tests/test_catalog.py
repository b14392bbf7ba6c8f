import os
import sys
import unittest
from decimal import Decimal

# Ensure project src/ is on sys.path for imports
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
src_path = os.path.join(ROOT, "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from store.catalog import Catalog  # noqa: E402
from store.models import Item  # noqa: E402


class CatalogTestCase(unittest.TestCase):
    def setUp(self):
        self.catalog = Catalog.default()

    def test_default_catalog(self):
        self.assertEqual(len(self.catalog), 30)
        canva = self.catalog.find_by_id("0001")
        self.assertEqual(canva.name, "Canva Template Pack")
        self.assertEqual(canva.unit_price, Decimal("50.00"))

    def test_find_by_id_miss_returns_none(self):
        self.assertIsNone(self.catalog.find_by_id("9999"))
        self.assertIsNone(self.catalog.find_by_id("canva"))

    def test_search_case_insensitive_in_catalog_order(self):
        res = self.catalog.search("TEMPLATE")
        self.assertEqual(
            [i.id for i in res], ["0001", "0002", "0003", "0004", "5001", "5003"]
        )
        self.assertEqual(self.catalog.search("no such thing"), [])

    def test_search_empty_term_matches_all(self):
        self.assertEqual(len(self.catalog.search("")), 30)

    def test_categories_first_seen_order(self):
        self.assertEqual(
            self.catalog.categories(),
            [
                "Digital Templates",
                "Educational Content",
                "Creative Assets",
                "Software & Tools",
                "Music & Audio",
                "Business & Marketing",
            ],
        )

    def test_by_category(self):
        res = self.catalog.by_category("Music & Audio")
        self.assertEqual([i.id for i in res], ["4001", "4002", "4003", "4004", "4005"])
        self.assertEqual(self.catalog.by_category("music & audio"), [])

    def test_lookup_id_first_then_partial_name(self):
        self.assertEqual(self.catalog.lookup("2004").name, "Icon Set")
        self.assertEqual(self.catalog.lookup("  icon ").id, "2004")
        # first partial match wins
        self.assertEqual(self.catalog.lookup("theme").id, "0005")
        self.assertIsNone(self.catalog.lookup("zzz"))
        self.assertIsNone(self.catalog.lookup("   "))

    def test_lookup_within_subset(self):
        subset = self.catalog.by_category("Software & Tools")
        self.assertEqual(self.catalog.lookup("theme", within=subset).id, "3003")
        self.assertIsNone(self.catalog.lookup("0001", within=subset))

    def test_duplicate_ids_rejected(self):
        item = Item("1", "A", Decimal("1"), "X")
        with self.assertRaises(ValueError):
            Catalog([item, Item("1", "B", Decimal("2"), "Y")])

    def test_items_returns_copy(self):
        items = self.catalog.items()
        items.clear()
        self.assertEqual(len(self.catalog), 30)


if __name__ == "__main__":
    unittest.main()
