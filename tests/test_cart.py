import os
import sys
import unittest
from decimal import Decimal

# Ensure project src/ is on sys.path for imports
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
src_path = os.path.join(ROOT, "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from store.cart import Cart  # noqa: E402
from store.models import CartLine, Item  # noqa: E402

CANVA = Item("0001", "Canva Template Pack", Decimal("50.00"), "Digital Templates")
RESUME = Item("0002", "Resume Template", Decimal("10.00"), "Digital Templates")
ICONS = Item("2004", "Icon Set", Decimal("18.00"), "Creative Assets")
CHEAP = Item("9001", "Penny Sticker", Decimal("0.10"), "Misc")


class CartTestCase(unittest.TestCase):
    def setUp(self):
        self.cart = Cart()

    # ---------- add ----------

    def test_add_same_item_merges_into_one_line(self):
        self.cart.add_item(CANVA, 2)
        self.cart.add_item(CANVA, 3)

        lines = self.cart.snapshot_lines()
        self.assertEqual(len(lines), 1)
        self.assertEqual(lines[0].quantity, 5)
        self.assertEqual(self.cart.total_price(), Decimal("250.00"))

    def test_add_keeps_insertion_order(self):
        self.cart.add_item(RESUME, 1)
        self.cart.add_item(CANVA, 1)
        self.cart.add_item(RESUME, 4)

        self.assertEqual([l.item.id for l in self.cart.snapshot_lines()], ["0002", "0001"])
        self.assertEqual(self.cart.get_line("0002").quantity, 5)

    def test_add_rejects_non_positive_quantity(self):
        for qty in (0, -3):
            with self.assertRaises(ValueError):
                self.cart.add_item(CANVA, qty)
        self.assertTrue(self.cart.is_empty())

    def test_add_has_no_upper_bound(self):
        self.cart.add_item(ICONS, 1_000_000)
        self.assertEqual(self.cart.total_quantity(), 1_000_000)

    # ---------- remove / update ----------

    def test_remove_absent_is_noop(self):
        self.cart.add_item(CANVA, 2)
        before = self.cart.snapshot_lines()
        self.cart.remove_item("does-not-exist")
        self.assertEqual(self.cart.snapshot_lines(), before)

    def test_remove_present(self):
        self.cart.add_item(CANVA, 2)
        self.cart.add_item(RESUME, 1)
        self.cart.remove_item("0001")
        self.assertNotIn("0001", self.cart)
        self.assertEqual(len(self.cart), 1)

    def test_update_quantity(self):
        self.cart.add_item(CANVA, 2)
        self.cart.add_item(RESUME, 1)
        self.cart.update_quantity("0001", 7)

        self.assertEqual(self.cart.get_line("0001").quantity, 7)
        # position is kept
        self.assertEqual(self.cart.snapshot_lines()[0].item.id, "0001")

    def test_update_quantity_absent_is_noop(self):
        self.cart.add_item(CANVA, 2)
        self.cart.update_quantity("0002", 9)
        self.assertNotIn("0002", self.cart)
        self.assertEqual(self.cart.total_quantity(), 2)

    def test_update_quantity_rejects_non_positive(self):
        self.cart.add_item(CANVA, 2)
        for qty in (0, -1):
            with self.assertRaises(ValueError):
                self.cart.update_quantity("0001", qty)
        self.assertEqual(self.cart.get_line("0001").quantity, 2)

    # ---------- totals ----------

    def test_totals_recomputed_after_every_operation(self):
        def expected():
            return sum(
                (l.item.unit_price * l.quantity for l in self.cart.snapshot_lines()),
                Decimal("0"),
            )

        ops = [
            lambda: self.cart.add_item(CANVA, 2),
            lambda: self.cart.add_item(ICONS, 3),
            lambda: self.cart.update_quantity("2004", 1),
            lambda: self.cart.add_item(RESUME, 4),
            lambda: self.cart.remove_item("0001"),
            lambda: self.cart.add_item(CANVA, 1),
        ]
        for op in ops:
            op()
            self.assertEqual(self.cart.total_price(), expected())
        self.assertEqual(self.cart.total_quantity(), 1 + 4 + 1)

    def test_total_price_has_no_float_drift(self):
        self.cart.add_item(CHEAP, 3)
        self.assertEqual(self.cart.total_price(), Decimal("0.30"))

    def test_empty_totals(self):
        self.assertTrue(self.cart.is_empty())
        self.assertEqual(self.cart.total_quantity(), 0)
        self.assertEqual(self.cart.total_price(), Decimal("0"))

    # ---------- snapshot / replace ----------

    def test_snapshot_is_detached_from_cart(self):
        self.cart.add_item(CANVA, 2)
        snapshot = self.cart.snapshot_lines()
        self.cart.add_item(CANVA, 3)
        self.cart.add_item(RESUME, 1)
        self.assertEqual(snapshot, (CartLine(CANVA, 2),))

    def test_replace_all(self):
        self.cart.add_item(ICONS, 1)
        self.cart.replace_all([CartLine(CANVA, 2), CartLine(RESUME, 1)])
        self.assertEqual(
            self.cart.snapshot_lines(), (CartLine(CANVA, 2), CartLine(RESUME, 1))
        )

    def test_replace_all_rejects_duplicates_and_keeps_content(self):
        self.cart.add_item(ICONS, 1)
        with self.assertRaises(ValueError):
            self.cart.replace_all([CartLine(CANVA, 2), CartLine(CANVA, 1)])
        with self.assertRaises(ValueError):
            self.cart.replace_all([CartLine(CANVA, 0)])
        self.assertEqual(self.cart.snapshot_lines(), (CartLine(ICONS, 1),))

    def test_clear(self):
        self.cart.add_item(CANVA, 2)
        self.cart.clear()
        self.assertTrue(self.cart.is_empty())


if __name__ == "__main__":
    unittest.main()
