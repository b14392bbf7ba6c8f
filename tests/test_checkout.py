import os
import sys
import unittest
from dataclasses import FrozenInstanceError
from datetime import date, datetime
from decimal import Decimal

# Ensure project src/ is on sys.path for imports
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
src_path = os.path.join(ROOT, "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from store.checkout import (  # noqa: E402
    BuyerDetails,
    OrderNumberSequence,
    PaymentCard,
    PaymentMethod,
    parse_expiry,
    place_order,
)
from store.errors import EmptyCartError, FailureReason, ValidationFailure  # noqa: E402
from store.models import CartLine, Item  # noqa: E402

CANVA = Item("0001", "Canva Template Pack", Decimal("50.00"), "Digital Templates")
SDK = Item("3005", "SDK for Developers", Decimal("180.00"), "Software & Tools")

TODAY = date(2025, 6, 5)
WHEN = datetime(2025, 6, 5, 14, 20, 3)


def make_card(**overrides):
    fields = dict(
        method=PaymentMethod.CREDIT_CARD,
        number="4111111111111111",
        holder="Alex Trisha",
        ccv="123",
        expiry="12/27",
    )
    fields.update(overrides)
    return PaymentCard(**fields)


class BuyerValidationTestCase(unittest.TestCase):
    def test_valid_buyer(self):
        BuyerDetails("Alex", "09171234567").validate()
        BuyerDetails("Alex", "12345678").validate()
        BuyerDetails("Alex", "123456789012345").validate()

    def test_phone_rules(self):
        for phone in ("1234567", "1234567890123456", "0917-123-4567", "", "０９１７１２３４"):
            with self.assertRaises(ValidationFailure) as ctx:
                BuyerDetails("Alex", phone).validate()
            self.assertEqual(ctx.exception.reason, FailureReason.INVALID_PHONE)
            self.assertEqual(ctx.exception.field, "phone")

    def test_name_required(self):
        with self.assertRaises(ValidationFailure) as ctx:
            BuyerDetails("   ", "09171234567").validate()
        self.assertEqual(ctx.exception.field, "name")


class CardValidationTestCase(unittest.TestCase):
    def assertFailure(self, card, reason):
        with self.assertRaises(ValidationFailure) as ctx:
            card.validate(TODAY)
        self.assertEqual(ctx.exception.reason, reason)

    def test_valid_card(self):
        make_card().validate(TODAY)
        make_card(number="1" * 13, ccv="1234").validate(TODAY)
        make_card(number="1" * 19).validate(TODAY)

    def test_card_number_rules(self):
        for number in ("1" * 12, "1" * 20, "4111 1111 1111 1111", "41111111111a1111"):
            self.assertFailure(
                make_card(number=number), FailureReason.INVALID_CARD_NUMBER
            )

    def test_holder_required(self):
        self.assertFailure(make_card(holder=""), FailureReason.INVALID_CARD_HOLDER)

    def test_ccv_rules(self):
        for ccv in ("12", "12345", "12a"):
            self.assertFailure(make_card(ccv=ccv), FailureReason.INVALID_CCV)

    def test_expiry_rules(self):
        bad = ("1227", "12-27", "ab/27", "1/27", "13/27", "00/27", "12/24", "05/25")
        for expiry in bad:
            self.assertFailure(make_card(expiry=expiry), FailureReason.INVALID_EXPIRY)

    def test_expiry_non_ascii_digits_rejected(self):
        # superscript and full-width digits pass str.isdigit()
        for expiry in ("²1/30", "０１/30", "01/３0"):
            self.assertFailure(make_card(expiry=expiry), FailureReason.INVALID_EXPIRY)

    def test_expiry_current_month_valid(self):
        # current month is still valid
        make_card(expiry="06/25").validate(TODAY)
        make_card(expiry="01/26").validate(TODAY)

    def test_parse_expiry(self):
        self.assertEqual(parse_expiry("06/25"), (6, 2025))
        self.assertIsNone(parse_expiry("6/25"))
        self.assertIsNone(parse_expiry("06/2x"))
        self.assertIsNone(parse_expiry("²1/30"))
        self.assertIsNone(parse_expiry("０１/30"))
        self.assertIsNone(parse_expiry("01/３0"))

    def test_descriptor_masks_number(self):
        card = make_card(method=PaymentMethod.DEBIT_CARD, number="5555444433331234")
        self.assertEqual(card.descriptor, "Debit card ending in 1234")
        self.assertNotIn("5555444433331234", repr(card))
        self.assertNotIn("ccv", repr(card))


class OrderNumberSequenceTestCase(unittest.TestCase):
    def test_numbers_follow_timestamp(self):
        seq = OrderNumberSequence()
        self.assertEqual(seq.next(WHEN), int(WHEN.timestamp()))

    def test_same_second_does_not_collide(self):
        seq = OrderNumberSequence()
        numbers = [seq.next(WHEN) for _ in range(3)]
        self.assertEqual(len(set(numbers)), 3)
        self.assertEqual(numbers, sorted(numbers))

    def test_clock_going_backwards_still_increases(self):
        seq = OrderNumberSequence()
        first = seq.next(WHEN)
        second = seq.next(datetime(2020, 1, 1))
        self.assertGreater(second, first)


class PlaceOrderTestCase(unittest.TestCase):
    def setUp(self):
        self.buyer = BuyerDetails("Alex Trisha", "09171234567")
        self.card = make_card()
        self.numbers = OrderNumberSequence()

    def test_order_totals_and_snapshot(self):
        lines = (CartLine(CANVA, 5), CartLine(SDK, 1))
        order = place_order(lines, self.buyer, self.card, WHEN, self.numbers)

        self.assertEqual(order.total_quantity, 6)
        self.assertEqual(order.total_price, Decimal("430.00"))
        self.assertEqual(order.created_at, WHEN)
        self.assertEqual(order.payment_descriptor, "Credit card ending in 1111")
        self.assertEqual([p.item.id for p in order.lines], ["0001", "3005"])
        self.assertEqual(order.lines[0].unit_price_at_purchase, Decimal("50.00"))
        self.assertEqual(order.lines[0].subtotal, Decimal("250.00"))

    def test_price_is_captured_at_purchase(self):
        order = place_order(
            (CartLine(CANVA, 2),), self.buyer, self.card, WHEN, self.numbers
        )
        # a later catalog with a different price for the same id
        repriced = Item(CANVA.id, CANVA.name, Decimal("99.00"), CANVA.category)
        self.assertNotEqual(repriced.unit_price, order.lines[0].unit_price_at_purchase)
        self.assertEqual(order.total_price, Decimal("100.00"))

    def test_order_is_immutable(self):
        order = place_order(
            (CartLine(CANVA, 2),), self.buyer, self.card, WHEN, self.numbers
        )
        with self.assertRaises(FrozenInstanceError):
            order.total_price = Decimal("0")
        self.assertIsInstance(order.lines, tuple)

    def test_empty_cart_rejected(self):
        with self.assertRaises(EmptyCartError):
            place_order((), self.buyer, self.card, WHEN, self.numbers)

    def test_invalid_input_rejected(self):
        with self.assertRaises(ValidationFailure):
            place_order(
                (CartLine(CANVA, 1),),
                BuyerDetails("Alex", "123"),
                self.card,
                WHEN,
                self.numbers,
            )
        with self.assertRaises(ValidationFailure):
            place_order(
                (CartLine(CANVA, 1),),
                self.buyer,
                make_card(expiry="01/25"),
                WHEN,
                self.numbers,
            )


if __name__ == "__main__":
    unittest.main()
