import unittest
from decimal import Decimal

from seamless_wallet.core.money import format_amount, from_cents, to_cents, to_decimal


class MoneyTests(unittest.TestCase):
    def test_blank_amounts_count_as_zero(self):
        self.assertEqual(to_decimal(None), Decimal("0.00"))
        self.assertEqual(to_decimal(""), Decimal("0.00"))

    def test_amounts_round_half_up_to_cents(self):
        self.assertEqual(to_decimal("10.005"), Decimal("10.01"))
        self.assertEqual(to_decimal(7), Decimal("7.00"))

    def test_invalid_amount_raises_value_error(self):
        with self.assertRaises(ValueError):
            to_decimal("ten")
        with self.assertRaises(ValueError):
            to_decimal("1e40")
        with self.assertRaises(ValueError):
            to_decimal("NaN")

    def test_strict_mode_rejects_sub_cent_amounts(self):
        self.assertEqual(to_decimal("10.50", strict=True), Decimal("10.50"))
        self.assertEqual(to_decimal("3", strict=True), Decimal("3.00"))
        with self.assertRaises(ValueError):
            to_decimal("0.004", strict=True)

    def test_cents_conversion(self):
        self.assertEqual(to_cents(Decimal("12.34")), 1234)
        self.assertEqual(from_cents(1234), Decimal("12.34"))
        self.assertEqual(from_cents(-5), Decimal("-0.05"))

    def test_format_amount_always_has_two_digits(self):
        self.assertEqual(format_amount(Decimal("100")), "100.00")
        self.assertEqual(format_amount(Decimal("0.5")), "0.50")


if __name__ == "__main__":
    unittest.main()
