import unittest
from decimal import Decimal

from fx_consolidator.config import LoaderConfig
from fx_consolidator.exceptions import FormatError
from fx_consolidator.ingestion.transaction_parser import TransactionLineParser


class TransactionLineParserTests(unittest.TestCase):
    def setUp(self) -> None:
        self.parser = TransactionLineParser()

    def test_parse_valid_line(self) -> None:
        record = self.parser.parse("C1\tx\ty\tz\tw\tchf\t100.00")

        self.assertEqual(record.company_code, "C1")
        self.assertEqual(record.descriptors, ("x", "y", "z", "w"))
        self.assertEqual(record.currency, "CHF")
        self.assertEqual(record.amount, Decimal("100.00"))
        self.assertEqual(str(record.amount), "100.00")
        self.assertEqual(record.key, "C1/x/y/z/w")

    def test_parse_strips_line_endings_and_whitespace(self) -> None:
        record = self.parser.parse("C1\t x \ty\tz\tw\tEUR\t 12.5 \r\n")

        self.assertEqual(record.descriptors[0], "x")
        self.assertEqual(record.amount, Decimal("12.5"))

    def test_key_is_stable_for_same_line(self) -> None:
        line = "C9\ta\tb\tc\td\tGBP\t1"
        self.assertEqual(self.parser.parse(line).key, self.parser.parse(line).key)

    def test_wrong_field_count_raises(self) -> None:
        with self.assertRaises(FormatError):
            self.parser.parse("C1\tx\ty\tEUR\t1")

    def test_invalid_amount_raises_format_error(self) -> None:
        for amount in ("abc", "", "NaN", "Infinity", "1,000.00", "1_000", "1_0.5"):
            with self.subTest(amount=amount):
                with self.assertRaises(FormatError):
                    self.parser.parse(f"C1\tx\ty\tz\tw\tEUR\t{amount}")

    def test_format_error_is_value_error(self) -> None:
        with self.assertRaises(ValueError):
            self.parser.parse("C1\tx\ty\tz\tw\tEUR\tabc")

    def test_structural_validation(self) -> None:
        self.assertTrue(self.parser.is_structurally_valid("a\tb\tc\td\te\tf\tg"))
        self.assertFalse(self.parser.is_structurally_valid(""))
        self.assertFalse(self.parser.is_structurally_valid("   "))
        self.assertFalse(self.parser.is_structurally_valid("a\tb\tc"))
        self.assertFalse(self.parser.is_structurally_valid("a\tb\tc\td\te\tf\tg\th"))

    def test_header_detection_uses_configured_marker(self) -> None:
        parser = TransactionLineParser(LoaderConfig(header_marker="Entity"))

        self.assertTrue(parser.is_header("Entity\tA\tB\tC\tD\tCUR\tAMT"))
        self.assertFalse(parser.is_header("Company Code\tA\tB\tC\tD\tCUR\tAMT"))


if __name__ == "__main__":  # pragma: no cover - manual debugging helper
    unittest.main()
