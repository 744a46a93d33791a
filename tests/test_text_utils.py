"""
Test line splitting and decimal handling
"""
import unittest
from text_utils import split_lines, normalize_decimal, parse_decimal


class TestSplitLines(unittest.TestCase):
    """Test the line splitter"""

    def test_mixed_line_breaks(self):
        text = "Ø25,00 h6\r\n120,50\r1.2210\n12.34.56-7890"
        self.assertEqual(split_lines(text), ["Ø25,00 h6", "120,50", "1.2210", "12.34.56-7890"])

    def test_blank_lines_dropped_and_trimmed(self):
        text = "  first  \n\n   \n\tsecond\n"
        self.assertEqual(split_lines(text), ["first", "second"])

    def test_empty_input(self):
        self.assertEqual(split_lines(""), [])
        self.assertEqual(split_lines(None), [])

    def test_dict_input_uses_text_field(self):
        self.assertEqual(split_lines({"text": "a\nb"}), ["a", "b"])

    def test_bytes_input(self):
        self.assertEqual(split_lines("Ø20\n50".encode("utf-8")), ["Ø20", "50"])


class TestDecimals(unittest.TestCase):
    """Test decimal separator normalization"""

    def test_comma_becomes_dot(self):
        self.assertEqual(normalize_decimal("25,40"), "25.40")

    def test_both_separators_parse_equal(self):
        self.assertEqual(parse_decimal("25,40"), parse_decimal("25.40"))
        self.assertAlmostEqual(parse_decimal("120,5"), 120.5)

    def test_malformed_token_is_none(self):
        self.assertIsNone(parse_decimal("12.3.4"))
        self.assertIsNone(parse_decimal("abc"))
        self.assertIsNone(parse_decimal(None))


if __name__ == '__main__':
    unittest.main()
