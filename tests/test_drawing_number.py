"""
Test drawing number recognition
"""
import unittest
from drawing_number import resolve_drawing_number


class TestDrawingNumber(unittest.TestCase):
    """Test the drawing number resolver"""

    def test_dotted_code(self):
        self.assertEqual(resolve_drawing_number(["Zeichnungsnr. 12.34.56-7890"]), "12.34.56-7890")

    def test_letter_prefixed_digits(self):
        self.assertEqual(resolve_drawing_number(["A1234567"]), "A1234567")

    def test_bare_digits(self):
        self.assertEqual(resolve_drawing_number(["Teil 123456"]), "123456")

    def test_digit_run_length_limits(self):
        self.assertIsNone(resolve_drawing_number(["12345"]))
        self.assertIsNone(resolve_drawing_number(["1234567890"]))

    def test_first_matching_line_wins(self):
        lines = ["Ø25", "Nr 987654", "12.34.56-7890"]
        self.assertEqual(resolve_drawing_number(lines), "987654")

    def test_dotted_code_preferred_within_line(self):
        self.assertEqual(resolve_drawing_number(["123456 / 12.34.56-7890"]), "12.34.56-7890")

    def test_dimensions_and_materials_are_not_numbers(self):
        self.assertIsNone(resolve_drawing_number(["Ø25,00 h6 (0,008)", "120,50", "1.2210"]))

    def test_absent(self):
        self.assertIsNone(resolve_drawing_number([]))
        self.assertIsNone(resolve_drawing_number(["no number here"]))


if __name__ == '__main__':
    unittest.main()
