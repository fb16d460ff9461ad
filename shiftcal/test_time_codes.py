import re
import unittest

from shiftcal import (
    MalformedTimeCode,
    build_shift_pattern,
    clean_time_code,
    decode_time_code,
)


class TestTimeCodes(unittest.TestCase):
    def test_decode_time_code(self):
        """Test splitting time codes into hours and minutes"""
        test_cases = [
            ("0", (0, 0)),
            ("8", (8, 0)),
            ("08", (8, 0)),
            ("12", (12, 0)),
            ("24", (24, 0)),
            ("830", (8, 30)),
            ("0830", (8, 30)),
            ("1745", (17, 45)),
            # No range checking at this stage
            ("99", (99, 0)),
            ("875", (8, 75)),
        ]

        for code, expected in test_cases:
            with self.subTest(code=code):
                self.assertEqual(decode_time_code(code), expected)

    def test_malformed_time_codes(self):
        """Test codes that aren't 1-4 digits"""
        for code in ["", "12345", "8a", "8:30", " 8"]:
            with self.subTest(code=code):
                with self.assertRaises(MalformedTimeCode):
                    decode_time_code(code)

    def test_malformed_time_code_is_value_error(self):
        with self.assertRaises(ValueError):
            decode_time_code("123456")

    def test_clean_time_code(self):
        """Test removal of ':' and '.' separators"""
        test_cases = [
            ("8:30", "830"),
            ("8.30", "830"),
            ("10:15", "1015"),
            ("930", "930"),
        ]

        for code, expected in test_cases:
            with self.subTest(code=code):
                self.assertEqual(clean_time_code(code), expected)


class TestShiftPattern(unittest.TestCase):
    def setUp(self):
        self.shift_regex = re.compile(build_shift_pattern(), re.IGNORECASE)

    def test_shift_groups(self):
        """Test which parts of a shift unit each group captures"""
        test_cases = [
            ("m8-4", ("m", "8", None, "4", None)),
            ("t9am-5pm", ("t", "9", "am", "5", "pm")),
            ("w10 - 6", ("w", "10", None, "6", None)),
            ("r8:30 to 5:15", ("r", "8:30", None, "5:15", None)),
            ("f10 PM-6 AM", ("f", "10", "PM", "6", "AM")),
            ("sa9", ("sa", "9", None, None, None)),
            ("su 1200 2000", ("su", "1200", None, "2000", None)),
        ]

        for text, expected in test_cases:
            with self.subTest(text=text):
                match = self.shift_regex.search(text)
                self.assertIsNotNone(match)
                self.assertEqual(match.group(0), text)
                groups = match.group('day', 'code1', 'meridiem1', 'code2', 'meridiem2')
                self.assertEqual(groups, expected)

    def test_span_excludes_trailing_whitespace(self):
        match = self.shift_regex.search("m8-4   t9")
        self.assertEqual(match.span(), (0, 4))


if __name__ == '__main__':
    unittest.main()
