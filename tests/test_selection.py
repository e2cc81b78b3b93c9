"""Tests for fixmetrics/selection.py"""

import unittest

from fixmetrics.correlator import correlate
from fixmetrics.selection import is_qualifying_line, select_raw_records

SOH = "\x01"
TS = "2024/01/01 09:30:00.000000"


class TestIsQualifyingLine(unittest.TestCase):
    def test_submission_marker(self):
        self.assertTrue(is_qualifying_line(f"{TS} 8=FIX.4.4{SOH}35=D{SOH}"))

    def test_completion_marker(self):
        self.assertTrue(is_qualifying_line(f"{TS} 8=FIX.4.4{SOH}35=8{SOH}"))

    def test_other_message(self):
        self.assertFalse(is_qualifying_line(f"{TS} 8=FIX.4.4{SOH}35=0{SOH}"))

    def test_marker_inside_value_qualifies(self):
        # Coarse substring match: free text containing the marker counts.
        self.assertTrue(is_qualifying_line(f"{TS} 8=FIX.4.4{SOH}35=0{SOH}58=see 35=D{SOH}"))

    def test_marker_prefix_of_longer_type_qualifies(self):
        self.assertTrue(is_qualifying_line(f"{TS} 35=DK{SOH}"))


class TestSelectRawRecords(unittest.TestCase):
    def test_keeps_input_order(self):
        lines = [
            f"{TS} 35=D{SOH}11=A{SOH}",
            f"{TS} 35=0{SOH}",
            f"2024/01/01 09:30:01.000000 35=8{SOH}11=A{SOH}",
        ]
        records = select_raw_records(lines)
        self.assertEqual([r.message_type for r in records], ["35=D", "35=8"])
        self.assertEqual(records[1].timestamp, "09:30:01.000000")

    def test_short_qualifying_line_still_recorded(self):
        records = select_raw_records(["35=D"])
        self.assertEqual(len(records), 1)
        self.assertEqual(records[0].fields, {})

    def test_empty_input(self):
        self.assertEqual(select_raw_records([]), [])


class TestPathsDisagree(unittest.TestCase):
    """The raw-record and correlation paths classify lines independently."""

    def test_marker_in_text_selected_but_not_correlated(self):
        line = f"{TS} 8=FIX.4.4{SOH}35=0{SOH}58=35=D{SOH}11=X{SOH}"
        self.assertEqual(len(select_raw_records([line])), 1)
        self.assertEqual(correlate([line]).throughput, {})

    def test_unparseable_timestamp_selected_but_not_correlated(self):
        line = f"20240101-09:30:00.000000 35=D{SOH}11=X{SOH}"
        self.assertEqual(len(select_raw_records([line])), 1)
        result = correlate([line])
        self.assertEqual(result.parse_errors, 1)
        self.assertEqual(result.throughput, {})


if __name__ == "__main__":
    unittest.main()
