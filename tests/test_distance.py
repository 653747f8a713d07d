"""
Unit tests for the weighted edit distance.
"""

import unittest

from sectionsearch.distance import edit_distance


class TestEditDistance(unittest.TestCase):
    def test_base_cases(self) -> None:
        self.assertEqual(edit_distance("", ""), 0)
        self.assertEqual(edit_distance("", "abc"), 3)
        self.assertEqual(edit_distance("abc", ""), 3)
        self.assertEqual(edit_distance("abc", "abc"), 0)

    def test_classic_examples(self) -> None:
        self.assertEqual(edit_distance("kitten", "sitting"), 3)
        self.assertEqual(edit_distance("flaw", "lawn"), 2)

    def test_custom_insert_and_delete_costs(self) -> None:
        self.assertEqual(edit_distance("", "abc", insert=2), 6)
        self.assertEqual(edit_distance("abc", "", delete=5), 15)

    def test_expensive_replace_falls_back_to_delete_plus_insert(self) -> None:
        self.assertEqual(edit_distance("a", "b", replace=3), 2)
        self.assertEqual(edit_distance("a", "b", replace=1), 1)

    def test_all_zero_costs(self) -> None:
        self.assertEqual(edit_distance("kitten", "sitting", insert=0, delete=0, replace=0), 0)


if __name__ == "__main__":
    unittest.main()
