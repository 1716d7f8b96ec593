import unittest

from organic_trace.services.lookup import build_index, lookup


class BuildIndexTest(unittest.TestCase):
    def test_maps_primary_key_to_row(self):
        rows = [{"id": "p1", "name": "Ragi"}, {"id": "p2", "name": "Tomatoes"}]
        index = build_index(rows)
        self.assertEqual(index["p2"]["name"], "Tomatoes")
        self.assertEqual(len(index), 2)

    def test_duplicate_keys_last_row_wins(self):
        index = build_index([{"id": 1, "v": "a"}, {"id": 1, "v": "b"}])
        self.assertEqual(index[1]["v"], "b")
        self.assertEqual(len(index), 1)

    def test_accepts_callable_key(self):
        rows = [{"user_id": "u1", "role": "farmer"}]
        index = build_index(rows, key=lambda row: row["user_id"])
        self.assertEqual(index["u1"]["role"], "farmer")

    def test_rows_without_key_are_skipped(self):
        index = build_index([{"id": None, "v": "x"}, {"v": "y"}, {"id": "k", "v": "z"}])
        self.assertEqual(list(index), ["k"])

    def test_empty_input(self):
        self.assertEqual(build_index([]), {})
        self.assertEqual(build_index(None), {})

    def test_lookup_tolerates_unhashable_and_missing_keys(self):
        index = build_index([{"id": "a"}])
        self.assertIsNone(lookup(index, None))
        self.assertIsNone(lookup(index, {"nested": "value"}))
        self.assertIsNone(lookup(index, "missing"))
        self.assertEqual(lookup(index, "a"), {"id": "a"})


if __name__ == "__main__":
    unittest.main()
