import unittest

from row_store import BUCKET_CAPACITY, Row, RowStore


class RowTests(unittest.TestCase):
    def test_fields_share_one_block(self):
        row = Row.from_fields([b"a", b"", b"xyz"])
        self.assertEqual(row.nfields, 3)
        self.assertEqual(row.fields, (b"a", b"", b"xyz"))
        self.assertEqual(row.field(2), b"xyz")
        self.assertFalse(row.multiline)

    def test_multiline_detected_from_content(self):
        row = Row.from_fields([b"a", b"b\nc"])
        self.assertTrue(row.multiline)

    def test_explicit_multiline_flag_wins(self):
        row = Row.from_fields([b"a"], multiline=False)
        self.assertFalse(row.multiline)


class RowStoreTests(unittest.TestCase):
    def _store(self, n):
        store = RowStore()
        for i in range(n):
            store.append(Row.from_fields([str(i).encode()]))
        return store

    def test_append_spills_into_new_buckets(self):
        store = self._store(BUCKET_CAPACITY * 2 + 500)
        buckets = list(store.buckets())
        self.assertEqual(len(buckets), 3)
        self.assertTrue(buckets[0].full)
        self.assertTrue(buckets[1].full)
        self.assertEqual(len(buckets[2].items), 500)
        self.assertEqual(store.nrows, BUCKET_CAPACITY * 2 + 500)

    def test_iteration_crosses_buckets_in_order_and_restarts(self):
        store = self._store(BUCKET_CAPACITY + 3)
        first = [r.field(0) for r in store]
        second = [r.field(0) for r in store]
        self.assertEqual(first, second)
        self.assertEqual(first[BUCKET_CAPACITY], str(BUCKET_CAPACITY).encode())
        self.assertEqual(len(first), BUCKET_CAPACITY + 3)

    def test_append_keeps_earlier_rows(self):
        store = self._store(2)
        row = next(iter(store))
        for i in range(BUCKET_CAPACITY):
            store.append(Row.from_fields([b"x"]))
        self.assertIs(next(iter(store)), row)

    def test_head(self):
        store = self._store(5)
        self.assertEqual([r.field(0) for r in store.head(2)], [b"0", b"1"])
        self.assertEqual(len(RowStore().head(2)), 0)


if __name__ == "__main__":
    unittest.main()
