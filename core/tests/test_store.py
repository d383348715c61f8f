import os
import sys
import tempfile
import unittest

PROJECT_ROOT = os.path.dirname(os.path.dirname(__file__))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from noteshift_core import Entry, SqliteDictionaryStore, StoreError, ValidationError


class DictionaryStoreTests(unittest.TestCase):
    def test_upsert_then_load_all_round_trips_through_disk(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            path = os.path.join(temp_dir, "db", "abbreviations.db")
            with SqliteDictionaryStore(path) as store:
                store.upsert(":htn ", "Hypertension")
            with SqliteDictionaryStore(path) as reopened:
                loaded = reopened.load_all()

        self.assertEqual(loaded, {":htn ": "Hypertension"})

    def test_upsert_normalizes_key_and_overwrites(self) -> None:
        with SqliteDictionaryStore(":memory:") as store:
            store.upsert("HTN", "High blood pressure")
            store.upsert(":htn ", "Hypertension")
            self.assertEqual(store.load_all(), {":htn ": "Hypertension"})
            self.assertEqual(store.count(), 1)
            self.assertEqual(store.get("htn"), "Hypertension")

    def test_delete_is_idempotent(self) -> None:
        with SqliteDictionaryStore(":memory:") as store:
            store.upsert("dm", "Diabetes Mellitus")
            store.delete("dm")
            store.delete(":dm ")
            self.assertEqual(store.load_all(), {})
            self.assertIsNone(store.get("dm"))

    def test_empty_expansion_is_not_persisted(self) -> None:
        with SqliteDictionaryStore(":memory:") as store:
            with self.assertRaises(ValidationError):
                store.upsert("cc", "")
            self.assertEqual(store.load_all(), {})

    def test_whitespace_expansion_is_stored_verbatim(self) -> None:
        with SqliteDictionaryStore(":memory:") as store:
            store.upsert("sp", "   ")
            self.assertEqual(store.get("sp"), "   ")

    def test_upsert_many_is_all_or_nothing(self) -> None:
        with SqliteDictionaryStore(":memory:") as store:
            with self.assertRaises(ValidationError):
                store.upsert_many([Entry(":a ", "Assessment"), Entry(":p ", "")])
            self.assertEqual(store.load_all(), {})

    def test_unopenable_path_raises_store_error(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            store = SqliteDictionaryStore(temp_dir)
            with self.assertRaises(StoreError):
                store.load_all()

    def test_load_all_on_broken_table_raises_store_error(self) -> None:
        with SqliteDictionaryStore(":memory:") as store:
            store.upsert("cc", "Chief Complaint")
            store._connection().execute("DROP TABLE abbreviations")
            with self.assertRaises(StoreError):
                store.load_all()


if __name__ == "__main__":
    unittest.main()
