"""Tests for watermark stores."""

from openmic.state import InMemoryWatermarkStore, SQLiteWatermarkStore, StaticDataWatermarkStore


class TestInMemoryWatermarkStore:
    """Tests for InMemoryWatermarkStore."""

    def test_starts_absent(self):
        assert InMemoryWatermarkStore().read() is None

    def test_write_then_read(self):
        store = InMemoryWatermarkStore()
        store.write(1500)
        assert store.read() == 1500
        assert store.writes == 1


class TestStaticDataWatermarkStore:
    """Tests for the host static-data adapter."""

    def test_uses_last_seen_key(self):
        static_data = {}
        store = StaticDataWatermarkStore(static_data)

        assert store.read() is None
        store.write(42)

        assert static_data == {"lastSeenTimestamp": 42}

    def test_reads_existing_value(self):
        assert StaticDataWatermarkStore({"lastSeenTimestamp": 1000}).read() == 1000


class TestSQLiteWatermarkStore:
    """Tests for SQLiteWatermarkStore."""

    def test_persists_across_instances(self, tmp_path):
        path = tmp_path / "state" / "watermarks.db"
        SQLiteWatermarkStore(path, key="ended:*").write(1700000000000)

        assert SQLiteWatermarkStore(path, key="ended:*").read() == 1700000000000

    def test_keys_are_independent(self, tmp_path):
        path = tmp_path / "watermarks.db"
        SQLiteWatermarkStore(path, key="a").write(1)

        assert SQLiteWatermarkStore(path, key="b").read() is None

    def test_overwrite(self, tmp_path):
        store = SQLiteWatermarkStore(tmp_path / "watermarks.db")
        store.write(1)
        store.write(2)
        assert store.read() == 2

    def test_reset(self, tmp_path):
        store = SQLiteWatermarkStore(tmp_path / "watermarks.db")
        store.write(5)
        store.reset()
        assert store.read() is None
