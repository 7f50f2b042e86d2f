import pytest

from basecoin.kvstore import KVCache, KVStore, MemKVStore, legible_bytes


class RecordingStore(KVStore):
    def __init__(self):
        self.items = {}
        self.writes = []
        self.reads = []

    def get(self, key):
        self.reads.append(key)
        return self.items.get(key)

    def set(self, key, value):
        self.writes.append((key, value))
        self.items[key] = value


def test_mem_store_missing_key_is_none():
    assert MemKVStore().get(b"nope") is None


def test_mem_store_set_and_get():
    store = MemKVStore()
    store.set(b"k", b"v")
    assert store.get(b"k") == b"v"
    store.set(b"k", b"w")
    assert store.get(b"k") == b"w"


def test_cache_defers_writes_until_sync():
    backing = RecordingStore()
    cache = KVCache(backing)
    cache.set(b"a", b"1")
    assert backing.writes == []
    assert cache.get(b"a") == b"1"
    assert backing.reads == []
    cache.sync()
    assert backing.items[b"a"] == b"1"


def test_cache_sync_order_follows_last_set():
    backing = RecordingStore()
    cache = KVCache(backing)
    cache.set(b"a", b"1")
    cache.set(b"b", b"2")
    cache.set(b"a", b"3")
    cache.sync()
    assert backing.writes == [(b"b", b"2"), (b"a", b"3")]


def test_cache_miss_reads_store_and_syncs_read_key():
    backing = RecordingStore()
    backing.items[b"x"] = b"y"
    cache = KVCache(backing)
    assert cache.get(b"x") == b"y"
    assert cache.get(b"x") == b"y"
    assert backing.reads == [b"x"]
    cache.set(b"z", b"w")
    cache.sync()
    assert [k for k, _ in backing.writes] == [b"x", b"z"]


def test_cache_is_reset_after_sync():
    backing = RecordingStore()
    cache = KVCache(backing)
    cache.set(b"a", b"1")
    cache.sync()
    backing.items[b"a"] = b"changed"
    assert cache.get(b"a") == b"changed"


def test_cache_defaults_to_memory_store():
    cache = KVCache()
    cache.set(b"k", b"v")
    cache.sync()
    assert isinstance(cache.store, MemKVStore)
    assert cache.store.get(b"k") == b"v"


def test_reset_drops_pending_writes():
    backing = RecordingStore()
    cache = KVCache(backing)
    cache.set(b"a", b"1")
    assert cache.reset() is cache
    cache.sync()
    assert backing.writes == []


def test_logging_records_operations():
    cache = KVCache()
    cache.set_logging()
    cache.set(b"k", b"v")
    cache.get(b"k")
    cache.get(b"missing")
    lines = cache.log_lines
    assert len(lines) == 3
    assert lines[0].startswith("Set ")
    assert lines[1].startswith("Get (hit) ")
    assert lines[2].startswith("Get (miss) ")
    cache.clear_log_lines()
    assert cache.log_lines == []


def test_no_log_lines_without_logging():
    cache = KVCache()
    cache.set(b"k", b"v")
    assert cache.log_lines == []


@pytest.mark.parametrize(
    "data, expected",
    [
        (b"A", "\x1b[32mA\x1b[0m"),
        (b"\x01", "\x1b[34m01\x1b[0m"),
        (b"", ""),
    ],
)
def test_legible_bytes(data, expected):
    assert legible_bytes(data) == expected