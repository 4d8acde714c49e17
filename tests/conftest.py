"""Shared test fixtures for the LevelDB browser test suite."""

import bisect
from contextlib import contextmanager

import pytest

from leveldb_browser.errors import StoreError, KeyMissing


# ============================================================================
# In-memory ordered store
# ============================================================================

class FakeIterator:
    """Raw iterator over a sorted snapshot of a MemoryStore."""

    def __init__(self, store):
        self._store = store
        self._keys = sorted(store.data)
        self._pos = len(self._keys)
        self._buf = bytearray()
        self.closed = False

    def _check(self):
        fail_on = self._store.fail_on
        if fail_on is not None and self.valid() and self._keys[self._pos] == fail_on:
            raise StoreError(f"corruption at {fail_on!r}")

    def seek_to_first(self):
        self._pos = 0
        self._check()

    def seek(self, target):
        self._pos = bisect.bisect_left(self._keys, bytes(target))
        self._check()

    def valid(self):
        return not self.closed and self._pos < len(self._keys)

    def key(self):
        k = self._keys[self._pos]
        if self._store.reuse_buffer:
            self._buf[:] = k
            return self._buf
        return k

    def value(self):
        return self._store.data[self._keys[self._pos]]

    def next(self):
        self._pos += 1
        self._check()

    def close(self):
        self.closed = True


class MemoryStore:
    """Same surface as leveldb_browser.store.Store: ``scan()`` and ``get()``.

    ``fail_on`` makes any iterator raise StoreError when it reaches that key.
    ``reuse_buffer`` makes ``key()`` hand back one shared, mutated bytearray.
    """

    def __init__(self, data=None):
        self.data = dict(data or {})
        self.fail_on = None
        self.reuse_buffer = False
        self.iterators = []

    def get(self, key):
        try:
            return self.data[bytes(key)]
        except KeyError:
            raise KeyMissing(key) from None

    @contextmanager
    def scan(self):
        it = FakeIterator(self)
        self.iterators.append(it)
        try:
            yield it
        finally:
            it.close()

    def all_closed(self):
        return all(it.closed for it in self.iterators)


# ============================================================================
# Store fixtures
# ============================================================================

@pytest.fixture
def make_store():
    """Factory: build a MemoryStore from a {bytes: bytes} mapping."""
    def _make(data=None):
        return MemoryStore(data)
    return _make


@pytest.fixture
def fruit_store():
    """Three keys with mixed case, values are plain text."""
    return MemoryStore({b"apple": b"1", b"Banana": b"2", b"cherry": b"3"})


@pytest.fixture
def numbered_store():
    """250 zero-padded keys, every tenth one containing 'tens'."""
    data = {}
    for i in range(250):
        suffix = "-tens" if i % 10 == 0 else ""
        data[f"key{i:04d}{suffix}".encode()] = f"value {i}".encode()
    return MemoryStore(data)
