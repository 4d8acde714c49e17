"""Read-only LevelDB access layer for LevelDB GUI Browser."""

import os
import logging
from contextlib import contextmanager

import plyvel

from .errors import StoreError, KeyMissing

log = logging.getLogger(__name__)


# ── Store class ──────────────────────────────────────────────────────────
class Store:
    """Thin wrapper over a plyvel database opened read-only.

    ``scan()`` hands out a raw iterator (``seek_to_first``, ``seek``, ``valid``,
    ``key``, ``value``, ``next``) that is always released when the ``with``
    block ends, however it ends.
    """

    def __init__(self):
        self._db = None
        self._path = None

    def open(self, path):
        self.close()
        try:
            self._db = plyvel.DB(path, create_if_missing=False)
        except plyvel.Error as e:
            raise StoreError(f"Cannot open database {path}: {e}") from e
        self._path = path
        log.info("opened %s", path)

    def close(self):
        if self._db:
            try:
                self._db.close()
            finally:
                log.info("closed %s", self._path)
                self._db = None
                self._path = None

    @property
    def ok(self):
        return self._db is not None

    @property
    def path(self):
        return self._path

    def disk_size(self):
        """Total size of the files in the database directory."""
        if not self._path:
            return 0
        total = 0
        for entry in os.scandir(self._path):
            if entry.is_file():
                total += entry.stat().st_size
        return total

    def get(self, key):
        try:
            value = self._db.get(key)
        except plyvel.Error as e:
            raise StoreError(str(e)) from e
        if value is None:
            raise KeyMissing(key)
        return value

    @contextmanager
    def scan(self):
        try:
            it = self._db.raw_iterator()
        except plyvel.Error as e:
            raise StoreError(str(e)) from e
        try:
            yield it
        except plyvel.Error as e:
            raise StoreError(f"Iterator error: {e}") from e
        finally:
            it.close()
