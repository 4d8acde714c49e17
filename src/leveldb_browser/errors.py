"""Error types shared by the store, pager, export and session layers."""


class StoreError(Exception):
    """Any failure reported by the underlying LevelDB library."""


class KeyMissing(StoreError):
    def __init__(self, key):
        super().__init__(f"key not found: {key!r}")
        self.key = key


class ExportError(Exception):
    """Export stopped early. ``count`` entries made it into ``path``."""

    def __init__(self, message, count=0, path=None):
        super().__init__(message)
        self.count = count
        self.path = path
