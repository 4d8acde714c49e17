"""Filtered, paginated key listing over the ordered store."""

import logging

from .constants import PAGE_SIZE
from .errors import StoreError
from .utils import key_text

log = logging.getLogger(__name__)


def matches(key, spec):
    """Case-insensitive substring test; an empty filter matches every key."""
    if not spec:
        return True
    return spec.lower() in key_text(key).lower()


class Pager:
    """Walks the store in key order and assembles pages of matching keys.

    ``keys`` only ever grows by appending until the next ``reset``. The last
    entry of ``keys`` is the resume cursor for ``extend``.

    ``more`` is True when the iterator could still step past the last
    collected key. It does not look ahead for another *match*, so a sparse
    filter can report more data and the following ``extend`` returns False.
    """

    def __init__(self, store, page_size=PAGE_SIZE):
        if page_size < 1:
            raise ValueError(f"page size must be >= 1, got {page_size}")
        self.store = store
        self.page_size = page_size
        self.spec = ""
        self.keys = []
        self.more = False
        self.error = None

    @property
    def cursor(self):
        return self.keys[-1] if self.keys else None

    def reset(self, spec):
        self.spec = spec or ""
        self.keys = []
        self.more = False
        return self.load_first_page()

    def load_first_page(self):
        """Collect the first page for the current filter. Returns the key count."""
        self.keys = []
        self.more = False
        self.error = None
        try:
            with self.store.scan() as it:
                it.seek_to_first()
                self.more = self._collect(it)
        except StoreError as e:
            self.error = str(e)
            self.more = False
            log.warning("first page for %r stopped after %d keys: %s",
                        self.spec, len(self.keys), e)
        log.debug("first page for %r: %d keys, more=%s",
                  self.spec, len(self.keys), self.more)
        return len(self.keys)

    def extend(self):
        """Append up to one page past the cursor. True if anything was added."""
        if not self.more or not self.keys:
            return False
        self.error = None
        last = self.keys[-1]
        before = len(self.keys)
        try:
            with self.store.scan() as it:
                it.seek(last)
                if it.valid() and it.key() == last:
                    it.next()
                self.more = self._collect(it)
        except StoreError as e:
            # keys appended before the failure stay; ``more`` is untouched so
            # the next extend retries from the new cursor
            self.error = str(e)
            log.warning("extend for %r stopped after %d new keys: %s",
                        self.spec, len(self.keys) - before, e)
        added = len(self.keys) - before
        log.debug("extend for %r: +%d keys (total %d), more=%s",
                  self.spec, added, len(self.keys), self.more)
        return added > 0

    def _collect(self, it):
        """Append matches from ``it`` until a page is full; return the more flag."""
        count = 0
        while it.valid():
            key = it.key()
            if matches(key, self.spec):
                # the iterator may reuse its buffer on the next step
                self.keys.append(bytes(key))
                count += 1
                if count >= self.page_size:
                    it.next()
                    return it.valid()
            it.next()
        return False
