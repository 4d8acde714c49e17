"""LevelDB GUI Browser: paginated, filtered, read-only browsing of a LevelDB store."""

from .constants import VERSION
from .errors import StoreError, KeyMissing, ExportError
from .pager import Pager, matches
from .render import render
from .export import dump_one, dump_all
from .session import Session, Event

__version__ = VERSION

__all__ = [
    "StoreError", "KeyMissing", "Pager", "matches", "render",
    "dump_one", "dump_all", "ExportError", "Session", "Event",
]
