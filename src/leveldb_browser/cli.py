"""Command-line entry point for LevelDB GUI Browser."""

import sys
import logging
import argparse

from .constants import VERSION, PAGE_SIZE, DUMP_DIR
from .store import Store, StoreError

log = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def _page_size(text):
    n = int(text)
    if n < 1:
        raise argparse.ArgumentTypeError("page size must be at least 1")
    return n


def build_parser():
    ap = argparse.ArgumentParser(
        prog="leveldb-browser",
        description="Browse, filter and export a LevelDB database (read-only).")
    ap.add_argument("path", nargs="?", help="LevelDB database directory")
    ap.add_argument("--db", dest="db", help="LevelDB database directory")
    ap.add_argument("--page-size", type=_page_size, default=PAGE_SIZE,
                    help=f"keys loaded per page (default {PAGE_SIZE})")
    ap.add_argument("--dump-dir", default=DUMP_DIR,
                    help=f"directory for exported files (default {DUMP_DIR})")
    ap.add_argument("--log-level", default="WARNING",
                    choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                    help="logging verbosity on stderr (default WARNING)")
    ap.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    return ap


def parse_args(argv=None):
    ap = build_parser()
    args = ap.parse_args(argv)
    if args.db and args.path and args.db != args.path:
        ap.error("give the database path once, either positionally or with --db")
    args.db = args.db or args.path
    if not args.db:
        ap.error("a database path is required (--db PATH)")
    return args


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level, format=LOG_FORMAT)

    store = Store()
    try:
        store.open(args.db)
    except StoreError as e:
        log.error("%s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    # Imported late so --help and open failures work without a display
    from .app import App
    try:
        app = App(store, page_size=args.page_size, dump_dir=args.dump_dir)
        app.mainloop()
    finally:
        store.close()
    return 0
