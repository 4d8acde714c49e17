"""Tests for command-line parsing and startup failures."""

import pytest

pytest.importorskip("plyvel")

from leveldb_browser import cli
from leveldb_browser.constants import PAGE_SIZE, DUMP_DIR


class TestParseArgs:
    """Test argument handling."""

    def test_db_flag(self):
        """--db names the database; defaults fill the rest."""
        args = cli.parse_args(["--db", "/data/db"])
        assert args.db == "/data/db"
        assert args.page_size == PAGE_SIZE
        assert args.dump_dir == DUMP_DIR
        assert args.log_level == "WARNING"

    def test_positional_path(self):
        """The path may also be given positionally."""
        assert cli.parse_args(["/data/db"]).db == "/data/db"

    def test_overrides(self):
        """Page size, dump directory and log level are configurable."""
        args = cli.parse_args(["--db", "x", "--page-size", "25",
                               "--dump-dir", "out", "--log-level", "DEBUG"])
        assert (args.page_size, args.dump_dir, args.log_level) == (25, "out", "DEBUG")

    @pytest.mark.parametrize("argv", [
        [],
        ["--db", "a", "b"],
        ["--db", "x", "--page-size", "0"],
        ["--db", "x", "--page-size", "lots"],
    ])
    def test_rejected(self, argv, capsys):
        """Missing, doubled or invalid arguments exit with usage errors."""
        with pytest.raises(SystemExit) as exc:
            cli.parse_args(argv)
        assert exc.value.code == 2


class TestMain:
    """Test the startup path."""

    def test_unopenable_store_is_fatal(self, tmp_path, capsys):
        """A store that cannot be opened ends the process with status 1."""
        assert cli.main(["--db", str(tmp_path / "missing")]) == 1
        assert "Error:" in capsys.readouterr().err
