"""Unit tests for CLI command handling."""

from __future__ import annotations

from pathlib import Path

import pytest

from cli.main import main
from tests.site_tree import NEW_MTIME, OLD_MTIME, site_config, write_file


def _root_args(root: Path) -> list[str]:
    config = site_config(root)
    return ["--source", str(config.source_root), "--dest", str(config.dest_root)]


def test_cli_validate_accepts_separate_roots(tmp_path: Path, capsys) -> None:
    """Validate should print ok for non-overlapping roots."""
    exit_code = main([*_root_args(tmp_path), "validate"])
    output = capsys.readouterr().out.strip()

    assert exit_code == 0 and output == "ok"


def test_cli_validate_rejects_nested_roots(tmp_path: Path) -> None:
    """Validate should fail when the destination sits inside the source."""
    args = ["--source", str(tmp_path), "--dest", str(tmp_path / "dest"), "validate"]

    assert main(args) == 2


def test_cli_check_lists_stale_files(tmp_path: Path, capsys) -> None:
    """Check should print trimmed source and destination paths."""
    config = site_config(tmp_path)
    write_file(config.source_root / "index.ejs", "<p>hi</p>", mtime=NEW_MTIME)
    write_file(config.source_root / "about.ejs", "<p>about</p>", mtime=OLD_MTIME)
    write_file(config.dest_root / "about.html", "<p>about</p>", mtime=NEW_MTIME)

    exit_code = main([*_root_args(tmp_path), "check"])
    output = capsys.readouterr().out.strip()

    assert exit_code == 0 and output == "/source/index.ejs\t/dest/index.html"


def test_cli_check_force_build_lists_everything(tmp_path: Path, capsys) -> None:
    """Force build should report every discovered file."""
    config = site_config(tmp_path)
    write_file(config.source_root / "a.ejs", "a", mtime=OLD_MTIME)
    write_file(config.dest_root / "a.html", "a", mtime=NEW_MTIME)
    write_file(config.source_root / "b.ejs", "b", mtime=OLD_MTIME)
    write_file(config.dest_root / "b.html", "b", mtime=NEW_MTIME)

    main([*_root_args(tmp_path), "--force-build", "--concurrency", "2", "check"])
    output_lines = capsys.readouterr().out.strip().splitlines()

    assert len(output_lines) == 2


def test_cli_check_rejects_invalid_concurrency(tmp_path: Path) -> None:
    """An out-of-range worker count should be a usage error."""
    with pytest.raises(SystemExit):
        main([*_root_args(tmp_path), "--concurrency", "99", "check"])


def test_cli_includes_prints_transitive_includes(tmp_path: Path, capsys) -> None:
    """Includes should print every resolved include path."""
    config = site_config(tmp_path)
    page = write_file(config.source_root / "index.pug", "include _layout\n")
    layout = write_file(config.source_root / "_layout.pug", "include _nav\n")
    nav = write_file(config.source_root / "_nav.pug", "nav\n")

    exit_code = main([*_root_args(tmp_path), "includes", str(page)])
    output_lines = capsys.readouterr().out.strip().splitlines()

    assert exit_code == 0 and output_lines == [str(layout), str(nav)]


def test_cli_includes_rejects_unsupported_file_type(tmp_path: Path) -> None:
    """Includes should fail for files without an include dialect."""
    config = site_config(tmp_path)
    page = write_file(config.source_root / "readme.md", "# hi")

    assert main([*_root_args(tmp_path), "includes", str(page)]) == 2
