"""Unit tests for source and destination path mapping."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.errors import KilnConfigError
from core.extension_map import ExtensionMap
from core.paths import (
    change_extension,
    dest_to_source,
    ensure_paths_valid,
    file_extension,
    in_source,
    paths_are_valid,
    remove_extension,
    source_to_dest,
    trim_dest,
    trim_source,
)
from tests.site_tree import site_config

ROOT = Path("/web/project")


def test_source_to_dest_maps_template_extension() -> None:
    """EJS sources should land as HTML in the destination tree."""
    config = site_config(ROOT)

    dest = source_to_dest(ROOT / "source" / "blog" / "index.ejs", config, ExtensionMap())

    assert dest == ROOT / "dest" / "blog" / "index.html"


def test_source_to_dest_keeps_unmapped_extension() -> None:
    """Files without a mapping should keep their extension."""
    config = site_config(ROOT)

    dest = source_to_dest(ROOT / "source" / "robots.txt", config, ExtensionMap())

    assert dest == ROOT / "dest" / "robots.txt"


def test_source_to_dest_matches_extension_case_insensitively() -> None:
    """Upper-case source extensions should still map."""
    config = site_config(ROOT)

    dest = source_to_dest(ROOT / "source" / "site.SCSS", config, ExtensionMap())

    assert dest == ROOT / "dest" / "site.css"


def test_source_to_dest_never_rewrites_wildcard_entries() -> None:
    """Pass-through archives should keep their extension."""
    config = site_config(ROOT)

    dest = source_to_dest(ROOT / "source" / "bundle.js.gz", config, ExtensionMap())

    assert dest == ROOT / "dest" / "bundle.js.gz"


def test_source_to_dest_keeps_directory_outside_source_root() -> None:
    """Paths outside the source tree should keep their directory."""
    config = site_config(ROOT)

    dest = source_to_dest(Path("/elsewhere/page.ejs"), config, ExtensionMap())

    assert dest == Path("/elsewhere/page.html")


def test_dest_to_source_swaps_root_only() -> None:
    """Destination paths should map back without touching the extension."""
    config = site_config(ROOT)

    source = dest_to_source(ROOT / "dest" / "css" / "site.css", config)

    assert source == ROOT / "source" / "css" / "site.css"


def test_extension_helpers() -> None:
    """Extension helpers should operate on the last suffix only."""
    file_path = Path("/files/index.html.gz")

    assert (
        file_extension(file_path) == "gz"
        and remove_extension(file_path) == Path("/files/index.html")
        and change_extension(Path("/files/index.jade"), "html") == Path("/files/index.html")
    )


@pytest.mark.parametrize(
    ("source_root", "dest_root", "expected"),
    [
        ("/web/source", "/web/dest", True),
        ("/web/source", "/web/source", False),
        ("/web/source", "/web/source/", False),
        ("/web", "/web/dest", False),
        ("/web/source/dest", "/web/source", False),
        ("/web/src", "/web/src2", True),
    ],
)
def test_paths_are_valid(source_root: str, dest_root: str, expected: bool) -> None:
    """Roots must differ and neither may contain the other."""
    assert paths_are_valid(source_root, dest_root) is expected


def test_ensure_paths_valid_raises_for_nested_roots() -> None:
    """Nested roots should refuse to run a pass."""
    config = site_config(ROOT)
    nested = site_config(ROOT, dest_root=ROOT / "source" / "out")

    ensure_paths_valid(config)
    with pytest.raises(KilnConfigError):
        ensure_paths_valid(nested)


def test_in_source_checks_ancestry() -> None:
    """Only paths below the source root should count as source paths."""
    source_root = ROOT / "source"

    assert in_source(source_root / "a" / "b.ejs", source_root) and not in_source(
        ROOT / "sourcemaps" / "b.map", source_root
    )


def test_trim_paths_start_at_root_name() -> None:
    """Display paths should start at the root directory name."""
    config = site_config(ROOT)

    assert trim_source(ROOT / "source" / "index.ejs", config) == "/source/index.ejs" and trim_dest(
        ROOT / "dest" / "index.html", config
    ) == "/dest/index.html"
