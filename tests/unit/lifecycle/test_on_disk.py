"""Unit tests for on-disk build preparation."""

from __future__ import annotations

from pathlib import Path

from core.types import BuildDescriptor
from lifecycle.context import BuildContext
from lifecycle.on_disk import prepare_on_disk
from tests.site_tree import NEW_MTIME, OLD_MTIME, site_config, write_file


def test_prepare_on_disk_flushes_content_to_destination(tmp_path: Path) -> None:
    """Content from a previous stage should be written and repointed."""
    context = BuildContext(config=site_config(tmp_path))
    source = context.config.source_root / "css" / "site.scss"
    descriptor = BuildDescriptor.from_content(source, "body{}")

    prepare_on_disk(descriptor, context)
    dest = context.config.dest_root / "css" / "site.css"

    assert (descriptor.source, descriptor.dest, descriptor.data, descriptor.build) == (
        dest,
        dest,
        None,
        True,
    ) and dest.read_text(encoding="utf-8") == "body{}"


def test_prepare_on_disk_repoints_existing_destination(tmp_path: Path) -> None:
    """An existing destination should become the next stage's input."""
    context = BuildContext(config=site_config(tmp_path))
    source = context.config.source_root / "app.js"
    dest = write_file(context.config.dest_root / "app.js", "var a;")

    descriptor = prepare_on_disk(BuildDescriptor.from_dest(source, dest), context)

    assert descriptor.source == dest and descriptor.build is True


def test_prepare_on_disk_falls_back_to_source_for_missing_destination(tmp_path: Path) -> None:
    """A missing destination should be recomputed from the source file."""
    context = BuildContext(config=site_config(tmp_path))
    source = write_file(context.config.source_root / "app.js", "var a;", mtime=NEW_MTIME)
    stray_dest = context.config.dest_root / "stray.js"

    descriptor = prepare_on_disk(BuildDescriptor.from_dest(source, stray_dest), context)

    assert descriptor.dest == context.config.dest_root / "app.js" and descriptor.build is True


def test_prepare_on_disk_creates_destination_folder(tmp_path: Path) -> None:
    """Unbuilt files should get their destination folder created."""
    context = BuildContext(config=site_config(tmp_path))
    source = write_file(context.config.source_root / "img" / "logo.png", "png")

    descriptor = prepare_on_disk(BuildDescriptor.from_source(source), context)

    assert descriptor.build is True and (context.config.dest_root / "img").is_dir()


def test_prepare_on_disk_skips_fresh_output(tmp_path: Path) -> None:
    """Fresh output should not be rebuilt or read."""
    context = BuildContext(config=site_config(tmp_path))
    source = write_file(context.config.source_root / "img" / "logo.png", "png", mtime=OLD_MTIME)
    write_file(context.config.dest_root / "img" / "logo.png", "png", mtime=NEW_MTIME)

    descriptor = prepare_on_disk(BuildDescriptor.from_source(source), context)

    assert descriptor.build is False and descriptor.data is None


def test_prepare_on_disk_force_build_ignores_times(tmp_path: Path) -> None:
    """Force build should rebuild fresh on-disk output."""
    context = BuildContext(config=site_config(tmp_path, force_build=True))
    source = write_file(context.config.source_root / "img" / "logo.png", "png", mtime=OLD_MTIME)
    write_file(context.config.dest_root / "img" / "logo.png", "png", mtime=NEW_MTIME)

    descriptor = prepare_on_disk(BuildDescriptor.from_source(source), context)

    assert descriptor.build is True
