"""Integration test for an incremental build loop over a small site."""

from __future__ import annotations

from pathlib import Path

from core.types import BuildDescriptor
from includes.registry import dialect_for_extension
from lifecycle.context import BuildContext
from lifecycle.in_memory import prepare_in_memory
from lifecycle.on_disk import prepare_on_disk
from lifecycle.with_includes import prepare_with_includes
from orchestration.build_pass import run_build_pass
from orchestration.discovery import discover_sources
from probe.filesystem import write_text
from tests.site_tree import NEW_MTIME, OLD_MTIME, set_mtime, site_config, write_file


def _publish(context: BuildContext, published_at: int) -> list[Path]:
    """Run one pass and write every stale page verbatim as its output."""
    result = run_build_pass(discover_sources(context.config), context)
    published: list[Path] = []
    for descriptor in result.stale:
        assert descriptor.dest is not None and descriptor.data is not None
        write_text(descriptor.dest, descriptor.data)
        set_mtime(descriptor.dest, published_at)
        published.append(descriptor.dest)
    return published


def test_include_change_triggers_single_rebuild(tmp_path: Path) -> None:
    """Touching a partial should rebuild its page exactly once."""
    context = BuildContext(config=site_config(tmp_path, concurrency_limit=2))
    source_root = context.config.source_root
    write_file(source_root / "index.ejs", "<%- include('partials/_hello.ejs') %>", mtime=OLD_MTIME)
    hello = write_file(source_root / "partials" / "_hello.ejs", "hello", mtime=OLD_MTIME)

    first = _publish(context, OLD_MTIME + 500)
    second = _publish(context, OLD_MTIME + 600)
    set_mtime(hello, NEW_MTIME)
    third = _publish(context, NEW_MTIME + 500)
    fourth = _publish(context, NEW_MTIME + 600)

    assert (first, second, third, fourth) == (
        [context.config.dest_root / "index.html"],
        [],
        [context.config.dest_root / "index.html"],
        [],
    )


def test_pipeline_stages_chain_through_descriptor(tmp_path: Path) -> None:
    """One descriptor should flow through include, memory, and disk stages."""
    context = BuildContext(config=site_config(tmp_path))
    source_root = context.config.source_root
    source = write_file(source_root / "css" / "site.scss", "@import 'vars';", mtime=OLD_MTIME)
    write_file(source_root / "css" / "_vars.scss", "$c: red;", mtime=OLD_MTIME)
    descriptor = BuildDescriptor.from_source(source)

    prepare_with_includes(descriptor, dialect_for_extension("scss"), context)
    descriptor.data = "body{color:red}"
    prepare_in_memory(descriptor, context)
    prepare_on_disk(descriptor, context)
    dest = context.config.dest_root / "css" / "site.css"

    assert (descriptor.source, descriptor.data, dest.read_text(encoding="utf-8")) == (
        dest,
        None,
        "body{color:red}",
    )
