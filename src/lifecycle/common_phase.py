"""Shared first phase of every descriptor lifecycle.

This module decides whether a descriptor must be built and computes its
destination. Variant modules add their own second phase on top.
"""

from __future__ import annotations

from pathlib import Path

from core.errors import (
    DestinationInSourceTreeError,
    MissingDestinationError,
    MissingSourceError,
)
from core.logging_config import get_logger
from core.paths import in_source, source_to_dest
from core.types import BuildDescriptor
from lifecycle.context import BuildContext
from probe.filesystem import make_dir_path, pair_exists_with_time, read_text

_LOGGER = get_logger(__name__)


def decide_build(
    descriptor: BuildDescriptor,
    context: BuildContext,
    variant: str,
    create_dest_dir: bool = False,
) -> float:
    """Decide ``build`` and fill in ``dest`` for a descriptor.

    Args:
        descriptor: Descriptor to mutate in place.
        context: Shared build pass context.
        variant: Lifecycle name used in error messages.
        create_dest_dir: Create the destination folder when dest is missing.

    Returns:
        Destination modification time in epoch milliseconds when both
        files exist, else 0.

    Raises:
        DestinationInSourceTreeError: If a supplied dest is inside the source tree.
        MissingDestinationError: If a supplied dest cannot be read.
        MissingSourceError: If the source file does not exist.
    """
    state = descriptor.reopen()
    descriptor.build = False
    if state == "has_content":
        descriptor.build = True
        if descriptor.dest is not None:
            ensure_dest_outside_source(descriptor.dest, context, variant)
        return 0.0
    if state == "needs_content":
        descriptor.data = _read_asserted_dest(descriptor.dest, context, variant)
        descriptor.build = True
        return 0.0
    dest = source_to_dest(descriptor.source, context.config, context.extension_map)
    descriptor.dest = dest
    if context.config.force_build:
        descriptor.build = True
        return 0.0
    times = pair_exists_with_time(descriptor.source, dest)
    if not times.source.exists:
        raise MissingSourceError(
            f"{variant}: source file {descriptor.source} is missing. "
            "It may have been removed after discovery; rerun the build pass."
        )
    if not times.dest.exists:
        descriptor.build = True
        if create_dest_dir:
            make_dir_path(dest)
        return 0.0
    descriptor.build = times.source.mtime > times.dest.mtime
    return times.dest.mtime


def ensure_dest_outside_source(dest: Path, context: BuildContext, variant: str) -> None:
    """Reject a destination that points into the source tree.

    Raises:
        DestinationInSourceTreeError: If ``dest`` is inside the source root.
    """
    if in_source(dest, context.config.source_root):
        raise DestinationInSourceTreeError(
            f"{variant}: destination {dest} points to the source directory "
            f"{context.config.source_root}. Fix the pipeline stage that supplied it."
        )


def load_source(descriptor: BuildDescriptor, variant: str) -> str:
    """Read the source file of a descriptor.

    Raises:
        MissingSourceError: If the source cannot be read.
    """
    try:
        return read_text(descriptor.source)
    except (OSError, UnicodeDecodeError) as error:
        raise MissingSourceError(
            f"{variant}: failed to read source file {descriptor.source}: {error}."
        ) from error


def finish_descriptor(descriptor: BuildDescriptor, variant: str) -> BuildDescriptor:
    """Mark a descriptor ready for the next stage and trace the result."""
    descriptor.state = "ready"
    _LOGGER.debug(
        "descriptor_prepared",
        variant=variant,
        source=str(descriptor.source),
        dest=str(descriptor.dest) if descriptor.dest is not None else None,
        data_loaded=descriptor.data is not None,
        build=descriptor.build,
    )
    return descriptor


def _read_asserted_dest(dest: Path | None, context: BuildContext, variant: str) -> str:
    """Read a destination the caller asserted already exists."""
    if dest is None:
        raise MissingDestinationError(f"{variant}: descriptor has no destination to read.")
    ensure_dest_outside_source(dest, context, variant)
    try:
        return read_text(dest)
    except (OSError, UnicodeDecodeError) as error:
        raise MissingDestinationError(
            f"{variant}: destination file {dest} is missing or unreadable. "
            "Run the stage that produces it first."
        ) from error
