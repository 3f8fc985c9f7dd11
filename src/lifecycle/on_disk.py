"""On-disk build preparation.

This module prepares descriptors for command line compilers that work
file to file. Content from a previous stage is flushed to the destination
and the descriptor is repointed so the next stage compiles dest to dest.
"""

from __future__ import annotations

from core.paths import source_to_dest
from core.types import BuildDescriptor
from lifecycle.common_phase import decide_build, ensure_dest_outside_source, finish_descriptor
from lifecycle.context import BuildContext
from probe.filesystem import exists, write_text

_VARIANT = "on_disk"


def prepare_on_disk(descriptor: BuildDescriptor, context: BuildContext) -> BuildDescriptor:
    """Make sure the destination file is on disk for the next stage.

    Args:
        descriptor: Descriptor to prepare in place.
        context: Shared build pass context.

    Returns:
        The same descriptor in the ready state.

    Raises:
        KilnBuildError: If the source file is missing.
        DestinationInSourceTreeError: If a supplied dest is inside the source tree.
        KilnProbeError: If content cannot be written to the destination.
    """
    state = descriptor.reopen()
    descriptor.build = False
    if state == "has_content":
        _flush_content(descriptor, context)
        return finish_descriptor(descriptor, _VARIANT)
    if state == "needs_content" and descriptor.dest is not None:
        if exists(descriptor.dest):
            descriptor.build = True
            descriptor.source = descriptor.dest
            return finish_descriptor(descriptor, _VARIANT)
        descriptor.dest = None
        descriptor.state = "unresolved"
    decide_build(descriptor, context, _VARIANT, create_dest_dir=True)
    return finish_descriptor(descriptor, _VARIANT)


def _flush_content(descriptor: BuildDescriptor, context: BuildContext) -> None:
    """Write in-memory content to dest and repoint source at it."""
    descriptor.build = True
    if descriptor.dest is None:
        descriptor.dest = source_to_dest(descriptor.source, context.config, context.extension_map)
    else:
        ensure_dest_outside_source(descriptor.dest, context, _VARIANT)
    write_text(descriptor.dest, descriptor.data or "")
    descriptor.data = None
    descriptor.source = descriptor.dest
