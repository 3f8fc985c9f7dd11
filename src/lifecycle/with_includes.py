"""Include-aware build decision.

This module extends the common staleness check with the transitive
include set of a source file. It never writes to disk.
"""

from __future__ import annotations

from core.paths import file_extension
from core.types import BuildDescriptor
from includes.dialects import IncludeDialect
from includes.resolver import resolve_includes
from lifecycle.common_phase import decide_build, finish_descriptor, load_source
from lifecycle.context import BuildContext

_VARIANT = "with_includes"


def prepare_with_includes(
    descriptor: BuildDescriptor,
    dialect: IncludeDialect,
    context: BuildContext,
) -> BuildDescriptor:
    """Decide whether a file with includes needs building.

    A destination that is newer than its source is still stale when
    any transitively included file is newer than the destination.

    Args:
        descriptor: Descriptor to prepare in place.
        dialect: Include dialect matching the source file type.
        context: Shared build pass context.

    Returns:
        The same descriptor in the ready state with content loaded.

    Raises:
        KilnBuildError: If the source or an asserted destination is missing.
        DestinationInSourceTreeError: If a supplied dest is inside the source tree.
    """
    dest_mtime = decide_build(descriptor, context, _VARIANT)
    if descriptor.data is None:
        descriptor.data = load_source(descriptor, _VARIANT)
    if not descriptor.build:
        include_paths = resolve_includes(
            descriptor.data,
            descriptor.source,
            dialect,
            context.config,
            cache=context.cache,
        )
        descriptor.build = context.cache.includes_newer(
            include_paths,
            file_extension(descriptor.source),
            dest_mtime,
        )
    return finish_descriptor(descriptor, _VARIANT)
