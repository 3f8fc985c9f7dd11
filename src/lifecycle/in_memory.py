"""In-memory build preparation.

This module prepares descriptors whose content is compiled in memory.
A descriptor marked for building always leaves with its content loaded.
"""

from __future__ import annotations

from core.types import BuildDescriptor
from lifecycle.common_phase import decide_build, finish_descriptor, load_source
from lifecycle.context import BuildContext

_VARIANT = "in_memory"


def prepare_in_memory(descriptor: BuildDescriptor, context: BuildContext) -> BuildDescriptor:
    """Decide whether a file needs building and load its content if so.

    Args:
        descriptor: Descriptor to prepare in place.
        context: Shared build pass context.

    Returns:
        The same descriptor in the ready state.

    Raises:
        KilnBuildError: If the source or an asserted destination is missing.
        DestinationInSourceTreeError: If a supplied dest is inside the source tree.
    """
    decide_build(descriptor, context, _VARIANT)
    if descriptor.build and descriptor.data is None:
        descriptor.data = load_source(descriptor, _VARIANT)
    return finish_descriptor(descriptor, _VARIANT)
