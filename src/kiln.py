"""Public SDK surface for Kiln.

This module provides a stable import path for build orchestrators.
It re-exports the descriptor model, lifecycles, and include resolvers.
"""

from __future__ import annotations

from core.config import KilnConfig
from core.extension_map import ExtensionMap
from core.paths import dest_to_source, paths_are_valid, source_to_dest
from core.types import BuildDescriptor, PassResult
from includes.registry import dialect_for_extension
from includes.resolver import resolve_file_includes, resolve_includes
from lifecycle.context import BuildContext
from lifecycle.in_memory import prepare_in_memory
from lifecycle.on_disk import prepare_on_disk
from lifecycle.with_includes import prepare_with_includes
from orchestration.build_pass import run_build_pass
from orchestration.discovery import discover_sources
from staleness.cache import StalenessCache

__all__ = [
    "BuildContext",
    "BuildDescriptor",
    "ExtensionMap",
    "KilnConfig",
    "PassResult",
    "StalenessCache",
    "dest_to_source",
    "dialect_for_extension",
    "discover_sources",
    "paths_are_valid",
    "prepare_in_memory",
    "prepare_on_disk",
    "prepare_with_includes",
    "resolve_file_includes",
    "resolve_includes",
    "run_build_pass",
    "source_to_dest",
]
