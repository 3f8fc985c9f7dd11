"""Candidate source discovery.

This module enumerates the source files a build pass should consider.
Include-prefixed partials are skipped since they are never published.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from core.config import KilnConfig
from core.constants import DEFAULT_DISCOVERY_PATTERN
from core.errors import KilnConfigError
from core.paths import in_source
from probe.filesystem import find_files


def discover_sources(config: KilnConfig, pattern: str = DEFAULT_DISCOVERY_PATTERN) -> list[Path]:
    """Return publishable source files under the source root.

    Args:
        config: Runtime configuration.
        pattern: Glob pattern relative to the source root.

    Returns:
        Sorted source file paths.
    """
    return find_files(config.source_root, pattern, include_prefix=config.include_prefix)


def sources_for_paths(paths: Iterable[str], config: KilnConfig) -> list[Path]:
    """Expand explicit file or folder arguments into source files.

    Args:
        paths: File or directory paths, absolute or relative to the cwd.
        config: Runtime configuration.

    Returns:
        Source files in argument order, folders expanded and sorted.

    Raises:
        KilnConfigError: If a path lies outside the source root.
    """
    sources: list[Path] = []
    for raw_path in paths:
        source_path = Path(raw_path).expanduser().resolve()
        if not in_source(source_path, config.source_root):
            raise KilnConfigError(
                f"Path {source_path} is outside the source root {config.source_root}. "
                "Pass files that live under KILN_SOURCE_ROOT."
            )
        if source_path.is_dir():
            sources.extend(
                find_files(source_path, DEFAULT_DISCOVERY_PATTERN, config.include_prefix)
            )
        else:
            sources.append(source_path)
    return sources
