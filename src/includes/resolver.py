"""Transitive include resolution.

This module walks include statements recursively for any dialect.
It returns the flattened, deduplicated set of existing include files.
"""

from __future__ import annotations

from contextlib import nullcontext
from dataclasses import dataclass, field
from pathlib import Path
import uuid

from core.config import KilnConfig
from core.errors import KilnIncludeError
from core.logging_config import get_logger
from includes.dialects import IncludeDialect
from probe.filesystem import exists, read_text
from staleness.cache import StalenessCache

_LOGGER = get_logger(__name__)


@dataclass
class IncludeTraversal:
    """Recursion state for one top-level resolution call.

    Attributes:
        origin: File the top-level call started from.
        traversal_id: Identifier unique to this traversal.
        visited: Paths already queued, seeded with the origin.
    """

    origin: Path
    traversal_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    visited: set[Path] = field(default_factory=set)

    def __post_init__(self) -> None:
        self.visited.add(self.origin)

    def claim(self, include_path: Path) -> bool:
        """Mark a path as queued, returning False if it already was."""
        if include_path in self.visited:
            return False
        self.visited.add(include_path)
        return True


def resolve_includes(
    content: str,
    origin: Path,
    dialect: IncludeDialect,
    config: KilnConfig,
    traversal: IncludeTraversal | None = None,
    cache: StalenessCache | None = None,
) -> list[Path]:
    """Return every existing file transitively included by ``content``.

    Calls without a traversal are top-level entry points; they create a
    fresh traversal and discard it on return. Missing or unreadable
    includes are skipped.

    Args:
        content: Content of ``origin``.
        origin: File the content was read from.
        dialect: Include dialect strategy for this file type.
        config: Runtime configuration holding the source root.
        traversal: Recursion state shared with the parent call.
        cache: Optional cache tracking running traversals.

    Returns:
        Include paths, first discovered first, excluding ``origin``.
    """
    if traversal is not None:
        return _resolve_level(content, origin, dialect, config, traversal)
    top_level = IncludeTraversal(origin=origin)
    tracking = cache.track_traversal() if cache is not None else nullcontext()
    with tracking:
        return _resolve_level(content, origin, dialect, config, top_level)


def resolve_file_includes(
    origin: Path,
    dialect: IncludeDialect,
    config: KilnConfig,
    cache: StalenessCache | None = None,
) -> list[Path]:
    """Read a file and return its transitive includes.

    Raises:
        KilnIncludeError: If the origin file cannot be read.
    """
    try:
        content = read_text(origin)
    except (OSError, UnicodeDecodeError) as error:
        raise KilnIncludeError(
            f"Failed to read {origin} for include resolution: {error}. "
            "Check that the file exists and is UTF-8 text."
        ) from error
    return resolve_includes(content, origin, dialect, config, cache=cache)


def _resolve_level(
    content: str,
    origin: Path,
    dialect: IncludeDialect,
    config: KilnConfig,
    traversal: IncludeTraversal,
) -> list[Path]:
    discovered = _discover_candidates(content, origin, dialect, config, traversal)
    confirmed: list[Path] = []
    nested: list[Path] = []
    for include_path in discovered:
        include_content = _read_include(include_path, traversal)
        if include_content is None:
            continue
        confirmed.append(include_path)
        nested.extend(_resolve_level(include_content, include_path, dialect, config, traversal))
    return confirmed + nested


def _discover_candidates(
    content: str,
    origin: Path,
    dialect: IncludeDialect,
    config: KilnConfig,
    traversal: IncludeTraversal,
) -> list[Path]:
    """Return candidate paths not yet queued in this traversal."""
    discovered: list[Path] = []
    for target in dialect.extract_targets(content):
        if not target.literal:
            _LOGGER.debug(
                "include_dynamic_skipped",
                dialect=dialect.name,
                origin=str(origin),
                target=target.raw,
            )
            continue
        for candidate in dialect.candidate_paths(target.raw, origin, config):
            if traversal.claim(candidate):
                discovered.append(candidate)
    return discovered


def _read_include(include_path: Path, traversal: IncludeTraversal) -> str | None:
    """Read a discovered include, returning None when it cannot be used."""
    if not exists(include_path):
        _LOGGER.debug(
            "include_missing",
            include_path=str(include_path),
            traversal_id=traversal.traversal_id,
        )
        return None
    try:
        return read_text(include_path)
    except (OSError, UnicodeDecodeError) as error:
        _LOGGER.debug(
            "include_unreadable",
            include_path=str(include_path),
            traversal_id=traversal.traversal_id,
            error=str(error),
        )
        return None
