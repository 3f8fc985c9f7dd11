"""Extension mapping tables.

This module holds destination-to-source extension sets and the ordered
build tasks per source extension. Tables only grow through ``add_mapping``.
"""

from __future__ import annotations

from typing import Iterable, Mapping

from core.constants import (
    DEFAULT_DEST_TO_SOURCE_EXT,
    DEFAULT_SOURCE_TO_DEST_TASKS,
    WILDCARD_EXTENSION,
)


class ExtensionMap:
    """Mutable-by-append extension configuration.

    Keys are stored lower-case and every lookup lower-cases its input,
    so matching against real file extensions is case-insensitive.
    """

    def __init__(
        self,
        dest_to_source_ext: Mapping[str, Iterable[str]] | None = None,
        source_to_dest_tasks: Mapping[str, Iterable[str]] | None = None,
    ) -> None:
        """Initialize tables, copying the defaults when none are given.

        Args:
            dest_to_source_ext: Destination extension to source extensions.
            source_to_dest_tasks: Source extension to ordered task names.
        """
        if dest_to_source_ext is None:
            dest_to_source_ext = DEFAULT_DEST_TO_SOURCE_EXT
        if source_to_dest_tasks is None:
            source_to_dest_tasks = DEFAULT_SOURCE_TO_DEST_TASKS
        self.dest_to_source_ext: dict[str, list[str]] = {
            dest_ext.lower(): [source_ext.lower() for source_ext in source_exts]
            for dest_ext, source_exts in dest_to_source_ext.items()
        }
        self.source_to_dest_tasks: dict[str, list[str]] = {
            source_ext.lower(): list(tasks) for source_ext, tasks in source_to_dest_tasks.items()
        }

    def add_mapping(self, dest_ext: str, source_exts: str | Iterable[str]) -> None:
        """Append source extensions to a destination extension entry.

        Existing entries are never removed or replaced, and duplicates
        are kept since idempotency is up to the caller.

        Args:
            dest_ext: Destination extension like ``js``.
            source_exts: One source extension or an iterable of them.
        """
        if isinstance(source_exts, str):
            source_exts = [source_exts]
        entry = self.dest_to_source_ext.setdefault(dest_ext.lower(), [])
        entry.extend(source_ext.lower() for source_ext in source_exts)

    def dest_extension_for(self, source_ext: str) -> str | None:
        """Return the destination extension produced from a source extension.

        The first destination entry claiming the extension wins. Wildcard
        entries mark pass-through tasks and never rewrite an extension.

        Args:
            source_ext: Source extension without a dot.

        Returns:
            Destination extension, or None when no entry claims it.
        """
        lookup = source_ext.lower()
        for dest_ext, source_exts in self.dest_to_source_ext.items():
            if lookup in source_exts and lookup != WILDCARD_EXTENSION:
                return dest_ext
        return None

    def source_extensions_for(self, dest_ext: str) -> list[str]:
        """Return source extensions able to produce a destination extension."""
        return list(self.dest_to_source_ext.get(dest_ext.lower(), []))

    def accepts_any_source(self, dest_ext: str) -> bool:
        """Return whether a destination extension has a wildcard source entry."""
        return WILDCARD_EXTENSION in self.dest_to_source_ext.get(dest_ext.lower(), [])

    def tasks_for(self, source_ext: str) -> list[str]:
        """Return the ordered build tasks for a source extension."""
        return list(self.source_to_dest_tasks.get(source_ext.lower(), []))
