"""Per-pass staleness cache.

This module remembers include modification times and reported errors
for the duration of one build pass. The orchestrator owns the cache and
resets it before every pass.
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
import threading
from typing import Iterable, Iterator

from core.errors import KilnConfigError
from core.logging_config import get_logger
from probe.filesystem import exists_with_time

_LOGGER = get_logger(__name__)


class StalenessCache:
    """Process-lifetime cache shared by every unit of work in a pass.

    Entries are computed idempotently, so concurrent writers racing to the
    same key store the same value. A lock still guards the containers.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._include_mtimes: dict[str, dict[Path, float]] = {}
        self._errors_seen: set[str] = set()
        self._missing_task_extensions: set[str] = set()
        self._active_traversals = 0

    def reset(self) -> None:
        """Clear every cached value for a new build pass.

        Raises:
            KilnConfigError: If an include traversal is still running.
        """
        with self._lock:
            if self._active_traversals:
                raise KilnConfigError(
                    "Cannot reset the staleness cache while include resolution is running. "
                    "Wait for the current build pass to finish."
                )
            self._include_mtimes.clear()
            self._errors_seen.clear()
            self._missing_task_extensions.clear()

    def includes_newer(
        self,
        include_paths: Iterable[Path],
        file_type: str,
        dest_mtime: float,
    ) -> bool:
        """Return whether any include was modified after the destination.

        Args:
            include_paths: Transitive include paths of one source file.
            file_type: Dialect extension used to segregate cached times.
            dest_mtime: Destination modification time in epoch milliseconds.

        Returns:
            True when at least one include is newer than the destination.
        """
        for include_path in include_paths:
            include_mtime = self._include_mtime(include_path, file_type)
            if include_mtime is not None and include_mtime > dest_mtime:
                _LOGGER.info(
                    "includes_newer",
                    file_type=file_type.upper(),
                    include_path=str(include_path),
                )
                return True
        return False

    def cached_mtime(self, include_path: Path, file_type: str) -> float | None:
        """Return a cached include time without probing the filesystem."""
        with self._lock:
            return self._include_mtimes.get(file_type, {}).get(include_path)

    def mark_error_seen(self, message: str) -> bool:
        """Record an error message, returning True the first time it is seen."""
        with self._lock:
            if message in self._errors_seen:
                return False
            self._errors_seen.add(message)
            return True

    def mark_missing_tasks(self, extension: str) -> bool:
        """Record an extension without build tasks, True the first time."""
        with self._lock:
            if extension in self._missing_task_extensions:
                return False
            self._missing_task_extensions.add(extension)
            return True

    @property
    def active_traversals(self) -> int:
        """Number of top-level include traversals currently running."""
        return self._active_traversals

    @contextmanager
    def track_traversal(self) -> Iterator[None]:
        """Count a top-level include traversal for the duration of a block."""
        with self._lock:
            self._active_traversals += 1
        try:
            yield
        finally:
            with self._lock:
                self._active_traversals -= 1

    def _include_mtime(self, include_path: Path, file_type: str) -> float | None:
        """Return an include time from cache, probing and caching on a miss."""
        cached = self.cached_mtime(include_path, file_type)
        if cached is not None:
            return cached
        probe = exists_with_time(include_path)
        if not probe.exists:
            return None
        with self._lock:
            self._include_mtimes.setdefault(file_type, {})[include_path] = probe.mtime
        return probe.mtime
