"""Filesystem probes and file helpers.

This module answers existence, modification time, and size questions
with structured results instead of raising for missing paths.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
import shutil
from typing import Iterable

from core.constants import PROBE_THREAD_NAME_PREFIX, TEXT_ENCODING
from core.errors import KilnProbeError
from core.types import FilePairTimes, FileTime

_PROBE_EXECUTOR = ThreadPoolExecutor(max_workers=4, thread_name_prefix=PROBE_THREAD_NAME_PREFIX)


def exists(file_path: Path) -> bool:
    """Return whether a stat on the path succeeds.

    Any stat failure, permission errors included, counts as missing.
    """
    try:
        file_path.stat()
    except OSError:
        return False
    return True


def exists_with_time(file_path: Path) -> FileTime:
    """Return existence and modification time for one path.

    Args:
        file_path: File or directory path.

    Returns:
        File time with ``mtime`` in epoch milliseconds, 0 when missing.
    """
    try:
        stat_result = file_path.stat()
    except OSError:
        return FileTime(exists=False, mtime=0.0)
    return FileTime(exists=True, mtime=stat_result.st_mtime_ns / 1_000_000)


def pair_exists_with_time(source: Path, dest: Path) -> FilePairTimes:
    """Probe a source and destination path concurrently.

    Args:
        source: Source file path.
        dest: Destination file path.

    Returns:
        Both probe results once both stats completed.
    """
    source_future = _PROBE_EXECUTOR.submit(exists_with_time, source)
    dest_future = _PROBE_EXECUTOR.submit(exists_with_time, dest)
    return FilePairTimes(source=source_future.result(), dest=dest_future.result())


def size(file_path: Path) -> int:
    """Return the size of a path in bytes, or 0 when it does not exist."""
    try:
        return file_path.stat().st_size
    except OSError:
        return 0


def read_text(file_path: Path) -> str:
    """Read a UTF-8 text file.

    Raises:
        OSError: If the file cannot be read.
    """
    return file_path.read_text(encoding=TEXT_ENCODING)


def make_dir_path(file_path: Path) -> None:
    """Create every missing directory leading up to a file.

    Raises:
        KilnProbeError: If a directory cannot be created.
    """
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as error:
        raise KilnProbeError(
            f"Failed to create directory {file_path.parent}: {error}. "
            "Check destination permissions and retry."
        ) from error


def write_text(file_path: Path, data: str) -> None:
    """Write UTF-8 text, creating parent directories as needed.

    Raises:
        KilnProbeError: If the file cannot be written.
    """
    make_dir_path(file_path)
    try:
        file_path.write_text(data, encoding=TEXT_ENCODING)
    except OSError as error:
        raise KilnProbeError(
            f"Failed to write {file_path}: {error}. Check destination permissions and retry."
        ) from error


def remove_file(file_path: Path) -> None:
    """Remove a file or directory tree; missing paths are not an error.

    Raises:
        KilnProbeError: If an existing path cannot be removed.
    """
    try:
        if file_path.is_dir() and not file_path.is_symlink():
            shutil.rmtree(file_path)
        else:
            file_path.unlink(missing_ok=True)
    except OSError as error:
        raise KilnProbeError(f"Failed to remove {file_path}: {error}.") from error


def remove_files(file_paths: Iterable[Path]) -> None:
    """Remove several files or directory trees."""
    for file_path in file_paths:
        remove_file(file_path)


def remove_dest(file_path: Path, source_root: Path) -> None:
    """Remove a destination path, refusing anything inside the source tree.

    Args:
        file_path: Destination file or directory.
        source_root: Source root that must never be touched.

    Raises:
        KilnProbeError: If the path points into the source tree.
    """
    if file_path == source_root or source_root in file_path.parents:
        raise KilnProbeError(
            f"Refusing to remove {file_path}: path is inside the source directory {source_root}."
        )
    remove_file(file_path)


def find_files(
    root: Path,
    pattern: str,
    include_prefix: str | None = None,
) -> list[Path]:
    """Find files under a root matching a glob pattern.

    Dot files are skipped, and so are files whose basename starts with
    ``include_prefix`` when one is given.

    Args:
        root: Directory to search.
        pattern: Glob pattern relative to root, like ``**/*.styl``.
        include_prefix: Optional basename prefix marking partials.

    Returns:
        Sorted absolute file paths.
    """
    if not root.is_dir():
        return []
    matches: list[Path] = []
    for file_path in root.glob(pattern):
        if not file_path.is_file() or _is_hidden(file_path, root):
            continue
        if include_prefix and file_path.name.startswith(include_prefix):
            continue
        matches.append(file_path)
    return sorted(matches)


def _is_hidden(file_path: Path, root: Path) -> bool:
    """Return whether any segment below root is a dot entry."""
    return any(part.startswith(".") for part in file_path.relative_to(root).parts)
