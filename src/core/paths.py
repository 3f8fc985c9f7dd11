"""Source and destination path mapping.

This module translates paths between the source and destination trees.
It also validates that the two roots never overlap.
"""

from __future__ import annotations

import os
from pathlib import Path

from core.config import KilnConfig
from core.errors import KilnConfigError
from core.extension_map import ExtensionMap


def file_extension(file_path: Path | str) -> str:
    """Return the lower-case extension of a path without its dot."""
    return Path(file_path).suffix.lstrip(".").lower()


def change_extension(file_path: Path, new_extension: str) -> Path:
    """Replace the last extension of a path.

    Args:
        file_path: Path like ``/files/index.jade``.
        new_extension: Extension like ``html``.

    Returns:
        Path like ``/files/index.html``.
    """
    return file_path.with_suffix(f".{new_extension}")


def remove_extension(file_path: Path) -> Path:
    """Strip one extension, so ``index.html.gz`` becomes ``index.html``."""
    return file_path.with_suffix("")


def source_to_dest(source: Path, config: KilnConfig, extension_map: ExtensionMap) -> Path:
    """Convert a source path to its destination equivalent.

    Args:
        source: File path under the source root.
        config: Runtime configuration holding both roots.
        extension_map: Extension tables used to rewrite the extension.

    Returns:
        Destination path with the mapped extension.
    """
    dest = _swap_root(source, config.source_root, config.dest_root)
    dest_ext = extension_map.dest_extension_for(file_extension(source))
    if dest_ext is not None:
        dest = change_extension(dest, dest_ext)
    return dest


def dest_to_source(dest: Path, config: KilnConfig) -> Path:
    """Convert a destination path to its source equivalent.

    Only the root is swapped since a destination extension cannot be
    inverted in general.
    """
    return _swap_root(dest, config.dest_root, config.source_root)


def paths_are_valid(source_root: Path | str, dest_root: Path | str) -> bool:
    """Return whether the roots differ and neither contains the other.

    Args:
        source_root: Source directory.
        dest_root: Destination directory.

    Returns:
        True when a build pass may safely run.
    """
    source = _with_trailing_separator(source_root)
    dest = _with_trailing_separator(dest_root)
    if source == dest:
        return False
    return not (source.startswith(dest) or dest.startswith(source))


def ensure_paths_valid(config: KilnConfig) -> None:
    """Refuse to run a pass when source and destination roots overlap.

    Raises:
        KilnConfigError: If the roots are equal or nested.
    """
    if paths_are_valid(config.source_root, config.dest_root):
        return
    raise KilnConfigError(
        f"Source root {config.source_root} and destination root {config.dest_root} "
        "must differ and must not be nested. Fix KILN_SOURCE_ROOT/KILN_DEST_ROOT and retry."
    )


def in_source(file_path: Path, source_root: Path) -> bool:
    """Return whether a path lives inside the source tree."""
    return file_path == source_root or source_root in file_path.parents


def trim_source(file_path: Path, config: KilnConfig) -> str:
    """Return a display path starting at the source directory name.

    A path like ``/web/project/source/index.ejs`` becomes ``/source/index.ejs``.
    """
    return _trim_to_root_name(file_path, config.source_root)


def trim_dest(file_path: Path, config: KilnConfig) -> str:
    """Return a display path starting at the destination directory name."""
    return _trim_to_root_name(file_path, config.dest_root)


def _swap_root(file_path: Path, from_root: Path, to_root: Path) -> Path:
    """Re-root a path, leaving paths outside ``from_root`` unchanged."""
    try:
        relative = file_path.relative_to(from_root)
    except ValueError:
        return file_path
    return to_root / relative


def _trim_to_root_name(file_path: Path, root: Path) -> str:
    try:
        relative = file_path.relative_to(root.parent)
    except ValueError:
        return file_path.as_posix()
    return "/" + relative.as_posix()


def _with_trailing_separator(root: Path | str) -> str:
    normalized = os.path.normpath(str(root))
    return normalized.rstrip(os.sep) + os.sep
