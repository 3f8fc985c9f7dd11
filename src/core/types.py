"""Shared typed models.

This module defines the data models passed between the probe, include,
staleness, lifecycle, and orchestration layers to keep interfaces explicit.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

DescriptorState = Literal["unresolved", "needs_content", "has_content", "ready"]


@dataclass
class BuildDescriptor:
    """Unit of work flowing through one pipeline stage.

    Exactly one lifecycle function mutates a descriptor per stage.
    The ``state`` tag drives which branch of the lifecycle runs.

    Attributes:
        source: Absolute path of the originating file.
        dest: Output path, or None until computed from ``source``.
        data: In-memory content, or None when content lives on disk.
        build: Whether the file must be (re)compiled.
        state: Explicit lifecycle phase of this descriptor.
    """

    source: Path
    dest: Path | None = None
    data: str | None = None
    build: bool = False
    state: DescriptorState | None = None

    def __post_init__(self) -> None:
        if self.state is None:
            self.state = infer_state(self.dest, self.data)

    @classmethod
    def from_source(cls, source: Path) -> "BuildDescriptor":
        """Create a descriptor for a source file with nothing resolved."""
        return cls(source=source)

    @classmethod
    def from_dest(cls, source: Path, dest: Path) -> "BuildDescriptor":
        """Create a descriptor whose destination already exists on disk."""
        return cls(source=source, dest=dest)

    @classmethod
    def from_content(
        cls,
        source: Path,
        data: str,
        dest: Path | None = None,
    ) -> "BuildDescriptor":
        """Create a descriptor carrying content from a previous stage."""
        return cls(source=source, dest=dest, data=data)

    def reopen(self) -> DescriptorState:
        """Re-classify a ready descriptor so the next stage can consume it.

        Returns:
            The state the next lifecycle call will branch on.
        """
        if self.state == "ready":
            self.state = infer_state(self.dest, self.data)
        return self.state  # type: ignore[return-value]


def infer_state(dest: Path | None, data: str | None) -> DescriptorState:
    """Derive the initial lifecycle state from populated fields.

    Args:
        dest: Destination path if supplied.
        data: In-memory content if supplied.

    Returns:
        Lifecycle state for the descriptor.
    """
    if data is not None:
        return "has_content"
    if dest is not None:
        return "needs_content"
    return "unresolved"


@dataclass(frozen=True)
class FileTime:
    """Existence and modification time of one path.

    Attributes:
        exists: Whether a stat call succeeded.
        mtime: Modification time in epoch milliseconds, 0 when missing.
    """

    exists: bool
    mtime: float = 0.0


@dataclass(frozen=True)
class FilePairTimes:
    """Probe result for a source and destination pair."""

    source: FileTime
    dest: FileTime


@dataclass(frozen=True)
class FileFailure:
    """A fatal per-file error captured during a build pass.

    Attributes:
        source: Source file whose lifecycle failed.
        error_type: Exception class name.
        message: Human-readable error message.
    """

    source: Path
    error_type: str
    message: str


@dataclass(frozen=True)
class PassResult:
    """Outcome of one build pass over a set of files.

    Attributes:
        ready: Prepared descriptors in completion order.
        failed: Fatal per-file failures in completion order.
    """

    ready: tuple[BuildDescriptor, ...] = ()
    failed: tuple[FileFailure, ...] = ()

    @property
    def stale(self) -> tuple[BuildDescriptor, ...]:
        """Return prepared descriptors that need a rebuild."""
        return tuple(descriptor for descriptor in self.ready if descriptor.build)


@dataclass(frozen=True)
class IncludeTarget:
    """A raw include token extracted from file content.

    Attributes:
        raw: Target text as written in the source file.
        literal: False when the target is a dynamic expression.
    """

    raw: str
    literal: bool = True
