"""Kiln exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class KilnError(Exception):
    """Base exception for all Kiln failures."""


class KilnConfigError(KilnError):
    """Raised for invalid runtime configuration."""


class DestinationInSourceTreeError(KilnConfigError):
    """Raised when a destination path points inside the source tree."""


class KilnBuildError(KilnError):
    """Raised when a single file cannot be prepared for building."""


class MissingSourceError(KilnBuildError):
    """Raised when a source file vanished before its staleness check."""


class MissingDestinationError(KilnBuildError):
    """Raised when a caller-asserted destination file cannot be read."""


class KilnIncludeError(KilnError):
    """Raised when an include origin file cannot be read."""


class KilnProbeError(KilnError):
    """Raised for filesystem write or removal failures."""
