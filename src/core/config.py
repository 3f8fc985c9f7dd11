"""Runtime configuration model for Kiln.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    DEFAULT_CONCURRENCY_LIMIT,
    DEFAULT_DEST_ROOT,
    DEFAULT_INCLUDE_PREFIX,
    DEFAULT_SOURCE_ROOT,
    MAX_CONCURRENCY_LIMIT,
    TRUTHY_ENV_VALUES,
)
from core.errors import KilnConfigError


@dataclass(frozen=True)
class KilnConfig:
    """Validated runtime configuration.

    Attributes:
        source_root: Root directory holding source files.
        dest_root: Root directory receiving built files.
        concurrency_limit: Number of files prepared in parallel.
        force_build: Rebuild every file regardless of modification times.
        include_prefix: Basename prefix marking include-only partials.
    """

    source_root: Path
    dest_root: Path
    concurrency_limit: int = DEFAULT_CONCURRENCY_LIMIT
    force_build: bool = False
    include_prefix: str = DEFAULT_INCLUDE_PREFIX

    @classmethod
    def from_env(cls) -> "KilnConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            KilnConfigError: If environment values are invalid.
        """
        source_root_value = os.getenv("KILN_SOURCE_ROOT", str(DEFAULT_SOURCE_ROOT))
        dest_root_value = os.getenv("KILN_DEST_ROOT", str(DEFAULT_DEST_ROOT))
        concurrency_value = os.getenv("KILN_CONCURRENCY", str(DEFAULT_CONCURRENCY_LIMIT))
        force_build_value = os.getenv("KILN_FORCE_BUILD", "")
        include_prefix = os.getenv("KILN_INCLUDE_PREFIX", DEFAULT_INCLUDE_PREFIX)
        return cls(
            source_root=Path(source_root_value).expanduser().resolve(),
            dest_root=Path(dest_root_value).expanduser().resolve(),
            concurrency_limit=parse_concurrency_limit(concurrency_value),
            force_build=force_build_value.strip().lower() in TRUTHY_ENV_VALUES,
            include_prefix=include_prefix,
        )


def parse_concurrency_limit(raw_value: str) -> int:
    """Parse and bound-check a concurrency limit value.

    Args:
        raw_value: Raw string from environment or CLI.

    Returns:
        Parsed worker count.

    Raises:
        KilnConfigError: If value is not an integer within bounds.
    """
    try:
        limit = int(raw_value)
    except ValueError as error:
        raise KilnConfigError(
            "Invalid KILN_CONCURRENCY value: "
            f"expected integer, got '{raw_value}'. "
            "Set KILN_CONCURRENCY to a numeric value."
        ) from error
    if not 1 <= limit <= MAX_CONCURRENCY_LIMIT:
        raise KilnConfigError(
            f"Invalid KILN_CONCURRENCY value: {limit} is outside 1..{MAX_CONCURRENCY_LIMIT}. "
            "Pick a small worker count since file I/O dominates."
        )
    return limit
