"""Build context passed to every lifecycle call.

This module bundles the configuration, extension tables, and staleness
cache that one build pass shares across its units of work.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from core.config import KilnConfig
from core.extension_map import ExtensionMap
from staleness.cache import StalenessCache


@dataclass
class BuildContext:
    """Shared state for one orchestrated build pass."""

    config: KilnConfig
    extension_map: ExtensionMap = field(default_factory=ExtensionMap)
    cache: StalenessCache = field(default_factory=StalenessCache)
