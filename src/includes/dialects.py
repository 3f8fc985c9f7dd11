"""Per-dialect include extraction strategies.

This module knows how each templating or stylesheet language spells an
include, and which candidate files a raw include target may refer to.
Traversal, deduplication, and cycle safety live in ``includes.resolver``.
"""

from __future__ import annotations

import os
from pathlib import Path
import re

from core.config import KilnConfig
from core.types import IncludeTarget

_QUOTED_LITERAL = re.compile(r"""^(['"`])(?P<body>[^'"`]*)\1$""")
_BARE_LITERAL = re.compile(r"^[\w@~.*\-/\\]+$")
_WILDCARD = "*"


class IncludeDialect:
    """Base strategy shared by every include dialect.

    Subclasses provide ``pattern`` and may override target extraction or
    candidate expansion. The default behaviour appends the dialect's
    default extension to extension-less targets.
    """

    name = ""
    default_extension = ""
    expressions = False
    pattern: re.Pattern[str] = re.compile(r"(?!)")

    def extract_targets(self, content: str) -> list[IncludeTarget]:
        """Return raw include targets in order of appearance.

        Args:
            content: File content to scan.

        Returns:
            Include targets; dialects that accept expressions flag
            dynamic ones as non-literal.
        """
        targets: list[IncludeTarget] = []
        for match in self.pattern.finditer(content):
            captured = match.group(1).strip()
            if not captured:
                continue
            if self.expressions:
                targets.append(_literal_target(captured))
            else:
                targets.append(IncludeTarget(raw=captured))
        return targets

    def candidate_paths(self, raw: str, origin: Path, config: KilnConfig) -> list[Path]:
        """Return absolute candidate paths for one literal target.

        Args:
            raw: Literal include target.
            origin: File containing the include statement.
            config: Runtime configuration holding the source root.

        Returns:
            Candidate paths in the order they should be probed.
        """
        target = normalize_target(raw, origin, config.source_root)
        if not target.suffix:
            target = target.with_name(f"{target.name}.{self.default_extension}")
        return [target]


class EjsDialect(IncludeDialect):
    """EJS ``<% include %>`` statements in every supported spelling."""

    name = "ejs"
    default_extension = "ejs"
    expressions = True
    pattern = re.compile(r"(?:<%[-= ]*include[( ]*)([^,)%]*)(?:,?.*%>)", re.IGNORECASE)


class JadeDialect(IncludeDialect):
    """Jade and Pug ``include`` lines, optionally with a filter."""

    pattern = re.compile(r"^\s*include:?[^ ]* (.*)$", re.IGNORECASE | re.MULTILINE)

    def __init__(self, name: str = "jade") -> None:
        self.name = name
        self.default_extension = name


class LessDialect(IncludeDialect):
    """Less ``@import "file";`` statements."""

    name = "less"
    default_extension = "less"
    pattern = re.compile(r"""^\s*@import ["'](.*)["'].*$""", re.IGNORECASE | re.MULTILINE)


class SassDialect(IncludeDialect):
    """Sass and SCSS ``@import`` statements.

    One statement may list several comma-separated targets. Targets
    without an extension may be either syntax, and every target may
    also exist as an include-prefixed partial.
    """

    name = "sass"
    default_extension = "scss"
    pattern = re.compile(r"^(?:\s)*@import ?(.*)", re.IGNORECASE | re.MULTILINE)

    def extract_targets(self, content: str) -> list[IncludeTarget]:
        targets: list[IncludeTarget] = []
        for match in self.pattern.finditer(content):
            statement = re.sub(r"""['";]""", "", match.group(1))
            statement = re.sub(r"//.*", "", statement)
            statement = re.sub(r"/\*.*", "", statement)
            for raw in statement.split(","):
                raw = raw.strip()
                if raw and not _is_plain_css_import(raw):
                    targets.append(IncludeTarget(raw=raw))
        return targets

    def candidate_paths(self, raw: str, origin: Path, config: KilnConfig) -> list[Path]:
        target = normalize_target(raw, origin, config.source_root)
        if target.suffix:
            check_files = [target]
        else:
            check_files = [
                target.with_name(f"{target.name}.scss"),
                target.with_name(f"{target.name}.sass"),
            ]
        candidates: list[Path] = []
        for check_file in check_files:
            if not check_file.name.startswith(config.include_prefix):
                candidates.append(check_file.with_name(config.include_prefix + check_file.name))
            candidates.append(check_file)
        return candidates


class StylusDialect(IncludeDialect):
    """Stylus ``@import`` and ``@require`` statements.

    Plain ``.css`` imports are left to the browser, extension-less
    targets may name an ``index.styl`` inside a folder, and targets with
    a wildcard are expanded against the filesystem.
    """

    name = "styl"
    default_extension = "styl"
    expressions = True
    pattern = re.compile(r"^(?:\s)*@(?:require|import)([^;\n]*).*$", re.IGNORECASE | re.MULTILINE)

    def extract_targets(self, content: str) -> list[IncludeTarget]:
        targets = super().extract_targets(content)
        return [
            target for target in targets if not (target.literal and _is_plain_css_import(target.raw))
        ]

    def candidate_paths(self, raw: str, origin: Path, config: KilnConfig) -> list[Path]:
        target = normalize_target(raw, origin, config.source_root)
        if _WILDCARD in str(target):
            pattern = re.sub(r"\.styl", "", str(target), flags=re.IGNORECASE) + ".styl"
            return expand_glob(pattern)
        if target.suffix:
            return [target]
        return [
            target.with_name(f"{target.name}.styl"),
            target / "index.styl",
        ]


def normalize_target(raw: str, origin: Path, source_root: Path) -> Path:
    """Turn a raw include target into an absolute path.

    Targets already spelled under the source root are kept; anything else
    is resolved against the directory of the including file.

    Args:
        raw: Literal include target.
        origin: File containing the include statement.
        source_root: Source tree root.

    Returns:
        Normalized absolute path.
    """
    if raw.startswith(str(source_root)):
        return Path(os.path.normpath(raw))
    relative = raw.lstrip("/\\")
    return Path(os.path.normpath(os.path.join(origin.parent, relative)))


def expand_glob(pattern: str) -> list[Path]:
    """Expand an absolute glob pattern into sorted file paths."""
    parts = Path(pattern).parts
    anchor_length = next(
        index for index, part in enumerate(parts) if _WILDCARD in part
    )
    anchor = Path(*parts[:anchor_length])
    relative_pattern = str(Path(*parts[anchor_length:]))
    if not anchor.is_dir():
        return []
    return sorted(path for path in anchor.glob(relative_pattern) if path.is_file())


def _literal_target(captured: str) -> IncludeTarget:
    """Classify a captured include expression as literal or dynamic."""
    text = captured.strip()
    quoted = _QUOTED_LITERAL.match(text)
    if quoted:
        body = quoted.group("body").strip()
        return IncludeTarget(raw=body, literal="${" not in body)
    return IncludeTarget(raw=text, literal=bool(_BARE_LITERAL.match(text)))


def _is_plain_css_import(raw: str) -> bool:
    lowered = raw.lower()
    return (
        lowered.endswith(".css")
        or lowered.startswith(("http://", "https://", "//"))
        or lowered.startswith("url(")
    )


EJS = EjsDialect()
JADE = JadeDialect("jade")
PUG = JadeDialect("pug")
LESS = LessDialect()
SASS = SassDialect()
STYLUS = StylusDialect()
