"""Include dialect lookup by file extension."""

from __future__ import annotations

from includes.dialects import EJS, JADE, LESS, PUG, SASS, STYLUS, IncludeDialect

_DIALECTS_BY_EXTENSION: dict[str, IncludeDialect] = {
    "ejs": EJS,
    "jade": JADE,
    "less": LESS,
    "pug": PUG,
    "sass": SASS,
    "scss": SASS,
    "styl": STYLUS,
}

INCLUDE_FILE_TYPES = tuple(sorted(_DIALECTS_BY_EXTENSION))


def dialect_for_extension(extension: str) -> IncludeDialect | None:
    """Return the include dialect for a file extension, if it has one."""
    return _DIALECTS_BY_EXTENSION.get(extension.lower())
