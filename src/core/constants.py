"""Core constants used across Kiln modules.

This module centralizes non-domain-specific constants.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_SOURCE_ROOT = Path("source")
DEFAULT_DEST_ROOT = Path("dest")
DEFAULT_CONCURRENCY_LIMIT = 1
MAX_CONCURRENCY_LIMIT = 16
DEFAULT_INCLUDE_PREFIX = "_"
DEFAULT_DISCOVERY_PATTERN = "**/*"
TEXT_ENCODING = "utf-8"
WILDCARD_EXTENSION = "*"
PROBE_THREAD_NAME_PREFIX = "kiln-probe"
BUILD_THREAD_NAME_PREFIX = "kiln-build"
TRUTHY_ENV_VALUES = ("1", "true", "yes", "on")
DEFAULT_LOG_LEVEL = "info"

DEFAULT_DEST_TO_SOURCE_EXT: dict[str, tuple[str, ...]] = {
    "css": ("less", "sass", "scss", "styl"),
    "gz": (WILDCARD_EXTENSION,),
    "html": ("ejs", "jade", "md", "pug"),
    "js": ("coffee", "jsx"),
    "map": (WILDCARD_EXTENSION,),
}

COPY_ONLY_EXTENSIONS = (
    "7z", "ai", "asp", "aspx", "c", "cfm", "cfc", "csv", "doc", "docx",
    "eot", "eps", "exe", "flv", "gz", "h", "ico", "ini", "iso", "json",
    "m4a", "map", "mid", "midi", "mov", "mp3", "mp4", "ogg", "otf", "pdf",
    "php", "pl", "ppt", "pptx", "psd", "py", "rb", "rss", "svg", "swf",
    "tar", "ttf", "txt", "vtt", "wav", "weba", "webm", "woff", "xls",
    "xlsx", "xml", "zip",
)

DEFAULT_SOURCE_TO_DEST_TASKS: dict[str, tuple[str, ...]] = {
    "coffee": ("coffeeScript", "js"),
    "concat": ("concat",),
    "css": ("css",),
    "ejs": ("ejs", "html"),
    "gif": ("gif",),
    "htm": ("html",),
    "html": ("html",),
    "jade": ("jade", "html"),
    "jpg": ("jpg",),
    "jpeg": ("jpg",),
    "js": ("js",),
    "jsx": ("jsx",),
    "less": ("less",),
    "md": ("markdown", "html"),
    "png": ("png",),
    "pug": ("pug", "html"),
    "sass": ("sass",),
    "scss": ("sass",),
    "styl": ("stylus",),
    **{extension: ("copy",) for extension in COPY_ONLY_EXTENSIONS},
}
