"""Kiln CLI entry points.
This module exposes staleness and include inspection commands.
It maps argparse commands onto engine calls.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
import sys
from typing import Any, Sequence

from core.config import KilnConfig, parse_concurrency_limit
from core.errors import KilnConfigError, KilnIncludeError
from core.paths import file_extension, paths_are_valid, trim_dest, trim_source
from includes.registry import INCLUDE_FILE_TYPES, dialect_for_extension
from includes.resolver import resolve_file_includes
from lifecycle.context import BuildContext
from orchestration.build_pass import run_build_pass
from orchestration.discovery import discover_sources, sources_for_paths


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="kiln", description="Kiln incremental build checker")
    parser.add_argument("--source", help="Override KILN_SOURCE_ROOT for this command")
    parser.add_argument("--dest", help="Override KILN_DEST_ROOT for this command")
    parser.add_argument(
        "--force-build",
        action="store_true",
        help="Treat every file as stale regardless of modification times",
    )
    parser.add_argument("--concurrency", help="Override KILN_CONCURRENCY for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_validate_command(subparsers)
    _add_check_command(subparsers)
    _add_includes_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Kiln CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = _build_config(args)
    except KilnConfigError as error:
        parser.error(str(error))
        return 2
    if args.command == "validate":
        return _run_validate_command(config)
    if args.command == "check":
        return _run_check_command(config, args)
    if args.command == "includes":
        return _run_includes_command(config, args)
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_config(args: argparse.Namespace) -> KilnConfig:
    """Build config from env with optional CLI overrides.

    Args:
        args: Parsed CLI args.

    Returns:
        Configured runtime config.
    """
    config = KilnConfig.from_env()
    if args.source:
        config = replace(config, source_root=Path(args.source).expanduser().resolve())
    if args.dest:
        config = replace(config, dest_root=Path(args.dest).expanduser().resolve())
    if args.force_build:
        config = replace(config, force_build=True)
    if args.concurrency:
        config = replace(config, concurrency_limit=parse_concurrency_limit(args.concurrency))
    return config


def _run_validate_command(config: KilnConfig) -> int:
    """Handle validate command.

    Args:
        config: Runtime config.

    Returns:
        Exit code.
    """
    if paths_are_valid(config.source_root, config.dest_root):
        print("ok")
        return 0
    print(
        f"Source root {config.source_root} and destination root {config.dest_root} overlap.",
        file=sys.stderr,
    )
    return 2


def _run_check_command(config: KilnConfig, args: argparse.Namespace) -> int:
    """Handle check command.

    Args:
        config: Runtime config.
        args: Parsed CLI args.

    Returns:
        Exit code, 1 when any file failed.
    """
    try:
        sources = sources_for_paths(args.paths, config) if args.paths else discover_sources(config)
        result = run_build_pass(sources, BuildContext(config=config))
    except KilnConfigError as error:
        print(str(error), file=sys.stderr)
        return 2
    for descriptor in sorted(result.stale, key=lambda item: item.source):
        dest = trim_dest(descriptor.dest, config) if descriptor.dest is not None else "-"
        print(f"{trim_source(descriptor.source, config)}\t{dest}")
    for failure in result.failed:
        print(f"{failure.error_type}: {failure.message}", file=sys.stderr)
    return 1 if result.failed else 0


def _run_includes_command(config: KilnConfig, args: argparse.Namespace) -> int:
    """Handle includes command.

    Args:
        config: Runtime config.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    origin = Path(args.file).expanduser().resolve()
    dialect = dialect_for_extension(file_extension(origin))
    if dialect is None:
        print(
            f"No include dialect for {origin.name}. Supported: {', '.join(INCLUDE_FILE_TYPES)}.",
            file=sys.stderr,
        )
        return 2
    try:
        include_paths = resolve_file_includes(origin, dialect, config)
    except KilnIncludeError as error:
        print(str(error), file=sys.stderr)
        return 1
    for include_path in include_paths:
        print(include_path)
    return 0


def _add_validate_command(subparsers: Any) -> None:
    """Register validate subcommand."""
    subparsers.add_parser("validate", help="Check that source and destination roots do not overlap")


def _add_check_command(subparsers: Any) -> None:
    """Register check subcommand."""
    parser = subparsers.add_parser("check", help="List source files whose output is stale")
    parser.add_argument(
        "paths",
        nargs="*",
        help="Optional source files or folders; defaults to the whole source tree",
    )


def _add_includes_command(subparsers: Any) -> None:
    """Register includes subcommand."""
    parser = subparsers.add_parser("includes", help="Print the transitive includes of a file")
    parser.add_argument("file", help="Source file written in an include dialect")
