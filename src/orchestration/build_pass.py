"""Bounded build pass execution.

This module runs one lifecycle over many independent source files on a
small worker pool. A fatal error in one file never halts its siblings.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Callable, Iterable

from core.constants import BUILD_THREAD_NAME_PREFIX
from core.errors import KilnError
from core.logging_config import get_logger
from core.paths import ensure_paths_valid, file_extension
from core.types import BuildDescriptor, FileFailure, PassResult
from includes.registry import dialect_for_extension
from lifecycle.common_phase import decide_build, finish_descriptor
from lifecycle.context import BuildContext
from lifecycle.with_includes import prepare_with_includes
from staleness.cache import StalenessCache

_LOGGER = get_logger(__name__)

PrepareFunction = Callable[[BuildDescriptor, BuildContext], BuildDescriptor]


def prepare_for_extension(descriptor: BuildDescriptor, context: BuildContext) -> BuildDescriptor:
    """Decide staleness with the lifecycle matching the file type.

    Files written in an include dialect get the include-aware check;
    everything else is compared against its destination only.

    Args:
        descriptor: Descriptor to prepare in place.
        context: Shared build pass context.

    Returns:
        The prepared descriptor.
    """
    extension = file_extension(descriptor.source)
    if not context.extension_map.tasks_for(extension) and context.cache.mark_missing_tasks(
        extension
    ):
        _LOGGER.warning("build_tasks_missing", extension=extension, source=str(descriptor.source))
    dialect = dialect_for_extension(extension)
    if dialect is not None:
        return prepare_with_includes(descriptor, dialect, context)
    decide_build(descriptor, context, "decide")
    return finish_descriptor(descriptor, "decide")


def run_build_pass(
    sources: Iterable[Path],
    context: BuildContext,
    prepare: PrepareFunction = prepare_for_extension,
) -> PassResult:
    """Prepare every source file of one build pass.

    The staleness cache is reset before any work starts. Files complete
    in I/O order, not submission order.

    Args:
        sources: Source files to evaluate.
        context: Shared build pass context.
        prepare: Lifecycle applied to each file.

    Returns:
        Prepared descriptors and per-file failures.

    Raises:
        KilnConfigError: If the source and destination roots overlap.
    """
    ensure_paths_valid(context.config)
    context.cache.reset()
    ready: list[BuildDescriptor] = []
    failed: list[FileFailure] = []
    with ThreadPoolExecutor(
        max_workers=context.config.concurrency_limit,
        thread_name_prefix=BUILD_THREAD_NAME_PREFIX,
    ) as pool:
        futures = {
            pool.submit(prepare, BuildDescriptor.from_source(source), context): source
            for source in sources
        }
        for future in as_completed(futures):
            source = futures[future]
            try:
                ready.append(future.result())
            except KilnError as error:
                failed.append(_record_failure(source, error, context.cache))
    result = PassResult(ready=tuple(ready), failed=tuple(failed))
    _LOGGER.info(
        "build_pass_completed",
        file_count=len(futures),
        stale_count=len(result.stale),
        failed_count=len(result.failed),
        concurrency_limit=context.config.concurrency_limit,
    )
    return result


def _record_failure(source: Path, error: KilnError, cache: StalenessCache) -> FileFailure:
    """Capture a per-file failure, logging each distinct message once."""
    failure = FileFailure(source=source, error_type=type(error).__name__, message=str(error))
    if cache.mark_error_seen(failure.message):
        _LOGGER.error(
            "build_file_failed",
            source=str(source),
            error_type=failure.error_type,
            message=failure.message,
        )
    return failure
