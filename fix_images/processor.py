"""Batched, concurrent directory scan that renames misnamed images."""

import os
import stat
import asyncio
import logging
from enum import Enum
from pathlib import Path
from dataclasses import dataclass

from .file_detector import detect_image_format
from .renamer import (
    FileOperationError,
    current_extension,
    is_extension_correct,
    rename_in_place,
    target_name,
)


logger = logging.getLogger('fix-images')

DEFAULT_BATCH_SIZE = 20


class DirectoryError(OSError):
    """The target directory could not be listed."""

    def __init__(self, path: str | Path, message: str):
        self.path = Path(path)
        super().__init__(f'Invalid directory: {self.path} ({message})')


class FileOutcome(Enum):
    """What happened to a single directory entry."""
    PROCESSED = 'processed'
    RENAMED = 'renamed'
    SKIPPED = 'skipped'
    ERROR = 'error'
    IGNORED = 'ignored'


@dataclass
class ProcessingStats:
    """Counters for a directory run."""
    processed: int = 0
    renamed: int = 0
    errors: int = 0
    skipped: int = 0

    @property
    def examined(self) -> int:
        """Regular, non-hidden files that were looked at."""
        return self.processed + self.skipped + self.errors

    def record(self, outcome: FileOutcome):
        """Fold a single file outcome into the counters."""
        if outcome is FileOutcome.RENAMED:
            self.processed += 1
            self.renamed += 1
        elif outcome is FileOutcome.PROCESSED:
            self.processed += 1
        elif outcome is FileOutcome.SKIPPED:
            self.skipped += 1
        elif outcome is FileOutcome.ERROR:
            self.errors += 1


def list_candidates(directory: str | Path) -> list[str]:
    """
    List the non-hidden entry names of a directory (no recursion).

    Args:
        directory: Directory to list

    Returns:
        Entry names in listing order, without names starting with '.'

    Raises:
        DirectoryError: If the directory cannot be listed
    """
    try:
        names = os.listdir(directory)
    except OSError as e:
        raise DirectoryError(directory, e.strerror or str(e)) from e

    return [name for name in names if not name.startswith('.')]


def _is_regular_file(file_path: Path) -> bool:
    try:
        return stat.S_ISREG(os.stat(file_path).st_mode)
    except OSError as e:
        raise FileOperationError(file_path, f'stat failed: {e.strerror or e}') from e


async def process_entry(directory: Path, name: str) -> FileOutcome:
    """
    Detect and, if needed, rename a single directory entry.

    Never raises: failures are logged and reported as FileOutcome.ERROR.

    Args:
        directory: Directory holding the entry
        name: Entry name

    Returns:
        Outcome of the entry
    """
    file_path = directory / name

    try:
        if not await asyncio.to_thread(_is_regular_file, file_path):
            return FileOutcome.IGNORED

        result = await asyncio.to_thread(detect_image_format, file_path)

        if not result.is_recognized:
            if result.debug_hex:
                logger.debug(f'[SKIP] Unknown format: {name} (Hex: {result.debug_hex})')
            return FileOutcome.SKIPPED

        if is_extension_correct(current_extension(name), result.ext):
            return FileOutcome.PROCESSED

        new_path = await asyncio.to_thread(
            rename_in_place, file_path, target_name(name, result.ext)
        )
        if new_path is None:
            return FileOutcome.PROCESSED

        logger.info(f'[FIXED] {name} -> .{result.ext} \t[{result.label}]')
        return FileOutcome.RENAMED

    except Exception as e:
        logger.error(f'Error processing {name}: {e}')
        return FileOutcome.ERROR


async def process_directory_async(
    directory: str | Path,
    batch_size: int = DEFAULT_BATCH_SIZE
) -> ProcessingStats:
    """
    Scan a directory and fix the extension of every misnamed image.

    Files are handled in batches: all files of a batch run concurrently and
    a batch finishes completely before the next starts, which caps the
    number of open header handles at batch_size.

    Args:
        directory: Directory to process
        batch_size: Maximum number of files handled concurrently

    Returns:
        Accumulated statistics

    Raises:
        DirectoryError: If the directory cannot be listed
        ValueError: If batch_size is not positive
    """
    if batch_size < 1:
        raise ValueError(f'Batch size must be positive, got {batch_size}')

    directory = Path(directory)
    names = await asyncio.to_thread(list_candidates, directory)
    stats = ProcessingStats()

    for start in range(0, len(names), batch_size):
        batch = names[start:start + batch_size]
        outcomes = await asyncio.gather(
            *(process_entry(directory, name) for name in batch)
        )
        for outcome in outcomes:
            stats.record(outcome)

    logger.debug(
        f'Directory complete: {stats.processed} processed, {stats.renamed} renamed, '
        f'{stats.skipped} skipped, {stats.errors} errors'
    )

    return stats


def process_directory(
    directory: str | Path,
    batch_size: int = DEFAULT_BATCH_SIZE
) -> ProcessingStats:
    """Synchronous wrapper around process_directory_async."""
    return asyncio.run(process_directory_async(directory, batch_size))
