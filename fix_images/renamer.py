"""In-place file renaming with skip-if-exists collision handling."""

import os
import logging
from pathlib import Path
from typing import Optional


logger = logging.getLogger('fix-images')

# Extensions that are equivalent to the detected canonical one
EQUIVALENT_EXTENSIONS = {
    'jpg': {'jpeg'},
}


class FileOperationError(OSError):
    """A stat or rename of a specific file failed."""

    def __init__(self, path: str | Path, message: str):
        self.path = Path(path)
        super().__init__(f'{self.path.name}: {message}')


def current_extension(name: str) -> str:
    """
    Get the extension of a file name, lower-cased and without the dot.

    Args:
        name: File name

    Returns:
        Extension such as 'png', or '' if the name has none
    """
    return os.path.splitext(name)[1].lstrip('.').lower()


def is_extension_correct(current: str, detected: str) -> bool:
    """
    Check whether the current extension already matches the detected one.

    JPEG files named '.jpeg' are treated as correct for the 'jpg' type.

    Args:
        current: Current extension (lower-case, no dot)
        detected: Detected canonical extension

    Returns:
        True if no rename is needed
    """
    if current == detected:
        return True
    return current in EQUIVALENT_EXTENSIONS.get(detected, set())


def target_name(name: str, ext: str) -> str:
    """Build the corrected file name: the name minus its extension plus ext."""
    return f'{os.path.splitext(name)[0]}.{ext}'


def rename_in_place(file_path: str | Path, new_name: str) -> Optional[Path]:
    """
    Rename a file within its own directory.

    Existing files are never overwritten: if the target name is taken the
    rename is skipped.

    Args:
        file_path: Current file path
        new_name: New file name (no directory part)

    Returns:
        New path if renamed, None if the name is unchanged or the target exists

    Raises:
        FileOperationError: If the rename itself fails
    """
    path = Path(file_path)

    if new_name == path.name:
        return None

    new_path = path.with_name(new_name)

    if os.path.lexists(new_path):
        logger.debug(f'Target exists, skipping: {new_name}')
        return None

    try:
        os.rename(path, new_path)
    except OSError as e:
        raise FileOperationError(path, f'rename failed: {e.strerror or e}') from e

    return new_path
