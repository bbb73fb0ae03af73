#!/usr/bin/env python3
"""
File system utilities for pfamsum.
Provides safe file operations with error handling.
"""
import os
import logging
import tempfile
from contextlib import contextmanager
from typing import Optional, Generator, TextIO

from pfamsum.exceptions import FileOperationError

logger = logging.getLogger("pfamsum.utils.file")


def ensure_dir(dir_path: str) -> None:
    """Create a directory (and parents) if it does not exist

    Raises:
        FileOperationError: If the directory cannot be created
    """
    if not dir_path:
        return
    try:
        os.makedirs(dir_path, exist_ok=True)
    except OSError as e:
        error_msg = f"Error creating directory {dir_path}: {str(e)}"
        logger.error(error_msg)
        raise FileOperationError(error_msg, {"dir_path": dir_path}) from e


@contextmanager
def atomic_write(file_path: str, encoding: Optional[str] = 'utf-8',
                 newline: Optional[str] = None) -> Generator[TextIO, None, None]:
    """Write a text file through a temporary file in the same directory

    The target only appears once the block completes without error.

    Raises:
        FileOperationError: If the file cannot be written
    """
    base_dir = os.path.dirname(file_path) or '.'
    ensure_dir(base_dir)

    try:
        fd, temp_path = tempfile.mkstemp(suffix=f".{os.path.basename(file_path)}.tmp", dir=base_dir)
    except OSError as e:
        raise FileOperationError(f"Error writing file {file_path}: {str(e)}",
                                 {"file_path": file_path}) from e

    try:
        with os.fdopen(fd, 'w', encoding=encoding, newline=newline) as handle:
            yield handle
        os.replace(temp_path, file_path)
        logger.debug(f"Atomically wrote to file: {file_path}")
    except OSError as e:
        error_msg = f"Error writing file {file_path}: {str(e)}"
        logger.error(error_msg)
        raise FileOperationError(error_msg, {"file_path": file_path}) from e
    finally:
        if os.path.exists(temp_path):
            os.remove(temp_path)
