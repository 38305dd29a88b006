"""
Temporary directory and file utilities.

Centralized helpers for the scratch space a dump needs:

    - the working directory the dump tree is assembled in
    - the archive output file

Cleanup operations are best-effort and error-tolerant.
"""

from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional, Union


def ensure_temp_dir(
    prefix: str = "config_dump_",
    root: Optional[Union[str, Path]] = None,
) -> Path:
    """
    Create and return a new, empty temporary directory.

    Parameters
    ----------
    prefix : str
        Prefix for the directory name.
    root : Optional[str | Path]
        Parent directory. Defaults to the system temp root.

    Returns
    -------
    Path
        Newly created temporary directory path.

    Caller is responsible for invoking cleanup_temp_dir() when finished.
    """
    if root is not None:
        Path(root).mkdir(parents=True, exist_ok=True)
    return Path(tempfile.mkdtemp(prefix=prefix, dir=root))


def new_temp_file(
    prefix: str = "config_dump_",
    suffix: str = "",
    root: Optional[Union[str, Path]] = None,
) -> Path:
    """
    Reserve a new, empty temporary file and return its path.

    The file exists (zero bytes) when this returns, so the name cannot be
    taken by anyone else.
    """
    if root is not None:
        Path(root).mkdir(parents=True, exist_ok=True)
    fd, name = tempfile.mkstemp(prefix=prefix, suffix=suffix, dir=root)
    os.close(fd)
    return Path(name)


def cleanup_temp_dir(path: Optional[Path]) -> None:
    """
    Remove a temporary directory and all its contents.

    Parameters
    ----------
    path : Optional[Path]
        Directory to remove. If None, does nothing.

    Notes
    -----
    Errors are ignored. Temp cleanup never decides the outcome of a dump.
    """
    if not path:
        return
    shutil.rmtree(path, ignore_errors=True)


def remove_file(path: Optional[Path]) -> None:
    """
    Delete a single file if it exists. Missing files are not an error.
    """
    if not path:
        return
    try:
        Path(path).unlink()
    except FileNotFoundError:
        pass


__all__ = [
    "ensure_temp_dir",
    "new_temp_file",
    "cleanup_temp_dir",
    "remove_file",
]
