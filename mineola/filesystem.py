"""Path helpers."""

from __future__ import annotations

import os
import stat
from enum import Enum


class FileType(Enum):
    """Kind of an existing filesystem entry."""

    FILE = "file"
    DIR = "dir"


def join_paths(path0: str, path1: str) -> str:
    """Join two paths with '/' unless the first is empty or ends in a separator."""
    if not path0 or path0[-1] in "/\\":
        return path0 + path1
    return f"{path0}/{path1}"


def split_path(path: str) -> tuple[str, str]:
    """Split into (folder with trailing separator, file name)."""
    pos = max(path.rfind("/"), path.rfind("\\"))
    if pos < 0:
        return "", path
    return path[: pos + 1], path[pos + 1:]


def file_type(path: str) -> FileType | None:
    """Type of a regular file or directory at ``path``, None otherwise."""
    try:
        mode = os.stat(path).st_mode
    except (OSError, ValueError):
        return None
    if stat.S_ISDIR(mode):
        return FileType.DIR
    if stat.S_ISREG(mode):
        return FileType.FILE
    return None


def file_exists(path: str) -> bool:
    """True if ``path`` is an existing regular file or directory."""
    return file_type(path) is not None