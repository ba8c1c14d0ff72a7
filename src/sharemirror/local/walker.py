"""Recursive enumeration of regular files under a mirror root."""

from __future__ import annotations

import logging
import os

from sharemirror.errors import LocalReadError, NotADirectoryError, NotFoundError

logger = logging.getLogger(__name__)


def validate_root(root: str) -> str:
    """
    Return the absolute, normalised form of root.

    Raises:
        NotFoundError: if root does not exist.
        NotADirectoryError: if root exists but is not a directory.
    """
    abs_root = os.path.abspath(root)
    if not os.path.lexists(abs_root):
        raise NotFoundError(f"Mirror root does not exist: {abs_root}", details={"root": abs_root})
    if not os.path.isdir(abs_root):
        raise NotADirectoryError(
            f"Mirror root is not a directory: {abs_root}",
            details={"root": abs_root},
        )
    return abs_root


def walk(root: str) -> list[str]:
    """
    List every regular file under root, at any depth.

    Entries are sorted by name at each level, so the same tree always yields
    the same order. Symbolic links are skipped and never followed.

    Returns:
        Absolute file paths.

    Raises:
        LocalReadError: if a directory under root cannot be listed.
    """
    abs_root = validate_root(root)
    files = _walk_dir(abs_root)
    logger.debug("Walked %s: %d files", abs_root, len(files))
    return files


def _walk_dir(directory: str) -> list[str]:
    results: list[str] = []
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as exc:
        raise LocalReadError(
            f"Cannot list directory: {directory}",
            details={"path": directory},
            cause=exc,
        ) from exc

    for entry in entries:
        if entry.is_symlink():
            logger.debug("Skipping symlink: %s", entry.path)
            continue
        if entry.is_dir(follow_symlinks=False):
            results.extend(_walk_dir(entry.path))
        elif entry.is_file(follow_symlinks=False):
            results.append(entry.path)

    return results
