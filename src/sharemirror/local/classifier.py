"""Classify local files as root-level or nested relative to a mirror root."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from sharemirror.errors import PathEscapeError


@dataclass(slots=True, frozen=True)
class Classification:
    """
    Where a local file lands in the remote store.

    remote_dir is None for files directly under the root, otherwise a
    POSIX-style path relative to the root (never "" or ".").
    """

    is_root: bool
    remote_dir: Optional[str]
    name: str


def to_remote_path(relative: str) -> str:
    """Convert an OS-relative path to the remote POSIX form."""
    if os.sep != "/":
        relative = relative.replace(os.sep, "/")
    return relative


def relative_to_root(file: str, root: str) -> str:
    """
    Return file's path relative to root.

    Raises:
        PathEscapeError: if file is root itself or lies outside root.
    """
    abs_file = os.path.abspath(file)
    abs_root = os.path.abspath(root)

    try:
        common = os.path.commonpath([abs_file, abs_root])
    except ValueError as exc:
        # Different drives on Windows.
        raise PathEscapeError(
            f"File is not under mirror root: {abs_file}",
            details={"file": abs_file, "root": abs_root},
            cause=exc,
        ) from exc

    if common != abs_root or abs_file == abs_root:
        raise PathEscapeError(
            f"File is not under mirror root: {abs_file}",
            details={"file": abs_file, "root": abs_root},
        )
    return os.path.relpath(abs_file, abs_root)


def classify(file: str, root: str) -> Classification:
    relative = relative_to_root(file, root)
    name = os.path.basename(relative)

    remote_dir = to_remote_path(os.path.dirname(relative))
    if remote_dir in ("", "."):
        return Classification(is_root=True, remote_dir=None, name=name)
    return Classification(is_root=False, remote_dir=remote_dir, name=name)
