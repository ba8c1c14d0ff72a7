"""Derive the remote directory set needed to host a list of files."""

from __future__ import annotations

import os
from typing import Iterable

from .classifier import relative_to_root, to_remote_path


def directories(files: Iterable[str], root: str) -> list[str]:
    """
    Return the unique remote directories that directly hold a file.

    Notes:
        - Root-level files contribute nothing; "" and "." are never returned.
        - Ancestors are not added on their own: "a/b/c.txt" yields "a/b" only.
        - Result is sorted lexicographically for reproducible plans.
    """
    abs_root = os.path.abspath(root)
    found: set[str] = set()

    for file in files:
        relative = relative_to_root(file, abs_root)
        dir_path = to_remote_path(os.path.dirname(relative))
        if dir_path in ("", ".") or dir_path == abs_root:
            continue
        found.add(dir_path)

    return sorted(found)
