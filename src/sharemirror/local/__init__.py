"""Local filesystem side of sharemirror (walk, classify, directory set)."""

from __future__ import annotations

from .classifier import Classification, classify, relative_to_root, to_remote_path
from .dirset import directories
from .walker import validate_root, walk

__all__ = [
    "Classification",
    "classify",
    "directories",
    "relative_to_root",
    "to_remote_path",
    "validate_root",
    "walk",
]
