"""Public model exports for sharemirror."""

from __future__ import annotations

from .plan import MirrorPlan
from .remote import RemoteDirectory, RemoteFile
from .results import ApplyResult, ApplyStatus, OperationResult, OperationStatus

__all__ = [
    "RemoteDirectory",
    "RemoteFile",
    "MirrorPlan",
    "OperationStatus",
    "ApplyStatus",
    "OperationResult",
    "ApplyResult",
]
