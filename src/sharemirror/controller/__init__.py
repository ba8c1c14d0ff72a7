"""Remote store engines for sharemirror."""

from __future__ import annotations

from .drive_engine import GoogleDriveEngine

__all__ = ["GoogleDriveEngine"]
