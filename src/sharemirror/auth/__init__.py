"""Public auth exports for sharemirror."""

from __future__ import annotations

from .auth_info import AuthInfo
from .credentials import build_drive_service, load_credentials

__all__ = ["AuthInfo", "build_drive_service", "load_credentials"]
