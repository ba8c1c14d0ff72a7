"""Provisioning engine exports for sharemirror."""

from __future__ import annotations

from .base import ProvisioningEngine
from .memory import InMemoryEngine

__all__ = ["ProvisioningEngine", "InMemoryEngine"]
