"""Provisioning engine interface consumed by apply_plan."""

from __future__ import annotations

from typing import AbstractSet, Optional, Protocol


class ProvisioningEngine(Protocol):
    """
    Executes remote creations for a MirrorPlan.

    Handles are opaque strings chosen by the engine. Both methods raise
    ProviderError subclasses on failure; retry policy, if any, lives in the
    engine.
    """

    def create_directory(self, path: str) -> str:
        """Create the directory at path (relative to the destination root)."""
        ...

    def create_file(
        self,
        name: str,
        parent: Optional[str],
        source_path: str,
        depends_on: AbstractSet[str],
    ) -> str:
        """
        Upload source_path as name under the parent directory handle
        (None for the destination root) once every handle in depends_on
        exists.
        """
        ...
