"""Remote object descriptors produced by the mirror planner."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True, frozen=True, order=True)
class RemoteDirectory:
    """A directory to create in the remote store, relative to the share root."""

    path: str

    @property
    def name(self) -> str:
        return posixpath.basename(self.path)

    @property
    def depth(self) -> int:
        return self.path.count("/") + 1


@dataclass(slots=True, frozen=True)
class RemoteFile:
    """
    A file to upload into the remote store.

    Notes:
        - remote_directory is None for files directly under the mirror root.
        - depends_on lists the directory paths that must exist before upload
          (the full directory set of the plan).
    """

    name: str
    source_path: str
    remote_directory: Optional[str] = None
    depends_on: tuple[str, ...] = ()

    @property
    def is_root(self) -> bool:
        return self.remote_directory is None

    @property
    def remote_path(self) -> str:
        if self.remote_directory is None:
            return self.name
        return posixpath.join(self.remote_directory, self.name)
