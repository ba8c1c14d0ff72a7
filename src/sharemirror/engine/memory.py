"""In-memory provisioning engine used for dry runs and tests."""

from __future__ import annotations

import logging
import posixpath
from dataclasses import dataclass
from typing import AbstractSet, Optional

from sharemirror.errors import ConflictError, InvalidArgumentError, RemoteNotFoundError
from sharemirror.util.ids import resource_id

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class StoredFile:
    name: str
    parent: Optional[str]
    source_path: str


class InMemoryEngine:
    """
    Records directory and file creations without touching any remote store.

    Handles are derived from the destination and path, so two runs over the
    same plan produce the same handles.
    """

    def __init__(self, destination: str = "memory") -> None:
        self.destination = destination
        self.directories: dict[str, str] = {}
        self.files: dict[str, StoredFile] = {}
        self.calls: list[tuple] = []

    def create_directory(self, path: str) -> str:
        self.calls.append(("create_directory", path))
        if not path or path in (".", "/"):
            raise InvalidArgumentError("Directory path must be non-empty", details={"path": path})

        handle = resource_id("memdir", self.destination, path)
        if handle in self.directories:
            raise ConflictError("Directory already exists", details={"path": path})
        self.directories[handle] = path
        logger.debug("Created directory %s -> %s", path, handle)
        return handle

    def create_file(
        self,
        name: str,
        parent: Optional[str],
        source_path: str,
        depends_on: AbstractSet[str],
    ) -> str:
        self.calls.append(("create_file", name, parent, source_path, frozenset(depends_on)))

        missing = sorted(h for h in depends_on if h not in self.directories)
        if missing:
            raise RemoteNotFoundError(
                "Dependencies have not been created",
                details={"name": name, "missing": missing},
            )
        if parent is not None and parent not in self.directories:
            raise RemoteNotFoundError("Parent directory not found", details={"parent": parent})

        remote_path = name
        if parent is not None:
            remote_path = posixpath.join(self.directories[parent], name)

        handle = resource_id("memfile", self.destination, remote_path)
        if handle in self.files:
            raise ConflictError("File already exists", details={"path": remote_path})
        self.files[handle] = StoredFile(name=name, parent=parent, source_path=source_path)
        logger.debug("Created file %s -> %s", remote_path, handle)
        return handle

    def file_paths(self) -> list[str]:
        """Remote paths of all created files, sorted."""
        paths = []
        for f in self.files.values():
            if f.parent is None:
                paths.append(f.name)
            else:
                paths.append(posixpath.join(self.directories[f.parent], f.name))
        return sorted(paths)
