"""MirrorPlan model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from sharemirror.errors import InvalidPlanError

from .remote import RemoteDirectory, RemoteFile


@dataclass(slots=True, frozen=True)
class MirrorPlan:
    """
    Complete description of the directory and file creations for one root.

    Built once by the planner and never mutated afterwards. Every file
    creation depends on completion of the whole directory set.
    """

    plan_id: str
    root: str
    destination: Optional[str]
    directories: tuple[RemoteDirectory, ...]
    files: tuple[RemoteFile, ...]

    @property
    def directory_paths(self) -> tuple[str, ...]:
        return tuple(d.path for d in self.directories)

    @property
    def root_files(self) -> tuple[RemoteFile, ...]:
        return tuple(f for f in self.files if f.is_root)

    @property
    def nested_files(self) -> tuple[RemoteFile, ...]:
        return tuple(f for f in self.files if not f.is_root)

    def is_empty(self) -> bool:
        return not self.directories and not self.files

    def dependencies_of(self, file: RemoteFile) -> frozenset[RemoteDirectory]:
        """Return the directories that must exist before file is created."""
        return frozenset(RemoteDirectory(p) for p in file.depends_on)

    def validate(self) -> None:
        """
        Check structural invariants.

        Raises:
            InvalidPlanError: on duplicate or empty directories, a nested file
                whose directory is not in the plan, or a file whose
                dependencies differ from the full directory set.
        """
        paths = self.directory_paths
        path_set = set(paths)
        if len(path_set) != len(paths):
            raise InvalidPlanError("Duplicate directory in plan", details={"plan_id": self.plan_id})
        if path_set & {"", "."}:
            raise InvalidPlanError("Root path must not be a directory", details={"plan_id": self.plan_id})

        for f in self.files:
            if f.remote_directory is not None and f.remote_directory not in path_set:
                raise InvalidPlanError(
                    "File references a directory missing from the plan",
                    details={"file": f.remote_path, "directory": f.remote_directory},
                )
            if set(f.depends_on) != path_set:
                raise InvalidPlanError(
                    "File dependencies must equal the full directory set",
                    details={"file": f.remote_path},
                )

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation with a stable key order."""
        return {
            "plan_id": self.plan_id,
            "root": self.root,
            "destination": self.destination,
            "directories": [d.path for d in self.directories],
            "files": [
                {
                    "name": f.name,
                    "directory": f.remote_directory,
                    "source": f.source_path,
                    "depends_on": list(f.depends_on),
                }
                for f in self.files
            ],
        }
