"""Apply-time operation model (explicit fields; no args dict)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .actions import Action


@dataclass(slots=True, frozen=True)
class Operation:
    """
    A single remote creation derived from a MirrorPlan.

    Fields by action:
        - CREATE_DIRECTORY: path
        - CREATE_FILE: path (remote path), name, source_path, optional parent
          (directory path), depends_on (op_ids of directory creations)
    """

    op_id: str
    seq: int
    action: Action
    path: str

    name: Optional[str] = None
    source_path: Optional[str] = None
    parent: Optional[str] = None
    depends_on: tuple[str, ...] = ()

    def validate_required_fields(self) -> None:
        """Validate required fields according to action. Raises ValueError."""
        _require(self.op_id, "op_id")
        _require(self.path, "path")

        if self.action is Action.CREATE_DIRECTORY:
            if self.depends_on:
                raise ValueError("CREATE_DIRECTORY must not declare dependencies")
            return

        if self.action is Action.CREATE_FILE:
            _require(self.name, "name")
            _require(self.source_path, "source_path")
            return

        raise ValueError(f"Unsupported action: {self.action}")


def _require(value: object, field_name: str) -> None:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValueError(f"Missing required field: {field_name}")
