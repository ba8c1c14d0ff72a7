"""Apply ordering for MirrorPlan operations."""

from __future__ import annotations

from sharemirror.models import MirrorPlan
from sharemirror.util.ids import directory_id, file_id

from .actions import Action
from .operation import Operation


def build_apply_order(plan: MirrorPlan) -> list[Operation]:
    """
    Turn a MirrorPlan into an ordered list of Operations.

    Rules:
        - All CREATE_DIRECTORY operations come before any CREATE_FILE.
        - Directories are ordered shallow -> deep, then by path, so a serial
          engine never creates "a/b" before "a".
        - Files keep plan order; each depends on every directory op_id.
    """
    dirs = sorted(plan.directories, key=lambda d: (d.depth, d.path))
    dir_op_ids = {d.path: directory_id(plan.destination, d.path) for d in dirs}

    ops: list[Operation] = []
    for d in dirs:
        ops.append(
            Operation(
                op_id=dir_op_ids[d.path],
                seq=len(ops),
                action=Action.CREATE_DIRECTORY,
                path=d.path,
                name=d.name,
            )
        )

    for f in plan.files:
        ops.append(
            Operation(
                op_id=file_id(plan.destination, f.remote_path),
                seq=len(ops),
                action=Action.CREATE_FILE,
                path=f.remote_path,
                name=f.name,
                source_path=f.source_path,
                parent=f.remote_directory,
                depends_on=tuple(dir_op_ids[p] for p in f.depends_on),
            )
        )

    return ops
