"""MirrorPlanner: local directory tree -> MirrorPlan (no remote I/O)."""

from __future__ import annotations

import logging
from typing import Optional

from sharemirror.local import classify, directories, validate_root, walk
from sharemirror.models import MirrorPlan, RemoteDirectory, RemoteFile
from sharemirror.util.ids import plan_id

logger = logging.getLogger(__name__)


def plan(root: str, destination: Optional[str] = None) -> MirrorPlan:
    """
    Build the MirrorPlan for a local root.

    Steps:
        1. Walk root for every regular file (sorted, symlinks skipped).
        2. Derive the unique directory set from those files.
        3. Partition files into root-level and nested, keeping walk order.
        4. Emit root-level files with no remote directory, then nested files
           with their classified directory.
        5. Every file depends on the entire directory set.

    Errors from walking or classification propagate unchanged; no partial
    plan is ever returned.

    Args:
        root: Local directory to mirror.
        destination: Opaque handle of the remote store (e.g. a share or
            folder id). Only used to derive identifiers.
    """
    abs_root = validate_root(root)
    files = walk(abs_root)

    dir_paths = directories(files, abs_root)
    remote_dirs = tuple(RemoteDirectory(p) for p in dir_paths)
    depends_on = tuple(dir_paths)

    root_files: list[RemoteFile] = []
    nested_files: list[RemoteFile] = []

    for path in files:
        c = classify(path, abs_root)
        if c.is_root:
            root_files.append(
                RemoteFile(name=c.name, source_path=path, depends_on=depends_on)
            )
        else:
            nested_files.append(
                RemoteFile(
                    name=c.name,
                    source_path=path,
                    remote_directory=c.remote_dir,
                    depends_on=depends_on,
                )
            )

    remote_files = tuple(root_files + nested_files)
    result = MirrorPlan(
        plan_id=plan_id(
            destination,
            abs_root,
            dir_paths,
            [f.remote_path for f in remote_files],
        ),
        root=abs_root,
        destination=destination,
        directories=remote_dirs,
        files=remote_files,
    )
    logger.info(
        "Planned %s: %d directories, %d root files, %d nested files",
        abs_root,
        len(remote_dirs),
        len(root_files),
        len(nested_files),
    )
    return result
