from __future__ import annotations

import hashlib
from typing import Iterable, Optional

_DIGEST_LEN = 16


def content_hash(*parts: str) -> str:
    """Stable short SHA-256 digest of the given parts (NUL-joined)."""
    joined = "\x00".join(parts)
    return hashlib.sha256(joined.encode("utf-8")).hexdigest()[:_DIGEST_LEN]


def resource_id(kind: str, *parts: str) -> str:
    """Build an identifier like 'dir_1a2b...' derived only from its inputs."""
    return f"{kind}_{content_hash(kind, *parts)}"


def directory_id(destination: Optional[str], path: str) -> str:
    """Identifier for a remote directory creation within a destination."""
    return resource_id("dir", destination or "", path)


def file_id(destination: Optional[str], remote_path: str) -> str:
    """Identifier for a remote file creation within a destination."""
    return resource_id("file", destination or "", remote_path)


def plan_id(
    destination: Optional[str],
    root: str,
    directory_paths: Iterable[str],
    remote_file_paths: Iterable[str],
) -> str:
    """Identifier for a whole MirrorPlan; equal trees give equal ids."""
    return resource_id(
        "plan",
        destination or "",
        root,
        "\x01".join(directory_paths),
        "\x01".join(remote_file_paths),
    )
