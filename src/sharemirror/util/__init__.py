from .ids import content_hash, directory_id, file_id, plan_id, resource_id
from .time import now_utc, to_rfc3339

__all__ = [
    "content_hash",
    "resource_id",
    "directory_id",
    "file_id",
    "plan_id",
    "now_utc",
    "to_rfc3339",
]
