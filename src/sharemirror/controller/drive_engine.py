"""Google Drive provisioning engine."""

from __future__ import annotations

import json
import logging
import mimetypes
import os
import time
from dataclasses import dataclass
from typing import AbstractSet, Any, Callable, Optional, Sequence, TypeVar

from sharemirror.auth import AuthInfo, build_drive_service
from sharemirror.errors import (
    ApiError,
    HttpErrorInfo,
    InvalidArgumentError,
    NetworkError,
    RateLimitError,
    RemoteNotFoundError,
    map_http_error,
)

from .fields import FILE_FIELDS, FOLDER_MIME

T = TypeVar("T")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _RetryPolicy:
    max_retries: int = 3
    initial_delay_sec: float = 1.0


class GoogleDriveEngine:
    """
    Creates mirrored directories and files under a Drive folder.

    Notes:
        - The destination folder id is the mirror root; it must already exist.
        - Directory paths are created segment by segment; segments created
          earlier in this engine's lifetime are reused, remote state is not
          queried.
        - Transient failures (429, 5xx, network) are retried with
          exponential backoff.
    """

    DEFAULT_SCOPES: tuple[str, ...] = ("https://www.googleapis.com/auth/drive.file",)

    def __init__(
        self,
        auth_info: AuthInfo,
        destination_folder_id: str,
        *,
        scopes: Optional[Sequence[str]] = None,
        supports_all_drives: bool = True,
    ) -> None:
        use_scopes = list(scopes) if scopes is not None else list(self.DEFAULT_SCOPES)
        service = build_drive_service(auth_info, use_scopes)
        self._init_state(service, destination_folder_id, supports_all_drives)

    @classmethod
    def from_service(
        cls,
        service: Any,
        destination_folder_id: str,
        *,
        supports_all_drives: bool = True,
        retry_delay_sec: float = 1.0,
    ) -> "GoogleDriveEngine":
        """Create engine from a pre-built Drive service (useful for tests)."""
        obj = cls.__new__(cls)
        obj._init_state(service, destination_folder_id, supports_all_drives)
        obj._retry_policy = _RetryPolicy(initial_delay_sec=retry_delay_sec)
        return obj

    def _init_state(
        self,
        service: Any,
        destination_folder_id: str,
        supports_all_drives: bool,
    ) -> None:
        if not destination_folder_id:
            raise InvalidArgumentError("destination_folder_id must be a non-empty string")
        self._service = service
        self._root_id = destination_folder_id
        self._supports_all_drives = supports_all_drives
        self._retry_policy = _RetryPolicy()
        self._folder_ids: dict[str, str] = {}

    @property
    def destination(self) -> str:
        return self._root_id

    # ----------------------------
    # ProvisioningEngine
    # ----------------------------
    def create_directory(self, path: str) -> str:
        segments = [s for s in path.split("/") if s]
        if not segments:
            raise InvalidArgumentError("Directory path must be non-empty", details={"path": path})

        parent_id = self._root_id
        for i, segment in enumerate(segments):
            prefix = "/".join(segments[: i + 1])
            existing = self._folder_ids.get(prefix)
            if existing is not None:
                parent_id = existing
                continue

            parent_id = self._create_folder(segment, parent_id)
            self._folder_ids[prefix] = parent_id
            logger.debug("Created Drive folder %s -> %s", prefix, parent_id)

        return parent_id

    def create_file(
        self,
        name: str,
        parent: Optional[str],
        source_path: str,
        depends_on: AbstractSet[str],
    ) -> str:
        known = set(self._folder_ids.values())
        missing = sorted(h for h in depends_on if h not in known)
        if missing:
            raise RemoteNotFoundError(
                "Dependencies have not been created",
                details={"name": name, "missing": missing},
            )
        if not source_path or not os.path.isfile(source_path):
            raise InvalidArgumentError(
                "source_path must be an existing file",
                details={"source_path": source_path},
            )

        from googleapiclient.http import MediaFileUpload

        mime_type, _ = mimetypes.guess_type(name)
        media = MediaFileUpload(
            source_path,
            mimetype=mime_type or "application/octet-stream",
            resumable=True,
        )
        body = {"name": name, "parents": [parent or self._root_id]}

        req = self._service.files().create(
            body=body,
            media_body=media,
            fields=FILE_FIELDS,
            **self._common_write_kwargs(),
        )
        data = self._execute(req.execute)
        file_id = _require_id(data, name)
        logger.debug("Uploaded %s -> %s", source_path, file_id)
        return file_id

    # ----------------------------
    # Internals
    # ----------------------------
    def _create_folder(self, name: str, parent_id: str) -> str:
        body = {"name": name, "mimeType": FOLDER_MIME, "parents": [parent_id]}
        req = self._service.files().create(
            body=body,
            fields=FILE_FIELDS,
            **self._common_write_kwargs(),
        )
        data = self._execute(req.execute)
        return _require_id(data, name)

    def _common_write_kwargs(self) -> dict[str, Any]:
        if not self._supports_all_drives:
            return {}
        return {"supportsAllDrives": True}

    def _execute(self, func: Callable[[], T]) -> T:
        delay = self._retry_policy.initial_delay_sec
        for attempt in range(self._retry_policy.max_retries + 1):
            try:
                return func()
            except Exception as exc:
                mapped = self._map_exception(exc)
                if self._should_retry(mapped) and attempt < self._retry_policy.max_retries:
                    logger.info(
                        "Retrying Drive request after %s (attempt %d)",
                        type(mapped).__name__,
                        attempt + 1,
                    )
                    time.sleep(delay)
                    delay *= 2
                    continue
                raise mapped from exc

        raise ApiError("Unexpected retry loop termination")

    def _should_retry(self, exc: Exception) -> bool:
        if isinstance(exc, (RateLimitError, NetworkError)):
            return True
        if isinstance(exc, ApiError):
            status_code = exc.details.get("status_code")
            return isinstance(status_code, int) and 500 <= status_code <= 599
        return False

    def _map_exception(self, exc: Exception) -> Exception:
        from googleapiclient.errors import HttpError

        if isinstance(exc, HttpError):
            info = _http_error_to_info(exc)
            return map_http_error(info, cause=exc)

        if isinstance(exc, (OSError, TimeoutError)):
            return NetworkError("Network error", cause=exc)

        return ApiError("Drive API error", cause=exc)


def _require_id(data: dict[str, Any], name: str) -> str:
    file_id = data.get("id") if isinstance(data, dict) else None
    if not isinstance(file_id, str) or not file_id:
        raise ApiError("Drive did not return an id for created item", details={"name": name})
    return file_id


def _http_error_to_info(exc: Any) -> HttpErrorInfo:
    status_code = getattr(getattr(exc, "resp", None), "status", None)
    reason = getattr(getattr(exc, "resp", None), "reason", None)

    message = None
    details: dict[str, Any] = {}

    content = getattr(exc, "content", None)
    if isinstance(content, (bytes, bytearray)):
        try:
            payload = json.loads(content.decode("utf-8"))
        except (UnicodeDecodeError, ValueError):
            payload = None
        if isinstance(payload, dict):
            err = payload.get("error", {})
            if isinstance(err, dict):
                message = err.get("message") or None
                errors = err.get("errors") or []
                if errors and isinstance(errors, list) and isinstance(errors[0], dict):
                    details["domain"] = errors[0].get("domain")
                    if isinstance(errors[0].get("reason"), str):
                        reason = errors[0]["reason"]

    if not isinstance(status_code, int):
        status_code = 0

    return HttpErrorInfo(
        status_code=status_code,
        reason=reason if isinstance(reason, str) else None,
        message=message,
        details=details or None,
    )
