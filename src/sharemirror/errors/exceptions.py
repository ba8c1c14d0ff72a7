"""Exception hierarchy and HTTP error mapping for sharemirror."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


class MirrorError(Exception):
    """
    Base exception for sharemirror.

    Attributes:
        details: Optional structured information (e.g., path, HTTP status).
        cause: Optional original exception that triggered this error.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause


# ----------------------------
# Local (plan-build) errors
# ----------------------------
class NotFoundError(MirrorError):
    """Raised when the local mirror root does not exist."""


class NotADirectoryError(MirrorError):
    """Raised when the local mirror root exists but is not a directory."""


class PathEscapeError(MirrorError):
    """Raised when a file path does not live under the mirror root."""


class LocalReadError(MirrorError):
    """Raised when a local directory or file under the mirror root cannot be read."""


class InvalidPlanError(MirrorError):
    """Raised when a MirrorPlan violates its structural invariants."""


class ConfigError(MirrorError):
    """Raised when a config file or composition input is malformed."""


# ----------------------------
# Provider (apply-time) errors
# ----------------------------
class ProviderError(MirrorError):
    """Opaque failure reported by a provisioning engine."""


class AuthError(ProviderError):
    """Raised when authentication/refresh fails (HTTP 401)."""


class PermissionError(ProviderError):
    """Raised when access is denied (HTTP 403 non-quota)."""


class InvalidArgumentError(ProviderError):
    """Raised when request arguments are invalid (HTTP 400, etc.)."""


class RemoteNotFoundError(ProviderError):
    """Raised when a remote resource is not found (HTTP 404)."""


class ConflictError(ProviderError):
    """Raised when a remote conflict occurs (HTTP 409/412)."""


class RateLimitError(ProviderError):
    """Raised when rate-limited (HTTP 429)."""


class QuotaExceededError(ProviderError):
    """Raised when quota is exceeded (HTTP 403 with quota-related reason)."""


class NetworkError(ProviderError):
    """Raised when network/timeout issues prevent the request."""


class ApiError(ProviderError):
    """Raised for unclassified provider errors (5xx, unknown 4xx, etc.)."""


@dataclass(frozen=True)
class HttpErrorInfo:
    """Lightweight HTTP error information for mapping to provider exceptions."""

    status_code: int
    reason: str | None = None
    message: str | None = None
    details: dict[str, Any] | None = None


_QUOTA_REASON_KEYWORDS: tuple[str, ...] = (
    "quota",
    "storageQuotaExceeded",
    "dailyLimitExceeded",
    "usageLimits",
)


def _is_quota_reason(reason: str | None) -> bool:
    if not reason:
        return False
    return any(key.lower() in reason.lower() for key in _QUOTA_REASON_KEYWORDS)


def map_http_error(
    info: HttpErrorInfo,
    *,
    cause: Optional[BaseException] = None,
) -> ProviderError:
    """
    Map an HTTP error to a provider exception.

    Policy:
        - 400 -> InvalidArgumentError
        - 401 -> AuthError
        - 403 -> PermissionError, or QuotaExceededError if quota-related,
                 or RateLimitError for rate-limit reasons
        - 404 -> RemoteNotFoundError
        - 409/412 -> ConflictError
        - 429 -> RateLimitError
        - otherwise -> ApiError
    """
    details: dict[str, Any] = {
        "status_code": info.status_code,
        "reason": info.reason,
    }
    if info.details:
        details.update(info.details)

    message = info.message or f"HTTP error {info.status_code}"

    if info.status_code == 400:
        return InvalidArgumentError(message, details=details, cause=cause)
    if info.status_code == 401:
        return AuthError(message, details=details, cause=cause)
    if info.status_code == 403:
        if info.reason and "ratelimitexceeded" in info.reason.lower():
            return RateLimitError(message, details=details, cause=cause)
        if _is_quota_reason(info.reason):
            return QuotaExceededError(message, details=details, cause=cause)
        return PermissionError(message, details=details, cause=cause)
    if info.status_code == 404:
        return RemoteNotFoundError(message, details=details, cause=cause)
    if info.status_code in (409, 412):
        return ConflictError(message, details=details, cause=cause)
    if info.status_code == 429:
        return RateLimitError(message, details=details, cause=cause)

    return ApiError(message, details=details, cause=cause)
