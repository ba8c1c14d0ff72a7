"""Public error exports for sharemirror."""

from __future__ import annotations

from .exceptions import (
    ApiError,
    AuthError,
    ConfigError,
    ConflictError,
    HttpErrorInfo,
    InvalidArgumentError,
    InvalidPlanError,
    LocalReadError,
    MirrorError,
    NetworkError,
    NotADirectoryError,
    NotFoundError,
    PathEscapeError,
    PermissionError,
    ProviderError,
    QuotaExceededError,
    RateLimitError,
    RemoteNotFoundError,
    map_http_error,
)

__all__ = [
    "MirrorError",
    "NotFoundError",
    "NotADirectoryError",
    "PathEscapeError",
    "LocalReadError",
    "InvalidPlanError",
    "ConfigError",
    "ProviderError",
    "AuthError",
    "PermissionError",
    "InvalidArgumentError",
    "RemoteNotFoundError",
    "ConflictError",
    "RateLimitError",
    "QuotaExceededError",
    "NetworkError",
    "ApiError",
    "HttpErrorInfo",
    "map_http_error",
]
