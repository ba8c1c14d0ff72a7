"""sharemirror public API."""

from __future__ import annotations

from sharemirror.apply import apply_plan
from sharemirror.auth import AuthInfo
from sharemirror.compose import (
    EnvVar,
    LiteralEnv,
    MirrorSet,
    SecretRefEnv,
    ShareOutcome,
    ShareSpec,
    render_env,
)
from sharemirror.engine import InMemoryEngine, ProvisioningEngine
from sharemirror.errors import (
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
from sharemirror.local import Classification, classify, directories, walk
from sharemirror.models import (
    ApplyResult,
    MirrorPlan,
    OperationResult,
    RemoteDirectory,
    RemoteFile,
)
from sharemirror.plan import Action, Operation, build_apply_order

__all__ = [
    # Core
    "walk",
    "classify",
    "Classification",
    "directories",
    # Plan / Models
    "Action",
    "Operation",
    "build_apply_order",
    "MirrorPlan",
    "RemoteDirectory",
    "RemoteFile",
    "ApplyResult",
    "OperationResult",
    # Apply
    "apply_plan",
    "ProvisioningEngine",
    "InMemoryEngine",
    "AuthInfo",
    # Composition
    "ShareSpec",
    "ShareOutcome",
    "MirrorSet",
    "EnvVar",
    "LiteralEnv",
    "SecretRefEnv",
    "render_env",
    # Errors
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
