"""Composition helpers: share sets and container environment variables."""

from __future__ import annotations

from .env import EnvVar, LiteralEnv, SecretRefEnv, env_from_mapping, render_env, required_secrets
from .shares import (
    DEFAULT_QUOTA_GB,
    MirrorSet,
    ShareOutcome,
    ShareSpec,
    check_quota,
    plan_size_bytes,
)

__all__ = [
    "EnvVar",
    "LiteralEnv",
    "SecretRefEnv",
    "env_from_mapping",
    "render_env",
    "required_secrets",
    "DEFAULT_QUOTA_GB",
    "MirrorSet",
    "ShareOutcome",
    "ShareSpec",
    "check_quota",
    "plan_size_bytes",
]
