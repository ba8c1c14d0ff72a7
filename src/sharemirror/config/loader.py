"""Load sharemirror configuration from YAML or JSON."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from typing import Any, Optional

import yaml

from sharemirror.auth import AuthInfo
from sharemirror.compose import DEFAULT_QUOTA_GB, EnvVar, ShareSpec, env_from_mapping
from sharemirror.errors import ConfigError


@dataclass(slots=True, frozen=True)
class MirrorConfig:
    """
    Resolved configuration.

    Example (YAML):
        destination: 1AbCdEf          # default destination for shares
        auth:
          kind: service_account
          key_file: sa.json
        shares:
          - name: nginx
            local_dir: mountfiles/nginx
          - name: sandbox
            local_dir: mountfiles/sandbox
            destination: 9XyZ         # overrides the default
            quota_gb: 10
        env:
          LOG_LEVEL: INFO
          DB_PASSWORD: {secret: postgres-db-password}
    """

    shares: tuple[ShareSpec, ...]
    auth: Optional[AuthInfo] = None
    env: tuple[EnvVar, ...] = field(default_factory=tuple)


def load_config(path: str) -> MirrorConfig:
    """
    Load and validate a config file.

    Relative local_dir and auth file paths are resolved against the
    directory containing the config file.

    Raises:
        ConfigError: if the file is missing, unreadable, of an unsupported
            format, or structurally invalid.
    """
    raw = _load_file(path)
    base_dir = os.path.dirname(os.path.abspath(path))

    default_destination = raw.get("destination")
    if default_destination is not None and not isinstance(default_destination, str):
        raise ConfigError("destination must be a string")

    shares_raw = raw.get("shares")
    if not isinstance(shares_raw, list) or not shares_raw:
        raise ConfigError("shares must be a non-empty list")
    shares = tuple(
        _parse_share(item, index, default_destination, base_dir)
        for index, item in enumerate(shares_raw)
    )

    auth = None
    if raw.get("auth") is not None:
        auth = _parse_auth(raw["auth"], base_dir)

    env_raw = raw.get("env") or {}
    if not isinstance(env_raw, dict):
        raise ConfigError("env must be a mapping")

    return MirrorConfig(shares=shares, auth=auth, env=tuple(env_from_mapping(env_raw)))


def _load_file(path: str) -> dict[str, Any]:
    if not os.path.isfile(path):
        raise ConfigError(f"Config file not found: {path}", details={"path": path})

    suffix = os.path.splitext(path)[1].lower()
    try:
        with open(path, "r", encoding="utf-8") as f:
            if suffix in (".yaml", ".yml"):
                data = yaml.safe_load(f)
            elif suffix == ".json":
                data = json.load(f)
            else:
                raise ConfigError(f"Unsupported config format: {suffix}", details={"path": path})
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Failed to parse config: {path}", details={"path": path}, cause=exc) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Failed to read config: {path}", details={"path": path}, cause=exc) from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config root must be a mapping, got {type(data).__name__}")
    return data


def _parse_share(
    item: Any,
    index: int,
    default_destination: Optional[str],
    base_dir: str,
) -> ShareSpec:
    if not isinstance(item, dict):
        raise ConfigError(f"shares[{index}] must be a mapping")

    local_dir = item.get("local_dir")
    if isinstance(local_dir, str) and local_dir and not os.path.isabs(local_dir):
        local_dir = os.path.join(base_dir, local_dir)

    destination = item.get("destination", default_destination)
    if destination is None:
        raise ConfigError(
            f"shares[{index}] has no destination and no default destination is set"
        )

    return ShareSpec(
        name=item.get("name"),  # type: ignore[arg-type]
        local_dir=local_dir,  # type: ignore[arg-type]
        destination=destination,
        quota_gb=item.get("quota_gb", DEFAULT_QUOTA_GB),
    )


def _parse_auth(raw: Any, base_dir: str) -> AuthInfo:
    if not isinstance(raw, dict):
        raise ConfigError("auth must be a mapping")

    data = dict(raw)
    for key in ("client_secrets_file", "token_file", "key_file"):
        value = data.get(key)
        if isinstance(value, str) and value and not os.path.isabs(value):
            data[key] = os.path.join(base_dir, value)

    try:
        return AuthInfo.from_dict(data)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid auth section: {exc}", cause=exc) from exc
