"""Container environment variables as a tagged variant."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Union

from sharemirror.errors import ConfigError


@dataclass(slots=True, frozen=True)
class LiteralEnv:
    """Environment variable with an inline value."""

    name: str
    value: str


@dataclass(slots=True, frozen=True)
class SecretRefEnv:
    """Environment variable whose value comes from a named secret."""

    name: str
    secret_name: str


EnvVar = Union[LiteralEnv, SecretRefEnv]


def render_env(env_vars: Iterable[EnvVar]) -> list[dict[str, str]]:
    """
    Render env vars to the container-runtime shape.

    LiteralEnv -> {"name", "value"}; SecretRefEnv -> {"name", "secretRef"}.

    Raises:
        ConfigError: on an empty or duplicate name, or an unknown variant.
    """
    rendered: list[dict[str, str]] = []
    seen: set[str] = set()

    for var in env_vars:
        if not var.name:
            raise ConfigError("Environment variable name must be non-empty")
        if var.name in seen:
            raise ConfigError(
                f"Duplicate environment variable: {var.name}",
                details={"name": var.name},
            )
        seen.add(var.name)

        if isinstance(var, LiteralEnv):
            rendered.append({"name": var.name, "value": var.value})
        elif isinstance(var, SecretRefEnv):
            rendered.append({"name": var.name, "secretRef": var.secret_name})
        else:
            raise ConfigError(f"Unsupported env var type: {type(var).__name__}")

    return rendered


def required_secrets(env_vars: Iterable[EnvVar]) -> list[str]:
    """Sorted unique secret names referenced by env_vars."""
    return sorted({v.secret_name for v in env_vars if isinstance(v, SecretRefEnv)})


def env_from_mapping(raw: dict[str, object]) -> list[EnvVar]:
    """
    Parse {"NAME": "value", "OTHER": {"secret": "name"}} into EnvVars.

    Keys keep mapping order.
    """
    env_vars: list[EnvVar] = []
    for name, value in raw.items():
        if isinstance(value, dict):
            secret = value.get("secret")
            if not isinstance(secret, str) or not secret:
                raise ConfigError(
                    f"env.{name}: secret reference needs a 'secret' name",
                    details={"name": name},
                )
            env_vars.append(SecretRefEnv(name=name, secret_name=secret))
        elif isinstance(value, (str, int, float, bool)):
            text = str(value).lower() if isinstance(value, bool) else str(value)
            env_vars.append(LiteralEnv(name=name, value=text))
        else:
            raise ConfigError(
                f"env.{name}: unsupported value type {type(value).__name__}",
                details={"name": name},
            )
    return env_vars
