"""Authentication information for remote store engines."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

_REQUIRED_KEYS: dict[str, tuple[str, ...]] = {
    "oauth": ("client_secrets_file", "token_file"),
    "service_account": ("key_file",),
}


@dataclass(slots=True, frozen=True)
class AuthInfo:
    """
    Authentication information.

    Supported kinds:
        - "oauth": data must include client_secrets_file and token_file
        - "service_account": data must include key_file (JSON key);
          optional subject for domain-wide delegation
    """

    kind: str
    data: dict[str, Any]

    def __post_init__(self) -> None:
        if self.kind not in _REQUIRED_KEYS:
            raise ValueError(
                f"AuthInfo.kind must be one of {sorted(_REQUIRED_KEYS)}, got {self.kind!r}"
            )

        if not isinstance(self.data, dict):
            raise TypeError("AuthInfo.data must be a dict")

        for key in _REQUIRED_KEYS[self.kind]:
            value = self.data.get(key)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"AuthInfo.data['{key}'] must be a non-empty string")

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> AuthInfo:
        """Build from a config mapping like {"kind": "oauth", ...}."""
        data = dict(raw)
        kind = data.pop("kind", None)
        if not isinstance(kind, str):
            raise ValueError("auth.kind must be a string")
        return cls(kind=kind, data=data)

    @property
    def client_secrets_file(self) -> str:
        return str(self.data["client_secrets_file"])

    @property
    def token_file(self) -> str:
        return str(self.data["token_file"])

    @property
    def key_file(self) -> str:
        return str(self.data["key_file"])
