"""Credential loading and Drive service construction."""

from __future__ import annotations

import logging
import os
from typing import Any, Sequence

from sharemirror.errors import AuthError, InvalidArgumentError

from .auth_info import AuthInfo

logger = logging.getLogger(__name__)


def load_credentials(auth_info: AuthInfo, scopes: Sequence[str]) -> Any:
    """
    Return Google credentials for the given scopes.

    - service_account: loaded from the JSON key file.
    - oauth: loaded from token_file and refreshed if expired; falls back to
      the installed-app flow and saves the new token.

    Raises:
        AuthError: on load/refresh/flow failures.
        InvalidArgumentError: if scopes is invalid.
    """
    if not scopes or not all(isinstance(s, str) and s.strip() for s in scopes):
        raise InvalidArgumentError("scopes must be a non-empty sequence of strings")

    if auth_info.kind == "service_account":
        return _load_service_account(auth_info, scopes)
    return _load_oauth(auth_info, scopes)


def build_drive_service(auth_info: AuthInfo, scopes: Sequence[str]) -> Any:
    """
    Build a Drive v3 API service resource.

    Returns:
        googleapiclient.discovery.Resource
    """
    from googleapiclient.discovery import build

    creds = load_credentials(auth_info, scopes)
    try:
        return build("drive", "v3", credentials=creds, cache_discovery=False)
    except Exception as exc:
        raise AuthError("Failed to build Drive service", cause=exc) from exc


def _load_service_account(auth_info: AuthInfo, scopes: Sequence[str]) -> Any:
    from google.oauth2 import service_account

    key_file = auth_info.key_file
    try:
        creds = service_account.Credentials.from_service_account_file(
            key_file,
            scopes=list(scopes),
        )
    except (OSError, ValueError) as exc:
        raise AuthError(
            "Failed to load service account key",
            details={"key_file": key_file},
            cause=exc,
        ) from exc

    subject = auth_info.data.get("subject")
    if isinstance(subject, str) and subject:
        creds = creds.with_subject(subject)
    return creds


def _load_oauth(auth_info: AuthInfo, scopes: Sequence[str]) -> Any:
    from google.auth.exceptions import RefreshError
    from google.auth.transport.requests import Request
    from google.oauth2.credentials import Credentials
    from google_auth_oauthlib.flow import InstalledAppFlow

    token_file = auth_info.token_file

    if os.path.exists(token_file):
        try:
            creds = Credentials.from_authorized_user_file(token_file, scopes=list(scopes))
        except (OSError, ValueError) as exc:
            raise AuthError(
                "Failed to load token_file",
                details={"token_file": token_file},
                cause=exc,
            ) from exc

        if not creds.valid and creds.refresh_token:
            try:
                creds.refresh(Request())
            except RefreshError as exc:
                raise AuthError(
                    "Failed to refresh OAuth credentials",
                    details={"token_file": token_file},
                    cause=exc,
                ) from exc
            _save_token(creds, token_file)

        if creds.valid:
            return creds

    # No token, or token could not be refreshed -> run OAuth flow.
    client_secrets = auth_info.client_secrets_file
    logger.info("Starting OAuth flow with %s", client_secrets)
    try:
        flow = InstalledAppFlow.from_client_secrets_file(client_secrets, scopes=list(scopes))
        creds = flow.run_local_server(port=0)
    except Exception as exc:
        raise AuthError(
            "OAuth authorization flow failed",
            details={"client_secrets_file": client_secrets, "token_file": token_file},
            cause=exc,
        ) from exc

    _save_token(creds, token_file)
    return creds


def _save_token(creds: Any, token_file: str) -> None:
    token_dir = os.path.dirname(token_file)
    if token_dir:
        os.makedirs(token_dir, exist_ok=True)

    try:
        with open(token_file, "w", encoding="utf-8") as f:
            f.write(creds.to_json())
    except OSError as exc:
        raise AuthError(
            "Failed to save OAuth token file",
            details={"token_file": token_file},
            cause=exc,
        ) from exc
