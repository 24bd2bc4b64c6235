"""Keyring-backed storage for session tokens and account credentials."""

from __future__ import annotations

import logging
from typing import Any, Optional, Tuple

import keyring
from keyring.errors import KeyringError, PasswordDeleteError
from pydantic import ValidationError

from ..models import Session

DEFAULT_SERVICE_NAME = "linkup-client"

API_TOKEN_KEY = "api-token"
USERNAME_KEY = "username"
PASSWORD_KEY = "password"
SESSION_KEY = "session"


class SecureStoreError(Exception):
    """Raised when the platform credential store cannot be used."""


class CredentialNotFoundError(SecureStoreError):
    """Raised when no value is stored under the requested key."""


class SecureStore:
    """Stores secrets in the OS keyring under a single service namespace."""

    def __init__(self, service: str = DEFAULT_SERVICE_NAME, backend: Any = keyring) -> None:
        self.service = service
        self._backend = backend

    def store(self, key: str, value: str) -> None:
        try:
            self._backend.set_password(self.service, key, value)
        except KeyringError as exc:
            raise SecureStoreError(f"Failed to store secure value {key!r}: {exc}") from exc

    def get(self, key: str) -> str:
        try:
            value = self._backend.get_password(self.service, key)
        except KeyringError as exc:
            raise SecureStoreError(f"Failed to retrieve secure value {key!r}: {exc}") from exc
        if value is None:
            raise CredentialNotFoundError(f"No secure value stored for {key!r}")
        return value

    def delete(self, key: str) -> None:
        try:
            self._backend.delete_password(self.service, key)
        except PasswordDeleteError as exc:
            raise CredentialNotFoundError(f"No secure value stored for {key!r}") from exc
        except KeyringError as exc:
            raise SecureStoreError(f"Failed to delete secure value {key!r}: {exc}") from exc


class CredentialVault:
    """Convenience accessors for the values the client keeps between runs."""

    def __init__(self, store: SecureStore) -> None:
        self._store = store

    def store_api_token(self, token: str) -> None:
        self._store.store(API_TOKEN_KEY, token)

    def get_api_token(self) -> Optional[str]:
        try:
            return self._store.get(API_TOKEN_KEY)
        except CredentialNotFoundError:
            return None

    def delete_api_token(self) -> None:
        self._store.delete(API_TOKEN_KEY)

    def store_credentials(self, username: str, password: str) -> None:
        self._store.store(USERNAME_KEY, username)
        self._store.store(PASSWORD_KEY, password)

    def get_credentials(self) -> Optional[Tuple[str, str]]:
        try:
            return self._store.get(USERNAME_KEY), self._store.get(PASSWORD_KEY)
        except CredentialNotFoundError:
            return None

    def delete_credentials(self) -> None:
        self._delete_if_present(USERNAME_KEY)
        self._delete_if_present(PASSWORD_KEY)

    def store_session(self, session: Session) -> None:
        self._store.store(SESSION_KEY, session.model_dump_json())
        self.store_api_token(session.token)

    def get_session(self) -> Optional[Session]:
        try:
            raw = self._store.get(SESSION_KEY)
        except CredentialNotFoundError:
            return None
        try:
            return Session.model_validate_json(raw)
        except ValidationError as exc:
            logging.warning("Ignoring unreadable stored session: %s", exc)
            return None

    def delete_session(self) -> None:
        self._delete_if_present(SESSION_KEY)
        self._delete_if_present(API_TOKEN_KEY)

    def _delete_if_present(self, key: str) -> None:
        try:
            self._store.delete(key)
        except CredentialNotFoundError:
            logging.debug("Nothing stored under %s", key)
