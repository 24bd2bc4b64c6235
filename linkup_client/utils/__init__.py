"""Utility helpers for HTTP, endpoints, hashing, and storage."""

from .endpoints import normalize_region, resolve_base_url
from .hashing import digest_account_id
from .http_client import HttpClient, TransportError
from .preferences import PreferenceStore
from .secure_store import CredentialNotFoundError, CredentialVault, SecureStore, SecureStoreError

__all__ = [
    "HttpClient",
    "TransportError",
    "resolve_base_url",
    "normalize_region",
    "digest_account_id",
    "PreferenceStore",
    "SecureStore",
    "SecureStoreError",
    "CredentialNotFoundError",
    "CredentialVault",
]
