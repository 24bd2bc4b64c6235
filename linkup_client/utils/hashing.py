"""Account identifier hashing for the ``Account-Id`` request header."""

from __future__ import annotations

import hashlib


def digest_account_id(account_id: str) -> str:
    """Returns the hex SHA-256 digest of ``account_id``."""

    return hashlib.sha256(account_id.encode("utf-8")).hexdigest()
