"""Data models for authentication, sessions, and connections."""

from .auth_models import (
    FALLBACK_STATUS_CODE,
    AuthFailure,
    AuthOutcome,
    AuthSuccess,
    AuthUnknown,
    ConfirmedRegion,
    LoginRequest,
    RegionSource,
    Session,
)
from .connection_models import Connection, GraphPayload, NoConnections, Swallowed

__all__ = [
    "FALLBACK_STATUS_CODE",
    "AuthFailure",
    "AuthOutcome",
    "AuthSuccess",
    "AuthUnknown",
    "ConfirmedRegion",
    "LoginRequest",
    "RegionSource",
    "Session",
    "Connection",
    "GraphPayload",
    "NoConnections",
    "Swallowed",
]
