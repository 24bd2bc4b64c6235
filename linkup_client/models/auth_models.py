"""Models related to authentication and login responses."""

from __future__ import annotations

import time
from enum import Enum
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict

FALLBACK_STATUS_CODE = 999999


class LoginRequest(BaseModel):
    """Credentials and the region the caller believes the account lives in."""

    model_config = ConfigDict(frozen=True)

    region: str
    username: str
    password: str


class Session(BaseModel):
    """Authenticated, region-bound token set."""

    model_config = ConfigDict(frozen=True)

    token: str
    account_id: str
    region: str
    expires: Optional[int] = None

    def is_expired(self, now: Optional[float] = None) -> bool:
        if self.expires is None:
            return False
        current = time.time() if now is None else now
        return current >= self.expires


class RegionSource(str, Enum):
    USER_COUNTRY = "user_country"
    RESPONSE_REGION = "response_region"
    REQUEST_FALLBACK = "request_fallback"


class ConfirmedRegion(BaseModel):
    """Server-confirmed region together with the response field it came from."""

    value: str
    source: RegionSource


class AuthSuccess(BaseModel):
    kind: Literal["success"] = "success"
    session: Session


class AuthFailure(BaseModel):
    """The provider answered with a non-success status."""

    kind: Literal["failure"] = "failure"
    status_code: int


class AuthUnknown(BaseModel):
    """No status, or no usable session, could be read from the response."""

    kind: Literal["unknown"] = "unknown"
    reason: str


AuthOutcome = Union[AuthSuccess, AuthFailure, AuthUnknown]
