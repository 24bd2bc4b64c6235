"""Authentication against the region-sharded LibreLinkUp login endpoint."""

from __future__ import annotations

import logging
from typing import Any, Dict

from ..models import (
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
from ..utils.endpoints import normalize_region, resolve_base_url
from ..utils.http_client import HttpClient, TransportError, build_api_headers

LOGIN_PATH = "/auth/login"
SUCCESS_STATUS = 0


def parse_status(body: Any) -> int:
    """Reads the provider status; anything absent or unparseable is the fallback code."""

    status = body.get("status") if isinstance(body, dict) else None
    if isinstance(status, bool):
        return FALLBACK_STATUS_CODE
    if isinstance(status, int):
        return status
    if isinstance(status, str):
        try:
            return int(status)
        except ValueError:
            return FALLBACK_STATUS_CODE
    return FALLBACK_STATUS_CODE


def parse_confirmed_region(body: Dict[str, Any], requested_region: str) -> ConfirmedRegion:
    """Picks the region from ``data.user.country``, then ``data.region``, then the request."""

    data = body.get("data") or {}
    user = data.get("user") or {}
    country = user.get("country")
    if country:
        return ConfirmedRegion(value=normalize_region(str(country)), source=RegionSource.USER_COUNTRY)
    region = data.get("region")
    if region:
        return ConfirmedRegion(value=normalize_region(str(region)), source=RegionSource.RESPONSE_REGION)
    return ConfirmedRegion(value=normalize_region(requested_region), source=RegionSource.REQUEST_FALLBACK)


class AuthAPI:
    """Runs the login exchange, following at most one region correction."""

    def __init__(self, http_client: HttpClient) -> None:
        self._client = http_client

    async def authenticate(self, request: LoginRequest) -> AuthOutcome:
        """Logs in and returns a session bound to the server-confirmed region.

        ``TransportError`` propagates: infrastructure failures are the
        caller's to retry, while provider rejections come back as
        ``AuthFailure`` with the provider's status code.
        """

        body = await self._login(request, request.region)
        status = parse_status(body)
        if status != SUCCESS_STATUS:
            logging.warning("Login failed with status %s", status)
            return AuthFailure(status_code=status)

        confirmed = parse_confirmed_region(body, request.region)
        login_region = request.region
        if confirmed.value != request.region.lower():
            logging.info(
                "Account belongs to region %s (from %s), retrying login there",
                confirmed.value,
                confirmed.source.value,
            )
            login_region = confirmed.value
            # The second answer is authoritative even if it names yet another region.
            body = await self._login(request, login_region)
            status = parse_status(body)
            if status != SUCCESS_STATUS:
                logging.warning("Retried login failed with status %s", status)
                return AuthFailure(status_code=status)

        return self._build_outcome(body, login_region)

    async def _login(self, request: LoginRequest, region: str) -> Any:
        url = f"{resolve_base_url(region)}{LOGIN_PATH}"
        payload = {"email": request.username, "password": request.password}
        logging.info("Logging in to %s as %s", url, request.username)
        logging.debug("Login body: %s", {"email": request.username, "password": "***"})
        try:
            return await self._client.post_json(url, payload, build_api_headers())
        except TransportError as exc:
            logging.error("Unable to get the token from %s: %s", url, exc)
            raise

    def _build_outcome(self, body: Dict[str, Any], login_region: str) -> AuthOutcome:
        data = body.get("data") or {}
        user = data.get("user") or {}
        ticket = data.get("authTicket") or {}
        token = ticket.get("token")
        account_id = user.get("id")
        if not token or not account_id:
            return AuthUnknown(reason="login response is missing the auth ticket or user id")

        country = user.get("country")
        region = normalize_region(str(country)) if country else normalize_region(login_region)
        expires = ticket.get("expires")
        session = Session(
            token=str(token),
            account_id=str(account_id),
            region=region,
            expires=expires if isinstance(expires, int) and not isinstance(expires, bool) else None,
        )
        logging.info("Login successful for region %s", session.region)
        return AuthSuccess(session=session)
