"""Shared HTTP helpers for the LibreLinkUp API."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

import aiohttp

from .hashing import digest_account_id

PRODUCT = "llu.android"
CLIENT_VERSION = "4.16.0"

API_HEADERS_TEMPLATE: Dict[str, str] = {
    "product": PRODUCT,
    "version": CLIENT_VERSION,
    "Pragma": "no-cache",
    "Cache-Control": "no-cache",
}


class TransportError(Exception):
    """Raised when a request fails before a provider status could be read."""


def build_api_headers(token: Optional[str] = None, account_id: Optional[str] = None) -> Dict[str, str]:
    """Returns a fresh header set, adding bearer and account headers when given."""

    headers = API_HEADERS_TEMPLATE.copy()
    if token:
        headers["Authorization"] = f"Bearer {token}"
    if account_id:
        headers["Account-Id"] = digest_account_id(account_id)
    return headers


class HttpClient:
    """Issues JSON requests over a lazily created aiohttp session."""

    def __init__(self, timeout: Optional[float] = None, session: Optional[aiohttp.ClientSession] = None) -> None:
        self.timeout = timeout
        self._session = session
        self._owns_session = session is None
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    async def post_json(self, url: str, payload: Dict[str, Any], headers: Dict[str, str]) -> Any:
        return await self.request_json("POST", url, headers, payload)

    async def get_json(self, url: str, headers: Dict[str, str]) -> Any:
        return await self.request_json("GET", url, headers)

    async def request_json(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        payload: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Sends a request and decodes the body as JSON whatever the HTTP status."""

        session = await self._get_session()
        try:
            async with session.request(method, url, headers=headers, json=payload) as resp:
                logging.debug("%s %s -> HTTP %s", method, url, resp.status)
                try:
                    return await resp.json(content_type=None)
                except ValueError as exc:
                    raise TransportError(f"{method} {url} returned a non-JSON body (HTTP {resp.status})") from exc
        except aiohttp.ClientError as exc:
            logging.error("HTTP %s to %s failed: %s", method, url, exc)
            raise TransportError(f"{method} {url} failed: {exc}") from exc
        except asyncio.TimeoutError as exc:
            logging.error("HTTP %s to %s timed out", method, url)
            raise TransportError(f"{method} {url} timed out") from exc

    async def _get_session(self) -> aiohttp.ClientSession:
        if not self._owns_session:
            return self._session

        current_loop = asyncio.get_running_loop()
        if self._session and (self._session.closed or self._loop is not current_loop):
            await self._shutdown_session()

        if self._session is None:
            timeout = aiohttp.ClientTimeout(total=self.timeout) if self.timeout else None
            if timeout is None:
                self._session = aiohttp.ClientSession()
            else:
                self._session = aiohttp.ClientSession(timeout=timeout)
            self._loop = current_loop
        return self._session

    async def _shutdown_session(self) -> None:
        if self._session and not self._session.closed:
            try:
                await self._session.close()
            except RuntimeError as exc:
                logging.debug("Could not close session from a previous event loop: %s", exc)
        self._session = None
        self._loop = None

    async def close(self) -> None:
        if self._owns_session:
            await self._shutdown_session()

    async def __aenter__(self) -> "HttpClient":
        return self

    async def __aexit__(self, exc_type, exc_value, traceback) -> None:
        await self.close()
