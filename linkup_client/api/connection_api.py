"""Best-effort retrieval of followed connections and their glucose graph."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Union

from ..models import Connection, GraphPayload, NoConnections, Session, Swallowed
from ..utils.endpoints import resolve_base_url
from ..utils.http_client import HttpClient, build_api_headers

CONNECTIONS_PATH = "/connections"
GRAPH_PATH = "/connections/{patient_id}/graph"

FailureObserver = Callable[[Swallowed], None]


def log_swallowed(failure: Swallowed) -> None:
    logging.warning("Unable to %s: %s", failure.operation, failure.error)


class ConnectionAPI:
    """Fetches connection and graph data; failures become ``None``, never exceptions."""

    def __init__(self, http_client: HttpClient, on_failure: FailureObserver = log_swallowed) -> None:
        self._client = http_client
        self._on_failure = on_failure

    async def fetch_connection(self, session: Session) -> Optional[Connection]:
        result = await self._guard("fetch connection", self._first_connection(session))
        if isinstance(result, Swallowed):
            return None
        return result

    async def fetch_cgm_data(self, session: Session) -> Union[GraphPayload, NoConnections, None]:
        """Returns the graph payload, ``NoConnections`` for an empty list, or ``None``."""

        result = await self._guard("fetch CGM data", self._graph(session))
        if isinstance(result, Swallowed):
            return None
        return result

    async def _guard(self, operation: str, call: Any) -> Any:
        try:
            return await call
        except Exception as exc:
            failure = Swallowed(operation=operation, error=exc)
            self._on_failure(failure)
            return failure

    async def _list_connections(self, session: Session) -> list:
        url = f"{resolve_base_url(session.region)}{CONNECTIONS_PATH}"
        logging.debug("Fetching connections from %s", url)
        body = await self._client.get_json(url, build_api_headers(session.token, session.account_id))
        data = body.get("data") if isinstance(body, dict) else None
        if not isinstance(data, list):
            raise ValueError(f"connections response has no list: {body!r}")
        return data

    async def _first_connection(self, session: Session) -> Optional[Connection]:
        connections = await self._list_connections(session)
        if not connections:
            return None
        return Connection.model_validate(connections[0])

    async def _graph(self, session: Session) -> Union[GraphPayload, NoConnections, None]:
        connections = await self._list_connections(session)
        if not connections:
            return NoConnections()

        first = connections[0] if isinstance(connections[0], dict) else {}
        patient_id = first.get("patientId")
        if not patient_id:
            raise ValueError("first connection has no patientId")

        url = f"{resolve_base_url(session.region)}{GRAPH_PATH.format(patient_id=patient_id)}"
        logging.debug("Fetching graph data for patient %s", patient_id)
        body = await self._client.get_json(url, build_api_headers(session.token, session.account_id))
        data = body.get("data") if isinstance(body, dict) else None
        if not isinstance(data, dict):
            raise ValueError(f"graph response has no data object: {body!r}")
        return data.get("connection")
