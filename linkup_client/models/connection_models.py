"""Models describing followed connections and fetch results."""

from __future__ import annotations

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

NO_CONNECTIONS_MESSAGE = (
    "No LibreLinkUp connections found. Please set up a connection in your Libre app."
)

GraphPayload = Dict[str, Any]


class Connection(BaseModel):
    """A patient the account may follow; unknown provider fields are kept."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    patient_id: str = Field(alias="patientId")
    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")


class NoConnections(BaseModel):
    """Returned when the account follows nobody yet."""

    error: Literal["NO_CONNECTIONS"] = "NO_CONNECTIONS"
    message: str = NO_CONNECTIONS_MESSAGE


class Swallowed(BaseModel):
    """A fetch failure that was suppressed instead of raised."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    operation: str
    error: Exception
