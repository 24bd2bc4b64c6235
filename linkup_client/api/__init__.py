"""API layer for authentication and connection data."""

from .auth_api import AuthAPI
from .connection_api import ConnectionAPI

__all__ = ["AuthAPI", "ConnectionAPI"]
