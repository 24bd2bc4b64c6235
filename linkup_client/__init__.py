"""Async client for the LibreLinkUp glucose sharing service."""

__version__ = "0.1.0"
