from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
from typing import Any, Optional, Tuple

from dotenv import load_dotenv

from .api.auth_api import AuthAPI
from .api.connection_api import ConnectionAPI
from .models import AuthFailure, AuthSuccess, LoginRequest, NoConnections, Session
from .utils.endpoints import GLOBAL_REGION
from .utils.http_client import HttpClient, TransportError
from .utils.preferences import DEFAULT_PREFERENCES_PATH, PreferenceStore
from .utils.secure_store import DEFAULT_SERVICE_NAME, CredentialVault, SecureStore, SecureStoreError

load_dotenv()

EXIT_OK = 0
EXIT_AUTH_FAILED = 1
EXIT_TRANSPORT = 2
EXIT_NO_CONNECTIONS = 3
EXIT_NO_DATA = 4

REGION_PREFERENCE = "region"


def _env_str(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return None
    return value


def _env_float(name: str) -> float | None:
    value = _env_str(name)
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _env_bool(name: str) -> bool:
    value = _env_str(name)
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Show the latest LibreLinkUp glucose reading.")
    parser.add_argument("--region", default=_env_str("LINKUP_REGION"), help="Account region code, or 'global'")
    parser.add_argument("--username", default=_env_str("LINKUP_USERNAME"), help="LibreLinkUp account email")
    parser.add_argument("--password", default=_env_str("LINKUP_PASSWORD"), help="LibreLinkUp account password")
    parser.add_argument("--timeout", type=float, default=_env_float("LINKUP_TIMEOUT"), help="Total request timeout in seconds")
    preferences_env = _env_str("LINKUP_PREFERENCES")
    parser.add_argument(
        "--preferences",
        default=os.path.expanduser(preferences_env) if preferences_env else DEFAULT_PREFERENCES_PATH,
        help="JSON file holding non-sensitive settings",
    )
    parser.add_argument(
        "--service",
        default=_env_str("LINKUP_SERVICE") or DEFAULT_SERVICE_NAME,
        help="Keyring service name for stored secrets",
    )
    parser.add_argument(
        "--save-credentials",
        action="store_true",
        default=_env_bool("LINKUP_SAVE_CREDENTIALS"),
        help="Store username and password in the OS keyring after a successful login",
    )
    parser.add_argument("--logout", action="store_true", help="Forget the stored session and credentials")
    parser.add_argument("--json", action="store_true", help="Print the raw graph payload")
    return parser.parse_args(argv)


def configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


def resolve_credentials(args: argparse.Namespace, vault: CredentialVault) -> Optional[Tuple[str, str]]:
    if args.username and args.password:
        return args.username, args.password
    stored = vault.get_credentials()
    if stored:
        logging.info("Using stored credentials for %s", stored[0])
    return stored


async def resolve_session(
    args: argparse.Namespace,
    auth_api: AuthAPI,
    vault: CredentialVault,
    preferences: PreferenceStore,
) -> Session | int:
    """Returns a usable session, or an exit code when none could be obtained."""

    # Explicit credentials may name a different account than the stored session.
    explicit_login = bool(args.username and args.password)
    cached = None if explicit_login else vault.get_session()
    if cached and not cached.is_expired():
        logging.info("Reusing stored session for region %s", cached.region)
        return cached

    credentials = resolve_credentials(args, vault)
    if not credentials:
        logging.error("Either --username/--password or stored credentials must be provided.")
        return EXIT_AUTH_FAILED

    username, password = credentials
    region = args.region or preferences.get(REGION_PREFERENCE, GLOBAL_REGION)
    request = LoginRequest(region=region, username=username, password=password)
    try:
        outcome = await auth_api.authenticate(request)
    except TransportError as exc:
        logging.error("Login request failed: %s", exc)
        return EXIT_TRANSPORT

    if isinstance(outcome, AuthFailure):
        logging.error("Login rejected by LibreLinkUp (status %s)", outcome.status_code)
        return EXIT_AUTH_FAILED
    if not isinstance(outcome, AuthSuccess):
        logging.error("Login response could not be understood: %s", outcome.reason)
        return EXIT_AUTH_FAILED

    session = outcome.session
    preferences.set(REGION_PREFERENCE, session.region)
    vault.store_session(session)
    if args.save_credentials:
        vault.store_credentials(username, password)
    return session


def print_graph(payload: dict[str, Any], raw: bool) -> None:
    if raw:
        print(json.dumps(payload, indent=2, ensure_ascii=False))
        return
    measurement = payload.get("glucoseMeasurement") or {}
    graph_points = payload.get("graphData") or []
    logging.info(
        "Latest: %s (trend %s) at %s; %s graph points",
        measurement.get("Value"),
        measurement.get("TrendArrow"),
        measurement.get("Timestamp"),
        len(graph_points),
    )


async def run(args: argparse.Namespace) -> int:
    preferences = PreferenceStore(args.preferences)
    vault = CredentialVault(SecureStore(args.service))

    if args.logout:
        vault.delete_session()
        vault.delete_credentials()
        logging.info("Stored session and credentials removed.")
        return EXIT_OK

    async with HttpClient(timeout=args.timeout) as http_client:
        session = await resolve_session(args, AuthAPI(http_client), vault, preferences)
        if isinstance(session, int):
            return session

        payload = await ConnectionAPI(http_client).fetch_cgm_data(session)

    if isinstance(payload, NoConnections):
        logging.warning("%s", payload.message)
        return EXIT_NO_CONNECTIONS
    if not payload:
        logging.warning("No glucose data available right now.")
        return EXIT_NO_DATA
    print_graph(payload, args.json)
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging()
    try:
        return asyncio.run(run(args))
    except SecureStoreError as exc:
        logging.error("Secure storage unavailable: %s", exc)
        return EXIT_AUTH_FAILED


if __name__ == "__main__":
    sys.exit(main())
