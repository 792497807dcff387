"""
Hosted database access (Supabase / PostgREST).

The client is built lazily from the environment. Without credentials a
FallbackClient takes its place: every query built on it can be chained as
usual, and fails with DatabaseUnavailableError once executed, so routes keep
running (and answer 500) in disconnected environments.
"""

import logging
from typing import Any, Optional

from supabase import Client, create_client

from . import config

logger = logging.getLogger(__name__)

UNAVAILABLE_MESSAGE = "Database unavailable - Supabase connection failed"

_client: Optional[Any] = None


class DatabaseUnavailableError(RuntimeError):
    def __init__(self, table: Optional[str] = None):
        self.table = table
        super().__init__(UNAVAILABLE_MESSAGE)


class _UnavailableQuery:
    """Stands in for a PostgREST request builder; any builder call chains."""

    def __init__(self, table: str):
        self.table = table

    def __getattr__(self, name: str):
        if name.startswith("_"):
            raise AttributeError(name)

        def _chain(*args, **kwargs):
            return self

        return _chain

    def execute(self):
        raise DatabaseUnavailableError(self.table)


class FallbackClient:
    def table(self, name: str) -> _UnavailableQuery:
        return _UnavailableQuery(name)

    def from_(self, name: str) -> _UnavailableQuery:
        return self.table(name)


def _create() -> Any:
    url = config.supabase_url()
    key = config.supabase_key()
    logger.info("Loading Supabase with URL: %s", "Found" if url else "Not found")
    logger.info("Loading Supabase with Key: %s", "Found" if key else "Not found")

    if not (url and key):
        logger.warning("Supabase environment variables not found. Using fallback client.")
        return FallbackClient()
    try:
        client: Client = create_client(url, key)
    except Exception:
        logger.exception("Failed to create Supabase client")
        return FallbackClient()
    logger.info("Supabase client initialized")
    return client


def get_client() -> Any:
    global _client
    if _client is None:
        _client = _create()
    return _client


def reset_client() -> None:
    global _client
    _client = None


def is_fallback(client: Any) -> bool:
    return isinstance(client, FallbackClient)


def get_db():
    """FastAPI dependency returning the shared database client."""
    return get_client()
