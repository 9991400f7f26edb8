import logging

from fastapi import Request
from supabase import create_client, Client

from app import config
from app.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def create_supabase() -> Client:
    if not config.SUPABASE_URL or not config.SUPABASE_KEY:
        raise ConfigurationError("SUPABASE_URL and SUPABASE_KEY must be set")
    logger.info("Connecting to Supabase at %s", config.SUPABASE_URL)
    return create_client(config.SUPABASE_URL, config.SUPABASE_KEY)


def supabase_for_app(app) -> Client:
    """The app's Supabase client, created on first use."""
    client = getattr(app.state, "supabase", None)
    if client is None:
        client = create_supabase()
        app.state.supabase = client
    return client


def get_supabase(request: Request) -> Client:
    return supabase_for_app(request.app)
