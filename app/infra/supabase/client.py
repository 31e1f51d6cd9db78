"""Supabase client singleton"""
import logging
from typing import Optional

from supabase import Client, create_client  # type: ignore

from app import config
from .repositories import RepositoryFactory

logger = logging.getLogger(__name__)

_supabase_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """Get or create Supabase client singleton"""
    global _supabase_client

    if _supabase_client is None:
        if not config.SUPABASE_URL or not config.SUPABASE_SERVICE_ROLE_KEY:
            raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set")

        logger.info("Creating Supabase client")
        _supabase_client = create_client(config.SUPABASE_URL, config.SUPABASE_SERVICE_ROLE_KEY)

    return _supabase_client


def reset_supabase_client():
    """Reset the Supabase client singleton (useful for testing)"""
    global _supabase_client
    _supabase_client = None


def get_repositories() -> RepositoryFactory:
    """FastAPI dependency returning repositories bound to the shared client"""
    return RepositoryFactory(get_supabase_client())
