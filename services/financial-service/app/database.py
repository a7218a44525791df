"""
Supabase client management.

The financial collections live in Supabase tables accessed through the
PostgREST client. A single client is shared by every request.
"""

from typing import Optional

import structlog
from supabase import Client, create_client

from app.config import settings
from app.exceptions import DatabaseNotConfiguredException

logger = structlog.get_logger(__name__)

# Global Supabase client instance
_supabase_client: Optional[Client] = None


def is_configured() -> bool:
    """Check if Supabase is properly configured."""
    return bool(settings.SUPABASE_URL and settings.SUPABASE_SERVICE_KEY)


def get_supabase_client() -> Client:
    """
    Get or create Supabase client instance.

    Returns:
        Configured Supabase client

    Raises:
        DatabaseNotConfiguredException: If SUPABASE_URL or SUPABASE_SERVICE_KEY is unset
    """
    global _supabase_client

    if not is_configured():
        missing = [
            name
            for name, value in (
                ("SUPABASE_URL", settings.SUPABASE_URL),
                ("SUPABASE_SERVICE_KEY", settings.SUPABASE_SERVICE_KEY),
            )
            if not value
        ]
        raise DatabaseNotConfiguredException(missing)

    if _supabase_client is None:
        logger.info("Initializing Supabase client", url=settings.SUPABASE_URL)
        _supabase_client = create_client(
            settings.SUPABASE_URL, settings.SUPABASE_SERVICE_KEY
        )
        logger.info("Supabase client initialized")

    return _supabase_client


def reset_supabase_client() -> None:
    """Drop the cached client so the next call creates a new one."""
    global _supabase_client

    if _supabase_client is not None:
        logger.info("Releasing Supabase client")
        _supabase_client = None
