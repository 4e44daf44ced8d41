"""
Database configuration and connection management.
"""
import os
from supabase import AsyncClient, acreate_client


# Supabase configuration, loaded into the environment by settings.py
SUPABASE_URL = os.getenv('SUPABASE_URL')
SUPABASE_KEY = os.getenv('SUPABASE_KEY')

async def get_supabase_client() -> AsyncClient:
    """
    Get a configured Supabase async client.

    Returns:
        AsyncClient: A configured Supabase async client instance

    Raises:
        ValueError: If required environment variables are not set
    """
    url = SUPABASE_URL or os.getenv('SUPABASE_URL')
    key = SUPABASE_KEY or os.getenv('SUPABASE_KEY')
    if not url or not key:
        raise ValueError(
            "Missing required environment variables. "
            "Please ensure SUPABASE_URL and SUPABASE_KEY are set in your .env file."
        )

    return await acreate_client(url, key)

# Database connection string for yoyo
DATABASE_URL = os.getenv('DATABASE_URL')
