# catalog_admin/core/supabase_client.py
from functools import lru_cache

from fastapi import Depends
from supabase import Client, create_client

from catalog_admin.core.config import Settings, get_settings


@lru_cache
def _cached_client(url: str, key: str) -> Client:
    return create_client(url, key)


def get_public_client(settings: Settings = Depends(get_settings)) -> Client:
    """
    Supabase client with the anon/public key.

    Use cases:
      - reading the products table through RLS

    Note: This client still respects RLS.
    """
    return _cached_client(settings.SUPABASE_URL, settings.SUPABASE_ANON_KEY)


def get_admin_client(settings: Settings = Depends(get_settings)) -> Client:
    """
    Supabase client with the service role key.

    Use cases:
      - product writes and storage uploads/deletes
      - reading a user's role from `profiles` before they hold a token

    WARNING:
      - Never expose the service role key to the frontend.
    """
    return _cached_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_KEY)


def new_auth_client(settings: Settings) -> Client:
    """
    Uncached anon client for password sign-in.

    sign_in_with_password stores the user's session on the client it was
    called on, so sign-ins must not share the cached public client.
    """
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_ANON_KEY)
