from .base import DataClient
from .supabase import SupabaseClient, UnconfiguredClient, create_data_client

__all__ = ["DataClient", "SupabaseClient", "UnconfiguredClient", "create_data_client"]
