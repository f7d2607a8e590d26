from typing import AsyncIterator

from app.configuration.settings import Configuration
from app.database.supabase import SupabaseClient

configuration = Configuration()

def create_client() -> SupabaseClient:
    return SupabaseClient(
        configuration.supabase_url,
        configuration.supabase_key or "",
        timeout=configuration.supabase_timeout_seconds,
    )

async def get_session() -> AsyncIterator[SupabaseClient]:
    """Dependência do FastAPI: um cliente por requisição, fechado ao final."""
    client = create_client()
    try:
        yield client
    finally:
        await client.aclose()
