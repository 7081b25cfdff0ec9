from fastapi import Request

from stepflow.config import settings
from stepflow.services.store import MemoryStore

def get_store(request: Request) -> MemoryStore:
    return request.app.state.store

async def get_current_user_id() -> int:
    """
    Caller identity.

    There is no authentication layer yet, every request acts as the configured
    default user. A real identity provider replaces this dependency.
    """
    return settings.DEFAULT_USER_ID
