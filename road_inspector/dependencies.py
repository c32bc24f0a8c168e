import secrets

from fastapi import Header

from road_inspector.config import settings
from road_inspector.utils.exceptions import AccessDenied


async def verify_api_key(x_api_key: str = Header(default="")) -> None:
    """Guard for /api routes. A relay without API_KEY configured is open (local dev)."""
    if not settings.api_key:
        return
    if not secrets.compare_digest(x_api_key.encode(), settings.api_key.encode()):
        raise AccessDenied()
