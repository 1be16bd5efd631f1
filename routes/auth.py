import logging
from typing import Optional

from fastapi import Cookie, Header, HTTPException

from config import settings

logger = logging.getLogger(__name__)


async def require_auth(
    auth: Optional[str] = Cookie(default=None),
    authorization: Optional[str] = Header(default=None),
):
    """Admit logged-in browser sessions or callers holding the admin token."""
    if auth == "true":
        return
    if settings.admin_token and authorization == f"Bearer {settings.admin_token}":
        return
    logger.warning("Rejected unauthenticated search request")
    raise HTTPException(status_code=401, detail="Unauthorized")
