"""Bearer token check shared by every /api route."""
import logging
from typing import Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from grocer.utilities import config

logger = logging.getLogger(__name__)

_bearer = HTTPBearer(auto_error=False)


def require_bearer(credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer)) -> str:
    """Return the caller's token, or reject the request with 401 before any data is read."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise HTTPException(status_code=401, detail="Unauthorized",
                            headers={"WWW-Authenticate": "Bearer"})
    token = credentials.credentials.strip()
    if not token or token not in config.API_TOKENS:
        logger.info("Rejected request with unknown bearer token")
        raise HTTPException(status_code=401, detail="Unauthorized",
                            headers={"WWW-Authenticate": "Bearer"})
    return token
