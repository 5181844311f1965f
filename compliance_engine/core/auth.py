"""
JWT Authentication dependency.

Validates Bearer tokens issued by the managed auth provider (HS256,
shared project secret). Disabled in development via AUTH_ENABLED=false.
"""
from __future__ import annotations

from typing import Optional

import structlog
from fastapi import Depends, HTTPException, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from compliance_engine.core.config import Settings, get_settings

logger = structlog.get_logger()
security = HTTPBearer(auto_error=False)


async def verify_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security),
    settings: Settings = Depends(get_settings),
) -> dict:
    """
    FastAPI dependency: extracts and validates the JWT.
    Returns the decoded token payload (claims).
    """
    if not settings.auth_enabled:
        return {"sub": "dev-user", "role": "compliance-admin"}

    if credentials is None:
        raise HTTPException(status_code=401, detail="Missing authorization header")

    try:
        payload = jwt.decode(
            credentials.credentials,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
        )
    except JWTError as e:
        logger.warning("jwt_validation_failed", error=str(e))
        raise HTTPException(status_code=401, detail=f"Token validation failed: {e}")

    if not payload.get("sub"):
        raise HTTPException(status_code=401, detail="Token has no subject")
    return payload
