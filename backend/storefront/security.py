"""
Admin authorization for inventory routes.

Tokens are issued by the external auth provider; this module only verifies
them. A caller is an admin when the verified token carries the configured
role in `user_metadata.role` (or `app_metadata.role`).
"""
import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt

from storefront.config import settings

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def decode_token(token: str) -> dict:
    """
    Decode and validate a JWT access token.

    Raises:
        JWTError: If token is invalid
        ExpiredSignatureError: If token has expired
    """
    if settings.JWT_AUDIENCE:
        return jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            audience=settings.JWT_AUDIENCE,
        )
    return jwt.decode(
        token,
        settings.SECRET_KEY,
        algorithms=[settings.JWT_ALGORITHM],
        options={"verify_aud": False},
    )


def role_of(claims: dict) -> Optional[str]:
    for key in ("user_metadata", "app_metadata"):
        meta = claims.get(key) or {}
        if isinstance(meta, dict) and meta.get("role"):
            return meta["role"]
    return None


def require_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> dict:
    """FastAPI dependency guarding every admin route. Returns the token claims."""
    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None or not credentials.credentials:
        raise unauthorized

    try:
        claims = decode_token(credentials.credentials)
    except ExpiredSignatureError:
        logger.info("Rejected expired admin token")
        raise unauthorized
    except JWTError as e:
        logger.warning("Rejected invalid admin token: %s", e)
        raise unauthorized

    if role_of(claims) != settings.ADMIN_ROLE:
        logger.warning("Admin access denied for subject %s", claims.get("sub"))
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required"
        )
    return claims
