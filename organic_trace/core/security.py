from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import jwt
from fastapi import Header, HTTPException, status

from organic_trace.config import get_settings


@dataclass(frozen=True)
class Identity:
    user_id: str
    access_token: Optional[str] = None
    claims: dict = field(default_factory=dict)


def _get_bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    return None


def decode_access_token(token: str) -> dict:
    settings = get_settings()
    if not settings.JWT_SECRET:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="JWT auth is not configured",
        )

    options = {"verify_aud": bool(settings.JWT_AUDIENCE)}
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            issuer=settings.JWT_ISSUER,
            options=options,
        )
    except jwt.PyJWTError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid JWT",
        ) from exc


def identity_from_authorization(authorization: Optional[str]) -> Identity:
    token = _get_bearer_token(authorization)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    claims = decode_access_token(token)
    user_id = str(claims.get("sub") or "").strip()
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has no subject",
        )
    return Identity(user_id=user_id, access_token=token, claims=claims)


def get_identity(authorization: Optional[str] = Header(None)) -> Identity:
    return identity_from_authorization(authorization)


__all__ = ["Identity", "decode_access_token", "get_identity", "identity_from_authorization"]
