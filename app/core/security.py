from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

import jwt
from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.config import get_settings
from app.core.constants import USER_ROLES
from app.models.user import User


@dataclass(frozen=True)
class Principal:
    """The authenticated staff member acting on a request."""

    user_id: int
    role: str
    username: str = ""


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


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
        raise _unauthorized("JWT auth is not configured")

    options = {"verify_aud": bool(settings.JWT_AUDIENCE), "require": ["sub"]}
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
        raise _unauthorized("Invalid token") from exc


def _user_id_from_claims(payload: dict) -> int:
    raw = payload.get("sub")
    try:
        user_id = int(raw)
    except (TypeError, ValueError) as exc:
        raise _unauthorized("Invalid token") from exc
    if user_id < 1:
        raise _unauthorized("Invalid token")
    return user_id


def authenticate_request(db: Session, authorization: Optional[str]) -> Principal:
    token = _get_bearer_token(authorization)
    if not token:
        raise _unauthorized("Access token required")

    payload = decode_access_token(token)
    user_id = _user_id_from_claims(payload)

    # The user must still exist and be active; the stored role wins over the claim.
    user = db.get(User, user_id)
    if user is None or not user.is_active or user.role not in USER_ROLES:
        raise _unauthorized("Invalid token")
    return Principal(user_id=user.id, role=user.role, username=user.username)


def ensure_role(principal: Principal, allowed_roles: Iterable[str]) -> Principal:
    if principal.role not in set(allowed_roles):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Insufficient permissions",
        )
    return principal


__all__ = ["Principal", "authenticate_request", "decode_access_token", "ensure_role"]
