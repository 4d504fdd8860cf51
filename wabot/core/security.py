"""
core/security.py
-----------------

Session token issuance and the request authorization guard.

Tokens are HS256 JWTs signed with ``Settings.jwt_secret``.  There is no
server-side session store: a token is valid exactly as long as its
signature verifies and its ``exp`` claim lies in the future.
"""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi import Header, Request
from jose import JWTError, jwt

from wabot.core.config import Settings
from wabot.core.errors import ApiError
from wabot.logging_config import logger


def create_access_token(claims: Dict[str, Any], settings: Settings,
                        now: Optional[datetime] = None) -> str:
    """Sign ``claims`` into a token that expires ``jwt_expires_hours`` from ``now``.

    :param claims: identity claims (``sub``, ``username``, ``rol``)
    :param settings: application settings holding the secret and lifetime
    :param now: issuance instant, defaults to the current UTC time
    :return: the encoded JWT
    """
    issued_at = now or datetime.now(timezone.utc)
    payload = dict(claims)
    payload["iat"] = int(issued_at.timestamp())
    payload["exp"] = int((issued_at + timedelta(hours=settings.jwt_expires_hours)).timestamp())
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> Dict[str, Any]:
    """Verify signature and expiry and return the claims.

    :raises JWTError: for a bad signature, a malformed token or an expired one
    """
    return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])


def require_auth(request: Request, authorization: Optional[str] = Header(None)) -> Dict[str, Any]:
    """FastAPI dependency guarding privileged endpoints.

    The header must be exactly ``Bearer <token>``.  Any other shape is
    rejected before verification; every verification failure yields the
    same generic message.  The decoded claims are returned to the route
    and kept on ``request.state.user``.
    """
    parts = (authorization or "").split(" ")
    if len(parts) != 2 or parts[0] != "Bearer":
        raise ApiError.failure(401, "Token no proporcionado")
    settings: Settings = request.app.state.settings
    try:
        claims = decode_access_token(parts[1], settings)
    except JWTError as exc:
        logger.info(json.dumps({
            "event": "auth_token_rejected",
            "path": request.url.path,
            "detalle": str(exc),
        }))
        raise ApiError.failure(401, "Token inválido o expirado")
    request.state.user = claims
    return claims
