"""
services/auth_service.py
------------------------

Login proxy.  Credentials are validated by APEX; this service only
interprets APEX's answer and, on success, signs a local session token.
There is no local fallback: if APEX cannot confirm the user, the login
fails.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

import httpx

from wabot.clients.apex_client import ApexClient, ApexHTTPError
from wabot.core.config import Settings
from wabot.core.errors import ApiError
from wabot.core.security import create_access_token
from wabot.logging_config import logger, log_call
from wabot.schemas.auth import LoginData, LoginResponse

MSG_TIMEOUT = "Tiempo de espera agotado al conectar con APEX"
MSG_CONEXION = "Error conectando con APEX"


def _coerce_body(data: Any) -> Any:
    """APEX sometimes returns its JSON as a string; decode it when possible."""
    if isinstance(data, str):
        try:
            return json.loads(data)
        except ValueError:
            logger.warning(json.dumps({
                "event": "login_apex_body_not_json",
                "preview": data[:200],
            }))
    return data


def _upstream_status(status_code: int) -> int:
    # a 500 from APEX is reported as a gateway failure, not ours
    return 504 if status_code == 500 else status_code


def build_user(data: Dict[str, Any], username: str) -> Dict[str, Any]:
    """Identity record returned to the client: APEX's ``user`` or one built from the login."""
    user = data.get("user")
    if isinstance(user, dict):
        return user
    return {
        "username": data.get("username") or username,
        "nombre": data.get("nombre") or username,
        "rol": data.get("rol") or "USER",
    }


@log_call
def login(data: Optional[LoginData], apex: ApexClient, settings: Settings) -> LoginResponse:
    """Authenticate ``data`` against APEX and issue a session token.

    :raises ApiError: 400 for missing credentials, 401 when APEX rejects
        them, the upstream status (500 as 504) when APEX fails
    """
    if data is None or not data.username or not data.password:
        raise ApiError.failure(400, "Username y password son obligatorios")
    username = data.username

    logger.info(json.dumps({"event": "login_start", "usuario": username}))
    try:
        status_code, body = apex.login(username, data.password)
    except httpx.TimeoutException as exc:
        logger.error(json.dumps({"event": "login_error", "usuario": username, "detalle": MSG_TIMEOUT}))
        raise ApiError.failure(504, MSG_TIMEOUT) from exc
    except ApexHTTPError as exc:
        logger.error(json.dumps({
            "event": "login_error",
            "usuario": username,
            "status_code": exc.status_code,
            "detalle": str(exc),
        }))
        raise ApiError.failure(_upstream_status(exc.status_code), str(exc)) from exc
    except httpx.HTTPError as exc:
        message = str(exc) or MSG_CONEXION
        logger.error(json.dumps({"event": "login_error", "usuario": username, "detalle": message}))
        raise ApiError.failure(504, message) from exc

    body = _coerce_body(body)
    logger.info(json.dumps({
        "event": "login_apex_response",
        "usuario": username,
        "status_code": status_code,
        "body_type": type(body).__name__,
    }))
    if not isinstance(body, dict) or body.get("success") is not True:
        message = body.get("message") if isinstance(body, dict) else None
        logger.warning(json.dumps({"event": "login_failed", "usuario": username}))
        raise ApiError.failure(401, message or "Credenciales inválidas")

    user = build_user(body, username)
    claims = {
        # python-jose requires a string subject
        "sub": str(user.get("id") or username),
        "username": user.get("username") or username,
        "rol": user.get("rol") or "USER",
    }
    token = create_access_token(claims, settings)
    logger.info(json.dumps({"event": "login_success", "usuario": username}))
    return LoginResponse(
        success=True,
        message=body.get("message") or "Login exitoso",
        token=token,
        user=user,
    )
