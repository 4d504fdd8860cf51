"""
routes/auth.py
---------------

Login proxy and token introspection for the admin page.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends

from wabot.clients.apex_client import ApexClient
from wabot.core.config import Settings
from wabot.core.deps import get_apex_client, get_settings_dep
from wabot.core.security import require_auth
from wabot.schemas.auth import LoginData, LoginResponse
from wabot.services.auth_service import login

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/login", response_model=LoginResponse)
def post_login(data: Optional[LoginData] = Body(None), apex: ApexClient = Depends(get_apex_client),
               settings: Settings = Depends(get_settings_dep)):
    """Valida credenciales contra APEX y emite un token de sesión de 24 h."""
    return login(data, apex, settings)


@router.get("/me")
def get_me(claims: Dict[str, Any] = Depends(require_auth)):
    """Devuelve los datos del token presentado."""
    return {
        "success": True,
        "user": {k: claims.get(k) for k in ("sub", "username", "rol")},
        "exp": claims.get("exp"),
    }
