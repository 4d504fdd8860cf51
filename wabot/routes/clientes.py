"""
routes/clientes.py
-------------------

Manual customer operations from the admin page, proxied to APEX.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends

from wabot.clients.apex_client import ApexClient
from wabot.core.deps import get_apex_client
from wabot.core.security import require_auth
from wabot.schemas.clientes import DescuentoRequest
from wabot.services.clientes_service import actualizar_descuento

router = APIRouter(prefix="/api/clientes", tags=["Clientes"])


@router.post("/descuento")
def post_descuento(
    data: DescuentoRequest,
    claims: Dict[str, Any] = Depends(require_auth),
    apex: ApexClient = Depends(get_apex_client),
):
    """Actualiza el descuento de un cliente en APEX."""
    return actualizar_descuento(data, apex, claims.get("username"))
