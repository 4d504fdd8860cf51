"""
services/clientes_service.py
----------------------------

Manual discount updates submitted from the admin page.  The request
goes through the backend so the browser never talks to APEX directly;
APEX remains the only authority on valid percentages.
"""

from __future__ import annotations

import json
from typing import Any, Dict

from wabot.clients.apex_client import ApexClient, ApexError
from wabot.core.errors import ApiError
from wabot.logging_config import logger, log_call
from wabot.schemas.clientes import DescuentoRequest
from wabot.services.command_service import format_percent


@log_call
def actualizar_descuento(data: DescuentoRequest, apex: ApexClient, usuario: str) -> Dict[str, Any]:
    try:
        result = apex.actualizar_descuento(data.telefono, data.descuento)
    except ApexError as exc:
        logger.error(json.dumps({
            "event": "descuento_manual_error",
            "usuario": usuario,
            "telefono": data.telefono,
            "detalle": str(exc),
        }))
        raise ApiError.failure(502, "Error de conexión con APEX") from exc
    if not (isinstance(result, dict) and result.get("success")):
        logger.warning(json.dumps({
            "event": "descuento_manual_rechazado",
            "usuario": usuario,
            "telefono": data.telefono,
        }))
        raise ApiError.failure(400, "Error al actualizar descuento")
    logger.info(json.dumps({
        "event": "descuento_manual_ok",
        "usuario": usuario,
        "telefono": data.telefono,
        "descuento": data.descuento,
    }))
    return {
        "success": True,
        "message": f"Descuento actualizado a {format_percent(data.descuento)}% para {data.telefono}",
    }
