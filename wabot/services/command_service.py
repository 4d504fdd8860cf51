"""
services/command_service.py
---------------------------

Chat command handling for inbound WhatsApp messages.

Every inbound message produces exactly one reply.  The body is trimmed
and upper-cased to recognise one of the commands below; anything else
gets the greeting.

==================  ==========================================
``CONSULTAR``       customer lookup in APEX by sender phone
``DESCUENTO <n>``   discount update in APEX for the sender
``AYUDA``/``HELP``  static command list
==================  ==========================================
"""

from __future__ import annotations

import json
import math
import re
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from wabot.clients.apex_client import ApexClient, ApexError
from wabot.logging_config import logger, log_call
from wabot.schemas.whatsapp import IncomingMessage
from wabot.session.transport import SessionTransport, TransportError

DESCUENTO_PREFIX = "DESCUENTO "
_PLAIN_DECIMAL = re.compile(r"[+-]?\d+(?:\.\d+)?")

MSG_NO_ENCONTRADO = "❌ Cliente no encontrado en el sistema."
MSG_ERROR_CONSULTA = "⚠️ Error al consultar información. Intente nuevamente."
MSG_FORMATO_DESCUENTO = "❌ Formato incorrecto. Use: DESCUENTO 10"
MSG_ERROR_DESCUENTO = "❌ Error al actualizar descuento. Verifique que el cliente exista."
MSG_ERROR_SOLICITUD = "⚠️ Error al procesar solicitud. Intente nuevamente."
MSG_AYUDA = (
    "🤖 *Comandos disponibles:*\n\n"
    "📋 CONSULTAR - Ver tu información\n"
    "💰 DESCUENTO [%] - Actualizar descuento\n"
    "❓ AYUDA - Ver este mensaje\n\n"
    "Ejemplo: DESCUENTO 15"
)
MSG_SALUDO = "¡Hola! 👋\n\nEnvía *AYUDA* para ver los comandos disponibles."


@dataclass(frozen=True)
class Consultar:
    pass


@dataclass(frozen=True)
class Descuento:
    raw: str
    percent: Optional[float]


@dataclass(frozen=True)
class Ayuda:
    pass


@dataclass(frozen=True)
class Default:
    pass


Command = Union[Consultar, Descuento, Ayuda, Default]


def parse_percent(raw: str) -> Optional[float]:
    """Parse a discount percentage, or return ``None`` if it is not a number.

    No range check is made: negative values and values above 100 are
    passed on to APEX, which decides what is acceptable.
    """
    text = raw.strip()
    if not text or "_" in text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def parse_command(body: str) -> Command:
    text = (body or "").strip()
    upper = text.upper()
    if upper == "CONSULTAR":
        return Consultar()
    if upper.startswith(DESCUENTO_PREFIX):
        # digits come from the original text, not the upper-cased copy
        raw = text[len(DESCUENTO_PREFIX):].strip()
        return Descuento(raw=raw, percent=parse_percent(raw))
    if upper in ("AYUDA", "HELP"):
        return Ayuda()
    return Default()


def format_percent(value: float) -> str:
    """Plain decimal rendering without exponent or trailing zeros (``1e6`` → ``1000000``)."""
    text = f"{value:f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def _display_percent(command: Descuento) -> str:
    # echo what the user typed unless it is not a plain decimal
    if _PLAIN_DECIMAL.fullmatch(command.raw):
        return command.raw
    return format_percent(command.percent)


def normalize_phone(chat_id: str, suffix: str = "@c.us") -> str:
    """Strip the session address suffix from a chat id (``5491122@c.us`` → ``5491122``)."""
    return chat_id.removesuffix(suffix)


def _is_success(data: Any) -> bool:
    return isinstance(data, dict) and bool(data.get("success"))


def _reply_consultar(phone: str, apex: ApexClient) -> str:
    try:
        data = apex.consultar_cliente(phone)
    except ApexError as exc:
        logger.warning(json.dumps({
            "event": "consultar_error",
            "telefono": phone,
            "detalle": str(exc),
        }))
        return MSG_ERROR_CONSULTA
    except Exception as exc:
        # the sender still gets an answer for failures outside the client's taxonomy
        logger.error(json.dumps({
            "event": "consultar_error",
            "telefono": phone,
            "detalle": str(exc) or exc.__class__.__name__,
        }), exc_info=True)
        return MSG_ERROR_CONSULTA
    if not _is_success(data):
        logger.info(json.dumps({"event": "consultar_no_encontrado", "telefono": phone}))
        return MSG_NO_ENCONTRADO
    return (
        "📋 *Información del Cliente*\n\n"
        f"Nombre: {data.get('nombre')}\n"
        f"Teléfono: {data.get('telefono')}\n"
        f"Descuento actual: {data.get('descuento')}%\n"
        f"Estado: {data.get('estado')}"
    )


def _reply_descuento(command: Descuento, phone: str, apex: ApexClient) -> str:
    if command.percent is None:
        return MSG_FORMATO_DESCUENTO
    try:
        data = apex.actualizar_descuento(phone, command.percent)
    except ApexError as exc:
        logger.warning(json.dumps({
            "event": "descuento_error",
            "telefono": phone,
            "detalle": str(exc),
        }))
        return MSG_ERROR_SOLICITUD
    except Exception as exc:
        logger.error(json.dumps({
            "event": "descuento_error",
            "telefono": phone,
            "detalle": str(exc) or exc.__class__.__name__,
        }), exc_info=True)
        return MSG_ERROR_SOLICITUD
    if not _is_success(data):
        logger.info(json.dumps({"event": "descuento_rechazado", "telefono": phone}))
        return MSG_ERROR_DESCUENTO
    logger.info(json.dumps({
        "event": "descuento_actualizado",
        "telefono": phone,
        "descuento": command.percent,
    }))
    return (
        "✅ *Descuento actualizado*\n\n"
        f"Nuevo descuento: {_display_percent(command)}%\n"
        f"Teléfono: {phone}"
    )


@log_call
def build_reply(command: Command, phone: str, apex: ApexClient) -> str:
    """Return the single reply for ``command`` sent by ``phone``.

    APEX failures are turned into fixed user-facing texts; this function
    never raises for an upstream problem.
    """
    if isinstance(command, Consultar):
        return _reply_consultar(phone, apex)
    if isinstance(command, Descuento):
        return _reply_descuento(command, phone, apex)
    if isinstance(command, Ayuda):
        return MSG_AYUDA
    return MSG_SALUDO


def process_incoming_message(message: IncomingMessage, transport: SessionTransport,
                             apex: ApexClient, suffix: str = "@c.us") -> None:
    """Answer one inbound message with exactly one reply.

    A reply that cannot be delivered is logged and not retried.
    """
    phone = normalize_phone(message.chat_id, suffix)
    command = parse_command(message.body)
    logger.info(json.dumps({
        "event": "mensaje_recibido",
        "telefono": phone,
        "comando": type(command).__name__.upper(),
    }))
    reply = build_reply(command, phone, apex)
    try:
        transport.send_message(message.chat_id, reply)
    except TransportError as exc:
        logger.error(json.dumps({
            "event": "respuesta_no_enviada",
            "telefono": phone,
            "detalle": str(exc),
        }))


def make_message_handler(transport: SessionTransport, apex: ApexClient,
                         suffix: str = "@c.us") -> Callable[[IncomingMessage], None]:
    """Bind :func:`process_incoming_message` for registration on ``transport``."""

    def handle_message(message: IncomingMessage) -> None:
        process_incoming_message(message, transport, apex, suffix)

    return handle_message
