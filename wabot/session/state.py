"""
session/state.py
-----------------

Process-wide WhatsApp pairing/connection status.

One :class:`SessionState` lives on ``app.state`` for the lifetime of the
process.  Only transport event callbacks mutate it and only the status
endpoint reads it.  Each transition replaces both fields, so a reader
never observes a QR code together with ``connected=True``.
"""

from __future__ import annotations

import base64
import json
from io import BytesIO
from typing import Optional, Tuple

import qrcode

from wabot.logging_config import logger


def qr_to_data_url(code: str) -> str:
    """Render a pairing code as a PNG ``data:`` URL suitable for an <img> tag."""
    qr = qrcode.QRCode(
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=6,
        border=4,
    )
    qr.add_data(code)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")
    buffer = BytesIO()
    img.save(buffer, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buffer.getvalue()).decode("ascii")


class SessionState:
    """Connected flag plus the current pairing image.

    Lifecycle: ``(False, None)`` → pairing code → ``(False, <data url>)``
    → ready → ``(True, None)``.
    """

    def __init__(self) -> None:
        self._status: Tuple[bool, Optional[str]] = (False, None)

    @property
    def connected(self) -> bool:
        return self._status[0]

    @property
    def qr_code(self) -> Optional[str]:
        return self._status[1]

    def on_qr(self, code: str) -> None:
        """A new pairing code was emitted; show it and mark the session unpaired."""
        self._status = (False, qr_to_data_url(code))
        logger.info(json.dumps({"event": "whatsapp_qr", "detalle": "QR Code generado"}))

    def on_ready(self) -> None:
        """The session is paired; the QR code is no longer meaningful."""
        self._status = (True, None)
        logger.info(json.dumps({"event": "whatsapp_ready", "detalle": "WhatsApp Client está listo"}))

    def on_disconnected(self, reason: Optional[str] = None) -> None:
        self._status = (False, None)
        logger.warning(json.dumps({"event": "whatsapp_disconnected", "reason": reason}))

    def snapshot(self) -> Tuple[bool, Optional[str]]:
        return self._status
