"""
WhatsApp session package.

``state`` tracks pairing/connection status for the admin page and
``transport`` is the boundary to the external WhatsApp Web gateway that
owns the real session.
"""

from .state import SessionState  # noqa: F401
from .transport import GatewayTransport, SessionTransport, TransportError  # noqa: F401
