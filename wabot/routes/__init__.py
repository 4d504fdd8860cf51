"""
Route aggregation package for the WhatsApp/APEX bot.

Each module defines an ``APIRouter`` for one functional area (login,
status, messaging, customers and the gateway webhook).  ``wabot.main``
imports these routers and includes them in the application.
"""

__all__ = [
    "auth",
    "status",
    "messages",
    "clientes",
    "whatsapp",
]
