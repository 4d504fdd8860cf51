"""
wabot package
-------------

FastAPI backend bridging a WhatsApp session with the APEX customer
API.  Importing ``wabot`` exposes the ``app`` instance for ASGI servers.
"""

from .main import app  # noqa: F401
