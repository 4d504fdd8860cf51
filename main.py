"""
Root application entry point for the WhatsApp/APEX bot
======================================================

Exposes the FastAPI application instance defined in ``wabot/main.py``
so deployment tools like Uvicorn can import ``main:app`` directly.

Usage
-----

.. code-block:: bash

    uvicorn main:app --host 0.0.0.0 --port 3001

The WhatsApp Web gateway must be configured to post its notifications
to ``/api/whatsapp/events`` on this service.
"""

from wabot.main import app  # noqa: F401 re-export for Uvicorn

__all__ = ["app"]
