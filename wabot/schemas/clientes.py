"""
schemas/clientes.py
--------------------

Body of the admin page's manual discount form.  ``descuento`` is any
number; range checks belong to APEX.
"""

from __future__ import annotations

from pydantic import BaseModel


class DescuentoRequest(BaseModel):
    telefono: str
    descuento: float
