"""
Pydantic v2 schemas for the Órdenes de Trabajo (OT) module.

These models define the JSON shapes accepted and returned by
``app/routers/ordenes.py``.  Required-field checks, state normalization and
the ``total_costo`` computation live in ``orden_service``; the schemas only
describe shapes, so a missing ``titulo`` reaches the service and fails with
``MissingFieldError`` rather than a generic validation error.
"""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Line items (repuestos)
# ---------------------------------------------------------------------------


class RepuestoIn(BaseModel):
    """Spare-part line supplied by the client.

    Attributes:
        nombre: Part name.
        cantidad: Units, non-negative integer.
        costo: Unit cost, non-negative.
    """

    nombre: str = Field(..., min_length=1, max_length=200, description="Nombre del repuesto.")
    cantidad: int = Field(default=0, ge=0, description="Cantidad de unidades.")
    costo: float = Field(default=0, ge=0, allow_inf_nan=False, description="Costo unitario.")


class RepuestoResponse(BaseModel):
    """Spare-part line as stored on the order."""

    nombre: str
    cantidad: int
    costo: float
    subtotal: float = Field(..., description="cantidad × costo.")


# ---------------------------------------------------------------------------
# Create / update payloads
# ---------------------------------------------------------------------------


class OrdenCreate(BaseModel):
    """Payload for ``POST /ots``.

    ``estado`` is accepted for compatibility with older clients but always
    ignored: every new order starts as ``Pendiente``.
    """

    titulo: str | None = Field(default=None, max_length=200)
    patente: str | None = Field(default=None, max_length=20)
    mecanico: str | None = Field(default=None, max_length=200)
    proveedor_id: int | None = Field(default=None, description="ID del proveedor.")
    prioridad: str | None = Field(default=None, description="Alta, Media o Baja (por defecto Media).")
    estado: str | None = Field(default=None, description="Ignorado: toda OT nueva queda Pendiente.")
    descripcion: str | None = None
    fecha_solicitud: date | None = None
    conductor: str | None = Field(default=None, max_length=200)
    repuestos: list[RepuestoIn] = Field(default_factory=list)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "titulo": "Cambio de frenos",
                "patente": "AB-1234",
                "mecanico": "J. Perez",
                "proveedor_id": 1,
                "prioridad": "alta",
                "descripcion": "Pastillas delanteras gastadas.",
                "fecha_solicitud": "2026-03-02",
                "conductor": "M. Soto",
                "repuestos": [
                    {"nombre": "Pastillas", "cantidad": 4, "costo": 15000},
                ],
            }
        }
    )


class OrdenUpdate(BaseModel):
    """Partial update payload for ``PUT /ots/{id}``.

    Only fields present in the request body are applied.
    """

    titulo: str | None = Field(default=None, max_length=200)
    patente: str | None = Field(default=None, max_length=20)
    mecanico: str | None = Field(default=None, max_length=200)
    proveedor_id: int | None = None
    prioridad: str | None = None
    estado: str | None = None
    descripcion: str | None = None
    fecha_solicitud: date | None = None
    conductor: str | None = Field(default=None, max_length=200)
    repuestos: list[RepuestoIn] | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "estado": "en_progreso",
                "repuestos": [
                    {"nombre": "Pastillas", "cantidad": 4, "costo": 15000},
                    {"nombre": "Líquido de frenos", "cantidad": 1, "costo": 8000},
                ],
            }
        }
    )


# ---------------------------------------------------------------------------
# Response
# ---------------------------------------------------------------------------


class OrdenResponse(BaseModel):
    """Full representation of a work order.

    ``proveedor_nombre`` is resolved at read time from ``proveedor_id``; it is
    ``None`` when the provider is not registered.
    """

    id: int
    titulo: str
    patente: str
    mecanico: str
    proveedor_id: int
    proveedor_nombre: str | None = None
    prioridad: str
    estado: str
    descripcion: str | None = None
    fecha_solicitud: date | None = None
    conductor: str | None = None
    repuestos: list[RepuestoResponse] = Field(default_factory=list)
    total_costo: float = Field(..., ge=0, description="Σ cantidad × costo de los repuestos.")
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1,
                "titulo": "Cambio de frenos",
                "patente": "AB-1234",
                "mecanico": "J. Perez",
                "proveedor_id": 1,
                "proveedor_nombre": "Frenos del Sur SpA",
                "prioridad": "Alta",
                "estado": "Pendiente",
                "descripcion": "Pastillas delanteras gastadas.",
                "fecha_solicitud": "2026-03-02",
                "conductor": "M. Soto",
                "repuestos": [
                    {"nombre": "Pastillas", "cantidad": 4, "costo": 15000.0, "subtotal": 60000.0},
                ],
                "total_costo": 60000.0,
                "created_at": "2026-03-02T09:15:00",
                "updated_at": "2026-03-02T09:15:00",
            }
        }
    )
