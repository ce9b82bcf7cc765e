"""
Pydantic v2 schemas for the Presupuestos (budget requests) module.

A budget is generated from a work order and then reviewed by an approver,
who may change its ``estado``, adjust ``monto`` or leave an ``observacion``.
"""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field


class OrdenResumen(BaseModel):
    """Frozen summary of the owning order, captured at generation time.

    Later edits to the order (or its deletion) do not change this snapshot.
    """

    id: int
    titulo: str | None = None
    patente: str | None = None
    mecanico: str | None = None
    proveedor_id: int | None = None
    prioridad: str | None = None
    estado: str | None = None
    total_costo: float | None = None
    fecha_solicitud: date | None = None


class PresupuestoUpdate(BaseModel):
    """Partial update payload for ``PUT /budgets/{id}``.

    Amount validation is done in the service so that an invalid ``monto``
    fails with ``InvalidAmountError`` like every other amount in the system.
    """

    estado: str | None = Field(default=None, description="Pendiente, Aprobado, Parcial o Rechazado.")
    monto: float | None = Field(default=None, description="Monto solicitado (>= 0).")
    observacion: str | None = Field(default=None, description="Se trunca a 400 caracteres.")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "estado": "aprobado",
                "monto": 55000,
                "observacion": "Aprobado con descuento del proveedor.",
            }
        }
    )


class PresupuestoResponse(BaseModel):
    """Full representation of a budget request.

    Attributes:
        orden: Snapshot of the order at generation time.
        orden_vigente: Whether the order still exists (looked up at read time).
    """

    id: int
    orden_id: int
    monto: float = Field(..., ge=0)
    estado: str
    observacion: str = ""
    orden: OrdenResumen | None = None
    orden_vigente: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 3,
                "orden_id": 1,
                "monto": 60000.0,
                "estado": "Pendiente",
                "observacion": "",
                "orden": {
                    "id": 1,
                    "titulo": "Cambio de frenos",
                    "patente": "AB-1234",
                    "mecanico": "J. Perez",
                    "proveedor_id": 1,
                    "prioridad": "Alta",
                    "estado": "Pendiente",
                    "total_costo": 60000.0,
                    "fecha_solicitud": "2026-03-02",
                },
                "orden_vigente": True,
                "created_at": "2026-03-02T10:00:00",
                "updated_at": "2026-03-02T10:00:00",
            }
        }
    )
