"""
Pydantic v2 schemas for the Gastos (expense ledger) module and the annual
budget tracker.
"""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field


class GastoCreate(BaseModel):
    """Fields of a new expense (sent as multipart form data by the frontend).

    All fields are optional at the schema level; ``gasto_service`` enforces
    which are required and validates ``costo``.
    """

    patente: str | None = Field(default=None, max_length=20)
    concepto: str | None = Field(default=None, max_length=500)
    costo: float | None = None
    fecha: date | None = Field(default=None, description="Por defecto, la fecha de hoy.")
    proveedor_id: int | None = None


class GastoResponse(BaseModel):
    """Stored expense."""

    id: int
    patente: str
    concepto: str
    costo: float
    fecha: date
    proveedor_id: int | None = None
    proveedor_nombre: str | None = None
    boleta_path: str | None = None
    created_at: datetime | None = None


class PresupuestoAnualResponse(BaseModel):
    """Annual budget snapshot.

    Attributes:
        presupuesto_anual: Configured cap (0 until set).
        gastado: Σ costo over all expenses, re-derived on every read.
        disponible: presupuesto_anual − gastado; negative means overspend.
    """

    presupuesto_anual: float
    gastado: float
    disponible: float

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "presupuesto_anual": 1_000_000.0,
                "gastado": 250_000.0,
                "disponible": 750_000.0,
            }
        }
    )


class PresupuestoAnualUpdate(BaseModel):
    """Payload for ``PUT /expenses/budget``."""

    presupuesto_anual: float | None = Field(default=None, description="Tope anual (> 0).")


class GastosListResponse(BaseModel):
    """Expense listing plus the annual snapshot, as consumed by the expense page.

    Attributes:
        gastos: Expenses matching the period filter.
        total: Σ costo over all expenses.
        total_filtrado: Σ costo over ``gastos``.
        presupuesto: Annual budget snapshot.
    """

    gastos: list[GastoResponse] = Field(default_factory=list)
    total: float = 0.0
    total_filtrado: float = 0.0
    presupuesto: PresupuestoAnualResponse
