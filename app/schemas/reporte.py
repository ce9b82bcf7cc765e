"""
Pydantic v2 schemas for the consolidated dashboard report.

The report is recomputed from current data on every request; every block
has an empty/zero shape so that a fresh installation still renders.
"""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.gasto import PresupuestoAnualResponse


class ResumenOrdenes(BaseModel):
    """Work order counters.

    Attributes:
        total: Number of orders.
        por_estado: Count per canonical state (all four keys always present).
        por_prioridad: Count per priority (all three keys always present).
    """

    total: int = Field(default=0, ge=0)
    por_estado: dict[str, int] = Field(default_factory=dict)
    por_prioridad: dict[str, int] = Field(default_factory=dict)


class ResumenPresupuestos(BaseModel):
    total: int = Field(default=0, ge=0)
    por_estado: dict[str, int] = Field(default_factory=dict)


class GastoMensualItem(BaseModel):
    """One point of the monthly expense series.

    Attributes:
        periodo: Year-month label, ``"YYYY-MM"``.
        total: Σ costo of the expenses dated in that month.
    """

    periodo: str
    total: float


class ResumenGastos(BaseModel):
    total: float = 0.0
    mensual: list[GastoMensualItem] = Field(default_factory=list)
    presupuesto: PresupuestoAnualResponse


class DocumentoAlerta(BaseModel):
    """Vehicle document classified by its expiry date.

    Attributes:
        dias_para_vencer: Days until ``vence``; negative when overdue,
                          ``None`` when there is no date on record.
        estado: "Vencido", "Por vencer", "Vigente" or "Sin fecha".
    """

    id: int
    patente: str
    tipo: str
    responsable: str | None = None
    vence: date | None = None
    dias_para_vencer: int | None = None
    estado: str


class MantencionAlerta(BaseModel):
    """Maintenance task classified by date or odometer distance.

    Attributes:
        tipo_control: "fecha" or "km".
        proximo_control: Due date (ISO) or due odometer reading, as text.
        dias: Days until the due date (date-tracked tasks only).
        km_restantes: Kilometres until the due reading (km-tracked tasks only).
        estado: "Vencido", "Por vencer", "Vigente" or "Sin fecha".
    """

    id: int
    patente: str
    tarea: str
    tipo_control: str
    proximo_control: str | None = None
    dias: int | None = None
    km_restantes: int | None = None
    estado: str


class DashboardResponse(BaseModel):
    """Consolidated operational report for the dashboard page."""

    ot: ResumenOrdenes
    presupuestos: ResumenPresupuestos
    gastos: ResumenGastos
    documentacion: list[DocumentoAlerta] = Field(default_factory=list)
    mantenciones: list[MantencionAlerta] = Field(default_factory=list)
    generado_en: datetime

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "ot": {
                    "total": 3,
                    "por_estado": {"Pendiente": 1, "En progreso": 1, "Finalizada": 1, "Rechazada": 0},
                    "por_prioridad": {"Alta": 1, "Media": 2, "Baja": 0},
                },
                "presupuestos": {
                    "total": 2,
                    "por_estado": {"Pendiente": 1, "Aprobado": 1, "Parcial": 0, "Rechazado": 0},
                },
                "gastos": {
                    "total": 250000.0,
                    "mensual": [{"periodo": "2026-03", "total": 250000.0}],
                    "presupuesto": {
                        "presupuesto_anual": 1000000.0,
                        "gastado": 250000.0,
                        "disponible": 750000.0,
                    },
                },
                "documentacion": [
                    {
                        "id": 1,
                        "patente": "AB-1234",
                        "tipo": "Revisión técnica",
                        "responsable": "M. Soto",
                        "vence": "2026-03-20",
                        "dias_para_vencer": 12,
                        "estado": "Por vencer",
                    }
                ],
                "mantenciones": [
                    {
                        "id": 1,
                        "patente": "AB-1234",
                        "tarea": "Cambio de aceite",
                        "tipo_control": "km",
                        "proximo_control": "150000",
                        "dias": None,
                        "km_restantes": -320,
                        "estado": "Vencido",
                    }
                ],
                "generado_en": "2026-03-08T12:00:00",
            }
        }
    )
