"""
Application-wide constants for the Dashboard Flota system.

Defines the canonical state/priority vocabularies, business rule thresholds,
and lookup lists used across routers, services, and models.
"""

from enum import Enum
from typing import Final

# ---------------------------------------------------------------------------
# Work order states (Órdenes de Trabajo)
# ---------------------------------------------------------------------------


class EstadoOrden(str, Enum):
    PENDIENTE = "Pendiente"
    EN_PROGRESO = "En progreso"
    FINALIZADA = "Finalizada"
    RECHAZADA = "Rechazada"


# ---------------------------------------------------------------------------
# Budget request states (Presupuestos)
# ---------------------------------------------------------------------------


class EstadoPresupuesto(str, Enum):
    PENDIENTE = "Pendiente"
    APROBADO = "Aprobado"
    PARCIAL = "Parcial"
    RECHAZADO = "Rechazado"


# ---------------------------------------------------------------------------
# Work order priorities
# ---------------------------------------------------------------------------


class Prioridad(str, Enum):
    ALTA = "Alta"
    MEDIA = "Media"
    BAJA = "Baja"


PRIORIDAD_DEFAULT: Final[Prioridad] = Prioridad.MEDIA

# ---------------------------------------------------------------------------
# Expiry classification (documentación / mantenciones)
# ---------------------------------------------------------------------------


class EstadoVencimiento(str, Enum):
    VENCIDO = "Vencido"
    POR_VENCER = "Por vencer"
    VIGENTE = "Vigente"
    SIN_FECHA = "Sin fecha"


# Sort order for alert lists: most urgent first
ORDEN_URGENCIA: Final[dict[EstadoVencimiento, int]] = {
    EstadoVencimiento.VENCIDO: 0,
    EstadoVencimiento.POR_VENCER: 1,
    EstadoVencimiento.VIGENTE: 2,
    EstadoVencimiento.SIN_FECHA: 3,
}

TIPOS_CONTROL_MANTENCION: Final[list[str]] = [
    "fecha",
    "km",
]

# ---------------------------------------------------------------------------
# Business rule thresholds
# ---------------------------------------------------------------------------

DIAS_POR_VENCER: Final[int] = 30       # <= 30 days to due date → "Por vencer"
KM_POR_VENCER: Final[int] = 1_000      # <= 1,000 km to next service → "Por vencer"

OBSERVACION_MAX_LENGTH: Final[int] = 400

# ---------------------------------------------------------------------------
# Expense listing filters
# ---------------------------------------------------------------------------

TIPOS_FILTRO_GASTO: Final[list[str]] = [
    "todos",
    "mes",
    "anio",
    "semana",
]
