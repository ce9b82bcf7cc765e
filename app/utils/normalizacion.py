"""
Free-text → canonical vocabulary normalization.

Input is trimmed and lower-cased, then looked up in a static synonym table.
States are load-bearing and fail loudly on unknown input; priorities are
advisory and silently fall back to ``Media``.
"""

from __future__ import annotations

from typing import Any, Literal

from app.utils.constants import (
    PRIORIDAD_DEFAULT,
    EstadoOrden,
    EstadoPresupuesto,
    Prioridad,
)
from app.utils.errors import InvalidPriorityError, InvalidStateError

Dominio = Literal["orden", "presupuesto"]

_SINONIMOS_ESTADO_ORDEN: dict[str, EstadoOrden] = {
    "pendiente": EstadoOrden.PENDIENTE,
    "en progreso": EstadoOrden.EN_PROGRESO,
    "en_progreso": EstadoOrden.EN_PROGRESO,
    "en-progreso": EstadoOrden.EN_PROGRESO,
    "progreso": EstadoOrden.EN_PROGRESO,
    "finalizada": EstadoOrden.FINALIZADA,
    "finalizado": EstadoOrden.FINALIZADA,
    "finalizo": EstadoOrden.FINALIZADA,
    "rechazada": EstadoOrden.RECHAZADA,
    "rechazado": EstadoOrden.RECHAZADA,
}

_SINONIMOS_ESTADO_PRESUPUESTO: dict[str, EstadoPresupuesto] = {
    "pendiente": EstadoPresupuesto.PENDIENTE,
    "aprobado": EstadoPresupuesto.APROBADO,
    "parcial": EstadoPresupuesto.PARCIAL,
    "rechazado": EstadoPresupuesto.RECHAZADO,
}

_SINONIMOS_PRIORIDAD: dict[str, Prioridad] = {
    "alta": Prioridad.ALTA,
    "media": Prioridad.MEDIA,
    "baja": Prioridad.BAJA,
}

_TABLAS_ESTADO: dict[str, dict[str, Any]] = {
    "orden": _SINONIMOS_ESTADO_ORDEN,
    "presupuesto": _SINONIMOS_ESTADO_PRESUPUESTO,
}


def _clave(valor: Any) -> str:
    if valor is None:
        return ""
    if isinstance(valor, (EstadoOrden, EstadoPresupuesto, Prioridad)):
        valor = valor.value
    return str(valor).strip().lower()


def normalizar_estado(valor: Any, dominio: Dominio) -> EstadoOrden | EstadoPresupuesto:
    """Map free-text state input to the canonical state of *dominio*.

    Args:
        valor: Raw client input, e.g. ``" EN_PROGRESO "`` or ``"aprobado"``.
        dominio: ``"orden"`` or ``"presupuesto"``.

    Returns:
        The canonical ``EstadoOrden`` or ``EstadoPresupuesto`` member.

    Raises:
        InvalidStateError: If the value is missing or not in the synonym table.
        ValueError: If *dominio* is not a known domain.
    """
    tabla = _TABLAS_ESTADO.get(dominio)
    if tabla is None:
        raise ValueError(f"Dominio de estado desconocido: {dominio!r}")

    estado = tabla.get(_clave(valor))
    if estado is None:
        etiqueta = "orden" if dominio == "orden" else "presupuesto"
        raise InvalidStateError(f"Estado de {etiqueta} inválido: {valor!r}.")
    return estado


def parse_prioridad(valor: Any) -> Prioridad:
    """Strict priority lookup.

    Raises:
        InvalidPriorityError: If the value is not a known priority.
    """
    prioridad = _SINONIMOS_PRIORIDAD.get(_clave(valor))
    if prioridad is None:
        raise InvalidPriorityError(f"Prioridad inválida: {valor!r}.")
    return prioridad


def normalizar_prioridad(valor: Any) -> Prioridad:
    """Lenient priority lookup: unknown or omitted values become ``Media``."""
    try:
        return parse_prioridad(valor)
    except InvalidPriorityError:
        return PRIORIDAD_DEFAULT
