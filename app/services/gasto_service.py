"""
Gastos (expense ledger) service layer.

Expenses are append-only facts.  Recording one changes the annual budget
snapshot, which is re-derived from the ledger on the next read.

The period filters used by the expense page (month, year, ISO week) are
pure functions over ``fecha`` and live here next to the listing they apply
to; ``list_gastos_filtered`` accepts any predicate built with them.
"""

from __future__ import annotations

import datetime
import logging
import math
from collections.abc import Callable
from typing import Any

from sqlalchemy.orm import Session

from app.database import commit_or_raise
from app.models.gasto import Gasto
from app.schemas.gasto import GastoCreate, GastoResponse
from app.services import presupuesto_anual_service, proveedor_service
from app.utils.constants import TIPOS_FILTRO_GASTO
from app.utils.errors import InvalidAmountError, MissingFieldError

logger = logging.getLogger(__name__)

GastoPredicate = Callable[[Gasto], bool]


# ---------------------------------------------------------------------------
# Period filters (pure)
# ---------------------------------------------------------------------------


def iso_week_label(fecha: datetime.date | str | None) -> str | None:
    """Return the ISO-8601 week label ``"YYYY-Www"`` of *fecha*.

    ``date.isocalendar`` places each date in the week that contains its
    Thursday, so the first days of January may belong to the previous
    year's last week (2021-01-03 → ``"2020-W53"``) and the last days of
    December to week 1 of the next year (2024-12-30 → ``"2025-W01"``).

    Returns ``None`` for missing or unparseable dates.
    """
    if fecha is None:
        return None
    if isinstance(fecha, str):
        try:
            fecha = datetime.date.fromisoformat(fecha[:10])
        except ValueError:
            return None
    anio, semana, _ = fecha.isocalendar()
    return f"{anio}-W{semana:02d}"


def build_periodo_predicate(tipo: str, valor: str | None) -> GastoPredicate:
    """Build a predicate selecting expenses in a period.

    Args:
        tipo: ``"todos"``, ``"mes"`` (``valor = "YYYY-MM"``), ``"anio"``
              (``valor = "YYYY"``) or ``"semana"`` (``valor = "YYYY-Www"``).
        valor: Period value.  An empty value selects everything.

    Returns:
        A function ``Gasto -> bool``.

    Raises:
        ValueError: If *tipo* is not a known filter type.
    """
    if tipo not in TIPOS_FILTRO_GASTO:
        raise ValueError(f"Tipo de filtro desconocido: {tipo!r}")
    if tipo == "todos" or not valor:
        return lambda gasto: True

    def _predicate(gasto: Gasto) -> bool:
        if gasto.fecha is None:
            return False
        fecha_iso = gasto.fecha.isoformat()
        if tipo == "mes":
            return fecha_iso[:7] == valor
        if tipo == "anio":
            return fecha_iso[:4] == valor
        return iso_week_label(gasto.fecha) == valor

    return _predicate


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def build_response(db: Session, gasto: Gasto) -> GastoResponse:
    """Construct a ``GastoResponse`` resolving the provider's display name."""
    return GastoResponse(
        id=gasto.id,
        patente=gasto.patente,
        concepto=gasto.concepto,
        costo=float(gasto.costo),
        fecha=gasto.fecha,
        proveedor_id=gasto.proveedor_id,
        proveedor_nombre=proveedor_service.get_nombre_proveedor(db, gasto.proveedor_id),
        boleta_path=gasto.boleta_path,
        created_at=gasto.created_at,
    )


# ---------------------------------------------------------------------------
# Public service functions
# ---------------------------------------------------------------------------


def list_gastos(db: Session) -> list[Gasto]:
    """Return every expense, most recent ``fecha`` first."""
    return db.query(Gasto).order_by(Gasto.fecha.desc(), Gasto.id.desc()).all()


def list_gastos_filtered(db: Session, predicate: GastoPredicate) -> list[Gasto]:
    """Return the expenses for which *predicate* holds, in listing order."""
    rows = [gasto for gasto in list_gastos(db) if predicate(gasto)]
    logger.debug("list_gastos_filtered: %d rows", len(rows))
    return rows


def total_costo(gastos: list[Gasto]) -> float:
    return round(sum(float(g.costo) for g in gastos), 2)


def validate_gasto(data: GastoCreate) -> None:
    """Check the fields of a new expense without touching the database.

    Raises:
        MissingFieldError: If ``patente``, ``concepto`` or ``costo`` is missing.
        InvalidAmountError: If ``costo`` is not a finite number >= 0.
    """
    faltantes = [
        campo for campo in ("patente", "concepto", "costo")
        if _blank(getattr(data, campo))
    ]
    if faltantes:
        raise MissingFieldError(faltantes)

    if not math.isfinite(data.costo) or data.costo < 0:
        raise InvalidAmountError("El costo debe ser un número mayor o igual a cero.")


def record_gasto(
    db: Session,
    data: GastoCreate,
    boleta_path: str | None = None,
) -> Gasto:
    """Append a new expense to the ledger.

    Args:
        db: Active SQLAlchemy session.
        data: Expense fields; ``fecha`` defaults to today.
        boleta_path: Relative path of the uploaded receipt, as returned by
                     ``file_storage.guardar_boleta``.

    Returns:
        The newly persisted ``Gasto``.

    Raises:
        MissingFieldError: If ``patente``, ``concepto`` or ``costo`` is missing.
        InvalidAmountError: If ``costo`` is not a finite number >= 0.
    """
    validate_gasto(data)

    gasto = Gasto(
        patente=data.patente.strip().upper(),
        concepto=data.concepto.strip(),
        costo=float(data.costo),
        fecha=data.fecha or datetime.date.today(),
        proveedor_id=data.proveedor_id,
        boleta_path=boleta_path,
    )
    db.add(gasto)
    commit_or_raise(db, "registrar gasto")
    db.refresh(gasto)

    snapshot = presupuesto_anual_service.get_snapshot(db)
    logger.info(
        "record_gasto: id=%d patente=%s costo=%.2f disponible=%.2f",
        gasto.id, gasto.patente, float(gasto.costo), snapshot.disponible,
    )
    return gasto
