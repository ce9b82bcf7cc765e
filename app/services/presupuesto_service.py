"""
Presupuestos service layer.

All database access for the ``/api/budgets`` endpoints (and the
``POST /api/ots/{id}/budget`` generation endpoint) lives here.

Design notes
------------
- A budget is seeded from the order's ``total_costo`` at generation time;
  later edits to the order never change existing budgets.
- Generating twice for the same order produces two budgets.  Callers are
  responsible for not duplicating.
- The order summary is stored as a frozen JSON snapshot.  Whether the order
  still exists is looked up separately at read time (``orden_vigente``).
- ``update_presupuesto`` validates the whole payload before touching the
  row; an update with no recognised fields fails with ``NoChangesError``.
"""

from __future__ import annotations

import logging
import math
from typing import Any

from sqlalchemy.orm import Session

from app.database import commit_or_raise
from app.models.orden_trabajo import OrdenTrabajo
from app.models.presupuesto import Presupuesto
from app.schemas.presupuesto import OrdenResumen, PresupuestoResponse, PresupuestoUpdate
from app.services import notificacion_service
from app.utils.constants import OBSERVACION_MAX_LENGTH, EstadoPresupuesto
from app.utils.errors import InvalidAmountError, NoChangesError, NotFoundError
from app.utils.normalizacion import normalizar_estado

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _orden_snapshot(orden: OrdenTrabajo) -> dict[str, Any]:
    """Frozen, JSON-compatible summary of an order for display on the budget."""
    return {
        "id": orden.id,
        "titulo": orden.titulo,
        "patente": orden.patente,
        "mecanico": orden.mecanico,
        "proveedor_id": orden.proveedor_id,
        "prioridad": orden.prioridad,
        "estado": orden.estado,
        "total_costo": float(orden.total_costo or 0),
        "fecha_solicitud": (
            orden.fecha_solicitud.isoformat() if orden.fecha_solicitud else None
        ),
    }


def _validar_monto(monto: Any) -> float:
    """Return *monto* as float if it is a finite number >= 0.

    Raises:
        InvalidAmountError: Otherwise.
    """
    if isinstance(monto, bool) or not isinstance(monto, (int, float)):
        raise InvalidAmountError("El monto debe ser un número mayor o igual a cero.")
    if not math.isfinite(monto) or monto < 0:
        raise InvalidAmountError("El monto debe ser un número mayor o igual a cero.")
    return float(monto)


def _get_or_404(db: Session, presupuesto_id: int) -> Presupuesto:
    presupuesto: Presupuesto | None = (
        db.query(Presupuesto).filter(Presupuesto.id == presupuesto_id).first()
    )
    if presupuesto is None:
        raise NotFoundError(f"Presupuesto con ID {presupuesto_id} no encontrado.")
    return presupuesto


def build_response(db: Session, presupuesto: Presupuesto) -> PresupuestoResponse:
    """Construct a ``PresupuestoResponse`` from a ``Presupuesto`` ORM object.

    ``orden`` comes from the stored snapshot; ``orden_vigente`` is an explicit
    lookup of ``orden_id`` against the current orders.
    """
    orden_vigente = (
        db.query(OrdenTrabajo.id)
        .filter(OrdenTrabajo.id == presupuesto.orden_id)
        .first()
    ) is not None

    return PresupuestoResponse(
        id=presupuesto.id,
        orden_id=presupuesto.orden_id,
        monto=float(presupuesto.monto or 0),
        estado=presupuesto.estado,
        observacion=presupuesto.observacion or "",
        orden=(
            OrdenResumen(**presupuesto.orden_snapshot)
            if presupuesto.orden_snapshot
            else None
        ),
        orden_vigente=orden_vigente,
        created_at=presupuesto.created_at,
        updated_at=presupuesto.updated_at,
    )


# ---------------------------------------------------------------------------
# Public service functions: read operations
# ---------------------------------------------------------------------------


def list_presupuestos(db: Session, estado: str | None = None) -> list[Presupuesto]:
    """Return budgets, most recent first, optionally restricted to one state.

    Raises:
        InvalidStateError: If *estado* is given but not a budget state.
    """
    q = db.query(Presupuesto)
    if estado is not None:
        q = q.filter(Presupuesto.estado == normalizar_estado(estado, "presupuesto").value)
    rows = q.order_by(Presupuesto.id.desc()).all()
    logger.debug("list_presupuestos: estado=%s %d rows", estado, len(rows))
    return rows


def get_presupuesto(db: Session, presupuesto_id: int) -> Presupuesto:
    """Return one budget.

    Raises:
        NotFoundError: If no budget with the given ID exists.
    """
    return _get_or_404(db, presupuesto_id)


# ---------------------------------------------------------------------------
# Public service functions: write operations
# ---------------------------------------------------------------------------


def generate_presupuesto(db: Session, orden_id: int) -> Presupuesto:
    """Create a new ``Pendiente`` budget from an order's current total.

    Args:
        db: Active SQLAlchemy session.
        orden_id: Primary key of the source order.

    Returns:
        The newly persisted ``Presupuesto``.

    Raises:
        NotFoundError: If the order does not exist.
    """
    orden: OrdenTrabajo | None = (
        db.query(OrdenTrabajo).filter(OrdenTrabajo.id == orden_id).first()
    )
    if orden is None:
        raise NotFoundError(f"Orden de trabajo con ID {orden_id} no encontrada.")

    presupuesto = Presupuesto(
        orden_id=orden.id,
        monto=float(orden.total_costo or 0),
        estado=EstadoPresupuesto.PENDIENTE.value,
        observacion="",
        orden_snapshot=_orden_snapshot(orden),
    )
    db.add(presupuesto)
    db.flush()
    notificacion_service.emitir(
        db,
        f"Presupuesto #{presupuesto.id} generado para la OT #{orden.id} "
        f"({orden.patente}) por {float(presupuesto.monto):,.0f}.",
    )
    commit_or_raise(db, "generar presupuesto")
    db.refresh(presupuesto)

    logger.info(
        "generate_presupuesto: id=%d orden_id=%d monto=%.2f",
        presupuesto.id, orden_id, float(presupuesto.monto),
    )
    return presupuesto


def update_presupuesto(
    db: Session,
    presupuesto_id: int,
    data: PresupuestoUpdate,
) -> Presupuesto:
    """Apply a partial update (estado / monto / observacion) to a budget.

    Args:
        db: Active SQLAlchemy session.
        presupuesto_id: Primary key of the budget to modify.
        data: Partial update payload.

    Returns:
        The updated and refreshed ``Presupuesto``.

    Raises:
        NotFoundError: If no budget with the given ID exists.
        InvalidStateError: If ``estado`` is not a budget state.
        InvalidAmountError: If ``monto`` is not a finite number >= 0.
        NoChangesError: If the payload contains no recognised field.
    """
    presupuesto = _get_or_404(db, presupuesto_id)
    update_data = data.model_dump(exclude_unset=True)

    cambios: dict[str, Any] = {}
    if "estado" in update_data:
        cambios["estado"] = normalizar_estado(update_data["estado"], "presupuesto").value
    if "observacion" in update_data:
        cambios["observacion"] = (update_data["observacion"] or "")[:OBSERVACION_MAX_LENGTH]
    if "monto" in update_data:
        cambios["monto"] = _validar_monto(update_data["monto"])

    if not cambios:
        raise NoChangesError("No se proporcionaron cambios para actualizar.")

    estado_anterior = presupuesto.estado
    for field, value in cambios.items():
        setattr(presupuesto, field, value)

    if "estado" in cambios and cambios["estado"] != estado_anterior:
        notificacion_service.emitir(
            db,
            f"Presupuesto #{presupuesto.id} cambió de {estado_anterior} a {cambios['estado']}.",
        )

    commit_or_raise(db, "actualizar presupuesto")
    db.refresh(presupuesto)

    logger.info(
        "update_presupuesto: id=%d fields=%s", presupuesto_id, list(cambios.keys())
    )
    return presupuesto
