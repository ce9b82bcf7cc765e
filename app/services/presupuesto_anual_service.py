"""
Presupuesto anual (annual budget tracker) service layer.

Only the cap is stored.  ``gastado`` is re-derived from the ``gasto`` table
on every read and ``disponible`` is computed from it, so the snapshot can
never drift from the ledger.  ``disponible`` is allowed to go negative to
signal overspend.
"""

from __future__ import annotations

import logging
import math
from typing import Any

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.database import commit_or_raise
from app.models.gasto import Gasto
from app.models.presupuesto_anual import PresupuestoAnual
from app.schemas.gasto import PresupuestoAnualResponse
from app.utils.errors import InvalidAmountError

logger = logging.getLogger(__name__)

# The tracker is a single row
_REGISTRO_ID = 1


def _total_gastado(db: Session) -> float:
    total = db.query(func.coalesce(func.sum(Gasto.costo), 0)).scalar()
    return round(float(total or 0), 2)


def get_snapshot(db: Session) -> PresupuestoAnualResponse:
    """Return ``{presupuesto_anual, gastado, disponible}``.

    Before any cap has been configured the cap reads as 0, so ``disponible``
    equals ``-gastado``.
    """
    registro: PresupuestoAnual | None = db.get(PresupuestoAnual, _REGISTRO_ID)
    presupuesto_anual = float(registro.monto) if registro is not None else 0.0
    gastado = _total_gastado(db)
    disponible = round(presupuesto_anual - gastado, 2)

    logger.debug(
        "get_snapshot: anual=%.2f gastado=%.2f disponible=%.2f",
        presupuesto_anual, gastado, disponible,
    )
    return PresupuestoAnualResponse(
        presupuesto_anual=presupuesto_anual,
        gastado=gastado,
        disponible=disponible,
    )


def set_presupuesto_anual(db: Session, monto: Any) -> PresupuestoAnualResponse:
    """Replace the annual cap.

    Args:
        db: Active SQLAlchemy session.
        monto: New cap; must be a finite number greater than zero.

    Returns:
        The recomputed snapshot.

    Raises:
        InvalidAmountError: If *monto* is missing, non-numeric, not finite
                            or not greater than zero.
    """
    if (
        isinstance(monto, bool)
        or not isinstance(monto, (int, float))
        or not math.isfinite(monto)
        or monto <= 0
    ):
        raise InvalidAmountError("El presupuesto anual debe ser un número mayor a cero.")

    registro: PresupuestoAnual | None = db.get(PresupuestoAnual, _REGISTRO_ID)
    if registro is None:
        registro = PresupuestoAnual(id=_REGISTRO_ID, monto=float(monto))
        db.add(registro)
    else:
        registro.monto = float(monto)

    commit_or_raise(db, "actualizar presupuesto anual")

    logger.info("set_presupuesto_anual: monto=%.2f", float(monto))
    return get_snapshot(db)
