"""PresupuestoAnual model — the single configurable annual spending cap."""

from sqlalchemy import Column, DateTime, Integer, Numeric
from sqlalchemy.sql import func

from app.database import Base


class PresupuestoAnual(Base):
    """Holds the annual cap; at most one row (``id = 1``) ever exists.

    Only the cap is persisted.  ``gastado`` and ``disponible`` are derived
    from the ``gasto`` table on every read.

    Attributes:
        id: Primary key, always 1.
        monto: Configured annual cap.
        updated_at: Last time the cap was changed.
    """

    __tablename__ = "presupuesto_anual"

    id = Column(Integer, primary_key=True)
    monto = Column(Numeric(15, 2), nullable=False, default=0)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)
