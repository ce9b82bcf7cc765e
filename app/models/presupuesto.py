"""Presupuesto model — budget approval request spawned from a work order."""

from sqlalchemy import JSON, Column, DateTime, Integer, Numeric, String
from sqlalchemy.sql import func

from app.database import Base


class Presupuesto(Base):
    """Monetary approval request derived from an order's estimated cost.

    ``orden_id`` is a plain integer (no FK constraint): deleting the order
    leaves the budget in place as a historical record.  ``orden_snapshot`` is
    a frozen copy of the order summary taken at generation time.

    Attributes:
        id: Primary key.
        orden_id: Id of the order the budget was generated from.
        monto: Requested amount (>= 0), editable by approvers.
        estado: "Pendiente", "Aprobado", "Parcial" or "Rechazado".
        observacion: Approver's note (max 400 characters).
        orden_snapshot: JSON summary of the order at generation time.
        created_at: Record creation timestamp.
        updated_at: Last modification timestamp.
    """

    __tablename__ = "presupuesto"

    id = Column(Integer, primary_key=True, autoincrement=True)
    orden_id = Column(Integer, nullable=False, index=True)
    monto = Column(Numeric(15, 2), nullable=False, default=0)
    estado = Column(String(20), nullable=False, default="Pendiente", index=True)
    observacion = Column(String(400), nullable=False, default="")
    orden_snapshot = Column(JSON, nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)
