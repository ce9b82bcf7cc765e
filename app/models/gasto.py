"""Gasto model — expense actually incurred on a vehicle."""

from sqlalchemy import Column, Date, DateTime, Integer, Numeric, String
from sqlalchemy.sql import func

from app.database import Base


class Gasto(Base):
    """Append-only expense record measured against the annual budget.

    Attributes:
        id: Primary key.
        patente: Vehicle plate (stored upper-case).
        concepto: What was paid for.
        costo: Amount paid (>= 0).
        fecha: Date of the expense.
        proveedor_id: Optional reference to ``Proveedor`` (non-owning).
        boleta_path: Relative path of the uploaded receipt, if any.
        created_at: Record creation timestamp.
    """

    __tablename__ = "gasto"

    id = Column(Integer, primary_key=True, autoincrement=True)
    patente = Column(String(20), nullable=False, index=True)
    concepto = Column(String(500), nullable=False)
    costo = Column(Numeric(15, 2), nullable=False)
    fecha = Column(Date, nullable=False, index=True)
    proveedor_id = Column(Integer, nullable=True)
    boleta_path = Column(String(500), nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
