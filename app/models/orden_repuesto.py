"""OrdenRepuesto model — spare-part line item of a work order."""

from sqlalchemy import Column, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from app.database import Base


class OrdenRepuesto(Base):
    """One spare part (repuesto) line inside an ``OrdenTrabajo``.

    Line items are owned exclusively by their order and are replaced as a
    whole whenever the order's ``repuestos`` list is updated.

    Attributes:
        id: Primary key.
        orden_id: FK to OrdenTrabajo.
        posicion: 1-based position preserving the client's ordering.
        nombre: Part name.
        cantidad: Units (>= 0).
        costo: Unit cost (>= 0).
    """

    __tablename__ = "orden_repuesto"

    id = Column(Integer, primary_key=True, autoincrement=True)
    orden_id = Column(Integer, ForeignKey("orden_trabajo.id"), nullable=False)
    posicion = Column(Integer, nullable=False)
    nombre = Column(String(200), nullable=False)
    cantidad = Column(Integer, nullable=False, default=0)
    costo = Column(Numeric(15, 2), nullable=False, default=0)

    # Relationships
    orden = relationship("OrdenTrabajo", back_populates="repuestos", lazy="select")
