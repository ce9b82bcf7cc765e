"""OrdenTrabajo model — vehicle maintenance work order (OT)."""

from sqlalchemy import Column, Date, DateTime, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base


class OrdenTrabajo(Base):
    """A unit of requested maintenance work on one vehicle.

    ``total_costo`` is derived from ``repuestos`` and is only ever written by
    ``orden_service``; it is never accepted from the client.

    Attributes:
        id: Primary key.
        titulo: Short description of the job, e.g. "Cambio de frenos".
        patente: Vehicle plate (stored upper-case).
        mecanico: Mechanic in charge.
        proveedor_id: Reference to ``Proveedor`` (non-owning, no FK constraint).
        prioridad: "Alta", "Media" or "Baja".
        estado: "Pendiente", "En progreso", "Finalizada" or "Rechazada".
        descripcion: Free-text details.
        fecha_solicitud: Date the work was requested.
        conductor: Driver assigned to the vehicle.
        total_costo: Σ cantidad × costo over ``repuestos``.
        created_at: Record creation timestamp.
        updated_at: Last modification timestamp.
    """

    __tablename__ = "orden_trabajo"

    id = Column(Integer, primary_key=True, autoincrement=True)
    titulo = Column(String(200), nullable=False)
    patente = Column(String(20), nullable=False, index=True)
    mecanico = Column(String(200), nullable=False)
    proveedor_id = Column(Integer, nullable=False, index=True)
    prioridad = Column(String(10), nullable=False, default="Media")
    estado = Column(String(20), nullable=False, default="Pendiente", index=True)
    descripcion = Column(Text, nullable=True)
    fecha_solicitud = Column(Date, nullable=True)
    conductor = Column(String(200), nullable=True)
    total_costo = Column(Numeric(15, 2), nullable=False, default=0)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    repuestos = relationship(
        "OrdenRepuesto",
        back_populates="orden",
        order_by="OrdenRepuesto.posicion",
        lazy="select",
        cascade="all, delete-orphan",
    )
