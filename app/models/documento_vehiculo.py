"""DocumentoVehiculo model — vehicle paperwork with an expiry date."""

from sqlalchemy import Column, Date, Integer, String

from app.database import Base


class DocumentoVehiculo(Base):
    """Regulatory document attached to a vehicle (permiso de circulación,
    revisión técnica, SOAP, ...).

    Attributes:
        id: Primary key.
        patente: Vehicle plate.
        tipo: Document type label.
        responsable: Person in charge of renewing it.
        vence: Expiry date; ``None`` when not on record.
    """

    __tablename__ = "documento_vehiculo"

    id = Column(Integer, primary_key=True, autoincrement=True)
    patente = Column(String(20), nullable=False, index=True)
    tipo = Column(String(100), nullable=False)
    responsable = Column(String(200), nullable=True)
    vence = Column(Date, nullable=True)
