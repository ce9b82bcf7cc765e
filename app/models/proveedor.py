"""Proveedor model — supplier / workshop registry."""

from sqlalchemy import Boolean, Column, Integer, String

from app.database import Base


class Proveedor(Base):
    """Supplier or workshop that performs or bills maintenance work.

    Orders and expenses reference a provider by ``proveedor_id`` without a
    foreign-key constraint; the display name is looked up at read time.

    Attributes:
        id: Primary key.
        rut: Unique tax identification number (e.g. ``"76123456-7"``).
        razon_social: Legal company name.
        nombre_comercial: Trade name.
        contacto: Contact person.
        telefono: Contact phone number.
        email: Contact email address.
        activo: Soft-delete flag.
    """

    __tablename__ = "proveedor"

    id = Column(Integer, primary_key=True, autoincrement=True)
    rut = Column(String(12), unique=True, nullable=True)
    razon_social = Column(String(300), nullable=False)
    nombre_comercial = Column(String(300), nullable=True)
    contacto = Column(String(200), nullable=True)
    telefono = Column(String(50), nullable=True)
    email = Column(String(200), nullable=True)
    activo = Column(Boolean, default=True, nullable=False)
