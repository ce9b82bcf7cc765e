"""Notificacion model — in-app notice emitted by state-changing operations."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String
from sqlalchemy.sql import func

from app.database import Base


class Notificacion(Base):
    """Message surfaced by the notification bell of the frontend.

    Attributes:
        id: Primary key.
        mensaje: Human-readable message.
        leida: Whether the notification has been read.
        created_at: Emission timestamp.
    """

    __tablename__ = "notificacion"

    id = Column(Integer, primary_key=True, autoincrement=True)
    mensaje = Column(String(500), nullable=False)
    leida = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=func.now(), nullable=False)
