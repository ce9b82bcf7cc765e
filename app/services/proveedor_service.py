"""
Proveedores service layer.

Minimal provider registry.  Orders and expenses hold a plain
``proveedor_id``; ``get_nombre_proveedor`` is the explicit read-time lookup
used to display the provider next to them.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.database import commit_or_raise
from app.models.proveedor import Proveedor
from app.schemas.proveedor import ProveedorCreate
from app.utils.errors import MissingFieldError

logger = logging.getLogger(__name__)


def list_proveedores(db: Session, solo_activos: bool = True) -> list[Proveedor]:
    """Return providers ordered by ``razon_social``."""
    q = db.query(Proveedor)
    if solo_activos:
        q = q.filter(Proveedor.activo.is_(True))
    return q.order_by(Proveedor.razon_social).all()


def get_nombre_proveedor(db: Session, proveedor_id: int | None) -> str | None:
    """Resolve a provider's display name, or ``None`` if it is not registered.

    Prefers ``nombre_comercial`` and falls back to ``razon_social``.
    """
    if proveedor_id is None:
        return None
    proveedor: Proveedor | None = (
        db.query(Proveedor).filter(Proveedor.id == proveedor_id).first()
    )
    if proveedor is None:
        return None
    return proveedor.nombre_comercial or proveedor.razon_social


def create_proveedor(db: Session, data: ProveedorCreate) -> Proveedor:
    """Register a new provider.

    Raises:
        MissingFieldError: If ``razon_social`` is blank.
        HTTPException 409: If another provider already uses the same ``rut``.
    """
    razon_social = data.razon_social.strip()
    if not razon_social:
        raise MissingFieldError(["razon_social"])

    rut = data.rut.strip().upper() if data.rut else None
    if rut and db.query(Proveedor.id).filter(Proveedor.rut == rut).first():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Ya existe un proveedor con RUT {rut}.",
        )

    proveedor = Proveedor(
        rut=rut,
        razon_social=razon_social,
        nombre_comercial=data.nombre_comercial,
        contacto=data.contacto,
        telefono=data.telefono,
        email=data.email,
        activo=True,
    )
    db.add(proveedor)
    commit_or_raise(db, "crear proveedor")
    db.refresh(proveedor)

    logger.info("create_proveedor: id=%d razon_social='%s'", proveedor.id, razon_social)
    return proveedor
