"""
Proveedores router.

Mounts under ``/api/providers`` (prefix set in ``main.py``).

Endpoints
---------
GET  /   — Active providers ordered by razón social.
POST /   — Register a provider.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.proveedor import ProveedorCreate, ProveedorResponse
from app.services import proveedor_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Proveedores"])


@router.get("/", response_model=list[ProveedorResponse], summary="Listado de proveedores")
def list_proveedores(
    db: Annotated[Session, Depends(get_db)],
) -> list[ProveedorResponse]:
    return [ProveedorResponse.model_validate(p) for p in proveedor_service.list_proveedores(db)]


@router.post(
    "/",
    response_model=ProveedorResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Registrar proveedor",
    responses={409: {"description": "RUT ya registrado."}},
)
def create_proveedor(
    data: ProveedorCreate,
    db: Annotated[Session, Depends(get_db)],
) -> ProveedorResponse:
    logger.info("POST /providers razon_social='%s'", data.razon_social)
    return ProveedorResponse.model_validate(proveedor_service.create_proveedor(db, data))
