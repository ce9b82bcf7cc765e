"""
Presupuestos router.

Mounts under ``/api/budgets`` (prefix set in ``main.py``).  Budgets are
created from an order via ``POST /api/ots/{id}/budget``.

Endpoints
---------
GET /        — List budgets (optional ?estado=Pendiente).
GET /{id}    — Budget detail.
PUT /{id}    — Update estado / monto / observacion.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.presupuesto import PresupuestoResponse, PresupuestoUpdate
from app.services import presupuesto_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Presupuestos"])


@router.get(
    "/",
    response_model=list[PresupuestoResponse],
    summary="Listado de presupuestos",
    description="Retorna los presupuestos, los más recientes primero. Acepta filtro por estado.",
    responses={422: {"description": "Estado de presupuesto inválido."}},
)
def list_presupuestos(
    db: Annotated[Session, Depends(get_db)],
    estado: Annotated[
        str | None,
        Query(description="Pendiente, Aprobado, Parcial o Rechazado. Omitir para todos."),
    ] = None,
) -> list[PresupuestoResponse]:
    logger.debug("GET /budgets estado=%s", estado)
    return [
        presupuesto_service.build_response(db, p)
        for p in presupuesto_service.list_presupuestos(db, estado)
    ]


@router.get(
    "/{presupuesto_id}",
    response_model=PresupuestoResponse,
    summary="Detalle de un presupuesto",
    responses={404: {"description": "Presupuesto no encontrado."}},
)
def get_presupuesto(
    presupuesto_id: int,
    db: Annotated[Session, Depends(get_db)],
) -> PresupuestoResponse:
    logger.debug("GET /budgets/%d", presupuesto_id)
    return presupuesto_service.build_response(
        db, presupuesto_service.get_presupuesto(db, presupuesto_id)
    )


@router.put(
    "/{presupuesto_id}",
    response_model=PresupuestoResponse,
    summary="Actualizar presupuesto",
    description=(
        "Actualiza el estado (Pendiente / Aprobado / Parcial / Rechazado), el monto "
        "(número >= 0) y/o la observación (máximo 400 caracteres, se trunca). "
        "Una solicitud sin cambios reconocidos retorna 400."
    ),
    responses={
        200: {"description": "Presupuesto actualizado."},
        400: {"description": "No se proporcionaron cambios."},
        404: {"description": "Presupuesto no encontrado."},
        422: {"description": "Estado o monto inválido."},
    },
)
def update_presupuesto(
    presupuesto_id: int,
    data: PresupuestoUpdate,
    db: Annotated[Session, Depends(get_db)],
) -> PresupuestoResponse:
    logger.info("PUT /budgets/%d", presupuesto_id)
    presupuesto = presupuesto_service.update_presupuesto(db, presupuesto_id, data)
    return presupuesto_service.build_response(db, presupuesto)
