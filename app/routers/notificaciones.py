"""
Notificaciones router.

Mounts under ``/api/notifications`` (prefix set in ``main.py``).

Endpoints
---------
GET  /            — All notifications, newest first.
POST /{id}/read   — Mark one notification as read.
POST /read-all    — Mark every notification as read.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.notificacion import NotificacionResponse
from app.services import notificacion_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Notificaciones"])


@router.get("/", response_model=list[NotificacionResponse], summary="Listado de notificaciones")
def list_notificaciones(
    db: Annotated[Session, Depends(get_db)],
) -> list[NotificacionResponse]:
    return [
        NotificacionResponse.model_validate(n)
        for n in notificacion_service.list_notificaciones(db)
    ]


@router.post(
    "/read-all",
    response_model=list[NotificacionResponse],
    summary="Marcar todas como leídas",
)
def marcar_todas(
    db: Annotated[Session, Depends(get_db)],
) -> list[NotificacionResponse]:
    logger.info("POST /notifications/read-all")
    return [
        NotificacionResponse.model_validate(n)
        for n in notificacion_service.marcar_todas(db)
    ]


@router.post(
    "/{notificacion_id}/read",
    response_model=NotificacionResponse,
    summary="Marcar notificación como leída",
    responses={404: {"description": "Notificación no encontrada."}},
)
def marcar_leida(
    notificacion_id: int,
    db: Annotated[Session, Depends(get_db)],
) -> NotificacionResponse:
    logger.info("POST /notifications/%d/read", notificacion_id)
    return NotificacionResponse.model_validate(
        notificacion_service.marcar_leida(db, notificacion_id)
    )
