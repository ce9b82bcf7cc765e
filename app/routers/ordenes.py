"""
Órdenes de Trabajo router.

Mounts under ``/api/ots`` (prefix set in ``main.py``).

Endpoints
---------
GET    /              — List all work orders.
POST   /              — Create a work order (always starts Pendiente).
GET    /{id}          — Work order detail.
PUT    /{id}          — Partial update (estado, prioridad, repuestos, ...).
DELETE /{id}          — Delete a work order (its budgets are kept).
GET    /{id}/export   — Download the work order as a JSON file.
POST   /{id}/budget   — Generate a budget request from the order total.
"""

from __future__ import annotations

import json
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.orden import OrdenCreate, OrdenResponse, OrdenUpdate
from app.schemas.presupuesto import PresupuestoResponse
from app.services import orden_service, presupuesto_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Órdenes de Trabajo"])


# ---------------------------------------------------------------------------
# GET /
# ---------------------------------------------------------------------------


@router.get(
    "/",
    response_model=list[OrdenResponse],
    summary="Listado de órdenes de trabajo",
    description="Retorna todas las órdenes de trabajo, las más recientes primero.",
)
def list_ordenes(
    db: Annotated[Session, Depends(get_db)],
) -> list[OrdenResponse]:
    logger.debug("GET /ots")
    return [orden_service.build_response(db, o) for o in orden_service.list_ordenes(db)]


# ---------------------------------------------------------------------------
# POST /
# ---------------------------------------------------------------------------


@router.post(
    "/",
    response_model=OrdenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Crear orden de trabajo",
    description=(
        "Crea una nueva OT. Título, patente, mecánico y proveedor son obligatorios. "
        "El estado inicial es siempre 'Pendiente' (se ignora el estado enviado). "
        "La prioridad se normaliza y por defecto es 'Media'. "
        "El total se calcula a partir de los repuestos."
    ),
    responses={
        201: {"description": "Orden creada exitosamente."},
        422: {"description": "Faltan campos obligatorios o datos inválidos."},
    },
)
def create_orden(
    data: OrdenCreate,
    db: Annotated[Session, Depends(get_db)],
) -> OrdenResponse:
    """Create a new work order.

    Args:
        data: Creation payload.
        db: Database session.

    Returns:
        The created ``OrdenResponse`` (HTTP 201).
    """
    logger.info("POST /ots patente=%s titulo='%s'", data.patente, data.titulo)
    orden = orden_service.create_orden(db, data)
    return orden_service.build_response(db, orden)


# ---------------------------------------------------------------------------
# GET /{id}
# ---------------------------------------------------------------------------


@router.get(
    "/{orden_id}",
    response_model=OrdenResponse,
    summary="Detalle de una orden de trabajo",
    responses={404: {"description": "Orden no encontrada."}},
)
def get_orden(
    orden_id: int,
    db: Annotated[Session, Depends(get_db)],
) -> OrdenResponse:
    logger.debug("GET /ots/%d", orden_id)
    return orden_service.build_response(db, orden_service.get_orden(db, orden_id))


# ---------------------------------------------------------------------------
# PUT /{id}
# ---------------------------------------------------------------------------


@router.put(
    "/{orden_id}",
    response_model=OrdenResponse,
    summary="Actualizar orden de trabajo",
    description=(
        "Actualiza parcialmente una OT. Solo los campos incluidos en el cuerpo "
        "son modificados. El estado acepta sinónimos (ej. 'en_progreso') y puede "
        "cambiar a cualquier otro estado válido. Si se envían repuestos, el total "
        "se recalcula."
    ),
    responses={
        200: {"description": "Orden actualizada exitosamente."},
        404: {"description": "Orden no encontrada."},
        422: {"description": "Estado inválido o campo obligatorio vacío."},
    },
)
def update_orden(
    orden_id: int,
    data: OrdenUpdate,
    db: Annotated[Session, Depends(get_db)],
) -> OrdenResponse:
    logger.info("PUT /ots/%d", orden_id)
    orden = orden_service.update_orden(db, orden_id, data)
    return orden_service.build_response(db, orden)


# ---------------------------------------------------------------------------
# DELETE /{id}
# ---------------------------------------------------------------------------


@router.delete(
    "/{orden_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Eliminar orden de trabajo",
    description="Elimina la OT y sus repuestos. Los presupuestos generados se conservan.",
    responses={404: {"description": "Orden no encontrada."}},
)
def delete_orden(
    orden_id: int,
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    logger.info("DELETE /ots/%d", orden_id)
    orden_service.delete_orden(db, orden_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ---------------------------------------------------------------------------
# GET /{id}/export
# ---------------------------------------------------------------------------


@router.get(
    "/{orden_id}/export",
    summary="Descargar orden de trabajo (JSON)",
    response_class=Response,
    responses={
        200: {"content": {"application/json": {}}, "description": "Archivo JSON de la OT."},
        404: {"description": "Orden no encontrada."},
    },
)
def export_orden(
    orden_id: int,
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    """Stream the order as a pretty-printed JSON attachment."""
    contenido = orden_service.export_orden(db, orden_id)
    filename = orden_service.export_filename(contenido)
    logger.info("GET /ots/%d/export filename=%s", orden_id, filename)
    return Response(
        content=json.dumps(contenido, indent=2, ensure_ascii=False),
        media_type="application/json",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


# ---------------------------------------------------------------------------
# POST /{id}/budget
# ---------------------------------------------------------------------------


@router.post(
    "/{orden_id}/budget",
    response_model=PresupuestoResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Generar presupuesto desde la OT",
    description=(
        "Crea un presupuesto 'Pendiente' con el monto total actual de la OT. "
        "Cada llamada crea un presupuesto nuevo."
    ),
    responses={
        201: {"description": "Presupuesto generado."},
        404: {"description": "Orden no encontrada."},
    },
)
def generate_presupuesto(
    orden_id: int,
    db: Annotated[Session, Depends(get_db)],
) -> PresupuestoResponse:
    logger.info("POST /ots/%d/budget", orden_id)
    presupuesto = presupuesto_service.generate_presupuesto(db, orden_id)
    return presupuesto_service.build_response(db, presupuesto)
