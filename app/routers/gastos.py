"""
Gastos router.

Mounts under ``/api/expenses`` (prefix set in ``main.py``).

Endpoints
---------
GET /         — Expense listing with period filter (?tipo=mes&valor=2026-03)
                plus totals and the annual budget snapshot.
POST /        — Record an expense (multipart form, optional ``boleta`` file).
GET /budget   — Annual budget snapshot.
PUT /budget   — Set the annual budget cap.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status
from sqlalchemy.orm import Session

from app.config import get_settings
from app.database import get_db
from app.schemas.gasto import (
    GastoCreate,
    GastoResponse,
    GastosListResponse,
    PresupuestoAnualResponse,
    PresupuestoAnualUpdate,
)
from app.services import gasto_service, presupuesto_anual_service
from app.services.file_storage import guardar_boleta

settings = get_settings()
logger = logging.getLogger(__name__)

router = APIRouter(tags=["Gastos"])


# ---------------------------------------------------------------------------
# GET /
# ---------------------------------------------------------------------------


@router.get(
    "/",
    response_model=GastosListResponse,
    summary="Listado de gastos con filtro por período",
    description=(
        "Retorna los gastos (más recientes primero), el total general, el total "
        "del período filtrado y el estado del presupuesto anual. "
        "tipo: todos | mes (valor YYYY-MM) | anio (valor YYYY) | semana (valor YYYY-Www, ISO-8601)."
    ),
    responses={422: {"description": "Tipo de filtro desconocido."}},
)
def list_gastos(
    db: Annotated[Session, Depends(get_db)],
    tipo: Annotated[str, Query(description="todos, mes, anio o semana.")] = "todos",
    valor: Annotated[str | None, Query(description="Valor del período.")] = None,
) -> GastosListResponse:
    try:
        predicate = gasto_service.build_periodo_predicate(tipo, valor)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc

    todos = gasto_service.list_gastos(db)
    filtrados = gasto_service.list_gastos_filtered(db, predicate)
    logger.debug("GET /expenses tipo=%s valor=%s -> %d/%d", tipo, valor, len(filtrados), len(todos))

    return GastosListResponse(
        gastos=[gasto_service.build_response(db, g) for g in filtrados],
        total=gasto_service.total_costo(todos),
        total_filtrado=gasto_service.total_costo(filtrados),
        presupuesto=presupuesto_anual_service.get_snapshot(db),
    )


# ---------------------------------------------------------------------------
# POST /
# ---------------------------------------------------------------------------


@router.post(
    "/",
    response_model=GastoResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Registrar gasto",
    description=(
        "Registra un gasto enviado como formulario multipart. Patente, concepto y "
        "costo son obligatorios; la fecha por defecto es hoy. "
        "Opcionalmente se adjunta la boleta (campo 'boleta')."
    ),
    responses={
        201: {"description": "Gasto registrado."},
        422: {"description": "Campos obligatorios faltantes o costo inválido."},
    },
)
async def record_gasto(
    db: Annotated[Session, Depends(get_db)],
    patente: Annotated[str | None, Form()] = None,
    concepto: Annotated[str | None, Form()] = None,
    costo: Annotated[float | None, Form()] = None,
    fecha: Annotated[date | None, Form()] = None,
    proveedor_id: Annotated[int | None, Form()] = None,
    boleta: Annotated[UploadFile | None, File()] = None,
) -> GastoResponse:
    """Record an expense, storing the optional receipt first.

    The receipt is only written after the fields pass validation, so a
    rejected expense never leaves an orphan file on disk.
    """
    data = GastoCreate(
        patente=patente,
        concepto=concepto,
        costo=costo,
        fecha=fecha or date.today(),
        proveedor_id=proveedor_id,
    )
    gasto_service.validate_gasto(data)

    boleta_path: str | None = None
    if boleta is not None and boleta.filename:
        boleta_path = guardar_boleta(
            await boleta.read(),
            boleta.filename,
            settings.UPLOADS_DIR,
            patente=data.patente,
            fecha=data.fecha,
        )

    gasto = gasto_service.record_gasto(db, data, boleta_path=boleta_path)
    return gasto_service.build_response(db, gasto)


# ---------------------------------------------------------------------------
# GET /budget  ·  PUT /budget
# ---------------------------------------------------------------------------


@router.get(
    "/budget",
    response_model=PresupuestoAnualResponse,
    summary="Estado del presupuesto anual",
)
def get_presupuesto_anual(
    db: Annotated[Session, Depends(get_db)],
) -> PresupuestoAnualResponse:
    return presupuesto_anual_service.get_snapshot(db)


@router.put(
    "/budget",
    response_model=PresupuestoAnualResponse,
    summary="Configurar presupuesto anual",
    description="Reemplaza el tope anual. Debe ser un número mayor a cero.",
    responses={422: {"description": "Monto inválido."}},
)
def set_presupuesto_anual(
    data: PresupuestoAnualUpdate,
    db: Annotated[Session, Depends(get_db)],
) -> PresupuestoAnualResponse:
    logger.info("PUT /expenses/budget presupuesto_anual=%s", data.presupuesto_anual)
    return presupuesto_anual_service.set_presupuesto_anual(db, data.presupuesto_anual)
