"""
Reportes router.

Mounts under ``/api/reports`` (prefix set in ``main.py``).

Endpoints
---------
GET /dashboard — Consolidated dashboard report, recomputed on every call.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.reporte import DashboardResponse
from app.services import reporte_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Reportes"])


@router.get(
    "/dashboard",
    response_model=DashboardResponse,
    summary="Reporte consolidado del dashboard",
    description=(
        "Conteos de OT por estado y prioridad, conteos de presupuestos, serie "
        "mensual de gastos, estado del presupuesto anual y alertas de "
        "documentación y mantención (Vencido / Por vencer / Vigente / Sin fecha)."
    ),
)
def get_dashboard(
    db: Annotated[Session, Depends(get_db)],
) -> DashboardResponse:
    logger.debug("GET /reports/dashboard")
    return reporte_service.build_dashboard(db)
