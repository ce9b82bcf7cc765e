"""
Reportes service layer — consolidated dashboard.

``build_dashboard`` is read-only and recomputes the whole report from the
current database state on every call; nothing is cached and no accumulator
outlives a call, so concurrent calls are independent of each other.

Report blocks
-------------
- ``ot``            — order counts per canonical state and per priority.
- ``presupuestos``  — budget counts per canonical state.
- ``gastos``        — total, monthly series (``YYYY-MM`` buckets in
                      chronological order) and the annual budget snapshot.
- ``documentacion`` — vehicle documents classified by expiry date.
- ``mantenciones``  — maintenance tasks classified by date or odometer.

Classification
--------------
Vencido when the due point has passed, Por vencer within the lookahead
window (``DIAS_POR_VENCER`` days / ``KM_POR_VENCER`` km), Vigente beyond it,
Sin fecha when the due point is not on record.  Every block has an empty
shape (zero counts, empty lists) so an empty database still yields a full
report.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date, datetime

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.gasto import Gasto
from app.models.orden_trabajo import OrdenTrabajo
from app.models.presupuesto import Presupuesto
from app.schemas.reporte import (
    DashboardResponse,
    DocumentoAlerta,
    GastoMensualItem,
    MantencionAlerta,
    ResumenGastos,
    ResumenOrdenes,
    ResumenPresupuestos,
)
from app.services import presupuesto_anual_service
from app.services.referencia_service import (
    DocumentoRef,
    MantencionRef,
    ReferenceDataProvider,
    SqlReferenceDataProvider,
)
from app.utils.constants import (
    DIAS_POR_VENCER,
    KM_POR_VENCER,
    ORDEN_URGENCIA,
    EstadoOrden,
    EstadoPresupuesto,
    EstadoVencimiento,
    Prioridad,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Classification (pure)
# ---------------------------------------------------------------------------


def clasificar_por_fecha(
    vence: date | None,
    hoy: date,
    dias_alerta: int = DIAS_POR_VENCER,
) -> tuple[EstadoVencimiento, int | None]:
    """Classify a due date against *hoy*.

    Returns:
        ``(estado, dias)`` where ``dias`` is the number of days until
        *vence* (negative when overdue, ``None`` without a date).
    """
    if vence is None:
        return EstadoVencimiento.SIN_FECHA, None
    dias = (vence - hoy).days
    if dias < 0:
        return EstadoVencimiento.VENCIDO, dias
    if dias <= dias_alerta:
        return EstadoVencimiento.POR_VENCER, dias
    return EstadoVencimiento.VIGENTE, dias


def clasificar_por_km(
    proximo_km: int | None,
    km_actual: int | None,
    km_alerta: int = KM_POR_VENCER,
) -> tuple[EstadoVencimiento, int | None]:
    """Classify an odometer-tracked task.

    Returns:
        ``(estado, km_restantes)``; ``km_restantes`` is ``None`` when either
        reading is missing.
    """
    if proximo_km is None or km_actual is None:
        return EstadoVencimiento.SIN_FECHA, None
    km_restantes = proximo_km - km_actual
    if km_restantes <= 0:
        return EstadoVencimiento.VENCIDO, km_restantes
    if km_restantes <= km_alerta:
        return EstadoVencimiento.POR_VENCER, km_restantes
    return EstadoVencimiento.VIGENTE, km_restantes


def clasificar_documento(doc: DocumentoRef, hoy: date) -> DocumentoAlerta:
    estado, dias = clasificar_por_fecha(doc.vence, hoy)
    return DocumentoAlerta(
        id=doc.id,
        patente=doc.patente,
        tipo=doc.tipo,
        responsable=doc.responsable,
        vence=doc.vence,
        dias_para_vencer=dias,
        estado=estado.value,
    )


def clasificar_mantencion(tarea: MantencionRef, hoy: date) -> MantencionAlerta:
    if tarea.tipo_control == "km":
        estado, km_restantes = clasificar_por_km(tarea.proximo_km, tarea.km_actual)
        return MantencionAlerta(
            id=tarea.id,
            patente=tarea.patente,
            tarea=tarea.tarea,
            tipo_control="km",
            proximo_control=str(tarea.proximo_km) if tarea.proximo_km is not None else None,
            dias=None,
            km_restantes=km_restantes,
            estado=estado.value,
        )

    estado, dias = clasificar_por_fecha(tarea.proxima_fecha, hoy)
    return MantencionAlerta(
        id=tarea.id,
        patente=tarea.patente,
        tarea=tarea.tarea,
        tipo_control="fecha",
        proximo_control=tarea.proxima_fecha.isoformat() if tarea.proxima_fecha else None,
        dias=dias,
        km_restantes=None,
        estado=estado.value,
    )


def _urgencia(
    estado: str, restante: int | None, unidad: str = ""
) -> tuple[int, str, float]:
    """Sort key: urgency rank, then unit (days and km never interleave), then remaining."""
    rango = ORDEN_URGENCIA[EstadoVencimiento(estado)]
    return rango, unidad, restante if restante is not None else float("inf")


# ---------------------------------------------------------------------------
# Sub-aggregations
# ---------------------------------------------------------------------------


def _contar(db: Session, columna, claves: list[str]) -> tuple[int, dict[str, int]]:
    """GROUP BY *columna* and return ``(total, counts)`` with *claves* zero-filled."""
    conteo: dict[str, int] = {clave: 0 for clave in claves}
    for valor, cantidad in db.query(columna, func.count()).group_by(columna).all():
        conteo[valor or "Sin dato"] = conteo.get(valor or "Sin dato", 0) + cantidad
    return sum(conteo.values()), conteo


def resumen_ordenes(db: Session) -> ResumenOrdenes:
    total, por_estado = _contar(db, OrdenTrabajo.estado, [e.value for e in EstadoOrden])
    _, por_prioridad = _contar(db, OrdenTrabajo.prioridad, [p.value for p in Prioridad])
    return ResumenOrdenes(total=total, por_estado=por_estado, por_prioridad=por_prioridad)


def resumen_presupuestos(db: Session) -> ResumenPresupuestos:
    total, por_estado = _contar(
        db, Presupuesto.estado, [e.value for e in EstadoPresupuesto]
    )
    return ResumenPresupuestos(total=total, por_estado=por_estado)


def serie_mensual(db: Session) -> list[GastoMensualItem]:
    """Sum ``costo`` per ``YYYY-MM`` of ``fecha``, in chronological order.

    Grouping is done in Python so the output does not depend on
    database-specific date functions.
    """
    buckets: dict[str, float] = defaultdict(float)
    for fecha, costo in db.query(Gasto.fecha, Gasto.costo).all():
        if fecha is None:
            continue
        buckets[fecha.isoformat()[:7]] += float(costo or 0)

    return [
        GastoMensualItem(periodo=periodo, total=round(buckets[periodo], 2))
        for periodo in sorted(buckets)
    ]


def resumen_gastos(db: Session) -> ResumenGastos:
    presupuesto = presupuesto_anual_service.get_snapshot(db)
    return ResumenGastos(
        total=presupuesto.gastado,
        mensual=serie_mensual(db),
        presupuesto=presupuesto,
    )


def alertas_documentacion(
    referencias: ReferenceDataProvider, hoy: date
) -> list[DocumentoAlerta]:
    items = [clasificar_documento(doc, hoy) for doc in referencias.list_documentos()]
    return sorted(items, key=lambda d: _urgencia(d.estado, d.dias_para_vencer))


def alertas_mantencion(
    referencias: ReferenceDataProvider, hoy: date
) -> list[MantencionAlerta]:
    items = [clasificar_mantencion(t, hoy) for t in referencias.list_mantenciones()]
    return sorted(
        items,
        key=lambda m: _urgencia(
            m.estado,
            m.dias if m.tipo_control == "fecha" else m.km_restantes,
            m.tipo_control,
        ),
    )


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------


def build_dashboard(
    db: Session,
    referencias: ReferenceDataProvider | None = None,
    hoy: date | None = None,
) -> DashboardResponse:
    """Assemble the dashboard report from the current state.

    Args:
        db: Active SQLAlchemy session (read-only use).
        referencias: Source of document / maintenance records; defaults to
                     ``SqlReferenceDataProvider(db)``.
        hoy: Reference date for expiry classification; defaults to today.

    Returns:
        A ``DashboardResponse``.
    """
    referencias = referencias or SqlReferenceDataProvider(db)
    hoy = hoy or date.today()

    ot = resumen_ordenes(db)
    presupuestos = resumen_presupuestos(db)
    gastos = resumen_gastos(db)
    documentacion = alertas_documentacion(referencias, hoy)
    mantenciones = alertas_mantencion(referencias, hoy)

    logger.debug(
        "build_dashboard: ordenes=%d presupuestos=%d meses=%d documentos=%d mantenciones=%d",
        ot.total, presupuestos.total, len(gastos.mensual),
        len(documentacion), len(mantenciones),
    )

    return DashboardResponse(
        ot=ot,
        presupuestos=presupuestos,
        gastos=gastos,
        documentacion=documentacion,
        mantenciones=mantenciones,
        generado_en=datetime.now(),
    )
