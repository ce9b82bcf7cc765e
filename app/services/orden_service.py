"""
Órdenes de Trabajo (OT) service layer.

All database access for the ``/api/ots`` endpoints lives here.  Functions
receive a SQLAlchemy ``Session`` and return ORM objects or schema instances
ready for serialisation by FastAPI.

Design notes
------------
- New orders always start as ``Pendiente``; a client-supplied ``estado`` on
  create is ignored.
- State changes follow a free transition graph: any canonical state may
  follow any other, so work can be reopened or rejected at any point.
- ``total_costo`` is recomputed from the line items every time they are
  written and is never accepted from the client.
- Every payload is fully validated before the ORM object is touched, so a
  rejected update leaves the stored order unchanged.
- Deleting an order never touches its budgets; they keep their frozen
  snapshot of the order.
"""

from __future__ import annotations

import datetime
import logging
from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from sqlalchemy.orm import Session

from app.database import commit_or_raise
from app.models.orden_repuesto import OrdenRepuesto
from app.models.orden_trabajo import OrdenTrabajo
from app.schemas.orden import (
    OrdenCreate,
    OrdenResponse,
    OrdenUpdate,
    RepuestoIn,
    RepuestoResponse,
)
from app.services import notificacion_service, proveedor_service
from app.utils.constants import EstadoOrden
from app.utils.errors import MissingFieldError, NotFoundError
from app.utils.normalizacion import normalizar_estado, normalizar_prioridad

logger = logging.getLogger(__name__)

# Text fields that can never be blank on a stored order
_CAMPOS_OBLIGATORIOS: tuple[str, ...] = ("titulo", "patente", "mecanico")


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def _normalizar_patente(patente: str) -> str:
    return patente.strip().upper()


def _centavos(valor: float | Decimal) -> Decimal:
    return Decimal(str(valor)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def calcular_total(repuestos: Iterable[RepuestoIn | OrdenRepuesto]) -> float:
    """Return Σ cantidad × costo over the line items.

    Unit costs are taken at cents precision, the same precision the
    ``orden_repuesto.costo`` column stores, so the total always matches the
    persisted line items.
    """
    total = sum(
        (int(r.cantidad) * _centavos(r.costo) for r in repuestos),
        Decimal("0"),
    )
    return float(total)


def _build_repuestos(repuestos: list[RepuestoIn]) -> list[OrdenRepuesto]:
    return [
        OrdenRepuesto(
            posicion=posicion,
            nombre=r.nombre.strip(),
            cantidad=r.cantidad,
            costo=_centavos(r.costo),
        )
        for posicion, r in enumerate(repuestos, start=1)
    ]


def _get_or_404(db: Session, orden_id: int) -> OrdenTrabajo:
    orden: OrdenTrabajo | None = (
        db.query(OrdenTrabajo).filter(OrdenTrabajo.id == orden_id).first()
    )
    if orden is None:
        raise NotFoundError(f"Orden de trabajo con ID {orden_id} no encontrada.")
    return orden


def build_response(db: Session, orden: OrdenTrabajo) -> OrdenResponse:
    """Construct an ``OrdenResponse`` from an ``OrdenTrabajo`` ORM object.

    Resolves ``proveedor_nombre`` with an explicit lookup of ``proveedor_id``.

    Args:
        db: Active SQLAlchemy session.
        orden: An ``OrdenTrabajo`` instance loaded from the database.

    Returns:
        A fully-populated ``OrdenResponse``.
    """
    repuestos = [
        RepuestoResponse(
            nombre=r.nombre,
            cantidad=r.cantidad,
            costo=float(r.costo),
            subtotal=round(r.cantidad * float(r.costo), 2),
        )
        for r in (orden.repuestos or [])
    ]

    return OrdenResponse(
        id=orden.id,
        titulo=orden.titulo,
        patente=orden.patente,
        mecanico=orden.mecanico,
        proveedor_id=orden.proveedor_id,
        proveedor_nombre=proveedor_service.get_nombre_proveedor(db, orden.proveedor_id),
        prioridad=orden.prioridad,
        estado=orden.estado,
        descripcion=orden.descripcion,
        fecha_solicitud=orden.fecha_solicitud,
        conductor=orden.conductor,
        repuestos=repuestos,
        total_costo=float(orden.total_costo or 0),
        created_at=orden.created_at,
        updated_at=orden.updated_at,
    )


# ---------------------------------------------------------------------------
# Public service functions: read operations
# ---------------------------------------------------------------------------


def list_ordenes(db: Session) -> list[OrdenTrabajo]:
    """Return every work order, most recent first."""
    rows = db.query(OrdenTrabajo).order_by(OrdenTrabajo.id.desc()).all()
    logger.debug("list_ordenes: %d ordenes", len(rows))
    return rows


def get_orden(db: Session, orden_id: int) -> OrdenTrabajo:
    """Return one work order.

    Raises:
        NotFoundError: If no order with the given ID exists.
    """
    return _get_or_404(db, orden_id)


def export_orden(db: Session, orden_id: int) -> dict[str, Any]:
    """Return a JSON-serialisable copy of the order for download.

    Raises:
        NotFoundError: If no order with the given ID exists.
    """
    orden = _get_or_404(db, orden_id)
    logger.debug("export_orden: id=%d patente=%s", orden.id, orden.patente)
    return build_response(db, orden).model_dump(mode="json")


def export_filename(orden: OrdenTrabajo | dict[str, Any]) -> str:
    """Attachment filename for an exported order: ``ot-{patente}-{id}.json``."""
    if isinstance(orden, dict):
        return f"ot-{orden['patente']}-{orden['id']}.json"
    return f"ot-{orden.patente}-{orden.id}.json"


# ---------------------------------------------------------------------------
# Public service functions: write operations
# ---------------------------------------------------------------------------


def create_orden(db: Session, data: OrdenCreate) -> OrdenTrabajo:
    """Create a new work order in state ``Pendiente``.

    Args:
        db: Active SQLAlchemy session.
        data: Creation payload.  ``estado`` is ignored.

    Returns:
        The newly persisted ``OrdenTrabajo`` (with ``id`` and ``total_costo``).

    Raises:
        MissingFieldError: If ``titulo``, ``patente``, ``mecanico`` or
                           ``proveedor_id`` is missing or blank.
    """
    faltantes = [campo for campo in _CAMPOS_OBLIGATORIOS if _blank(getattr(data, campo))]
    if not data.proveedor_id:
        faltantes.append("proveedor_id")
    if faltantes:
        raise MissingFieldError(faltantes)

    if data.estado is not None:
        logger.debug("create_orden: ignoring client estado=%r", data.estado)

    orden = OrdenTrabajo(
        titulo=data.titulo.strip(),
        patente=_normalizar_patente(data.patente),
        mecanico=data.mecanico.strip(),
        proveedor_id=data.proveedor_id,
        prioridad=normalizar_prioridad(data.prioridad).value,
        estado=EstadoOrden.PENDIENTE.value,
        descripcion=data.descripcion,
        fecha_solicitud=data.fecha_solicitud or datetime.date.today(),
        conductor=data.conductor,
    )
    orden.repuestos = _build_repuestos(data.repuestos)
    orden.total_costo = calcular_total(orden.repuestos)

    db.add(orden)
    db.flush()
    notificacion_service.emitir(
        db, f"Nueva OT #{orden.id} creada: {orden.titulo} ({orden.patente})."
    )
    commit_or_raise(db, "crear orden de trabajo")
    db.refresh(orden)

    logger.info(
        "create_orden: id=%d patente=%s total_costo=%.2f",
        orden.id, orden.patente, float(orden.total_costo),
    )
    return orden


def update_orden(db: Session, orden_id: int, data: OrdenUpdate) -> OrdenTrabajo:
    """Apply a partial update to an existing work order.

    Only fields present in the payload are written.  ``estado`` must
    normalize to a canonical state, ``prioridad`` falls back to ``Media``,
    and a new ``repuestos`` list replaces the old one and recomputes
    ``total_costo``.

    Args:
        db: Active SQLAlchemy session.
        orden_id: Primary key of the order to modify.
        data: Partial update payload.

    Returns:
        The updated and refreshed ``OrdenTrabajo``.

    Raises:
        NotFoundError: If no order with the given ID exists.
        InvalidStateError: If ``estado`` is not a recognised order state.
        MissingFieldError: If a required field is blanked.
    """
    orden = _get_or_404(db, orden_id)
    update_data = data.model_dump(exclude_unset=True)

    # Validate everything before mutating the ORM object
    cambios: dict[str, Any] = {}
    if "estado" in update_data:
        cambios["estado"] = normalizar_estado(update_data.pop("estado"), "orden").value
    if "prioridad" in update_data:
        cambios["prioridad"] = normalizar_prioridad(update_data.pop("prioridad")).value

    blanqueados = [
        campo for campo in (*_CAMPOS_OBLIGATORIOS, "proveedor_id")
        if campo in update_data and _blank(update_data[campo])
    ]
    if blanqueados:
        raise MissingFieldError(blanqueados)

    nuevos_repuestos: list[RepuestoIn] | None = None
    if "repuestos" in update_data:
        update_data.pop("repuestos")
        nuevos_repuestos = data.repuestos or []

    for campo in _CAMPOS_OBLIGATORIOS:
        if campo in update_data:
            update_data[campo] = update_data[campo].strip()
    if "patente" in update_data:
        update_data["patente"] = _normalizar_patente(update_data["patente"])
    cambios.update(update_data)

    estado_anterior = orden.estado
    for field, value in cambios.items():
        setattr(orden, field, value)

    if nuevos_repuestos is not None:
        orden.repuestos = _build_repuestos(nuevos_repuestos)
        orden.total_costo = calcular_total(orden.repuestos)

    if "estado" in cambios and cambios["estado"] != estado_anterior:
        notificacion_service.emitir(
            db,
            f"OT #{orden.id} ({orden.patente}) cambió de {estado_anterior} a {cambios['estado']}.",
        )

    commit_or_raise(db, "actualizar orden de trabajo")
    db.refresh(orden)

    logger.info(
        "update_orden: id=%d fields=%s",
        orden_id,
        list(cambios.keys()) + (["repuestos"] if nuevos_repuestos is not None else []),
    )
    return orden


def delete_orden(db: Session, orden_id: int) -> None:
    """Delete a work order and its line items.

    Budgets generated from the order are left untouched.

    Raises:
        NotFoundError: If no order with the given ID exists.
    """
    orden = _get_or_404(db, orden_id)
    db.delete(orden)
    commit_or_raise(db, "eliminar orden de trabajo")
    logger.info("delete_orden: id=%d", orden_id)
