"""
Reference data consumed by the dashboard: vehicle documents with expiry
dates and preventive maintenance programs.

The reporting layer only depends on the ``ReferenceDataProvider`` protocol.
``SqlReferenceDataProvider`` is the default implementation backed by the
``documento_vehiculo`` and ``programa_mantencion`` tables; tests and other
integrations can pass any object with the same two methods.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Protocol

from sqlalchemy.orm import Session

from app.models.documento_vehiculo import DocumentoVehiculo
from app.models.programa_mantencion import ProgramaMantencion


@dataclass(frozen=True)
class DocumentoRef:
    """A vehicle document and its expiry date (``None`` = not on record)."""

    id: int
    patente: str
    tipo: str
    responsable: str | None = None
    vence: date | None = None


@dataclass(frozen=True)
class MantencionRef:
    """A maintenance task tracked by date (``"fecha"``) or odometer (``"km"``)."""

    id: int
    patente: str
    tarea: str
    tipo_control: str = "fecha"
    proxima_fecha: date | None = None
    proximo_km: int | None = None
    km_actual: int | None = None


class ReferenceDataProvider(Protocol):
    def list_documentos(self) -> list[DocumentoRef]: ...

    def list_mantenciones(self) -> list[MantencionRef]: ...


class SqlReferenceDataProvider:
    """Reads reference data from the application database."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def list_documentos(self) -> list[DocumentoRef]:
        rows = (
            self._db.query(DocumentoVehiculo)
            .order_by(DocumentoVehiculo.patente, DocumentoVehiculo.id)
            .all()
        )
        return [
            DocumentoRef(
                id=r.id,
                patente=r.patente,
                tipo=r.tipo,
                responsable=r.responsable,
                vence=r.vence,
            )
            for r in rows
        ]

    def list_mantenciones(self) -> list[MantencionRef]:
        rows = (
            self._db.query(ProgramaMantencion)
            .order_by(ProgramaMantencion.patente, ProgramaMantencion.id)
            .all()
        )
        return [
            MantencionRef(
                id=r.id,
                patente=r.patente,
                tarea=r.tarea,
                tipo_control=r.tipo_control,
                proxima_fecha=r.proxima_fecha,
                proximo_km=r.proximo_km,
                km_actual=r.km_actual,
            )
            for r in rows
        ]
