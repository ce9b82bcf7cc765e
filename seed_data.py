"""Seed data script for the Dashboard Flota database.

Populates the database with demo data for development: providers, work
orders with their spare parts, budget requests, expenses, the annual
budget cap, vehicle documents and maintenance programs.  The script is
idempotent: each table is skipped when it already has data.

Usage (from the repository root):
    python seed_data.py
"""

from __future__ import annotations

import sys
import os
from datetime import date, timedelta
from decimal import Decimal

# Ensure the app package is importable when running from the repository root
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from app.database import SessionLocal  # noqa: E402
from app.models import (  # noqa: E402
    DocumentoVehiculo,
    Gasto,
    OrdenRepuesto,
    OrdenTrabajo,
    Presupuesto,
    PresupuestoAnual,
    ProgramaMantencion,
    Proveedor,
)
from app.services.orden_service import calcular_total  # noqa: E402

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

ANIO = date.today().year
HOY = date.today()


def _d(month: int, day: int) -> date:
    """Shorthand date constructor for the current year."""
    return date(ANIO, month, day)


def _dec(value: float) -> Decimal:
    """Convert float to Decimal for Numeric columns."""
    return Decimal(str(round(value, 2)))


# ---------------------------------------------------------------------------
# Seed functions
# ---------------------------------------------------------------------------


def seed_proveedores(session) -> list[Proveedor]:
    if session.query(Proveedor).count() > 0:
        print("  [SKIP] Proveedor — table already has data.")
        return session.query(Proveedor).all()

    registros = [
        Proveedor(rut="76123456-7", razon_social="Frenos del Sur SpA",
                  nombre_comercial="Frenos del Sur", telefono="+56 2 2345 6789", activo=True),
        Proveedor(rut="77987654-3", razon_social="Lubricentro Norte Ltda.",
                  nombre_comercial="Lubricentro Norte", email="ventas@lubrinorte.cl", activo=True),
        Proveedor(rut="76555444-K", razon_social="Neumáticos Andes S.A.",
                  contacto="P. Rojas", activo=True),
    ]
    session.add_all(registros)
    session.flush()
    print(f"  [OK] Proveedor — {len(registros)} registros insertados.")
    return registros


def seed_ordenes(session, proveedores: list[Proveedor]) -> list[OrdenTrabajo]:
    if session.query(OrdenTrabajo).count() > 0:
        print("  [SKIP] OrdenTrabajo — table already has data.")
        return session.query(OrdenTrabajo).all()

    datos = [
        ("Cambio de frenos", "AB-1234", "J. Perez", 0, "Alta", "Pendiente", _d(1, 12),
         [("Pastillas", 4, 15000)]),
        ("Cambio de aceite y filtros", "CD-5678", "R. Díaz", 1, "Media", "Finalizada", _d(2, 3),
         [("Aceite 10W-40 (litro)", 6, 7500), ("Filtro de aceite", 1, 9000)]),
        ("Reemplazo de neumáticos", "EF-9012", "J. Perez", 2, "Media", "En progreso", _d(2, 20),
         [("Neumático 205/55 R16", 4, 62000)]),
        ("Revisión de suspensión", "AB-1234", "M. Vera", 0, "Baja", "Rechazada", _d(3, 1), []),
    ]

    registros = []
    for titulo, patente, mecanico, idx, prioridad, estado, fecha, repuestos in datos:
        orden = OrdenTrabajo(
            titulo=titulo,
            patente=patente,
            mecanico=mecanico,
            proveedor_id=proveedores[idx].id,
            prioridad=prioridad,
            estado=estado,
            fecha_solicitud=fecha,
            conductor="M. Soto",
            repuestos=[
                OrdenRepuesto(posicion=pos, nombre=nombre, cantidad=cantidad, costo=_dec(costo))
                for pos, (nombre, cantidad, costo) in enumerate(repuestos, start=1)
            ],
        )
        orden.total_costo = _dec(calcular_total(orden.repuestos))
        registros.append(orden)

    session.add_all(registros)
    session.flush()
    print(f"  [OK] OrdenTrabajo — {len(registros)} registros insertados.")
    return registros


def seed_presupuestos(session, ordenes: list[OrdenTrabajo]) -> None:
    if session.query(Presupuesto).count() > 0:
        print("  [SKIP] Presupuesto — table already has data.")
        return

    estados = ["Pendiente", "Aprobado", "Parcial"]
    registros = []
    for orden, estado in zip(ordenes, estados):
        registros.append(
            Presupuesto(
                orden_id=orden.id,
                monto=orden.total_costo,
                estado=estado,
                observacion="" if estado == "Pendiente" else f"Presupuesto {estado.lower()} por jefatura.",
                orden_snapshot={
                    "id": orden.id,
                    "titulo": orden.titulo,
                    "patente": orden.patente,
                    "mecanico": orden.mecanico,
                    "proveedor_id": orden.proveedor_id,
                    "prioridad": orden.prioridad,
                    "estado": orden.estado,
                    "total_costo": float(orden.total_costo),
                    "fecha_solicitud": orden.fecha_solicitud.isoformat(),
                },
            )
        )
    session.add_all(registros)
    print(f"  [OK] Presupuesto — {len(registros)} registros insertados.")


def seed_gastos(session, proveedores: list[Proveedor]) -> None:
    if session.query(Gasto).count() > 0:
        print("  [SKIP] Gasto — table already has data.")
        return

    datos = [
        ("CD-5678", "Cambio de aceite y filtros", 54000, _d(2, 4), 1),
        ("EF-9012", "Neumáticos delanteros", 124000, _d(2, 21), 2),
        ("AB-1234", "Lavado y aspirado", 15000, _d(3, 2), None),
        ("EF-9012", "Neumáticos traseros", 124000, _d(3, 9), 2),
    ]
    registros = [
        Gasto(
            patente=patente,
            concepto=concepto,
            costo=_dec(costo),
            fecha=fecha,
            proveedor_id=proveedores[idx].id if idx is not None else None,
        )
        for patente, concepto, costo, fecha, idx in datos
    ]
    session.add_all(registros)
    print(f"  [OK] Gasto — {len(registros)} registros insertados.")


def seed_presupuesto_anual(session) -> None:
    if session.get(PresupuestoAnual, 1) is not None:
        print("  [SKIP] PresupuestoAnual — already configured.")
        return
    session.add(PresupuestoAnual(id=1, monto=_dec(5_000_000)))
    print("  [OK] PresupuestoAnual — tope anual 5.000.000.")


def seed_documentos(session) -> None:
    if session.query(DocumentoVehiculo).count() > 0:
        print("  [SKIP] DocumentoVehiculo — table already has data.")
        return

    registros = [
        DocumentoVehiculo(patente="AB-1234", tipo="Revisión técnica", responsable="M. Soto",
                          vence=HOY + timedelta(days=12)),
        DocumentoVehiculo(patente="AB-1234", tipo="SOAP", responsable="M. Soto",
                          vence=HOY - timedelta(days=5)),
        DocumentoVehiculo(patente="CD-5678", tipo="Permiso de circulación", responsable="R. Díaz",
                          vence=HOY + timedelta(days=120)),
        DocumentoVehiculo(patente="EF-9012", tipo="Seguro", responsable=None, vence=None),
    ]
    session.add_all(registros)
    print(f"  [OK] DocumentoVehiculo — {len(registros)} registros insertados.")


def seed_mantenciones(session) -> None:
    if session.query(ProgramaMantencion).count() > 0:
        print("  [SKIP] ProgramaMantencion — table already has data.")
        return

    registros = [
        ProgramaMantencion(patente="AB-1234", tarea="Cambio de aceite", tipo_control="km",
                           proximo_km=150_000, km_actual=150_320),
        ProgramaMantencion(patente="CD-5678", tarea="Cambio de correa de distribución",
                           tipo_control="km", proximo_km=90_000, km_actual=89_400),
        ProgramaMantencion(patente="EF-9012", tarea="Mantención 20.000 km", tipo_control="fecha",
                           proxima_fecha=HOY + timedelta(days=45)),
    ]
    session.add_all(registros)
    print(f"  [OK] ProgramaMantencion — {len(registros)} registros insertados.")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main() -> None:
    """Run the complete seed process within a single database transaction."""
    print("=" * 60)
    print("  Dashboard Flota — Seed Data Script")
    print(f"  Año: {ANIO}")
    print("=" * 60)

    session = SessionLocal()
    try:
        print("\n[1/6] Proveedores...")
        proveedores = seed_proveedores(session)

        print("\n[2/6] Órdenes de trabajo + repuestos...")
        ordenes = seed_ordenes(session, proveedores)

        print("\n[3/6] Presupuestos...")
        seed_presupuestos(session, ordenes)

        print("\n[4/6] Gastos + presupuesto anual...")
        seed_gastos(session, proveedores)
        seed_presupuesto_anual(session)

        print("\n[5/6] Documentos de vehículos...")
        seed_documentos(session)

        print("\n[6/6] Programas de mantención...")
        seed_mantenciones(session)

        session.commit()
        print("\n" + "=" * 60)
        print("  Seed completado exitosamente.")
        print("=" * 60)

    except Exception as exc:
        session.rollback()
        print("\n[ERROR] Seed fallido — se hizo rollback.")
        print(f"  Detalle: {exc}")
        raise
    finally:
        session.close()


if __name__ == "__main__":
    main()
