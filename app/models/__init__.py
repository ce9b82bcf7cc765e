"""SQLAlchemy models package for Dashboard Flota.

Importing all models here ensures that SQLAlchemy's mapper registry is
populated before ``Base.metadata.create_all()`` or Alembic migrations run.
The import order follows the foreign-key dependency graph so that parent
tables are always registered before their children.

Usage from other modules:
    from app.models import OrdenTrabajo, Presupuesto
"""

# Reference data (no FK dependencies on other domain models)
from app.models.proveedor import Proveedor  # noqa: F401
from app.models.documento_vehiculo import DocumentoVehiculo  # noqa: F401
from app.models.programa_mantencion import ProgramaMantencion  # noqa: F401

# Work orders and their line items
from app.models.orden_trabajo import OrdenTrabajo  # noqa: F401
from app.models.orden_repuesto import OrdenRepuesto  # noqa: F401

# Budget requests (orphan-tolerant reference to OrdenTrabajo)
from app.models.presupuesto import Presupuesto  # noqa: F401

# Expense ledger and annual cap
from app.models.gasto import Gasto  # noqa: F401
from app.models.presupuesto_anual import PresupuestoAnual  # noqa: F401

# Cross-cutting concerns
from app.models.notificacion import Notificacion  # noqa: F401

__all__ = [
    "Proveedor",
    "DocumentoVehiculo",
    "ProgramaMantencion",
    "OrdenTrabajo",
    "OrdenRepuesto",
    "Presupuesto",
    "Gasto",
    "PresupuestoAnual",
    "Notificacion",
]
