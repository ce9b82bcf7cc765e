import datetime

import pytest

from app.models.presupuesto_anual import PresupuestoAnual
from app.schemas.gasto import GastoCreate
from app.services import gasto_service, presupuesto_anual_service
from app.utils.errors import InvalidAmountError


def _registrar(db, costo):
    return gasto_service.record_gasto(
        db,
        GastoCreate(patente="AB-1234", concepto="Neumáticos", costo=costo, fecha=datetime.date(2026, 3, 4)),
    )


def test_snapshot_sin_tope(db):
    snapshot = presupuesto_anual_service.get_snapshot(db)
    assert snapshot.model_dump() == {"presupuesto_anual": 0, "gastado": 0, "disponible": 0}
    assert db.query(PresupuestoAnual).count() == 0


def test_tope_y_gasto(db):
    presupuesto_anual_service.set_presupuesto_anual(db, 1_000_000)
    _registrar(db, 250_000)

    snapshot = presupuesto_anual_service.get_snapshot(db)
    assert snapshot.presupuesto_anual == 1_000_000
    assert snapshot.gastado == 250_000
    assert snapshot.disponible == 750_000


def test_disponible_negativo(db):
    presupuesto_anual_service.set_presupuesto_anual(db, 100)
    _registrar(db, 250)
    assert presupuesto_anual_service.get_snapshot(db).disponible == -150


def test_reemplazar_tope_conserva_gastado(db):
    _registrar(db, 400)
    presupuesto_anual_service.set_presupuesto_anual(db, 1_000)
    snapshot = presupuesto_anual_service.set_presupuesto_anual(db, 2_000)

    assert snapshot.presupuesto_anual == 2_000
    assert snapshot.gastado == 400
    assert db.query(PresupuestoAnual).count() == 1


@pytest.mark.parametrize("monto", [0, -5, None, "mil", float("nan"), True])
def test_tope_invalido(db, monto):
    with pytest.raises(InvalidAmountError):
        presupuesto_anual_service.set_presupuesto_anual(db, monto)
