import pytest

from app.schemas.orden import OrdenCreate, OrdenUpdate
from app.schemas.presupuesto import PresupuestoUpdate
from app.services import orden_service, presupuesto_service
from app.utils.errors import (
    InvalidAmountError,
    InvalidStateError,
    NoChangesError,
    NotFoundError,
)


@pytest.fixture()
def orden(db, proveedor):
    return orden_service.create_orden(
        db,
        OrdenCreate(
            titulo="Cambio de frenos",
            patente="AB-1234",
            mecanico="J. Perez",
            proveedor_id=proveedor.id,
            repuestos=[{"nombre": "Pastillas", "cantidad": 4, "costo": 15000}],
        ),
    )


def test_generate_presupuesto_desde_total(db, orden):
    presupuesto = presupuesto_service.generate_presupuesto(db, orden.id)

    assert float(presupuesto.monto) == 60000
    assert presupuesto.estado == "Pendiente"
    assert presupuesto.observacion == ""
    assert presupuesto.orden_snapshot["patente"] == "AB-1234"


def test_generate_presupuesto_orden_inexistente(db):
    with pytest.raises(NotFoundError):
        presupuesto_service.generate_presupuesto(db, 999)


def test_generate_dos_veces_crea_dos(db, orden):
    a = presupuesto_service.generate_presupuesto(db, orden.id)
    b = presupuesto_service.generate_presupuesto(db, orden.id)
    assert a.id != b.id
    assert len(presupuesto_service.list_presupuestos(db)) == 2


def test_monto_no_sigue_a_la_orden(db, orden):
    presupuesto = presupuesto_service.generate_presupuesto(db, orden.id)
    orden_service.update_orden(
        db, orden.id, OrdenUpdate(repuestos=[{"nombre": "Disco", "cantidad": 2, "costo": 50000}])
    )
    db.refresh(presupuesto)
    assert float(presupuesto.monto) == 60000


def test_update_estado_normalizado(db, orden):
    presupuesto = presupuesto_service.generate_presupuesto(db, orden.id)
    actualizado = presupuesto_service.update_presupuesto(
        db, presupuesto.id, PresupuestoUpdate(estado="aprobado")
    )
    assert actualizado.estado == "Aprobado"


def test_update_observacion_se_trunca(db, orden):
    presupuesto = presupuesto_service.generate_presupuesto(db, orden.id)
    actualizado = presupuesto_service.update_presupuesto(
        db, presupuesto.id, PresupuestoUpdate(observacion="x" * 450)
    )
    assert len(actualizado.observacion) == 400


def test_update_monto(db, orden):
    presupuesto = presupuesto_service.generate_presupuesto(db, orden.id)
    actualizado = presupuesto_service.update_presupuesto(
        db, presupuesto.id, PresupuestoUpdate(monto=55000)
    )
    assert float(actualizado.monto) == 55000


@pytest.mark.parametrize("monto", [-1, float("inf"), float("nan"), None])
def test_update_monto_invalido(db, orden, monto):
    presupuesto = presupuesto_service.generate_presupuesto(db, orden.id)
    with pytest.raises(InvalidAmountError):
        presupuesto_service.update_presupuesto(
            db, presupuesto.id, PresupuestoUpdate(monto=monto)
        )


def test_update_estado_invalido_no_modifica(db, orden):
    presupuesto = presupuesto_service.generate_presupuesto(db, orden.id)
    with pytest.raises(InvalidStateError):
        presupuesto_service.update_presupuesto(
            db, presupuesto.id, PresupuestoUpdate(estado="en progreso", observacion="nota")
        )
    db.expire_all()
    guardado = presupuesto_service.get_presupuesto(db, presupuesto.id)
    assert guardado.estado == "Pendiente"
    assert guardado.observacion == ""


def test_update_sin_cambios(db, orden):
    presupuesto = presupuesto_service.generate_presupuesto(db, orden.id)
    with pytest.raises(NoChangesError):
        presupuesto_service.update_presupuesto(db, presupuesto.id, PresupuestoUpdate())


def test_update_inexistente_antes_que_validacion(db):
    with pytest.raises(NotFoundError):
        presupuesto_service.update_presupuesto(db, 999, PresupuestoUpdate())


def test_list_presupuestos_filtra_por_estado(db, orden):
    a = presupuesto_service.generate_presupuesto(db, orden.id)
    presupuesto_service.generate_presupuesto(db, orden.id)
    presupuesto_service.update_presupuesto(db, a.id, PresupuestoUpdate(estado="rechazado"))

    rechazados = presupuesto_service.list_presupuestos(db, "RECHAZADO")
    assert [p.id for p in rechazados] == [a.id]
    with pytest.raises(InvalidStateError):
        presupuesto_service.list_presupuestos(db, "finalizada")


def test_presupuesto_sobrevive_a_la_orden(db, orden):
    presupuesto = presupuesto_service.generate_presupuesto(db, orden.id)
    orden_service.delete_orden(db, orden.id)

    respuesta = presupuesto_service.build_response(
        db, presupuesto_service.get_presupuesto(db, presupuesto.id)
    )
    assert respuesta.orden_vigente is False
    assert respuesta.orden.titulo == "Cambio de frenos"
    assert respuesta.monto == 60000


def test_estado_recorre_los_cuatro_canonicos(db, orden):
    presupuesto = presupuesto_service.generate_presupuesto(db, orden.id)

    for entrada, esperado in [
        ("aprobado", "Aprobado"),
        ("PARCIAL", "Parcial"),
        (" rechazado ", "Rechazado"),
        ("pendiente", "Pendiente"),
    ]:
        presupuesto_service.update_presupuesto(
            db, presupuesto.id, PresupuestoUpdate(estado=entrada)
        )
        db.expire_all()
        assert presupuesto_service.get_presupuesto(db, presupuesto.id).estado == esperado


def test_get_presupuesto_sin_cambios_es_estable(db, orden):
    presupuesto = presupuesto_service.generate_presupuesto(db, orden.id)

    primera = presupuesto_service.build_response(
        db, presupuesto_service.get_presupuesto(db, presupuesto.id)
    ).model_dump()
    segunda = presupuesto_service.build_response(
        db, presupuesto_service.get_presupuesto(db, presupuesto.id)
    ).model_dump()
    assert primera == segunda
