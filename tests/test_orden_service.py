import datetime

import pytest
from sqlalchemy.exc import OperationalError

from app.models.notificacion import Notificacion
from app.models.orden_trabajo import OrdenTrabajo
from app.schemas.orden import OrdenCreate, OrdenUpdate
from app.services import orden_service
from app.utils.errors import (
    InvalidStateError,
    MissingFieldError,
    NotFoundError,
    StorageUnavailableError,
)


def _payload(proveedor_id, **extra):
    data = {
        "titulo": "Cambio de frenos",
        "patente": "ab-1234",
        "mecanico": "J. Perez",
        "proveedor_id": proveedor_id,
        "prioridad": "alta",
        "repuestos": [{"nombre": "Pastillas", "cantidad": 4, "costo": 15000}],
    }
    data.update(extra)
    return OrdenCreate(**data)


def test_create_orden_calcula_total_y_queda_pendiente(db, proveedor):
    orden = orden_service.create_orden(db, _payload(proveedor.id, estado="Finalizada"))

    assert orden.id is not None
    assert float(orden.total_costo) == 60000
    assert orden.estado == "Pendiente"
    assert orden.prioridad == "Alta"
    assert orden.patente == "AB-1234"
    assert orden.fecha_solicitud == datetime.date.today()
    assert [r.nombre for r in orden.repuestos] == ["Pastillas"]


def test_create_orden_emite_notificacion(db, proveedor):
    orden = orden_service.create_orden(db, _payload(proveedor.id))
    mensajes = [n.mensaje for n in db.query(Notificacion).all()]
    assert any(f"#{orden.id}" in m for m in mensajes)


def test_create_orden_prioridad_desconocida_es_media(db, proveedor):
    orden = orden_service.create_orden(db, _payload(proveedor.id, prioridad="urgentísima"))
    assert orden.prioridad == "Media"


def test_create_orden_sin_repuestos_total_cero(db, proveedor):
    orden = orden_service.create_orden(db, _payload(proveedor.id, repuestos=[]))
    assert float(orden.total_costo) == 0


def test_create_orden_campos_faltantes(db):
    with pytest.raises(MissingFieldError) as exc_info:
        orden_service.create_orden(db, OrdenCreate(titulo="  ", patente="AB-1234"))

    assert set(exc_info.value.campos) == {"titulo", "mecanico", "proveedor_id"}
    assert db.query(OrdenTrabajo).count() == 0


def test_update_orden_normaliza_estado(db, proveedor):
    orden = orden_service.create_orden(db, _payload(proveedor.id))
    actualizada = orden_service.update_orden(db, orden.id, OrdenUpdate(estado="en_progreso"))
    assert actualizada.estado == "En progreso"


def test_update_orden_transicion_libre(db, proveedor):
    orden = orden_service.create_orden(db, _payload(proveedor.id))
    orden_service.update_orden(db, orden.id, OrdenUpdate(estado="finalizada"))
    reabierta = orden_service.update_orden(db, orden.id, OrdenUpdate(estado="pendiente"))
    assert reabierta.estado == "Pendiente"


def test_update_orden_estado_invalido_no_modifica(db, proveedor):
    orden = orden_service.create_orden(db, _payload(proveedor.id))

    with pytest.raises(InvalidStateError):
        orden_service.update_orden(
            db, orden.id, OrdenUpdate(estado="inexistente", titulo="Otro título")
        )

    db.expire_all()
    guardada = db.get(OrdenTrabajo, orden.id)
    assert guardada.estado == "Pendiente"
    assert guardada.titulo == "Cambio de frenos"


def test_update_orden_reemplaza_repuestos(db, proveedor):
    orden = orden_service.create_orden(db, _payload(proveedor.id))
    actualizada = orden_service.update_orden(
        db,
        orden.id,
        OrdenUpdate(
            repuestos=[
                {"nombre": "Pastillas", "cantidad": 4, "costo": 15000},
                {"nombre": "Líquido de frenos", "cantidad": 1, "costo": 8000},
            ]
        ),
    )
    assert float(actualizada.total_costo) == 68000
    assert [r.posicion for r in actualizada.repuestos] == [1, 2]


def test_update_orden_no_permite_vaciar_obligatorios(db, proveedor):
    orden = orden_service.create_orden(db, _payload(proveedor.id))
    with pytest.raises(MissingFieldError):
        orden_service.update_orden(db, orden.id, OrdenUpdate(patente=" "))


def test_update_orden_inexistente(db):
    with pytest.raises(NotFoundError):
        orden_service.update_orden(db, 999, OrdenUpdate(estado="pendiente"))


def test_delete_orden(db, proveedor):
    orden = orden_service.create_orden(db, _payload(proveedor.id))
    orden_service.delete_orden(db, orden.id)

    with pytest.raises(NotFoundError):
        orden_service.get_orden(db, orden.id)
    with pytest.raises(NotFoundError):
        orden_service.delete_orden(db, orden.id)


def test_build_response_resuelve_proveedor(db, proveedor):
    orden = orden_service.create_orden(db, _payload(proveedor.id))
    respuesta = orden_service.build_response(db, orden)
    assert respuesta.proveedor_nombre == "Frenos del Sur"
    assert respuesta.repuestos[0].subtotal == 60000


def test_build_response_proveedor_desconocido(db):
    orden = orden_service.create_orden(db, _payload(4242))
    assert orden_service.build_response(db, orden).proveedor_nombre is None


def test_export_orden(db, proveedor):
    orden = orden_service.create_orden(db, _payload(proveedor.id))
    contenido = orden_service.export_orden(db, orden.id)

    assert contenido["total_costo"] == 60000
    assert contenido["fecha_solicitud"] == datetime.date.today().isoformat()
    assert orden_service.export_filename(contenido) == f"ot-AB-1234-{orden.id}.json"


def test_list_ordenes_mas_recientes_primero(db, proveedor):
    primera = orden_service.create_orden(db, _payload(proveedor.id))
    segunda = orden_service.create_orden(db, _payload(proveedor.id, titulo="Alineación"))
    assert [o.id for o in orden_service.list_ordenes(db)] == [segunda.id, primera.id]


def test_commit_fallido_es_storage_unavailable(db, proveedor, monkeypatch):
    def _boom():
        raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(db, "commit", _boom)
    with pytest.raises(StorageUnavailableError):
        orden_service.create_orden(db, _payload(proveedor.id))

    monkeypatch.undo()
    assert db.query(OrdenTrabajo).count() == 0
    assert db.query(Notificacion).count() == 0


def test_total_coincide_con_repuestos_guardados(db, proveedor):
    orden = orden_service.create_orden(
        db,
        _payload(proveedor.id, repuestos=[{"nombre": "Perno", "cantidad": 3, "costo": 0.335}]),
    )

    db.expire_all()
    guardada = db.get(OrdenTrabajo, orden.id)
    suma = round(sum(r.cantidad * float(r.costo) for r in guardada.repuestos), 2)
    assert float(guardada.repuestos[0].costo) == 0.34
    assert float(guardada.total_costo) == suma == 1.02


def test_update_total_coincide_con_repuestos_guardados(db, proveedor):
    orden = orden_service.create_orden(db, _payload(proveedor.id))
    orden_service.update_orden(
        db,
        orden.id,
        OrdenUpdate(repuestos=[
            {"nombre": "Golilla", "cantidad": 7, "costo": 12.004},
            {"nombre": "Tuerca", "cantidad": 2, "costo": 0.125},
        ]),
    )

    db.expire_all()
    guardada = db.get(OrdenTrabajo, orden.id)
    suma = round(sum(r.cantidad * float(r.costo) for r in guardada.repuestos), 2)
    assert float(guardada.total_costo) == suma == 84.26


def test_get_orden_sin_cambios_es_estable(db, proveedor):
    orden = orden_service.create_orden(db, _payload(proveedor.id))
    primera = orden_service.build_response(db, orden_service.get_orden(db, orden.id)).model_dump()
    segunda = orden_service.build_response(db, orden_service.get_orden(db, orden.id)).model_dump()
    assert primera == segunda
