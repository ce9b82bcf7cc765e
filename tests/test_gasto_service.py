import datetime

import pytest

from app.models.gasto import Gasto
from app.schemas.gasto import GastoCreate
from app.services import gasto_service
from app.utils.errors import InvalidAmountError, MissingFieldError


@pytest.mark.parametrize(
    "fecha, esperado",
    [
        (datetime.date(2021, 1, 3), "2020-W53"),
        (datetime.date(2024, 12, 30), "2025-W01"),
        (datetime.date(2026, 3, 4), "2026-W10"),
        ("2021-01-04", "2021-W01"),
        (None, None),
        ("no es fecha", None),
    ],
)
def test_iso_week_label(fecha, esperado):
    assert gasto_service.iso_week_label(fecha) == esperado


def _gasto(fecha):
    return Gasto(patente="AB-1234", concepto="x", costo=1, fecha=fecha)


def test_filtro_mes_anio_semana():
    enero = _gasto(datetime.date(2021, 1, 3))
    marzo = _gasto(datetime.date(2021, 3, 15))

    por_mes = gasto_service.build_periodo_predicate("mes", "2021-03")
    por_anio = gasto_service.build_periodo_predicate("anio", "2021")
    por_semana = gasto_service.build_periodo_predicate("semana", "2020-W53")

    assert [por_mes(g) for g in (enero, marzo)] == [False, True]
    assert [por_anio(g) for g in (enero, marzo)] == [True, True]
    assert [por_semana(g) for g in (enero, marzo)] == [True, False]


def test_filtro_todos_o_sin_valor():
    gasto = _gasto(datetime.date(2021, 1, 3))
    assert gasto_service.build_periodo_predicate("todos", "2099")(gasto)
    assert gasto_service.build_periodo_predicate("mes", None)(gasto)


def test_filtro_desconocido():
    with pytest.raises(ValueError):
        gasto_service.build_periodo_predicate("trimestre", "2021-Q1")


def test_record_gasto(db, proveedor):
    gasto = gasto_service.record_gasto(
        db,
        GastoCreate(patente="ab-1234", concepto="Neumáticos", costo=250000, proveedor_id=proveedor.id),
        boleta_path="boletas/2026/03/AB-1234/x_boleta.pdf",
    )
    assert gasto.patente == "AB-1234"
    assert gasto.fecha == datetime.date.today()
    assert gasto.boleta_path.endswith("x_boleta.pdf")
    assert gasto_service.build_response(db, gasto).proveedor_nombre == "Frenos del Sur"


def test_record_gasto_faltantes(db):
    with pytest.raises(MissingFieldError) as exc_info:
        gasto_service.record_gasto(db, GastoCreate(patente="AB-1234"))
    assert exc_info.value.campos == ["concepto", "costo"]


@pytest.mark.parametrize("costo", [-10, float("inf")])
def test_record_gasto_costo_invalido(db, costo):
    with pytest.raises(InvalidAmountError):
        gasto_service.record_gasto(db, GastoCreate(patente="AB-1234", concepto="x", costo=costo))
    assert db.query(Gasto).count() == 0


def test_list_gastos_filtered(db):
    for fecha, costo in [("2026-01-10", 100), ("2026-02-05", 200), ("2026-02-20", 300)]:
        gasto_service.record_gasto(
            db,
            GastoCreate(
                patente="AB-1234",
                concepto="Aceite",
                costo=costo,
                fecha=datetime.date.fromisoformat(fecha),
            ),
        )

    febrero = gasto_service.list_gastos_filtered(
        db, gasto_service.build_periodo_predicate("mes", "2026-02")
    )
    assert [g.fecha.isoformat() for g in febrero] == ["2026-02-20", "2026-02-05"]
    assert gasto_service.total_costo(febrero) == 500
    assert gasto_service.total_costo(gasto_service.list_gastos(db)) == 600
