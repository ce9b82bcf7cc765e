import pytest

from app.utils.constants import EstadoOrden, EstadoPresupuesto, Prioridad
from app.utils.errors import InvalidPriorityError, InvalidStateError
from app.utils.normalizacion import normalizar_estado, normalizar_prioridad, parse_prioridad


@pytest.mark.parametrize(
    "valor, esperado",
    [
        ("pendiente", EstadoOrden.PENDIENTE),
        (" EN_PROGRESO ", EstadoOrden.EN_PROGRESO),
        ("en progreso", EstadoOrden.EN_PROGRESO),
        ("Finalizado", EstadoOrden.FINALIZADA),
        ("rechazado", EstadoOrden.RECHAZADA),
        (EstadoOrden.FINALIZADA, EstadoOrden.FINALIZADA),
    ],
)
def test_estado_orden_sinonimos(valor, esperado):
    assert normalizar_estado(valor, "orden") is esperado


def test_estado_presupuesto_canonico():
    assert normalizar_estado("aprobado", "presupuesto") is EstadoPresupuesto.APROBADO
    assert normalizar_estado("PARCIAL", "presupuesto") is EstadoPresupuesto.PARCIAL


@pytest.mark.parametrize("valor", ["inexistente", "", None, "aprobado"])
def test_estado_orden_desconocido_falla(valor):
    with pytest.raises(InvalidStateError):
        normalizar_estado(valor, "orden")


def test_estado_presupuesto_no_acepta_estados_de_orden():
    with pytest.raises(InvalidStateError):
        normalizar_estado("en progreso", "presupuesto")


def test_dominio_desconocido():
    with pytest.raises(ValueError):
        normalizar_estado("pendiente", "gasto")


def test_prioridad_estricta():
    assert parse_prioridad(" ALTA ") is Prioridad.ALTA
    with pytest.raises(InvalidPriorityError):
        parse_prioridad("urgente")


@pytest.mark.parametrize("valor", [None, "", "urgente", 3])
def test_prioridad_por_defecto_media(valor):
    assert normalizar_prioridad(valor) is Prioridad.MEDIA


def test_normalizacion_idempotente():
    canonico = normalizar_estado("en_progreso", "orden")
    assert normalizar_estado(canonico.value, "orden") is canonico
