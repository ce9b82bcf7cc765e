from datetime import date

from app.services.file_storage import carpeta_boleta, guardar_boleta


def test_carpeta_por_patente_y_mes_del_gasto():
    assert carpeta_boleta(" ab-1234 ", date(2025, 12, 31)).as_posix() == "boletas/AB-1234/2025-12"
    assert carpeta_boleta("../..", date(2026, 1, 2)).as_posix() == "boletas/SIN-PATENTE/2026-01"


def test_guardar_boleta_usa_fecha_del_gasto(tmp_path):
    relativa = guardar_boleta(b"contenido", "Boleta Marzo.PDF", tmp_path, "AB-1234", date(2024, 3, 15))

    assert relativa.startswith("boletas/AB-1234/2024-03/20240315-")
    assert relativa.endswith(".pdf")
    assert (tmp_path / relativa).read_bytes() == b"contenido"


def test_guardar_boleta_descarta_extension_sospechosa(tmp_path):
    relativa = guardar_boleta(b"x", "boleta.pdf; rm -rf", tmp_path, "AB-1234", date(2024, 3, 15))
    assert "." not in relativa.rsplit("/", 1)[-1]
