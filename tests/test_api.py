import json

import pytest
from sqlalchemy.exc import OperationalError

from app.config import get_settings

settings = get_settings()


@pytest.fixture()
def orden_id(client, proveedor):
    response = client.post(
        "/api/ots/",
        json={
            "titulo": "Cambio de frenos",
            "patente": "AB-1234",
            "mecanico": "J. Perez",
            "proveedor_id": proveedor.id,
            "prioridad": "alta",
            "repuestos": [{"nombre": "Pastillas", "cantidad": 4, "costo": 15000}],
        },
    )
    assert response.status_code == 201
    return response.json()["id"]


def test_health(client):
    assert client.get("/api/health").json()["status"] == "ok"


def test_crear_y_obtener_orden(client, orden_id):
    body = client.get(f"/api/ots/{orden_id}").json()
    assert body["total_costo"] == 60000
    assert body["estado"] == "Pendiente"
    assert body["proveedor_nombre"] == "Frenos del Sur"


def test_crear_orden_faltantes(client):
    response = client.post("/api/ots/", json={"titulo": "Sin datos"})
    assert response.status_code == 422
    assert response.json()["codigo"] == "MISSING_FIELD"


def test_actualizar_estado_invalido(client, orden_id):
    response = client.put(f"/api/ots/{orden_id}", json={"estado": "inexistente"})
    assert response.status_code == 422
    assert response.json()["codigo"] == "INVALID_STATE"
    assert client.get(f"/api/ots/{orden_id}").json()["estado"] == "Pendiente"


def test_orden_inexistente(client):
    response = client.get("/api/ots/999")
    assert response.status_code == 404
    assert response.json()["codigo"] == "NOT_FOUND"


def test_export_orden(client, orden_id):
    response = client.get(f"/api/ots/{orden_id}/export")
    assert response.status_code == 200
    assert response.headers["content-disposition"] == (
        f"attachment; filename=ot-AB-1234-{orden_id}.json"
    )
    assert json.loads(response.content)["total_costo"] == 60000


def test_flujo_presupuesto(client, orden_id):
    response = client.post(f"/api/ots/{orden_id}/budget")
    assert response.status_code == 201
    presupuesto = response.json()
    assert presupuesto["monto"] == 60000
    assert presupuesto["estado"] == "Pendiente"

    response = client.put(f"/api/budgets/{presupuesto['id']}", json={"estado": "aprobado"})
    assert response.json()["estado"] == "Aprobado"

    pendientes = client.get("/api/budgets/", params={"estado": "Pendiente"}).json()
    assert pendientes == []

    response = client.put(f"/api/budgets/{presupuesto['id']}", json={})
    assert response.status_code == 400
    assert response.json()["codigo"] == "NO_CHANGES"


def test_eliminar_orden_conserva_presupuesto(client, orden_id):
    presupuesto_id = client.post(f"/api/ots/{orden_id}/budget").json()["id"]

    assert client.delete(f"/api/ots/{orden_id}").status_code == 204
    assert client.get(f"/api/ots/{orden_id}").status_code == 404

    body = client.get(f"/api/budgets/{presupuesto_id}").json()
    assert body["orden_vigente"] is False
    assert body["orden"]["patente"] == "AB-1234"


def test_gastos_y_presupuesto_anual(client):
    response = client.put("/api/expenses/budget", json={"presupuesto_anual": 1_000_000})
    assert response.status_code == 200

    response = client.post(
        "/api/expenses/",
        data={"patente": "AB-1234", "concepto": "Neumáticos", "costo": "250000", "fecha": "2026-03-04"},
        files={"boleta": ("boleta marzo.pdf", b"%PDF-1.4 fake", "application/pdf")},
    )
    assert response.status_code == 201
    boleta_path = response.json()["boleta_path"]
    assert boleta_path.startswith("boletas/AB-1234/2026-03/20260304-")
    assert boleta_path.endswith(".pdf")
    assert (settings.UPLOADS_DIR / boleta_path).read_bytes() == b"%PDF-1.4 fake"

    snapshot = client.get("/api/expenses/budget").json()
    assert snapshot == {"presupuesto_anual": 1_000_000, "gastado": 250_000, "disponible": 750_000}


def test_gastos_filtrados(client):
    for fecha, costo in [("2026-01-10", "100"), ("2026-02-05", "200")]:
        client.post(
            "/api/expenses/",
            data={"patente": "AB-1234", "concepto": "Aceite", "costo": costo, "fecha": fecha},
        )

    body = client.get("/api/expenses/", params={"tipo": "mes", "valor": "2026-02"}).json()
    assert [g["fecha"] for g in body["gastos"]] == ["2026-02-05"]
    assert body["total"] == 300
    assert body["total_filtrado"] == 200
    assert body["presupuesto"]["disponible"] == -300

    response = client.get("/api/expenses/", params={"tipo": "trimestre", "valor": "1"})
    assert response.status_code == 422


def test_gasto_faltante_no_guarda_boleta(client):
    response = client.post(
        "/api/expenses/",
        data={"patente": "AB-1234"},
        files={"boleta": ("boleta.pdf", b"x", "application/pdf")},
    )
    assert response.status_code == 422
    assert response.json()["codigo"] == "MISSING_FIELD"


def test_presupuesto_anual_invalido(client):
    response = client.put("/api/expenses/budget", json={"presupuesto_anual": 0})
    assert response.status_code == 422
    assert response.json()["codigo"] == "INVALID_AMOUNT"


def test_notificaciones(client, orden_id):
    notificaciones = client.get("/api/notifications/").json()
    assert len(notificaciones) == 1
    assert notificaciones[0]["leida"] is False

    leida = client.post(f"/api/notifications/{notificaciones[0]['id']}/read").json()
    assert leida["leida"] is True

    client.put(f"/api/ots/{orden_id}", json={"estado": "en progreso"})
    todas = client.post("/api/notifications/read-all").json()
    assert len(todas) == 2
    assert all(n["leida"] for n in todas)

    assert client.post("/api/notifications/999/read").status_code == 404


def test_proveedores(client):
    response = client.post("/api/providers/", json={"rut": "76999888-1", "razon_social": "Lubricentro Norte"})
    assert response.status_code == 201

    duplicado = client.post("/api/providers/", json={"rut": "76999888-1", "razon_social": "Otro"})
    assert duplicado.status_code == 409

    nombres = [p["razon_social"] for p in client.get("/api/providers/").json()]
    assert nombres == ["Lubricentro Norte"]


def test_dashboard(client, orden_id):
    body = client.get("/api/reports/dashboard").json()
    assert body["ot"]["total"] == 1
    assert body["ot"]["por_estado"]["Pendiente"] == 1
    assert body["presupuestos"]["total"] == 0
    assert body["gastos"]["presupuesto"]["presupuesto_anual"] == 0


def test_storage_no_disponible(client, db, monkeypatch):
    def _boom():
        raise OperationalError("COMMIT", {}, Exception("database is locked"))

    monkeypatch.setattr(db, "commit", _boom)
    response = client.put("/api/expenses/budget", json={"presupuesto_anual": 500})
    assert response.status_code == 503
    assert response.json()["codigo"] == "STORAGE_UNAVAILABLE"
