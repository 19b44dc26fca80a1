"""Tests for the food endpoints."""

from datetime import timedelta
from uuid import uuid4

from fastapi.testclient import TestClient

from fresco_guard.api.app import create_app
from fresco_guard.domain.expiry import local_today
from tests.conftest import TEST_TIMEZONE


def test_create_food_expiring_in_three_days(container, signed_in) -> None:
    profile, headers = signed_in
    client = TestClient(create_app(container))
    expiry = local_today(TEST_TIMEZONE) + timedelta(days=3)

    response = client.post(
        "/api/foods",
        json={
            "name": "Leche",
            "expiryDate": expiry.isoformat(),
            "category": "Lácteos",
        },
        headers=headers,
    )

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["food"]["expiry_status"] == "expiring-soon"
    assert body["food"]["days_until_expiry"] == 3
    assert body["food"]["user_id"] == str(profile.id)


def test_create_food_requires_session(container) -> None:
    client = TestClient(create_app(container))

    response = client.post("/api/foods", json={"name": "Leche"})

    assert response.status_code == 401
    assert response.json() == {"error": "No autenticado. Por favor inicia sesión"}


def test_create_food_validation_messages(container, signed_in) -> None:
    _, headers = signed_in
    client = TestClient(create_app(container))

    missing_name = client.post(
        "/api/foods", json={"expiryDate": "2025-03-01"}, headers=headers
    )
    missing_date = client.post("/api/foods", json={"name": "Pan"}, headers=headers)
    long_notes = client.post(
        "/api/foods",
        json={"name": "Pan", "expiryDate": "2025-03-01", "notes": "x" * 501},
        headers=headers,
    )
    broken_json = client.post(
        "/api/foods",
        content="{not json",
        headers={**headers, "Content-Type": "application/json"},
    )

    assert missing_name.status_code == 400
    assert missing_name.json() == {"error": "El nombre es requerido"}
    assert missing_date.json() == {"error": "La fecha de vencimiento es requerida"}
    assert long_notes.json() == {"error": "Las notas no pueden exceder 500 caracteres"}
    assert broken_json.status_code == 400
    assert broken_json.json() == {"error": "Datos inválidos en el request"}


def test_free_plan_limit_returns_403(container, signed_in, user_repository) -> None:
    profile, headers = signed_in
    user_repository.update_profile(profile.id, {"food_count": 10})
    client = TestClient(create_app(container))

    response = client.post(
        "/api/foods", json={"name": "Pan", "expiryDate": "2030-01-01"}, headers=headers
    )

    assert response.status_code == 403
    assert "límite" in response.json()["error"]


def test_list_get_update_delete_food(container, signed_in, user_repository) -> None:
    profile, headers = signed_in
    client = TestClient(create_app(container))
    today = local_today(TEST_TIMEZONE)
    created = client.post(
        "/api/foods",
        json={"name": "Yogur", "expiryDate": (today - timedelta(days=1)).isoformat()},
        headers=headers,
    ).json()["food"]
    client.post(
        "/api/foods",
        json={"name": "Arroz", "expiryDate": (today + timedelta(days=60)).isoformat()},
        headers=headers,
    )

    expired = client.get("/api/foods?filter=expired", headers=headers).json()
    fetched = client.get(f"/api/foods/{created['id']}", headers=headers)
    updated = client.put(
        f"/api/foods/{created['id']}",
        json={"expiryDate": (today + timedelta(days=2)).isoformat()},
        headers=headers,
    )
    deleted = client.delete(f"/api/foods/{created['id']}", headers=headers)
    missing = client.get(f"/api/foods/{created['id']}", headers=headers)

    assert [food["name"] for food in expired["foods"]] == ["Yogur"]
    assert fetched.json()["food"]["expiry_status"] == "expired"
    assert updated.json()["food"]["expiry_status"] == "expiring-soon"
    assert updated.json()["food"]["name"] == "Yogur"
    assert deleted.json() == {
        "success": True,
        "message": "Alimento eliminado correctamente",
    }
    assert missing.status_code == 404
    assert missing.json() == {"error": "Alimento no encontrado"}
    assert user_repository.profiles[profile.id].food_count == 1


def test_delete_unknown_food_is_404(container, signed_in) -> None:
    _, headers = signed_in
    client = TestClient(create_app(container))

    response = client.delete(f"/api/foods/{uuid4()}", headers=headers)

    assert response.status_code == 404


def test_invalid_food_id_is_400(container, signed_in) -> None:
    _, headers = signed_in
    client = TestClient(create_app(container))

    response = client.get("/api/foods/not-a-uuid", headers=headers)

    assert response.status_code == 400
    assert response.json() == {"error": "Identificador inválido"}
