import logging

import requests

from service_car.core.config import settings
from service_car.models import Car

CLIENT_BASE_URL = "http://clients.test/api/clients"


def add_car(db, **fields):
    car = Car(**{"make": "Renault", "model": "Clio", **fields})
    db.add(car)
    db.commit()
    db.refresh(car)
    return car


def test_get_car_with_client(api, db, remote):
    car = add_car(db, clientId=42)
    remote.clients[42] = {"id": 42, "name": "Alice"}

    response = api.get(f"/api/cars/{car.id}")

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == car.id
    assert body["clientId"] == 42
    assert body["client"]["id"] == 42
    assert body["client"]["name"] == "Alice"
    assert remote.calls == [f"{CLIENT_BASE_URL}/42"]


def test_get_car_without_client_makes_no_remote_call(api, db, remote):
    car = add_car(db)

    response = api.get(f"/api/cars/{car.id}")

    assert response.status_code == 200
    body = response.json()
    assert body["clientId"] is None
    assert body["client"] is None
    assert remote.calls == []


def test_get_car_with_unreachable_client_service(api, db, remote, caplog):
    car = add_car(db, clientId=99)
    remote.failures[99] = requests.ConnectionError("connection refused")

    with caplog.at_level(logging.WARNING):
        response = api.get(f"/api/cars/{car.id}")

    assert response.status_code == 200
    body = response.json()
    assert body["clientId"] == 99
    assert body["client"] is None
    assert "Client 99 unavailable" in caplog.text


def test_get_missing_car_returns_404(api, remote):
    response = api.get("/api/cars/12345")

    assert response.status_code == 404
    assert response.json() == {"detail": "Car not found"}
    assert remote.calls == []


def test_get_car_with_oversized_id_returns_404(api):
    response = api.get(f"/api/cars/{2**70}")

    assert response.status_code == 404
    assert response.json() == {"detail": "Car not found"}


def test_list_cars_one_lookup_per_car(api, db, remote):
    add_car(db, clientId=1)
    add_car(db, clientId=1, model="Megane")
    add_car(db)
    add_car(db, clientId=2, make="Peugeot", model="208")
    remote.clients[1] = {"id": 1, "name": "Alice"}
    remote.clients[2] = {"id": 2, "name": "Bob"}

    response = api.get("/api/cars")

    assert response.status_code == 200
    body = response.json()
    assert [c["client"]["name"] if c["client"] else None for c in body] == [
        "Alice", "Alice", None, "Bob",
    ]
    # Repeated client ids are not deduplicated
    assert remote.calls == [
        f"{CLIENT_BASE_URL}/1",
        f"{CLIENT_BASE_URL}/1",
        f"{CLIENT_BASE_URL}/2",
    ]


def test_list_cars_deduplicates_when_enabled(api, db, remote, monkeypatch):
    monkeypatch.setattr(settings, "DEDUPLICATE_CLIENT_LOOKUPS", True)
    add_car(db, clientId=1)
    add_car(db, clientId=1, model="Megane")
    remote.clients[1] = {"id": 1, "name": "Alice"}

    body = api.get("/api/cars").json()

    assert [c["client"]["name"] for c in body] == ["Alice", "Alice"]
    assert remote.calls == [f"{CLIENT_BASE_URL}/1"]


def test_list_cars_keeps_going_when_one_client_is_missing(api, db, remote):
    add_car(db, clientId=1)
    add_car(db, clientId=404)
    remote.clients[1] = {"id": 1, "name": "Alice"}

    body = api.get("/api/cars").json()

    assert body[0]["client"]["name"] == "Alice"
    assert body[1]["clientId"] == 404
    assert body[1]["client"] is None


def test_list_cars_empty(api):
    response = api.get("/api/cars")

    assert response.status_code == 200
    assert response.json() == []


def test_strict_mode_turns_remote_failure_into_502(api, db, remote, monkeypatch):
    monkeypatch.setattr(settings, "CLIENT_LOOKUP_FAIL_OPEN", False)
    car = add_car(db, clientId=7)
    remote.failures[7] = requests.Timeout("read timed out")

    response = api.get(f"/api/cars/{car.id}")

    assert response.status_code == 502
    assert response.json() == {"detail": "Client service unavailable for client 7"}


def test_create_then_get_round_trip(api, remote):
    payload = {
        "make": "Toyota",
        "model": "Yaris",
        "registration": "AB-123-CD",
        "year": 2019,
        "clientId": 5,
    }

    created = api.post("/api/cars", json=payload)

    assert created.status_code == 200
    stored = created.json()
    assert stored["id"] is not None
    assert stored["client"] is None
    # Create never reaches the client service
    assert remote.calls == []

    fetched = api.get(f"/api/cars/{stored['id']}").json()
    for key, value in payload.items():
        assert fetched[key] == value


def test_create_ignores_client_and_id_fields(api, db):
    payload = {
        "id": 999,
        "make": "Fiat",
        "model": "Panda",
        "client": {"id": 3, "name": "Mallory"},
    }

    stored = api.post("/api/cars", json=payload).json()

    assert stored["id"] != 999
    assert stored["client"] is None
    assert db.get(Car, stored["id"]).make == "Fiat"


def test_list_counts_every_created_car(api):
    for model in ("Clio", "Megane", "Twingo"):
        api.post("/api/cars", json={"make": "Renault", "model": model})

    assert len(api.get("/api/cars").json()) == 3


def test_create_rejects_blank_make(api):
    response = api.post("/api/cars", json={"make": "   ", "model": "Clio"})

    assert response.status_code == 422


def test_create_rejects_missing_model(api):
    response = api.post("/api/cars", json={"make": "Renault"})

    assert response.status_code == 422


def test_create_rejects_bad_year_and_client_id(api):
    assert api.post("/api/cars", json={"make": "Ford", "model": "T", "year": 1700}).status_code == 422
    assert api.post("/api/cars", json={"make": "Ford", "model": "T", "clientId": 0}).status_code == 422
    assert api.post("/api/cars", json={"make": "Ford", "model": "T", "clientId": 2**70}).status_code == 422


def test_health(api):
    response = api.get("/api/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
