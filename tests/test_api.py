import pytest
from fastapi.testclient import TestClient

import api.main as main
import api.routes.safety as safety_routes
from api.services.safety_service import SafetyRoutingService


@pytest.fixture
def service(dataset_dir):
    return SafetyRoutingService(data_dir=str(dataset_dir))


@pytest.fixture
def client(service, monkeypatch):
    monkeypatch.setattr(safety_routes, "safety_service", service)
    monkeypatch.setattr(main, "safety_service", service)
    return TestClient(main.app)


ROUTE_REQUEST = {
    "origin": {"latitude": 35.8000, "longitude": 139.7200},
    "destination": {"latitude": 35.8000, "longitude": 139.7210},
    "simulated_hour": 22,
}


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["health_check"] == "/api/safety/health"


def test_health(client):
    response = client.get("/api/safety/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["datasets_loaded"] is True
    assert body["dataset_counts"]["roads"] == 2


def test_degraded_without_roads(tmp_path, monkeypatch):
    empty_service = SafetyRoutingService(data_dir=str(tmp_path))
    monkeypatch.setattr(safety_routes, "safety_service", empty_service)

    response = TestClient(main.app).get("/api/safety/health")

    assert response.json()["status"] == "degraded"


def test_calculate_routes(client):
    response = client.post("/api/safety/routes", json=ROUTE_REQUEST)

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert [r["type"] for r in body["routes"]] == ["fastest", "recommended"]

    fastest, recommended = body["routes"]
    assert fastest["coordinates"][0] == [139.72, 35.8]
    assert fastest["distance_meters"] < recommended["distance_meters"]
    assert (fastest["safety_score"], recommended["safety_score"]) == (59, 76)
    assert [139.7205, 35.8005] in recommended["coordinates"]
    assert fastest["nearby_pois"][0]["name"] == "Corner Shop"
    assert body["route_geojson"]["type"] == "FeatureCollection"


def test_request_hour_does_not_change_session_hour(client, service, clock):
    clock.hour = 2
    service.state.rescore()

    client.post("/api/safety/routes", json=ROUTE_REQUEST)
    response = client.post("/api/safety/routes", json=dict(ROUTE_REQUEST, simulated_hour=None))

    assert [r["safety_score"] for r in response.json()["routes"]] == [56, 69]
    assert service.state.simulated_hour is None


def test_scored_roads_follow_the_wall_clock(client, clock):
    client.get("/api/safety/roads", params={"simulated_hour": 22})
    clock.hour = 2

    response = client.get("/api/safety/roads")

    assert [f["properties"]["safety_score"] for f in response.json()["features"]] == [56, 69]


def test_no_route_is_reported_in_body(tmp_path, monkeypatch):
    empty_service = SafetyRoutingService(data_dir=str(tmp_path))
    monkeypatch.setattr(safety_routes, "safety_service", empty_service)

    response = TestClient(main.app).post("/api/safety/routes", json=ROUTE_REQUEST)

    assert response.status_code == 200
    assert response.json()["success"] is False
    assert response.json()["routes"] == []


def test_invalid_coordinates_rejected(client):
    bad_request = dict(ROUTE_REQUEST, origin={"latitude": 100, "longitude": 139.72})

    response = client.post("/api/safety/routes", json=bad_request)

    assert response.status_code == 422
    assert response.json()["error"] == "validation_error"
    assert response.json()["success"] is False
    assert response.json()["details"]["errors"][0]["loc"][-1] == "latitude"


def test_invalid_hour_rejected(client):
    response = client.post("/api/safety/routes", json=dict(ROUTE_REQUEST, simulated_hour=24))
    assert response.status_code == 422


def test_point_score(client):
    response = client.post("/api/safety/point-score",
                           json={"latitude": 35.8000, "longitude": 139.7210, "simulated_hour": 12})

    assert response.status_code == 200
    body = response.json()
    assert 0 <= body["total"] <= 100
    assert body["time_description"] == "daytime (bright)"
    assert body["color"].startswith("#")


def test_scored_roads(client):
    response = client.get("/api/safety/roads", params={"simulated_hour": 12})

    assert response.status_code == 200
    body = response.json()
    assert body["type"] == "FeatureCollection"
    assert len(body["features"]) == 2
    for feature in body["features"]:
        assert 50 <= feature["properties"]["safety_score"] <= 100
        assert feature["properties"]["color"].startswith("#")


def test_scored_roads_viewport(client):
    params = {"min_lon": 139.7204, "min_lat": 35.8003, "max_lon": 139.7206, "max_lat": 35.8010}

    response = client.get("/api/safety/roads", params=params)

    assert [f["properties"]["id"] for f in response.json()["features"]] == ["detour"]


def test_scored_roads_partial_viewport_rejected(client):
    response = client.get("/api/safety/roads", params={"min_lon": 139.72})
    assert response.status_code == 400


def test_set_time(client, service):
    response = client.put("/api/safety/time", json={"simulated_hour": 22})

    assert response.status_code == 200
    body = response.json()
    assert body["effective_hour"] == 22
    assert body["time_description"] == "late evening (quite dark)"
    assert body["scored_segments"] == 2
    assert service.state.simulated_hour == 22


def test_set_time_back_to_wall_clock(client, service):
    client.put("/api/safety/time", json={"simulated_hour": 3})

    response = client.put("/api/safety/time", json={"simulated_hour": None})

    assert response.status_code == 200
    assert response.json()["simulated_hour"] is None
    assert service.state.simulated_hour is None
