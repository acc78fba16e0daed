from unittest.mock import AsyncMock, Mock

from fastapi.testclient import TestClient

from flight_emissions.errors import ConfigurationError, UpstreamError
from flight_emissions.future.transform import normalize_future
from flight_emissions.past.transform import normalize_past
from flight_emissions.service import EmissionsService
from main import app, get_service

PAST_RESPONSE = {"total_emissions": 200, "per_passenger": 100, "total_distance": 500, "without_ir": 100,
                 "route_details": []}


def _client(service):
    app.dependency_overrides[get_service] = lambda: service
    return TestClient(app)


def teardown_function(_):
    app.dependency_overrides.clear()


def test_past_endpoint_returns_tagged_result_and_summary():
    service = Mock(spec=EmissionsService)
    service.estimate_past = AsyncMock(side_effect=lambda q: normalize_past(PAST_RESPONSE, q))
    client = _client(service)

    resp = client.post("/emissions/past", json={
        "origin": "OSL", "destination": "CPH", "travelers": "2", "departureDate": "2025-01-01",
    })
    assert resp.status_code == 200
    data = resp.json()
    assert data["result"]["kind"] == "past"
    assert data["result"]["total_emissions_kg"] == 200
    assert "200.00 kg CO₂e" in data["summary"]
    query = service.estimate_past.call_args.args[0]
    assert query.travelers == 2


def test_future_endpoint_returns_future_kind():
    entry = {"flight": {"origin": "OSL", "destination": "CPH", "operatingCarrierCode": "SK", "flightNumber": 123,
                        "departureDate": {"year": 2030, "month": 1, "day": 2}},
             "emissionsGramsPerPax": {"economy": 50000}}
    service = Mock(spec=EmissionsService)
    service.estimate_future = AsyncMock(side_effect=lambda q: normalize_future(entry, q))
    client = _client(service)

    resp = client.post("/emissions/future", json={"origin": "OSL", "destination": "CPH", "travelers": 2})
    assert resp.status_code == 200
    data = resp.json()
    assert data["result"]["kind"] == "future"
    assert "100.00 kg CO₂e per passenger" in data["summary"]


def test_error_types_map_to_status_codes():
    service = Mock(spec=EmissionsService)
    service.estimate_future = AsyncMock(side_effect=ConfigurationError())
    service.estimate_past = AsyncMock(side_effect=UpstreamError("Unknown airport XXX"))
    client = _client(service)

    resp = client.post("/emissions/future", json={})
    assert resp.status_code == 503
    assert "error" in resp.json()

    resp = client.post("/emissions/past", json={"origin": "OSL"})
    assert resp.status_code == 502
    assert resp.json() == {"error": "Unknown airport XXX"}


def test_bad_form_field_is_400():
    client = _client(Mock(spec=EmissionsService))
    resp = client.post("/emissions/past", json={"cabinClass": "Cargo"})
    assert resp.status_code == 400
    assert "Unknown cabin class" in resp.json()["error"]


def test_options_and_health():
    client = TestClient(app)
    assert client.get("/health").json()["status"] == "healthy"
    opts = client.get("/options").json()
    assert opts["cabin_classes"][1] == "Premium Economy"


def test_past_endpoint_accepts_documented_example_payload():
    service = Mock(spec=EmissionsService)
    service.estimate_past = AsyncMock(side_effect=lambda q: normalize_past(PAST_RESPONSE, q))
    client = _client(service)

    resp = client.post("/emissions/past", json={
        "origin": "OSL", "destination": "CPH", "flightType": "One way", "cabinClass": "Economy",
        "travelers": 2, "radiativeForcing": True, "departureDate": "2025-01-01",
    })
    assert resp.status_code == 200
    summary = resp.json()["summary"]
    assert "Total Emissions: 200.00 kg CO₂e" in summary
    assert "Per Passenger: 100.00 kg CO₂e" in summary
    assert "Without Radiative Forcing: 100.00 kg CO₂e" in summary
    query = service.estimate_past.call_args.args[0]
    assert query.include_radiative_forcing is True
    assert query.travelers == 2


def test_non_object_body_uses_error_shape():
    client = _client(Mock(spec=EmissionsService))
    resp = client.post("/emissions/future", json=["OSL", "CPH"])
    assert resp.status_code == 400
    assert resp.json() == {"error": "Request body must be a JSON object"}

    resp = client.post("/emissions/past", content="not json", headers={"content-type": "application/json"})
    assert resp.status_code == 400
    assert "error" in resp.json()
