import pytest

from flight_emissions.errors import ValidationError
from flight_emissions.past.adapter import build_past_request
from flight_emissions.types import CabinClass, PastItineraryQuery, wire_cabin_class


def _query(**overrides):
    data = {
        "flight_type": "One way",
        "origin": "OSL",
        "destination": "CPH",
        "cabin_class": "Economy",
        "travelers": 2,
        "include_radiative_forcing": True,
        "departure_date": "2025-01-01",
    }
    data.update(overrides)
    return PastItineraryQuery(**data)


def test_builds_expected_wire_body():
    body = build_past_request(_query())
    assert body == {
        "class": "economy",
        "departureDate": "2025-01-01",
        "ir_factor": True,
        "return": False,
        "route": ["OSL", "CPH"],
        "travelers": 2,
    }


def test_return_flag_follows_flight_type():
    assert build_past_request(_query(flight_type="Return"))["return"] is True
    assert build_past_request(_query(flight_type="One way"))["return"] is False


def test_via_is_inserted_between_origin_and_destination():
    body = build_past_request(_query(via="FRA"))
    assert body["route"] == ["OSL", "FRA", "CPH"]

    body = build_past_request(_query(via=""))
    assert body["route"] == ["OSL", "CPH"]


def test_route_codes_are_upper_cased_like_future_codes():
    body = build_past_request(_query(origin="osl", via="fra", destination="cph"))
    assert body["route"] == ["OSL", "FRA", "CPH"]


@pytest.mark.parametrize("label,wire", [
    ("Premium Economy", "premium_economy"),
    ("Economy", "economy"),
    ("Business", "business"),
    ("First", "first"),
])
def test_cabin_class_mapping(label, wire):
    assert wire_cabin_class(label) == wire
    # idempotent
    assert wire_cabin_class(wire_cabin_class(label)) == wire
    assert build_past_request(_query(cabin_class=label))["class"] == wire


def test_unknown_cabin_class_is_rejected():
    with pytest.raises(ValidationError):
        wire_cabin_class("Cargo")
    assert CabinClass.PREMIUM_ECONOMY.label == "Premium Economy"


def test_missing_airports_fail_before_submission():
    with pytest.raises(ValidationError, match="Origin and destination airports are required"):
        build_past_request(_query(destination=""))
    with pytest.raises(ValidationError, match="Origin and destination airports are required"):
        build_past_request(_query(origin=""))


def test_same_origin_and_destination_rejected():
    with pytest.raises(ValidationError):
        build_past_request(_query(destination="OSL"))


def test_departure_date_required_and_well_formed():
    with pytest.raises(ValidationError, match="Departure date is required"):
        build_past_request(_query(departure_date=""))
    with pytest.raises(ValidationError):
        build_past_request(_query(departure_date="01/01/2025"))
    with pytest.raises(ValidationError):
        build_past_request(_query(departure_date="2025-02-30"))


def test_travelers_below_one_rejected():
    with pytest.raises(ValidationError, match="at least 1"):
        build_past_request(_query(travelers=0))


def test_past_dates_are_allowed():
    body = build_past_request(_query(departure_date="2019-06-30"))
    assert body["departureDate"] == "2019-06-30"
