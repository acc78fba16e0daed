import pytest

from flight_emissions.errors import UpstreamError
from flight_emissions.future.transform import (
    RADIATIVE_FORCING_FACTOR,
    apply_radiative_forcing,
    normalize_future,
)
from flight_emissions.types import CabinClass, FutureItineraryQuery


def _entry(grams=None):
    return {
        "flight": {
            "origin": "OSL",
            "destination": "CPH",
            "operatingCarrierCode": "SK",
            "flightNumber": 123,
            "departureDate": {"year": 2030, "month": 5, "day": 17},
        },
        "emissionsGramsPerPax": grams if grams is not None else {
            "first": 200000, "business": 150000, "premiumEconomy": 80000, "economy": 50000,
        },
    }


def _query(travelers=2, rf=True, **kw):
    return FutureItineraryQuery(origin="OSL", destination="CPH", operating_carrier_code="SK",
                                flight_number="123", departure_date="2030-05-17",
                                travelers=travelers, include_radiative_forcing=rf, **kw)


def test_apply_radiative_forcing_doubles_only_when_enabled():
    assert RADIATIVE_FORCING_FACTOR == 2
    assert apply_radiative_forcing(12.5, True) == 25.0
    assert apply_radiative_forcing(12.5, False) == 12.5


def test_documented_example_with_forcing_on():
    result = normalize_future(_entry(), _query(travelers=2, rf=True))
    economy = result.figures(CabinClass.ECONOMY)
    assert economy.per_passenger_kg == 100.0
    assert economy.total_kg == 200.0
    assert economy.per_passenger_without_radiative_forcing_kg == 50.0
    assert economy.total_without_radiative_forcing_kg == 100.0


@pytest.mark.parametrize("grams,travelers", [(50000, 2), (123457, 3), (1, 1), (98765.4, 7)])
def test_scaling_property(grams, travelers):
    on = normalize_future(_entry({"economy": grams}), _query(travelers=travelers, rf=True))
    off = normalize_future(_entry({"economy": grams}), _query(travelers=travelers, rf=False))
    e_on = on.figures(CabinClass.ECONOMY)
    e_off = off.figures(CabinClass.ECONOMY)

    assert e_on.total_kg == pytest.approx(2 * grams * travelers / 1000)
    assert e_off.total_kg == pytest.approx(grams * travelers / 1000)
    # the "without" figure shown alongside is exactly the forcing-off figure
    assert e_on.total_without_radiative_forcing_kg == e_off.total_kg
    assert e_on.per_passenger_without_radiative_forcing_kg == e_off.per_passenger_kg


def test_every_class_is_converted_and_ordered():
    result = normalize_future(_entry(), _query(travelers=1, rf=False))
    assert [f.cabin_class for f in result.classes] == [
        CabinClass.FIRST, CabinClass.BUSINESS, CabinClass.PREMIUM_ECONOMY, CabinClass.ECONOMY,
    ]
    assert result.figures(CabinClass.FIRST).per_passenger_kg == 200.0
    assert result.figures(CabinClass.PREMIUM_ECONOMY).per_passenger_kg == 80.0
    assert result.emissions_grams_per_pax.premium_economy == 80000


def test_missing_class_yields_empty_figures():
    result = normalize_future(_entry({"economy": 50000}), _query())
    first = result.figures(CabinClass.FIRST)
    assert first.per_passenger_kg is None
    assert first.total_kg is None


def test_flight_descriptor_and_echo_fields():
    result = normalize_future(_entry(), _query(notes="conference trip"))
    assert result.kind == "future"
    assert result.flight.carrier_code == "SK"
    assert result.flight.flight_number == 123
    assert result.flight.departure_date.day == 17
    assert result.notes == "conference trip"
    assert result.travelers == 2


def test_malformed_entry_is_upstream_error():
    with pytest.raises(UpstreamError):
        normalize_future({"emissionsGramsPerPax": {}}, _query())
