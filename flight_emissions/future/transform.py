"""Future-flight response normalisation.

The Travel Impact Model reports grams per passenger for each cabin class and
knows nothing about radiative forcing. Conversion to kilograms, the traveller
multiplication and the forcing factor are all applied here, client-side.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError

from flight_emissions.errors import UpstreamError
from flight_emissions.types import (
    CabinClass,
    ClassEmissions,
    ClassFigures,
    DateParts,
    FlightDescriptor,
    FutureEmissionsResult,
    FutureItineraryQuery,
)

RADIATIVE_FORCING_FACTOR = 2.0
GRAMS_PER_KG = 1000.0

# display order of the results card
CLASS_ORDER = (
    CabinClass.FIRST,
    CabinClass.BUSINESS,
    CabinClass.PREMIUM_ECONOMY,
    CabinClass.ECONOMY,
)


class WireFlight(BaseModel):
    origin: str
    destination: str
    operatingCarrierCode: str
    flightNumber: int
    departureDate: DateParts


class WireEmissionsPerClass(BaseModel):
    # classes the model cannot estimate are omitted upstream
    first: Optional[float] = None
    business: Optional[float] = None
    premiumEconomy: Optional[float] = None
    economy: Optional[float] = None


class WireFlightEmissions(BaseModel):
    flight: WireFlight
    emissionsGramsPerPax: WireEmissionsPerClass = Field(default_factory=WireEmissionsPerClass)


def grams_to_kg(grams: float) -> float:
    return grams / GRAMS_PER_KG


def apply_radiative_forcing(kg: float, enabled: bool) -> float:
    """Scale a future-flight figure by the fixed forcing factor when enabled."""
    return kg * RADIATIVE_FORCING_FACTOR if enabled else kg


def class_figures(cabin: CabinClass, grams_per_pax: Optional[float], travelers: int,
                  include_radiative_forcing: bool) -> ClassFigures:
    if grams_per_pax is None:
        return ClassFigures(cabin_class=cabin)
    per_pax = grams_to_kg(grams_per_pax)
    total = per_pax * travelers
    return ClassFigures(
        cabin_class=cabin,
        per_passenger_kg=apply_radiative_forcing(per_pax, include_radiative_forcing),
        total_kg=apply_radiative_forcing(total, include_radiative_forcing),
        per_passenger_without_radiative_forcing_kg=per_pax,
        total_without_radiative_forcing_kg=total,
    )


def normalize_future(entry: Dict[str, Any], query: FutureItineraryQuery) -> FutureEmissionsResult:
    try:
        wire = WireFlightEmissions.model_validate(entry)
    except PydanticValidationError as e:
        raise UpstreamError("Unexpected response from the emissions service") from e

    grams = ClassEmissions(
        first=wire.emissionsGramsPerPax.first,
        business=wire.emissionsGramsPerPax.business,
        premium_economy=wire.emissionsGramsPerPax.premiumEconomy,
        economy=wire.emissionsGramsPerPax.economy,
    )
    travelers = max(1, query.travelers)

    return FutureEmissionsResult(
        flight=FlightDescriptor(
            origin=wire.flight.origin,
            destination=wire.flight.destination,
            carrier_code=wire.flight.operatingCarrierCode,
            flight_number=wire.flight.flightNumber,
            departure_date=wire.flight.departureDate,
        ),
        emissions_grams_per_pax=grams,
        travelers=travelers,
        include_radiative_forcing=query.include_radiative_forcing,
        radiative_forcing_factor=RADIATIVE_FORCING_FACTOR,
        classes=[
            class_figures(cabin, grams.for_class(cabin), travelers, query.include_radiative_forcing)
            for cabin in CLASS_ORDER
        ],
        flight_type=query.flight_type,
        notes=query.notes,
    )
