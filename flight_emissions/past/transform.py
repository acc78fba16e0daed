"""Past-flight response normalisation.

The past-flights service already answers in kilograms and applies its own
radiative-forcing adjustment (``ir_factor``), so nothing is rescaled here.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError

from flight_emissions.errors import UpstreamError
from flight_emissions.types import (
    ClassEmissions,
    DateParts,
    PastEmissionsResult,
    PastItineraryQuery,
    RouteLeg,
)
from flight_emissions.past.adapter import build_route


class WireLegEmissions(BaseModel):
    economy: Optional[float] = None
    premium_economy: Optional[float] = None
    business: Optional[float] = None
    first: Optional[float] = None


class WireRouteDetail(BaseModel):
    origin: str
    destination: str
    operatingCarrierCode: Optional[str] = None
    flightNumber: Optional[int] = None
    departureDate: Optional[DateParts] = None
    travelers: Optional[int] = None
    date: Optional[str] = None
    found: bool = False
    emissions: WireLegEmissions = Field(default_factory=WireLegEmissions)


class WirePastResponse(BaseModel):
    total_emissions: float
    total_distance: float
    per_passenger: float
    without_ir: float
    route_details: List[WireRouteDetail] = Field(default_factory=list)


def to_route_leg(detail: WireRouteDetail) -> RouteLeg:
    return RouteLeg(
        origin=detail.origin,
        destination=detail.destination,
        carrier_code=detail.operatingCarrierCode,
        flight_number=detail.flightNumber,
        departure_date=detail.departureDate,
        date=detail.date,
        travelers=detail.travelers,
        found=detail.found,
        emissions=ClassEmissions(**detail.emissions.model_dump()),
    )


def normalize_past(response: Dict[str, Any], query: PastItineraryQuery) -> PastEmissionsResult:
    try:
        wire = WirePastResponse.model_validate(response)
    except PydanticValidationError as e:
        raise UpstreamError("Unexpected response from the emissions service") from e

    return PastEmissionsResult(
        total_emissions_kg=wire.total_emissions,
        per_passenger_kg=wire.per_passenger,
        total_distance_km=wire.total_distance,
        emissions_without_radiative_forcing_kg=wire.without_ir,
        legs=[to_route_leg(d) for d in wire.route_details],
        route=build_route(query),
        flight_type=query.flight_type,
        cabin_class=query.cabin_class,
        travelers=query.travelers,
        departure_date=query.departure_date,
        include_radiative_forcing=query.include_radiative_forcing,
    )


def without_radiative_forcing(result: PastEmissionsResult) -> Optional[float]:
    """The upstream "without IR" figure, surfaced only when forcing was requested.

    The value is always on the result; this decides whether it is emphasised.
    """
    if not result.include_radiative_forcing:
        return None
    return result.emissions_without_radiative_forcing_kg
