from typing import Any, Dict, List

from flight_emissions.errors import ValidationError
from flight_emissions.types import FlightType, PastItineraryQuery, wire_cabin_class
from flight_emissions.utils.dates import parse_iso_date


def build_route(query: PastItineraryQuery) -> List[str]:
    """Ordered non-empty airport codes among origin, via, destination."""
    return [c.upper() for c in (query.origin, query.via, query.destination) if c]


def validate_past_request(request: Dict[str, Any]) -> None:
    route = request.get("route") or []
    if len(route) < 2:
        raise ValidationError("Origin and destination airports are required")
    if route[0] == route[-1]:
        raise ValidationError("Origin and destination cannot be the same")
    if not request.get("departureDate"):
        raise ValidationError("Departure date is required")
    if parse_iso_date(request["departureDate"]) is None:
        raise ValidationError("Departure date must be in YYYY-MM-DD format")
    travelers = request.get("travelers")
    if not travelers or travelers < 1:
        raise ValidationError("Number of travelers must be at least 1")


def build_past_request(query: PastItineraryQuery) -> Dict[str, Any]:
    """
    Map a past-flight query to the calculate-emissions wire body.
    Raises ValidationError before anything is sent.
    """
    if not query.origin or not query.destination:
        raise ValidationError("Origin and destination airports are required")
    request = {
        "class": wire_cabin_class(query.cabin_class),
        "departureDate": query.departure_date,
        "ir_factor": bool(query.include_radiative_forcing),
        "return": query.flight_type == FlightType.RETURN,
        "route": build_route(query),
        "travelers": query.travelers,
    }
    validate_past_request(request)
    return request
