from datetime import date
from typing import Any, Dict, Optional
import re

from flight_emissions.config import settings
from flight_emissions.errors import ValidationError
from flight_emissions.types import FutureItineraryQuery
from flight_emissions.utils.dates import current_date, parse_iso_date, to_date_parts

FLIGHT_NUMBER_PATTERN = re.compile(r"^\d+$")


def parse_flight_number(text: str) -> int:
    value = (text or "").strip()
    if not value:
        raise ValidationError("Flight number is required")
    if not FLIGHT_NUMBER_PATTERN.match(value) or int(value) < 1:
        raise ValidationError("Flight number must be a positive number")
    return int(value)


def build_future_request(query: FutureItineraryQuery, today: Optional[date] = None) -> Dict[str, Any]:
    """
    Map a future-flight query to the computeFlightEmissions wire body.
    ``today`` defaults to the current date in the configured timezone.
    """
    if not query.origin or not query.destination:
        raise ValidationError("Origin and destination airports are required")
    if query.origin.upper() == query.destination.upper():
        raise ValidationError("Origin and destination cannot be the same")
    if not (query.operating_carrier_code or "").strip():
        raise ValidationError("Airline code is required")
    flight_number = parse_flight_number(query.flight_number)
    if not query.departure_date:
        raise ValidationError("Departure date is required")

    departure = parse_iso_date(query.departure_date)
    if departure is None:
        raise ValidationError("Departure date must be in YYYY-MM-DD format")
    if today is None:
        today = current_date(settings.TZ)
    if departure < today:
        raise ValidationError("Departure date must be in the future")

    return {
        "flights": [
            {
                "origin": query.origin.upper(),
                "destination": query.destination.upper(),
                "operatingCarrierCode": query.operating_carrier_code.strip().upper(),
                "flightNumber": flight_number,
                "departureDate": to_date_parts(departure).model_dump(),
            }
        ]
    }
