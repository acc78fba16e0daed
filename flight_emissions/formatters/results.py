from typing import Optional

from flight_emissions.errors import EmissionsError
from flight_emissions.future.transform import CLASS_ORDER
from flight_emissions.past.transform import without_radiative_forcing
from flight_emissions.types import (
    EmissionsResult,
    FlightType,
    FutureEmissionsResult,
    PastEmissionsResult,
    RouteLeg,
)
from flight_emissions.utils.dates import format_date_parts, parse_iso_date

UNIT = "kg CO₂e"


def format_kg(value: Optional[float]) -> str:
    if value is None:
        return "n/a"
    return f"{value:.2f} {UNIT}"


def format_distance(km: Optional[float]) -> str:
    if km is None:
        return "n/a"
    return f"{km:.0f} km"


def _trip_suffix(flight_type: FlightType) -> str:
    return " (Return)" if flight_type == FlightType.RETURN else " (One way)"


def _leg_line(leg: RouteLeg, cabin) -> str:
    flight = f"{leg.carrier_code} {leg.flight_number}" if leg.carrier_code and leg.flight_number else "unmatched"
    basis = "scheduled flight" if leg.found else "distance estimate"
    return (f"• {leg.origin}→{leg.destination} | {flight} | "
            f"{format_kg(leg.emissions.for_class(cabin))} ({basis})")


def format_past_result(result: PastEmissionsResult) -> str:
    route = " → ".join(result.route)
    departure = parse_iso_date(result.departure_date)
    parts = [
        "Flight Emissions Results",
        f"{route}{_trip_suffix(result.flight_type)}",
        "",
        f"Total Emissions: {format_kg(result.total_emissions_kg)}",
        f"Per Passenger: {format_kg(result.per_passenger_kg)}",
        f"Total Distance: {format_distance(result.total_distance_km)}",
    ]
    without = without_radiative_forcing(result)
    if without is not None:
        parts.append(f"Without Radiative Forcing: {format_kg(without)}")

    if result.legs:
        parts += ["", "Legs:"]
        parts += [_leg_line(leg, result.cabin_class) for leg in result.legs]

    parts += [
        "",
        "Flight details:",
        f"• Class: {result.cabin_class.label}",
        f"• Departure: {departure.isoformat() if departure else result.departure_date}",
        f"• Travelers: {result.travelers}",
    ]
    return "\n".join(parts)


def format_future_result(result: FutureEmissionsResult) -> str:
    flight = result.flight
    parts = [
        "Future Flight Emissions Estimate",
        f"{flight.origin} → {flight.destination}{_trip_suffix(result.flight_type)}",
        "",
    ]
    if result.include_radiative_forcing:
        parts.append(f"Radiative forcing included (×{result.radiative_forcing_factor:g})")

    for cabin in CLASS_ORDER:
        f = result.figures(cabin)
        line = (f"• {cabin.label}: {format_kg(f.per_passenger_kg)} per passenger, "
                f"{format_kg(f.total_kg)} for {result.travelers} traveler"
                f"{'s' if result.travelers != 1 else ''}")
        if result.include_radiative_forcing:
            line += (f" (without radiative forcing: "
                     f"{format_kg(f.per_passenger_without_radiative_forcing_kg)} per passenger, "
                     f"{format_kg(f.total_without_radiative_forcing_kg)} total)")
        parts.append(line)

    parts += [
        "",
        "Flight details:",
        f"• Flight: {flight.carrier_code} {flight.flight_number}",
        f"• Departure: {format_date_parts(flight.departure_date)}",
    ]
    if result.notes:
        parts.append(f"• Notes: {result.notes}")
    return "\n".join(parts)


def format_result(result: EmissionsResult) -> str:
    """Render either result variant; dispatches on the ``kind`` tag."""
    if result.kind == "past":
        return format_past_result(result)
    if result.kind == "future":
        return format_future_result(result)
    raise ValueError(f"Unknown result kind: {result.kind}")


def format_error(exc: Exception) -> str:
    if isinstance(exc, EmissionsError):
        return exc.message
    return "Failed to calculate emissions"
