"""
Form state transitions for the past/future itinerary forms.

Each field change produces a new immutable query. Field values are type-checked
as they arrive; completeness (airports, dates, flight number) is only checked at
submit time by the request adapters.
"""

from typing import Any, Dict, Optional, TypeVar
import re

from pydantic import AliasChoices, ValidationError as PydanticValidationError

from flight_emissions.errors import ValidationError
from flight_emissions.types import (
    CabinClass,
    FlightType,
    FutureItineraryQuery,
    ItineraryQuery,
    PastItineraryQuery,
)

Q = TypeVar("Q", bound=ItineraryQuery)

AIRPORTS = ["OSL", "CPH", "MIA", "FRA", "SFO", "LHR", "CDG", "JFK", "ZRH", "BOS"]
AIRLINES = ["AF", "LX", "SK", "LH", "BA", "DL", "UA"]
FLIGHT_TYPES = [t.value for t in FlightType]
CABIN_CLASSES = [c.label for c in CabinClass]

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def initial_past_query() -> PastItineraryQuery:
    return PastItineraryQuery(
        flight_type=FlightType.ONE_WAY,
        cabin_class=CabinClass.ECONOMY,
        travelers=1,
        include_radiative_forcing=True,
    )


def initial_future_query() -> FutureItineraryQuery:
    return FutureItineraryQuery(
        flight_type=FlightType.ONE_WAY,
        cabin_class=CabinClass.ECONOMY,
        travelers=1,
        include_radiative_forcing=True,
    )


def _form_names(info) -> set:
    names = {info.alias} if info.alias else set()
    if isinstance(info.validation_alias, str):
        names.add(info.validation_alias)
    elif isinstance(info.validation_alias, AliasChoices):
        names.update(c for c in info.validation_alias.choices if isinstance(c, str))
    return names


def _field_name(query: ItineraryQuery, name: str) -> str:
    fields = type(query).model_fields
    if name in fields:
        return name
    # camelCase form names and the older form keys ("from", "flightClass", ...)
    for field_name, info in fields.items():
        if name in _form_names(info):
            return field_name
    raise ValidationError(f"Unknown form field: {name}")


def _first_error(e: PydanticValidationError) -> str:
    err = e.errors()[0]
    loc = ".".join(str(p) for p in err.get("loc", ()))
    msg = str(err.get("msg", "invalid value"))
    # pydantic prefixes messages raised from our validators
    msg = msg.removeprefix("Value error, ")
    return f"{loc}: {msg}" if loc else msg


def update_field(query: Q, name: str, value: Any) -> Q:
    """Return a new query with one field replaced and validated."""
    field = _field_name(query, name)
    data = query.model_dump()
    data[field] = value
    try:
        return type(query).model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(_first_error(e)) from e


def parse_int_prefix(raw: Any) -> Optional[int]:
    """Leading-integer parse of a typed value: "12", "12abc" -> 12; "abc" -> None."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw)
    m = _LEADING_INT.match(str(raw or ""))
    return int(m.group(1)) if m else None


def on_travelers_change(query: Q, raw: Any) -> Q:
    """Keystroke update: only applied when the text parses as an integer."""
    parsed = parse_int_prefix(raw)
    if parsed is None:
        return query
    return update_field(query, "travelers", parsed)


def commit_travelers(raw: Any) -> int:
    return max(1, parse_int_prefix(raw) or 1)


def on_travelers_blur(query: Q, raw: Any) -> Q:
    """Committing the field clamps it to at least one traveller."""
    return update_field(query, "travelers", commit_travelers(raw))


def _apply_form(query: Q, data: Optional[Dict[str, Any]]) -> Q:
    for name, value in (data or {}).items():
        if _field_name(query, name) == "travelers":
            query = on_travelers_blur(query, value)
        else:
            query = update_field(query, name, value)
    return query


def past_query_from_form(data: Optional[Dict[str, Any]]) -> PastItineraryQuery:
    return _apply_form(initial_past_query(), data)


def future_query_from_form(data: Optional[Dict[str, Any]]) -> FutureItineraryQuery:
    return _apply_form(initial_future_query(), data)


def form_options() -> Dict[str, Any]:
    return {
        "airports": AIRPORTS,
        "airlines": AIRLINES,
        "flight_types": FLIGHT_TYPES,
        "cabin_classes": CABIN_CLASSES,
        "defaults": {
            "past": initial_past_query().model_dump(by_alias=True, mode="json"),
            "future": initial_future_query().model_dump(by_alias=True, mode="json"),
        },
    }
