from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from flight_emissions.errors import ValidationError


class FlightType(str, Enum):
    RETURN = "Return"
    ONE_WAY = "One way"


class CabinClass(str, Enum):
    ECONOMY = "economy"
    PREMIUM_ECONOMY = "premium_economy"
    BUSINESS = "business"
    FIRST = "first"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()


def wire_cabin_class(value) -> str:
    """Map a cabin label ("Premium Economy") or wire value to the wire value."""
    if isinstance(value, CabinClass):
        return value.value
    wire = str(value or "").strip().lower().replace(" ", "_")
    if wire not in {c.value for c in CabinClass}:
        raise ValidationError(f"Unknown cabin class: {value}")
    return wire


# Input model

class ItineraryQuery(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    flight_type: FlightType = FlightType.ONE_WAY
    origin: str = Field("", validation_alias=AliasChoices("origin", "from"))
    destination: str = ""
    cabin_class: CabinClass = Field(
        CabinClass.ECONOMY, validation_alias=AliasChoices("cabinClass", "flightClass", "class")
    )
    travelers: int = Field(1, validation_alias=AliasChoices("travelers", "travelerCount"))
    include_radiative_forcing: bool = Field(
        True, validation_alias=AliasChoices("includeRadiativeForcing", "radiativeForcing", "radiativeFactor")
    )
    departure_date: str = Field("", description="YYYY-MM-DD")

    @field_validator("cabin_class", mode="before")
    @classmethod
    def _cabin_from_label(cls, v):
        return wire_cabin_class(v)

    @field_validator("origin", "destination", "departure_date", mode="before")
    @classmethod
    def _strip(cls, v):
        return (v or "").strip() if isinstance(v, str) or v is None else v


class PastItineraryQuery(ItineraryQuery):
    via: str = ""  # optional single stopover

    @field_validator("via", mode="before")
    @classmethod
    def _strip_via(cls, v):
        return (v or "").strip() if isinstance(v, str) or v is None else v


class FutureItineraryQuery(ItineraryQuery):
    operating_carrier_code: str = ""
    flight_number: str = ""  # typed as text, numeric on the wire
    notes: str = ""

    @field_validator("flight_number", mode="before")
    @classmethod
    def _flight_number_text(cls, v):
        if v is None:
            return ""
        return str(v).strip() if isinstance(v, (str, int)) and not isinstance(v, bool) else v


# Results

class DateParts(BaseModel):
    year: int
    month: int  # 1-indexed
    day: int


class ClassEmissions(BaseModel):
    first: Optional[float] = None
    business: Optional[float] = None
    premium_economy: Optional[float] = None
    economy: Optional[float] = None

    def for_class(self, cabin: CabinClass) -> Optional[float]:
        return getattr(self, cabin.value)


class RouteLeg(BaseModel):
    origin: str
    destination: str
    carrier_code: Optional[str] = None
    flight_number: Optional[int] = None
    departure_date: Optional[DateParts] = None
    date: Optional[str] = None
    travelers: Optional[int] = None
    found: bool = False  # False -> distance-based estimate
    emissions: ClassEmissions = Field(default_factory=ClassEmissions)  # kg


class PastEmissionsResult(BaseModel):
    kind: Literal["past"] = "past"
    total_emissions_kg: float
    per_passenger_kg: float
    total_distance_km: float
    emissions_without_radiative_forcing_kg: float
    legs: List[RouteLeg] = Field(default_factory=list)
    # submission echo for the results view
    route: List[str]
    flight_type: FlightType
    cabin_class: CabinClass
    travelers: int
    departure_date: str
    include_radiative_forcing: bool


class FlightDescriptor(BaseModel):
    origin: str
    destination: str
    carrier_code: str
    flight_number: int
    departure_date: DateParts


class ClassFigures(BaseModel):
    cabin_class: CabinClass
    per_passenger_kg: Optional[float] = None
    total_kg: Optional[float] = None
    per_passenger_without_radiative_forcing_kg: Optional[float] = None
    total_without_radiative_forcing_kg: Optional[float] = None


class FutureEmissionsResult(BaseModel):
    kind: Literal["future"] = "future"
    flight: FlightDescriptor
    emissions_grams_per_pax: ClassEmissions
    travelers: int
    include_radiative_forcing: bool
    radiative_forcing_factor: float
    classes: List[ClassFigures]  # first, business, premium economy, economy
    flight_type: FlightType = FlightType.ONE_WAY
    notes: str = ""

    def figures(self, cabin: CabinClass) -> ClassFigures:
        for f in self.classes:
            if f.cabin_class == cabin:
                return f
        return ClassFigures(cabin_class=cabin)


EmissionsResult = Annotated[
    Union[PastEmissionsResult, FutureEmissionsResult],
    Field(discriminator="kind"),
]
