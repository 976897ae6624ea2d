"""Models for the Vincy fare calculation system."""

from enum import Enum
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class FareMode(str, Enum):
    """Top-level fare mode selected by the user."""
    BUS = "bus"
    TAXI = "taxi"


class TripType(str, Enum):
    ONE_WAY = "one_way"
    RETURN = "return"


class Currency(str, Enum):
    """Display currency. The catalog is denominated in EC dollars."""
    EC = "EC"
    US = "US"

    @property
    def symbol(self) -> str:
        return f"{self.value}$"


class CatalogModel(BaseModel):
    """Base for catalog rows: immutable, no stray fields."""
    model_config = ConfigDict(frozen=True, extra="forbid")


class BusRouteItem(CatalogModel):
    """A single bus route with its flat EC fare."""
    name: str = Field(..., min_length=1)
    fare_ec: float = Field(..., ge=0)


class StandardFareItem(CatalogModel):
    """Taxi fare to a destination, regular and after-hours, in both currencies."""
    place: str = Field(..., min_length=1)
    distance_category: Optional[str] = None
    regular_ec: float = Field(..., ge=0)
    regular_us: float = Field(..., ge=0)
    after_hours_ec: float = Field(..., ge=0)
    after_hours_us: float = Field(..., ge=0)


class CruiseShipFareItem(CatalogModel):
    """
    Cruise ship berth fare for one destination and passenger tier.
    The catalog stores no after-hours return rate.
    """
    place: str = Field(..., min_length=1)
    passengers: str = Field(..., min_length=1)
    regular_one_way_ec: float = Field(..., ge=0)
    regular_one_way_us: float = Field(..., ge=0)
    regular_return_ec: float = Field(..., ge=0)
    regular_return_us: float = Field(..., ge=0)
    after_hours_one_way_ec: float = Field(..., ge=0)
    after_hours_one_way_us: float = Field(..., ge=0)


class KingstownTourFareItem(CatalogModel):
    """Kingstown tour tier. Tours are priced as return trips only."""
    passengers: str = Field(..., min_length=1)
    regular_return_ec: float = Field(..., ge=0)
    regular_return_us: float = Field(..., ge=0)
    after_hours_return_ec: float = Field(..., ge=0)
    after_hours_return_us: float = Field(..., ge=0)


class BusRouteCategory(CatalogModel):
    kind: Literal["bus_route"] = "bus_route"
    category: str = Field(..., min_length=1)
    routes: List[BusRouteItem]

    @property
    def mode(self) -> FareMode:
        return FareMode.BUS


class StandardFareCategory(CatalogModel):
    kind: Literal["standard"] = "standard"
    category: str = Field(..., min_length=1)
    fares: List[StandardFareItem]

    @property
    def mode(self) -> FareMode:
        return FareMode.TAXI


class CruiseShipFareCategory(CatalogModel):
    kind: Literal["cruise_ship"] = "cruise_ship"
    category: str = Field(..., min_length=1)
    fares: List[CruiseShipFareItem]

    @property
    def mode(self) -> FareMode:
        return FareMode.TAXI


class KingstownTourFareCategory(CatalogModel):
    kind: Literal["kingstown_tour"] = "kingstown_tour"
    category: str = Field(..., min_length=1)
    fares: List[KingstownTourFareItem]

    @property
    def mode(self) -> FareMode:
        return FareMode.TAXI


FareCategory = Union[
    BusRouteCategory,
    StandardFareCategory,
    CruiseShipFareCategory,
    KingstownTourFareCategory,
]


class PassengerRange(BaseModel):
    """
    Parsed passenger tier. A ``maximum`` of None means open-ended
    ("Over 10" is minimum 11, no maximum).
    """
    model_config = ConfigDict(frozen=True)

    minimum: int
    maximum: Optional[int] = None

    def contains(self, count: int) -> bool:
        if count < self.minimum:
            return False
        return self.maximum is None or count <= self.maximum

    def overlaps(self, other: "PassengerRange") -> bool:
        """True if some passenger count falls in both ranges."""
        low = max(self.minimum, other.minimum)
        highs = [r.maximum for r in (self, other) if r.maximum is not None]
        return not highs or low <= min(highs)


class CalculatedFare(BaseModel):
    """Outcome of a fare resolution, rendered by the caller."""
    status: str
    amount: float = Field(..., ge=0, description="Fare rounded to 2 decimal places")
    currency_symbol: str = Field(..., description='"EC$" or "US$"')
    details: Optional[str] = Field(None, description="Explanation or caveat")


class Fare(CalculatedFare):
    """A resolved fare."""
    status: Literal["fare"] = "fare"


class Incomplete(CalculatedFare):
    """Selection could not be priced; ``details`` tells the user why."""
    status: Literal["incomplete"] = "incomplete"
    amount: float = 0.0


class FareQuery(BaseModel):
    """Request model for a fare estimate."""
    mode: FareMode = Field(FareMode.TAXI, description="Bus or taxi fares")
    category: Optional[str] = Field(None, description="Fare category name")
    item: Optional[str] = Field(None, description="Bus route or taxi destination")
    passengers: int = Field(1, ge=1, description="Number of passengers")
    after_hours: bool = Field(False, description="After-hours taxi rates")
    trip_type: TripType = Field(TripType.ONE_WAY, description="One-way or return")
    discount: bool = Field(False, description="School child in uniform (bus only)")
    currency: Currency = Field(Currency.EC, description="Display currency")


class FareEstimateResponse(BaseModel):
    """Response model for a fare estimate."""
    status: Literal["fare", "incomplete", "none"]
    fare: Optional[Union[Fare, Incomplete]] = None


class CategorySummary(BaseModel):
    """What the UI needs to render the inputs for one category."""
    name: str
    kind: str
    mode: FareMode
    destinations: List[str] = Field(default_factory=list)
    passenger_tiers: List[str] = Field(default_factory=list)
    uses_trip_type: bool
    uses_after_hours: bool
    uses_discount: bool
