"""Fare resolution service implementing the rate-table business rules."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional, Protocol, Sequence, Union, runtime_checkable

from vincyfares.catalog import RateCatalog, get_catalog
from vincyfares.config import ResolverConstants
from vincyfares.models import (
    BusRouteCategory,
    CalculatedFare,
    CruiseShipFareCategory,
    CruiseShipFareItem,
    Currency,
    Fare,
    FareCategory,
    FareMode,
    FareQuery,
    Incomplete,
    KingstownTourFareCategory,
    KingstownTourFareItem,
    StandardFareCategory,
    TripType,
)
from vincyfares.passengers import matches

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "Fare information not available for current selection."

FareResult = Optional[CalculatedFare]


@dataclass
class FareQuote:
    """Intermediate EC/US figures for both trip directions, before selection."""
    one_way_ec: Optional[float] = None
    one_way_us: Optional[float] = None
    return_ec: Optional[float] = None
    return_us: Optional[float] = None
    notes: str = ""


@runtime_checkable
class FareResolverInterface(Protocol):
    """
    Interface for fare resolution.
    Any resolver the API is given must follow this contract.
    """

    def resolve(
        self,
        category: Optional[FareCategory],
        item: Optional[str],
        passengers: int,
        after_hours: bool,
        trip_type: TripType,
        discount: bool,
        currency: Currency,
    ) -> FareResult:
        """Resolve a fare for one set of selections."""
        ...

    def resolve_query(self, query: FareQuery) -> FareResult:
        """Resolve a fare for a request naming its category."""
        ...


class BaseFareResolver(ABC):
    """Abstract base class for fare resolvers."""

    def __init__(self, catalog: RateCatalog, constants: Optional[ResolverConstants] = None):
        self.catalog = catalog
        self.constants = constants or catalog.constants

    @abstractmethod
    def resolve(
        self,
        category: Optional[FareCategory],
        item: Optional[str],
        passengers: int,
        after_hours: bool,
        trip_type: TripType,
        discount: bool,
        currency: Currency,
    ) -> FareResult:
        """
        Resolve a fare for one set of selections.
        Must be implemented by subclasses.
        """
        pass

    def resolve_query(self, query: FareQuery) -> FareResult:
        """
        Look up the query's category for its mode, then resolve.
        A category that is missing or belongs to the other mode resolves to None.
        """
        category = None
        if query.category:
            category = self.catalog.find_category(query.category)
            if category is not None and category.mode is not FareMode(query.mode):
                category = None

        return self.resolve(
            category,
            query.item,
            query.passengers,
            query.after_hours,
            query.trip_type,
            query.discount,
            query.currency,
        )


class CatalogFareResolver(BaseFareResolver):
    """
    Resolves fares against the rate catalog.

    Pure with respect to its inputs: the catalog is read-only and no state
    is kept between calls, so it can be re-invoked on every input change.
    """

    def resolve(
        self,
        category: Optional[FareCategory],
        item: Optional[str],
        passengers: int,
        after_hours: bool,
        trip_type: TripType,
        discount: bool,
        currency: Currency,
    ) -> FareResult:
        """
        Resolve a fare for one set of selections.

        Args:
            category: Selected category, or None if nothing is selected yet
            item: Bus route name or taxi destination (unused for tours)
            passengers: Number of passengers, at least 1
            after_hours: Use after-hours taxi rates
            trip_type: One-way or return (ignored for bus and tours)
            discount: School child in uniform (bus only)
            currency: Display currency

        Returns:
            Fare, Incomplete with guidance, or None when there is nothing to show
        """
        if category is None:
            return None

        currency = Currency(currency)
        trip_type = TripType(trip_type)

        if isinstance(category, KingstownTourFareCategory):
            quote = self._quote_kingstown_tour(category, passengers, after_hours)
        elif not item:
            return None
        elif isinstance(category, BusRouteCategory):
            quote = self._quote_bus(category, item, discount)
        elif isinstance(category, CruiseShipFareCategory):
            quote = self._quote_cruise_ship(category, item, passengers, after_hours, trip_type)
        elif isinstance(category, StandardFareCategory):
            quote = self._quote_standard(category, item, passengers, after_hours)
        else:
            raise TypeError(f"Unknown fare category type: {type(category).__name__}")

        if isinstance(quote, Incomplete):
            logger.debug(f"Incomplete fare for {category.category!r}: {quote.details}")
            return quote.model_copy(update={"currency_symbol": currency.symbol})

        result = self._finalize(category, quote, after_hours, trip_type, currency)
        logger.debug(f"Resolved {category.category!r} / {item!r}: {result.amount} {result.currency_symbol}")
        return result

    def _quote_bus(
        self, category: BusRouteCategory, item: str, discount: bool
    ) -> Union[FareQuote, Incomplete]:
        route = next((route for route in category.routes if route.name == item), None)
        if route is None:
            return _incomplete(NOT_AVAILABLE)

        if discount:
            return FareQuote(one_way_ec=route.fare_ec * 0.5, notes="Bus fare (School Child Discount).")
        return FareQuote(one_way_ec=route.fare_ec, notes="Bus fare.")

    def _quote_standard(
        self, category: StandardFareCategory, item: str, passengers: int, after_hours: bool
    ) -> Union[FareQuote, Incomplete]:
        row = next((row for row in category.fares if row.place == item), None)
        if row is None:
            return _incomplete(NOT_AVAILABLE)

        base_ec = row.after_hours_ec if after_hours else row.regular_ec
        base_us = row.after_hours_us if after_hours else row.regular_us
        name = category.category

        if name.endswith(self.constants.per_passenger_suffix):
            quote = FareQuote(
                one_way_ec=base_ec * passengers,
                one_way_us=base_us * passengers,
                notes=f"Per passenger rate. Total for {passengers} passenger(s).",
            )
        elif name.endswith(self.constants.small_group_suffix):
            limit = self.constants.small_group_max
            notes = f"Fare for 1-{limit} passengers."
            if passengers > limit:
                notes += f" Current selection: {passengers} passengers; this rate is for 1-{limit}."
            quote = FareQuote(one_way_ec=base_ec, one_way_us=base_us, notes=notes)
        else:
            quote = FareQuote(one_way_ec=base_ec, one_way_us=base_us, notes="Standard taxi rate.")

        # No stored return rate for standard fares.
        quote.return_ec = quote.one_way_ec * 2
        quote.return_us = quote.one_way_us * 2
        return quote

    def _quote_cruise_ship(
        self,
        category: CruiseShipFareCategory,
        item: str,
        passengers: int,
        after_hours: bool,
        trip_type: TripType,
    ) -> Union[FareQuote, Incomplete]:
        candidates = [row for row in category.fares if row.place == item]
        row: Optional[CruiseShipFareItem] = _match_tier(candidates, passengers)
        if row is None:
            if not candidates:
                return _incomplete(NOT_AVAILABLE)
            return _incomplete(
                f"No specific fare tier for {passengers} passenger(s) for this selection. "
                f"Available tiers for {item}: {_tier_list(candidates)}. "
                "Please adjust passenger count or select an available tier."
            )

        if after_hours:
            one_way_ec, one_way_us = row.after_hours_one_way_ec, row.after_hours_one_way_us
            # The catalog has no after-hours return rate; it is estimated.
            return_ec, return_us = one_way_ec * 2, one_way_us * 2
        else:
            one_way_ec, one_way_us = row.regular_one_way_ec, row.regular_one_way_us
            return_ec, return_us = row.regular_return_ec, row.regular_return_us

        estimated = after_hours and trip_type is TripType.RETURN
        if row.passengers == self.constants.flat_rate_tier:
            notes = "After-hours return estimated as 2x one-way. " if estimated else ""
            notes += f"Fare for {row.passengers}."
            return FareQuote(one_way_ec, one_way_us, return_ec, return_us, notes)

        notes = "After-hours return estimated as 2x one-way per passenger. " if estimated else ""
        notes += f"Per passenger rate for {row.passengers}. Total for {passengers} passenger(s)."
        return FareQuote(
            one_way_ec * passengers,
            one_way_us * passengers,
            return_ec * passengers,
            return_us * passengers,
            notes,
        )

    def _quote_kingstown_tour(
        self, category: KingstownTourFareCategory, passengers: int, after_hours: bool
    ) -> Union[FareQuote, Incomplete]:
        candidates = list(category.fares)
        row: Optional[KingstownTourFareItem] = _match_tier(candidates, passengers)
        if row is None:
            if not candidates:
                return _incomplete(NOT_AVAILABLE)
            return _incomplete(
                f"No specific fare tier for {passengers} passenger(s) for this tour. "
                f"Available tiers: {_tier_list(candidates)}. Please adjust passenger count."
            )

        return_ec = row.after_hours_return_ec if after_hours else row.regular_return_ec
        return_us = row.after_hours_return_us if after_hours else row.regular_return_us

        if row.passengers == self.constants.flat_rate_tier:
            return FareQuote(
                return_ec=return_ec,
                return_us=return_us,
                notes=f"Fare for {row.passengers}. Tour (return trip).",
            )
        return FareQuote(
            return_ec=return_ec * passengers,
            return_us=return_us * passengers,
            notes=(
                f"Per passenger rate for {row.passengers}. Tour (return trip). "
                f"Total for {passengers} passenger(s)."
            ),
        )

    def _finalize(
        self,
        category: FareCategory,
        quote: FareQuote,
        after_hours: bool,
        trip_type: TripType,
        currency: Currency,
    ) -> CalculatedFare:
        """Pick the trip direction and currency, then round."""
        notes = quote.notes

        if isinstance(category, KingstownTourFareCategory):
            final_ec, final_us = quote.return_ec, quote.return_us
        elif isinstance(category, BusRouteCategory):
            final_ec, final_us = quote.one_way_ec, None
        elif trip_type is TripType.RETURN:
            final_ec, final_us = quote.return_ec, quote.return_us
            if "return trip" not in notes.lower():
                notes += " (Return Trip)"
        else:
            final_ec, final_us = quote.one_way_ec, quote.one_way_us
            if "one-way" not in notes.lower():
                notes += " (One-Way)"

        if category.mode is FareMode.TAXI and after_hours and "after hours" not in notes.lower():
            notes += " (After hours)"

        if currency is Currency.EC:
            amount = final_ec
        else:
            amount = final_us if final_us is not None else final_ec / self.constants.ec_to_us_rate

        amount = round_fare(amount)
        if amount <= 0:
            return _incomplete(NOT_AVAILABLE, currency)
        return Fare(amount=amount, currency_symbol=currency.symbol, details=notes.strip())


def round_fare(amount: float) -> float:
    """Round to cents, halves away from zero."""
    return float(Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def _match_tier(rows: Sequence, passengers: int):
    """First row whose passenger tier covers the count."""
    return next((row for row in rows if matches(passengers, row.passengers)), None)


def _tier_list(rows: Sequence) -> str:
    tiers: List[str] = [row.passengers for row in rows]
    return ", ".join(tiers)


def _incomplete(details: str, currency: Currency = Currency.EC) -> Incomplete:
    return Incomplete(currency_symbol=currency.symbol, details=details)


# Singleton instance for default resolver
_default_resolver: Optional[FareResolverInterface] = None


def get_fare_resolver() -> FareResolverInterface:
    """
    Get the default fare resolver instance (Singleton pattern).

    Returns:
        Fare resolver bound to the process-wide catalog
    """
    global _default_resolver
    if _default_resolver is None:
        _default_resolver = CatalogFareResolver(get_catalog())
    return _default_resolver


def reset_fare_resolver() -> None:
    """Forget the default resolver so it is rebuilt on next use."""
    global _default_resolver
    _default_resolver = None
