"""Rate catalog: the read-only fare table loaded once at startup."""

import json
import logging
from itertools import combinations
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from pydantic import ValidationError

from vincyfares.config import ResolverConstants, settings
from vincyfares.models import (
    BusRouteCategory,
    CruiseShipFareCategory,
    FareCategory,
    FareMode,
    KingstownTourFareCategory,
    StandardFareCategory,
)
from vincyfares.passengers import parse_passenger_range

logger = logging.getLogger(__name__)


class CatalogError(ValueError):
    """The fare catalog is malformed. Raised at load time only."""


class RateCatalog:
    """
    Immutable, ordered collection of fare categories.

    Each raw record is turned into exactly one tagged category model when
    the catalog is built, so resolution never has to inspect which fields
    a row happens to carry.
    """

    def __init__(self, categories: Sequence[FareCategory], constants: ResolverConstants):
        self._categories: Tuple[FareCategory, ...] = tuple(categories)
        self._by_name: Dict[str, FareCategory] = {}
        self.constants = constants

        for category in self._categories:
            if category.category in self._by_name:
                raise CatalogError(f"Duplicate category name: {category.category!r}")
            self._by_name[category.category] = category

    @classmethod
    def from_records(
        cls,
        records: Iterable[Mapping[str, Any]],
        constants: Optional[ResolverConstants] = None,
    ) -> "RateCatalog":
        """
        Build a catalog from raw category records.

        Args:
            records: Dicts with a ``category`` name and either ``routes`` or ``fares``
            constants: Reserved labels used to decide each category's shape

        Raises:
            CatalogError: If any record is malformed
        """
        constants = constants or settings.resolver_constants()
        categories = [_build_category(record, constants) for record in records]
        return cls(categories, constants)

    @classmethod
    def from_file(
        cls,
        path: Union[str, Path],
        constants: Optional[ResolverConstants] = None,
    ) -> "RateCatalog":
        """Load a catalog from a JSON file of the form ``{"categories": [...]}``."""
        path = Path(path)
        try:
            with path.open(encoding="utf-8") as handle:
                payload = json.load(handle)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Could not read fare catalog {path}: {e}")
            raise CatalogError(f"Could not read fare catalog {path}: {e}") from e

        if not isinstance(payload, dict) or not isinstance(payload.get("categories"), list):
            logger.error(f"Invalid fare catalog {path}: expected an object with a 'categories' list")
            raise CatalogError(f"{path}: expected an object with a 'categories' list")

        try:
            catalog = cls.from_records(payload["categories"], constants)
        except CatalogError as e:
            logger.error(f"Invalid fare catalog {path}: {e}")
            raise
        logger.info(f"Loaded {len(catalog)} fare categories from {path}")
        return catalog

    def __len__(self) -> int:
        return len(self._categories)

    def __iter__(self):
        return iter(self._categories)

    @property
    def categories(self) -> Tuple[FareCategory, ...]:
        return self._categories

    def list_categories(self, mode: FareMode) -> List[FareCategory]:
        """Categories for a mode, in display order."""
        mode = FareMode(mode)
        return [category for category in self._categories if category.mode is mode]

    def category_names(self, mode: FareMode) -> List[str]:
        return [category.category for category in self.list_categories(mode)]

    def find_category(self, name: str) -> Optional[FareCategory]:
        return self._by_name.get(name)

    def destinations(self, name: str) -> List[str]:
        """
        Unique selectable items for a category, in catalog order.
        Route names for bus, places for taxi, nothing for tours.
        """
        category = self.find_category(name)
        if category is None or isinstance(category, KingstownTourFareCategory):
            return []
        if isinstance(category, BusRouteCategory):
            return [route.name for route in category.routes]
        return list(dict.fromkeys(item.place for item in category.fares))

    def passenger_tiers(self, name: str, destination: Optional[str] = None) -> List[str]:
        """Tier strings for a tiered category, optionally for one destination."""
        category = self.find_category(name)
        if isinstance(category, KingstownTourFareCategory):
            return [item.passengers for item in category.fares]
        if isinstance(category, CruiseShipFareCategory):
            return [
                item.passengers for item in category.fares
                if destination is None or item.place == destination
            ]
        return []


def _category_shape(record: Mapping[str, Any], constants: ResolverConstants):
    name = record.get("category")
    if not isinstance(name, str) or not name:
        raise CatalogError(f"Category record without a name: {dict(record)!r}")

    has_routes = record.get("routes") is not None
    has_fares = record.get("fares") is not None
    if has_routes == has_fares:
        which = "both" if has_routes else "neither"
        raise CatalogError(
            f"Category {name!r} has {which} of 'routes' and 'fares'; exactly one is required"
        )

    if has_routes:
        return BusRouteCategory
    if name == constants.kingstown_tour_category:
        return KingstownTourFareCategory
    if name.startswith(constants.cruise_ship_prefix):
        return CruiseShipFareCategory
    return StandardFareCategory


def _build_category(record: Mapping[str, Any], constants: ResolverConstants) -> FareCategory:
    if not isinstance(record, Mapping):
        raise CatalogError(f"Category record must be an object, got {record!r}")

    model = _category_shape(record, constants)
    fields = {key: value for key, value in record.items() if value is not None}
    try:
        category = model(**fields)
    except ValidationError as e:
        raise CatalogError(
            f"Category {record['category']!r} does not match the "
            f"{model.model_fields['kind'].default} shape:\n{e}"
        ) from e

    if isinstance(category, CruiseShipFareCategory):
        groups: Dict[str, List[str]] = {}
        for item in category.fares:
            groups.setdefault(item.place, []).append(item.passengers)
        for place, tiers in groups.items():
            _check_tiers(f"{category.category} / {place}", tiers)
    elif isinstance(category, KingstownTourFareCategory):
        _check_tiers(category.category, [item.passengers for item in category.fares])

    return category


def _check_tiers(label: str, tiers: List[str]) -> None:
    """Every tier must parse, and no two tiers may cover the same passenger count."""
    parsed = []
    for tier in tiers:
        passenger_range = parse_passenger_range(tier)
        if passenger_range is None:
            raise CatalogError(f"{label}: malformed passenger tier {tier!r}")
        if passenger_range.maximum is not None and passenger_range.maximum < passenger_range.minimum:
            raise CatalogError(f"{label}: empty passenger tier {tier!r}")
        parsed.append((tier, passenger_range))

    for (tier_a, range_a), (tier_b, range_b) in combinations(parsed, 2):
        if range_a.overlaps(range_b):
            raise CatalogError(f"{label}: passenger tiers {tier_a!r} and {tier_b!r} overlap")


# Singleton instance
_catalog: Optional[RateCatalog] = None


def get_catalog() -> RateCatalog:
    """Get singleton catalog instance, loaded from settings.CATALOG_PATH."""
    global _catalog
    if _catalog is None:
        _catalog = RateCatalog.from_file(settings.CATALOG_PATH, settings.resolver_constants())
    return _catalog


def reset_catalog() -> None:
    """Drop the loaded catalog so the next get_catalog() reloads it."""
    global _catalog
    _catalog = None
