"""API endpoints for fare estimation."""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from vincyfares.catalog import RateCatalog, get_catalog
from vincyfares.models import (
    BusRouteCategory,
    CategorySummary,
    FareCategory,
    FareEstimateResponse,
    FareMode,
    FareQuery,
    KingstownTourFareCategory,
)
from vincyfares.services import get_fare_resolver
from vincyfares.services.fare_resolver import FareResolverInterface

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Fare Estimation"])


def get_resolver() -> FareResolverInterface:
    """
    Dependency injection for the fare resolver.
    Returns any implementation of FareResolverInterface.
    """
    return get_fare_resolver()


def get_rate_catalog() -> RateCatalog:
    """Dependency injection for the rate catalog."""
    return get_catalog()


def summarize_category(catalog: RateCatalog, category: FareCategory) -> CategorySummary:
    """Describe which inputs a category needs so a UI can render them."""
    is_taxi = category.mode is FareMode.TAXI
    return CategorySummary(
        name=category.category,
        kind=category.kind,
        mode=category.mode,
        destinations=catalog.destinations(category.category),
        passenger_tiers=catalog.passenger_tiers(category.category),
        uses_trip_type=is_taxi and not isinstance(category, KingstownTourFareCategory),
        uses_after_hours=is_taxi,
        uses_discount=isinstance(category, BusRouteCategory),
    )


def _require_category(catalog: RateCatalog, name: str) -> FareCategory:
    category = catalog.find_category(name)
    if category is None:
        logger.warning(f"Unknown fare category requested: {name!r}")
        raise HTTPException(status_code=404, detail=f"Fare category {name!r} not found")
    return category


@router.get("/categories", response_model=List[CategorySummary])
async def list_categories(
    mode: FareMode = Query(FareMode.TAXI, description="bus or taxi"),
    catalog: RateCatalog = Depends(get_rate_catalog),
) -> List[CategorySummary]:
    """
    List fare categories for a mode, in display order.

    Args:
        mode: Fare mode to list
        catalog: Injected rate catalog

    Returns:
        Category summaries with their destinations and passenger tiers
    """
    return [summarize_category(catalog, category) for category in catalog.list_categories(mode)]


@router.get("/categories/{name}", response_model=CategorySummary)
async def get_category(
    name: str,
    catalog: RateCatalog = Depends(get_rate_catalog),
) -> CategorySummary:
    """Get one fare category by its display name."""
    return summarize_category(catalog, _require_category(catalog, name))


@router.get("/categories/{name}/tiers", response_model=List[str])
async def get_passenger_tiers(
    name: str,
    destination: Optional[str] = None,
    catalog: RateCatalog = Depends(get_rate_catalog),
) -> List[str]:
    """
    Passenger tiers available for a category, optionally for one destination.
    Empty for categories that are not priced by tier.
    """
    _require_category(catalog, name)
    return catalog.passenger_tiers(name, destination)


@router.post("/fares/estimate", response_model=FareEstimateResponse)
async def estimate_fare(
    query: FareQuery,
    resolver: FareResolverInterface = Depends(get_resolver),
) -> FareEstimateResponse:
    """
    Estimate a fare for the current selections.

    Incomplete selections are not errors: they come back with status
    "incomplete" and guidance in ``fare.details``, or status "none" when
    there is nothing to show yet.

    Args:
        query: Fare selections
        resolver: Injected fare resolver implementing FareResolverInterface

    Returns:
        FareEstimateResponse with the resolved fare, if any

    Raises:
        HTTPException: If resolution fails unexpectedly
    """
    try:
        result = resolver.resolve_query(query)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Fare estimate failed for {query!r}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Internal error: {str(e)}")

    if result is None:
        return FareEstimateResponse(status="none")
    return FareEstimateResponse(status=result.status, fare=result)


@router.get("/health")
async def health_check(catalog: RateCatalog = Depends(get_rate_catalog)):
    """Health check endpoint including catalog status."""
    return {
        "status": "healthy",
        "service": "Vincy Fare Calculator",
        "categories_count": len(catalog),
        "bus_categories": len(catalog.list_categories(FareMode.BUS)),
        "taxi_categories": len(catalog.list_categories(FareMode.TAXI)),
    }
