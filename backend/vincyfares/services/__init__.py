"""Services package for the Vincy fare calculator."""

from .fare_resolver import (
    get_fare_resolver,
    FareResolverInterface,
    CatalogFareResolver
)

__all__ = [
    'get_fare_resolver',
    'FareResolverInterface',
    'CatalogFareResolver'
]
