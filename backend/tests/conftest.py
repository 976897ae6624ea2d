"""Shared fixtures: a small hand-written catalog with one category of each shape."""

import copy

import pytest

from vincyfares.catalog import RateCatalog
from vincyfares.config import ResolverConstants
from vincyfares.services.fare_resolver import CatalogFareResolver

SAMPLE_CATEGORIES = [
    {
        "category": "Test Bus Routes",
        "routes": [
            {"name": "A - B", "fare_ec": 4.00},
            {"name": "A - C", "fare_ec": 3.50},
        ],
    },
    {
        "category": "Airport (Per Passenger)",
        "fares": [
            {"place": "X", "regular_ec": 20.00, "regular_us": 7.50, "after_hours_ec": 25.00, "after_hours_us": 9.25},
        ],
    },
    {
        "category": "From Airport (1 to 3 Passengers)",
        "fares": [
            {"place": "X", "distance_category": "Zone B", "regular_ec": 75.00, "regular_us": 27.78,
             "after_hours_ec": 90.00, "after_hours_us": 33.33},
        ],
    },
    {
        "category": "From Town",
        "fares": [
            {"place": "Fort", "regular_ec": 25.00, "regular_us": 9.26, "after_hours_ec": 30.00, "after_hours_us": 11.11},
            {"place": "Gardens", "regular_ec": 20.00, "regular_us": 7.41, "after_hours_ec": 25.00, "after_hours_us": 9.26},
        ],
    },
    {
        "category": "From Cruise Ship Berth (Test)",
        "fares": [
            {"place": "Y", "passengers": "1 to 4",
             "regular_one_way_ec": 30.00, "regular_one_way_us": 11.11,
             "regular_return_ec": 55.00, "regular_return_us": 20.37,
             "after_hours_one_way_ec": 40.00, "after_hours_one_way_us": 14.81},
            {"place": "Y", "passengers": "5 to 10",
             "regular_one_way_ec": 8.00, "regular_one_way_us": 2.96,
             "regular_return_ec": 15.00, "regular_return_us": 5.56,
             "after_hours_one_way_ec": 10.00, "after_hours_one_way_us": 3.70},
            {"place": "Z", "passengers": "2 to 3",
             "regular_one_way_ec": 10.00, "regular_one_way_us": 3.70,
             "regular_return_ec": 18.00, "regular_return_us": 6.67,
             "after_hours_one_way_ec": 12.00, "after_hours_one_way_us": 4.44},
            {"place": "Z", "passengers": "Over 3",
             "regular_one_way_ec": 9.00, "regular_one_way_us": 3.33,
             "regular_return_ec": 16.00, "regular_return_us": 5.93,
             "after_hours_one_way_ec": 11.00, "after_hours_one_way_us": 4.07},
        ],
    },
    {
        "category": "Tours around Kingstown (Minimum of two (2) hours)",
        "fares": [
            {"passengers": "1 to 4", "regular_return_ec": 160.00, "regular_return_us": 59.26,
             "after_hours_return_ec": 200.00, "after_hours_return_us": 74.07},
            {"passengers": "5 to 10", "regular_return_ec": 40.00, "regular_return_us": 14.81,
             "after_hours_return_ec": 50.00, "after_hours_return_us": 18.52},
        ],
    },
]


@pytest.fixture
def records():
    """A fresh, mutable copy of the sample catalog records."""
    return copy.deepcopy(SAMPLE_CATEGORIES)


@pytest.fixture
def constants():
    return ResolverConstants()


@pytest.fixture
def catalog(records, constants):
    return RateCatalog.from_records(records, constants)


@pytest.fixture
def resolver(catalog):
    return CatalogFareResolver(catalog)
