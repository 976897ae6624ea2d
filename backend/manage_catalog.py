#!/usr/bin/env python3
"""
Fare catalog management utility for the Vincy fare calculator.

Usage:
    python manage_catalog.py show      - Show all fare categories and rows
    python manage_catalog.py validate  - Load the catalog and report problems
    python manage_catalog.py quote     - Interactively estimate a fare
"""

import sys

from vincyfares.catalog import CatalogError, RateCatalog
from vincyfares.config import settings
from vincyfares.models import (
    BusRouteCategory,
    CruiseShipFareCategory,
    Currency,
    FareMode,
    FareQuery,
    KingstownTourFareCategory,
    TripType,
)
from vincyfares.services.fare_resolver import CatalogFareResolver


def load_catalog() -> RateCatalog:
    return RateCatalog.from_file(settings.CATALOG_PATH, settings.resolver_constants())


def show_catalog():
    """Display all fare categories."""
    catalog = load_catalog()

    print("\n" + "="*70)
    print("FARE CATALOG")
    print("="*70)

    for category in catalog:
        print(f"\n[{category.mode.value}] {category.category}")
        print("-"*70)

        if isinstance(category, BusRouteCategory):
            for route in category.routes:
                print(f"  {route.name:<40} EC${route.fare_ec:>8.2f}")
        elif isinstance(category, KingstownTourFareCategory):
            print(f"  {'Passengers':<12} {'Return EC$':>12} {'After hrs EC$':>14}")
            for item in category.fares:
                print(f"  {item.passengers:<12} {item.regular_return_ec:>12.2f} "
                      f"{item.after_hours_return_ec:>14.2f}")
        elif isinstance(category, CruiseShipFareCategory):
            print(f"  {'Place':<30} {'Passengers':<12} {'One-way EC$':>12} {'Return EC$':>12}")
            for item in category.fares:
                print(f"  {item.place:<30} {item.passengers:<12} "
                      f"{item.regular_one_way_ec:>12.2f} {item.regular_return_ec:>12.2f}")
        else:
            print(f"  {'Place':<30} {'Regular EC$':>12} {'After hrs EC$':>14}")
            for item in category.fares:
                print(f"  {item.place:<30} {item.regular_ec:>12.2f} {item.after_hours_ec:>14.2f}")

    print("\n" + "="*70)
    print(f"Total categories: {len(catalog)}")
    print(f"EC$ to US$ rate: {settings.EC_TO_US_RATE}")
    print("="*70)


def validate_catalog():
    """Load the catalog and report whether it is usable."""
    print(f"Validating {settings.CATALOG_PATH}...")
    try:
        catalog = load_catalog()
    except CatalogError as e:
        print(f"✗ Catalog is invalid: {e}")
        sys.exit(1)

    bus = len(catalog.list_categories(FareMode.BUS))
    taxi = len(catalog.list_categories(FareMode.TAXI))
    print(f"✓ Catalog is valid: {bus} bus and {taxi} taxi categories")


def _choose(prompt: str, options: list) -> str:
    for number, option in enumerate(options, 1):
        print(f"  {number}. {option}")
    choice = int(input(prompt))
    if not 1 <= choice <= len(options):
        raise ValueError(f"Choose a number from 1 to {len(options)}")
    return options[choice - 1]


def _yes(prompt: str) -> bool:
    return input(prompt).strip().lower() in ("y", "yes")


def quote_fare():
    """Interactive fare estimate."""
    print("\nESTIMATE FARE")
    print("-"*30)

    try:
        catalog = load_catalog()
        resolver = CatalogFareResolver(catalog)

        mode = FareMode(input("Fare type (bus/taxi): ").strip().lower())
        name = _choose("Category number: ", catalog.category_names(mode))

        item = None
        destinations = catalog.destinations(name)
        if destinations:
            item = _choose("Route/destination number: ", destinations)

        category = catalog.find_category(name)
        passengers = 1
        after_hours = False
        trip_type = TripType.ONE_WAY
        discount = False

        if mode is FareMode.BUS:
            discount = _yes("School child in uniform? (y/n): ")
        else:
            passengers = int(input("Number of passengers: "))
            after_hours = _yes("After hours? (y/n): ")
            if not isinstance(category, KingstownTourFareCategory):
                if _yes("Return trip? (y/n): "):
                    trip_type = TripType.RETURN

        currency = Currency(input("Currency (EC/US): ").strip().upper() or "EC")

        query = FareQuery(
            mode=mode,
            category=name,
            item=item,
            passengers=passengers,
            after_hours=after_hours,
            trip_type=trip_type,
            discount=discount,
            currency=currency,
        )
        result = resolver.resolve_query(query)

        if result is None:
            print("More information is needed to estimate this fare.")
        elif result.status == "incomplete":
            print(f"! {result.details}")
        else:
            print(f"\nEstimated fare: {result.currency_symbol} {result.amount:.2f}")
            print(f"  {result.details}")

    except ValueError as e:
        print(f"Invalid input! {e}")
    except CatalogError as e:
        print(f"Catalog error: {e}")


def main():
    """Main entry point."""
    if len(sys.argv) < 2:
        print(__doc__)
        return

    command = sys.argv[1].lower()

    commands = {
        'show': show_catalog,
        'validate': validate_catalog,
        'quote': quote_fare,
    }

    if command in commands:
        commands[command]()
    else:
        print(f"Unknown command: {command}")
        print(__doc__)


if __name__ == "__main__":
    main()
