"""Configuration for the Vincy fare calculator."""

from dataclasses import dataclass
from pathlib import Path
from typing import List
import os
from dotenv import load_dotenv

load_dotenv()

PACKAGE_DIR = Path(__file__).parent


@dataclass(frozen=True)
class ResolverConstants:
    """Catalog-wide constants shared by the catalog loader and the resolver."""
    ec_to_us_rate: float = 2.7
    cruise_ship_prefix: str = "From Cruise Ship Berth"
    kingstown_tour_category: str = "Tours around Kingstown (Minimum of two (2) hours)"
    per_passenger_suffix: str = "(Per Passenger)"
    small_group_suffix: str = "(1 to 3 Passengers)"
    small_group_max: int = 3
    flat_rate_tier: str = "1 to 4"


def _split_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


class Settings:
    """Application settings."""

    # API Settings
    API_TITLE = "Vincy Fare Calculator"
    API_VERSION = "1.0.0"
    API_DESCRIPTION = (
        "Estimated bus and taxi fares from the published St. Vincent rate table"
    )

    # CORS Settings
    CORS_ORIGINS = _split_origins(
        os.getenv(
            "CORS_ORIGINS",
            "http://localhost:3000,http://127.0.0.1:3000,"
            "http://localhost:8000,http://127.0.0.1:8000",
        )
    )

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    # Catalog Settings
    CATALOG_PATH = Path(
        os.getenv("FARE_CATALOG_PATH", str(PACKAGE_DIR / "data" / "fare_catalog.json"))
    )

    # Fare Rules
    _DEFAULTS = ResolverConstants()
    EC_TO_US_RATE = float(os.getenv("EC_TO_US_RATE", str(_DEFAULTS.ec_to_us_rate)))
    CRUISE_SHIP_CATEGORY_PREFIX = _DEFAULTS.cruise_ship_prefix
    KINGSTOWN_TOUR_CATEGORY = _DEFAULTS.kingstown_tour_category
    PER_PASSENGER_SUFFIX = _DEFAULTS.per_passenger_suffix
    SMALL_GROUP_SUFFIX = _DEFAULTS.small_group_suffix
    SMALL_GROUP_MAX = _DEFAULTS.small_group_max
    FLAT_RATE_TIER = _DEFAULTS.flat_rate_tier

    @classmethod
    def resolver_constants(cls) -> ResolverConstants:
        """Build the constants injected into the catalog and resolver."""
        if cls.EC_TO_US_RATE <= 0:
            raise ValueError(f"EC_TO_US_RATE must be positive, got {cls.EC_TO_US_RATE}")
        return ResolverConstants(
            ec_to_us_rate=cls.EC_TO_US_RATE,
            cruise_ship_prefix=cls.CRUISE_SHIP_CATEGORY_PREFIX,
            kingstown_tour_category=cls.KINGSTOWN_TOUR_CATEGORY,
            per_passenger_suffix=cls.PER_PASSENGER_SUFFIX,
            small_group_suffix=cls.SMALL_GROUP_SUFFIX,
            small_group_max=cls.SMALL_GROUP_MAX,
            flat_rate_tier=cls.FLAT_RATE_TIER,
        )


settings = Settings()
