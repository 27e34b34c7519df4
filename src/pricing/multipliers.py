"""
Purchasing-power multipliers.

Maps a country's region to the multiplier applied to the base USD price.
The home market always pays full price.
"""

from types import MappingProxyType

HOME_MARKET_CODE = "US"
HOME_MARKET_MULTIPLIER = 1.0
DEFAULT_MULTIPLIER = 0.8

REGION_MULTIPLIERS = MappingProxyType(
    {
        "Africa": 0.5,
        "Americas": 0.75,
        "Asia": 0.7,
        "Europe": 1.0,
        "Oceania": 0.95,
    }
)


def get_multiplier_from_region(region: str | None) -> float:
    """Look up a region's multiplier, falling back to the default."""
    if not region:
        return DEFAULT_MULTIPLIER
    return REGION_MULTIPLIERS.get(region, DEFAULT_MULTIPLIER)


def resolve_multiplier(country_code: str | None, region: str | None = None) -> float:
    """
    Resolve the parity multiplier for a country.

    Args:
        country_code: Two-letter country code (e.g. "DE").
        region: Region name from the country directory, if any.

    Returns:
        float: Multiplier in (0, 1.0].
    """
    if country_code == HOME_MARKET_CODE:
        return HOME_MARKET_MULTIPLIER
    return get_multiplier_from_region(region)
