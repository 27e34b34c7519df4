"""
Pricing module.

Handles parity multiplier resolution, .99 price normalization and
per-country USD → local currency price tables.
"""

from src.pricing.models import CountryRecord, PricingRow
from src.pricing.multipliers import REGION_MULTIPLIERS, resolve_multiplier
from src.pricing.normalizer import normalize_price
from src.pricing.parity_engine import (
    ParityEngine,
    build_pricing_table,
    build_rate_table,
    coerce_base_amount,
    price_for,
)

__all__ = [
    "CountryRecord",
    "PricingRow",
    "ParityEngine",
    "REGION_MULTIPLIERS",
    "resolve_multiplier",
    "normalize_price",
    "price_for",
    "build_pricing_table",
    "build_rate_table",
    "coerce_base_amount",
]
