"""
Parity pricing engine.

Converts one USD base price into per-country parity prices.

Formula:
    P_usd   = normalize(base × multiplier)
    P_local = normalize(P_usd × R)
Where:
- multiplier = purchasing-power multiplier for the country's region
- R = USD to local currency exchange rate (1.0 if unknown)
- normalize = round up to the next X.99 price

The local price is derived from the normalized USD price, so both displayed
figures end in .99.
"""

import logging
import unicodedata
from collections.abc import Iterable, Mapping
from decimal import Decimal
from types import MappingProxyType
from typing import Any

from src.pricing.models import CountryRecord, PricingRow
from src.pricing.multipliers import resolve_multiplier
from src.pricing.normalizer import normalize_price, to_finite_decimal

logger = logging.getLogger(__name__)

REFERENCE_CURRENCY = "USD"
FALLBACK_RATE = 1.0


def coerce_base_amount(value: Any) -> float:
    """
    Coerce user input into a usable base amount.

    Args:
        value: Raw base amount (number or numeric string).

    Returns:
        float: The amount, or 0.0 if it is not a finite positive number.
    """
    number = to_finite_decimal(value)
    if number is None or number <= 0:
        return 0.0
    return float(number)


def build_rate_table(
    raw_rates: Mapping[str, Any] | None,
    reference_currency: str = REFERENCE_CURRENCY,
) -> Mapping[str, float]:
    """
    Build an exchange rate table relative to the reference currency.

    The reference currency is always pinned to 1.0; a conflicting value in
    the source is ignored. Non-numeric and non-positive rates are dropped.

    Args:
        raw_rates: Mapping of currency code to rate (1 USD = rate units).
        reference_currency: Currency the rates are quoted against.

    Returns:
        Read-only mapping of currency code to rate.
    """
    table: dict[str, float] = {}
    for currency, raw_rate in (raw_rates or {}).items():
        rate = to_finite_decimal(raw_rate)
        if rate is None or rate <= 0:
            logger.debug(f"Dropping invalid rate for {currency}: {raw_rate!r}")
            continue
        table[currency] = float(rate)

    table[reference_currency] = 1.0
    return MappingProxyType(table)


def lookup_rate(rate_table: Mapping[str, float], currency_code: str) -> float:
    """Get the rate for a currency, falling back to 1.0 when unknown."""
    return rate_table.get(currency_code, FALLBACK_RATE)


def price_for(
    base_amount: Any,
    multiplier: float,
    local_rate: float | None = FALLBACK_RATE,
) -> tuple[float, float]:
    """
    Calculate the parity USD price and local price for one country.

    Args:
        base_amount: Base price in USD.
        multiplier: Parity multiplier for the country.
        local_rate: USD to local rate. None means unknown and uses 1.0.

    Returns:
        Tuple of (parity_usd_price, local_price), both normalized.
    """
    base = Decimal(str(coerce_base_amount(base_amount)))
    rate = to_finite_decimal(local_rate)
    if rate is None:
        rate = Decimal(str(FALLBACK_RATE))

    reference_price = normalize_price(base * Decimal(str(multiplier)))
    local_price = normalize_price(Decimal(str(reference_price)) * rate)
    return reference_price, local_price


def _sort_key(name: str) -> tuple[str, str]:
    # Accent-insensitive, case-insensitive, with the raw name as tiebreak
    decomposed = unicodedata.normalize("NFKD", name)
    folded = "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()
    return folded, name


def to_country_record(entry: Any) -> CountryRecord | None:
    """Map a directory entry or CountryRecord to a CountryRecord."""
    if isinstance(entry, CountryRecord):
        return entry
    return CountryRecord.from_directory_entry(entry)


def parse_country_entries(entries: Iterable[Any]) -> list[CountryRecord]:
    """
    Map raw entries to CountryRecords and drop invalid ones.

    Args:
        entries: Directory entries and/or CountryRecord instances.

    Returns:
        List of valid CountryRecords, in input order.
    """
    records = [to_country_record(entry) for entry in entries]
    valid = [record for record in records if record is not None and record.is_valid()]

    dropped = len(records) - len(valid)
    if dropped:
        logger.debug(f"Dropped {dropped} country entries missing name, currency or code")
    return valid


def build_row(
    record: CountryRecord,
    base_amount: Any,
    rate_table: Mapping[str, float],
) -> PricingRow:
    """Compute the pricing row for one country."""
    multiplier = resolve_multiplier(record.country_code, record.region)
    rate = lookup_rate(rate_table, record.currency_code)
    reference_price, local_price = price_for(base_amount, multiplier, rate)
    return PricingRow(
        country=record.name,
        currency_code=record.currency_code,
        country_code=record.country_code,
        parity_multiplier=multiplier,
        usd_to_local=rate,
        parity_reference_price=reference_price,
        local_price=local_price,
    )


def build_pricing_table(
    countries: Iterable[Any],
    base_amount: Any,
    rate_table: Mapping[str, Any] | None,
    reference_currency: str = REFERENCE_CURRENCY,
) -> list[PricingRow]:
    """
    Build the parity pricing table for a collection of countries.

    Args:
        countries: CountryRecords or raw directory entries.
        base_amount: Base price in USD. Invalid amounts price everything at 0.
        rate_table: Mapping of currency code to rate against the reference.
        reference_currency: Currency of the base amount.

    Returns:
        List of PricingRow sorted by country name.
    """
    records = parse_country_entries(countries)
    rates = build_rate_table(rate_table, reference_currency)
    amount = coerce_base_amount(base_amount)

    rows = [build_row(record, amount, rates) for record in records]
    rows.sort(key=lambda row: _sort_key(row.country))
    return rows


class ParityEngine:
    """
    Engine for building parity pricing tables.

    Holds the reference currency and the loaded source data so the table can
    be recomputed whenever the base amount changes. Countries and rates are
    stored as one snapshot, so a build never mixes data from two updates.

    Attributes:
        reference_currency: Currency of base amounts and rates.
        countries: Valid country records.
        rate_table: Exchange rates with the reference pinned to 1.0.
    """

    def __init__(
        self,
        countries: Iterable[Any] = (),
        rate_table: Mapping[str, Any] | None = None,
        reference_currency: str = REFERENCE_CURRENCY,
    ) -> None:
        self.reference_currency = reference_currency
        self._snapshot: tuple[tuple[CountryRecord, ...], Mapping[str, float]] = (
            (),
            build_rate_table(None, reference_currency),
        )
        self.update(countries, rate_table)

    @property
    def countries(self) -> tuple[CountryRecord, ...]:
        return self._snapshot[0]

    @property
    def rate_table(self) -> Mapping[str, float]:
        return self._snapshot[1]

    def update(
        self,
        countries: Iterable[Any] | None = None,
        rate_table: Mapping[str, Any] | None = None,
    ) -> None:
        """
        Replace the country list and/or rate table.

        Args:
            countries: New country entries, or None to keep the current list.
            rate_table: New raw rates, or None to keep the current table.
        """
        current_countries, current_rates = self._snapshot
        if countries is not None:
            current_countries = tuple(parse_country_entries(countries))
        if rate_table is not None:
            current_rates = build_rate_table(rate_table, self.reference_currency)
        self._snapshot = (current_countries, current_rates)

        logger.info(
            f"Parity engine loaded: {len(current_countries)} countries, "
            f"{len(current_rates)} rates"
        )

    def build(self, base_amount: Any) -> list[PricingRow]:
        """Build the pricing table for a base amount."""
        countries, rate_table = self._snapshot
        return build_pricing_table(countries, base_amount, rate_table, self.reference_currency)
