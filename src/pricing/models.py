"""
Data models for the parity pricing engine.

Contains typed dataclasses for country input records and pricing table rows.
"""

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class CountryRecord:
    """
    A country eligible for parity pricing.

    Attributes:
        name: Display name, also the sort and identity key.
        currency_code: ISO currency code (e.g. "EUR").
        country_code: Two-letter country code (e.g. "DE").
        region: Region name used for the multiplier lookup.
    """

    name: str
    currency_code: str
    country_code: str
    region: str | None = None

    @classmethod
    def from_directory_entry(cls, entry: dict[str, Any]) -> "CountryRecord | None":
        """
        Create a CountryRecord from a country directory entry.

        Expected shape::

            {
                "name": {"common": "Germany"},
                "currencies": {"EUR": {"name": "Euro", "symbol": "€"}},
                "region": "Europe",
                "cca2": "DE",
            }

        Only the first currency key is used.

        Args:
            entry: Deserialized directory entry.

        Returns:
            CountryRecord, or None if name, currency or country code is missing.
        """
        if not isinstance(entry, dict):
            return None

        name_data = entry.get("name")
        name = name_data.get("common") if isinstance(name_data, dict) else None

        currencies = entry.get("currencies")
        currency_code = next(iter(currencies), None) if isinstance(currencies, dict) else None

        country_code = entry.get("cca2")
        region = entry.get("region") or None

        if not name or not currency_code or not country_code:
            return None

        return cls(
            name=name,
            currency_code=currency_code,
            country_code=country_code,
            region=region,
        )

    def is_valid(self) -> bool:
        """Check that the required identifying fields are present."""
        return bool(self.name and self.currency_code and self.country_code)


@dataclass(frozen=True)
class PricingRow:
    """
    One row of the parity pricing table.

    Attributes:
        country: Country display name.
        currency_code: Local currency code.
        country_code: Two-letter country code.
        parity_multiplier: Purchasing-power multiplier applied.
        usd_to_local: Exchange rate applied (1 USD = rate local units).
        parity_reference_price: Normalized USD price.
        local_price: Normalized local currency price.
    """

    country: str
    currency_code: str
    country_code: str
    parity_multiplier: float
    usd_to_local: float
    parity_reference_price: float
    local_price: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)
