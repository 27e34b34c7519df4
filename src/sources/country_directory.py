"""
Country directory client.

Fetches the list of countries with their currencies, regions and codes from a
REST Countries style endpoint.
"""

import logging
from typing import Any

import requests

from src.pricing.models import CountryRecord
from src.pricing.parity_engine import parse_country_entries
from src.sources.http_session import PricingSourceError, create_session, fetch_json
from src.utils.config_loader import AppConfig

logger = logging.getLogger(__name__)


class CountryDirectoryError(PricingSourceError):
    """Raised when the country list cannot be loaded."""

    def __init__(self, message: str = "Failed loading country list", cause: str | None = None):
        super().__init__(message, source="countries", cause=cause)


class CountryDirectoryClient:
    """
    Client for the country directory.

    Attributes:
        url: Endpoint returning the full country list.
        timeout: Request timeout in seconds.
        session: Requests session with retry logic.
    """

    def __init__(self, config: AppConfig, session: requests.Session | None = None) -> None:
        self.url = config.sources.countries_url
        self.timeout = config.sources.timeout_seconds
        self.session = session or create_session(max_retries=config.sources.max_retries)

    def fetch_raw(self) -> list[dict[str, Any]]:
        """
        Fetch the raw directory entries.

        Returns:
            List of directory entries as returned by the endpoint.

        Raises:
            CountryDirectoryError: If the request fails or the payload is not a list.
        """
        payload = fetch_json(
            self.session,
            self.url,
            self.timeout,
            CountryDirectoryError,
            "Failed loading country list",
        )
        if not isinstance(payload, list):
            raise CountryDirectoryError(cause=f"Expected a list, got {type(payload).__name__}")
        return payload

    def fetch_countries(self) -> list[CountryRecord]:
        """
        Fetch the country list as valid CountryRecords.

        Entries without a name, currency or country code are dropped.

        Returns:
            List of CountryRecords in directory order.
        """
        raw_entries = self.fetch_raw()
        countries = parse_country_entries(raw_entries)
        logger.info(f"Loaded {len(countries)} countries ({len(raw_entries)} directory entries)")
        return countries
