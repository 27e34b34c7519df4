"""
Exchange rate client.

Retrieves the latest rates for every currency against the reference currency
from an open.er-api.com style endpoint.
"""

import logging
from collections.abc import Mapping

import requests

from src.pricing.parity_engine import build_rate_table
from src.sources.http_session import PricingSourceError, create_session, fetch_json
from src.utils.config_loader import AppConfig

logger = logging.getLogger(__name__)


class ExchangeRateError(PricingSourceError):
    """Raised when the exchange rate table cannot be loaded."""

    def __init__(self, message: str = "Failed loading exchange rates", cause: str | None = None):
        super().__init__(message, source="rates", cause=cause)


class ExchangeRateClient:
    """
    Client for the exchange rate source.

    Rates are quoted as "1 reference unit = rate local units".

    Attributes:
        reference_currency: Currency the rates are quoted against.
        url: Endpoint for the latest rates.
        timeout: Request timeout in seconds.
        session: Requests session with retry logic.
    """

    def __init__(self, config: AppConfig, session: requests.Session | None = None) -> None:
        self.reference_currency = config.parity.reference_currency
        self.url = config.sources.rates_url.format(currency=self.reference_currency)
        self.timeout = config.sources.timeout_seconds
        self.session = session or create_session(max_retries=config.sources.max_retries)

    def fetch_rates(self) -> Mapping[str, float]:
        """
        Fetch the latest rate table.

        Returns:
            Read-only mapping of currency code to rate, with the reference
            currency pinned to 1.0.

        Raises:
            ExchangeRateError: If the request fails or the payload has no rates.
        """
        payload = fetch_json(
            self.session,
            self.url,
            self.timeout,
            ExchangeRateError,
            "Failed loading exchange rates",
        )
        if not isinstance(payload, dict):
            raise ExchangeRateError(cause=f"Expected an object, got {type(payload).__name__}")

        if payload.get("result") == "error":
            raise ExchangeRateError(cause=f"Source reported error: {payload.get('error-type')}")

        raw_rates = payload.get("rates")
        if not isinstance(raw_rates, dict):
            raise ExchangeRateError(cause="Response has no rates")

        base_code = payload.get("base_code")
        if base_code and base_code != self.reference_currency:
            logger.warning(
                f"Rates quoted against {base_code}, expected {self.reference_currency}"
            )

        rates = build_rate_table(raw_rates, self.reference_currency)
        logger.info(f"Loaded {len(rates)} exchange rates against {self.reference_currency}")
        return rates
