"""
Pricing Service for the Pricing Parity Calculator.

Loads the country directory and exchange rates, then builds parity pricing
tables on demand. Kept separate from routes and the CLI so both share one
loading and pricing path.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

import pandas as pd

from src.pricing.models import PricingRow
from src.pricing.parity_engine import ParityEngine, coerce_base_amount
from src.sources.country_directory import CountryDirectoryClient
from src.sources.exchange_rates import ExchangeRateClient
from src.sources.http_session import PricingSourceError
from src.utils.config_loader import AppConfig

logger = logging.getLogger(__name__)

TABLE_COLUMNS = [
    "country",
    "currency_code",
    "country_code",
    "parity_multiplier",
    "usd_to_local",
    "parity_reference_price",
    "local_price",
]


@dataclass
class PricingResult:
    """Result of a pricing table build."""

    base_amount: float
    reference_currency: str
    rows: list[PricingRow] = field(default_factory=list)
    loaded_at: datetime | None = None

    @property
    def count(self) -> int:
        return len(self.rows)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON responses."""
        return {
            "base_amount": self.base_amount,
            "reference_currency": self.reference_currency,
            "count": self.count,
            "loaded_at": self.loaded_at.isoformat() if self.loaded_at else None,
            "rows": [row.to_dict() for row in self.rows],
        }

    def to_dataframe(self) -> pd.DataFrame:
        """Convert rows to a DataFrame with a fixed column order."""
        return pd.DataFrame([row.to_dict() for row in self.rows], columns=TABLE_COLUMNS)


class PricingService:
    """
    Service for building parity pricing tables from live source data.

    Handles:
    - Concurrent loading of the country list and the rate table
    - Keeping the last successful load for repeated table builds
    - Recording the last load error for display
    """

    def __init__(
        self,
        app_config: AppConfig,
        countries_client: CountryDirectoryClient | None = None,
        rates_client: ExchangeRateClient | None = None,
    ):
        """
        Initialize pricing service.

        Args:
            app_config: Application configuration.
            countries_client: Country directory client (created from config if None).
            rates_client: Exchange rate client (created from config if None).
        """
        self.app_config = app_config
        self.countries_client = countries_client or CountryDirectoryClient(app_config)
        self.rates_client = rates_client or ExchangeRateClient(app_config)
        self.engine = ParityEngine(reference_currency=app_config.parity.reference_currency)
        self.loaded_at: datetime | None = None
        self.load_error: str | None = None
        self._lock = threading.Lock()
        self.logger = logging.getLogger(f"{__name__}.PricingService")

    @property
    def is_loaded(self) -> bool:
        return self.loaded_at is not None

    def load(self) -> None:
        """
        Fetch the country list and rate table concurrently.

        Both sources must succeed; the engine keeps its previous data otherwise.

        Raises:
            PricingSourceError: If either source fails.
        """
        with self._lock:
            with ThreadPoolExecutor(max_workers=2, thread_name_prefix="parity-load") as pool:
                countries_future = pool.submit(self.countries_client.fetch_countries)
                rates_future = pool.submit(self.rates_client.fetch_rates)

                try:
                    countries = countries_future.result()
                    rates = rates_future.result()
                except PricingSourceError as e:
                    self.load_error = e.message
                    self.logger.error(f"Source load failed ({e.source}): {e.cause or e.message}")
                    raise

            self.engine.update(countries, rates)
            self.loaded_at = datetime.now(timezone.utc)
            self.load_error = None

    def ensure_loaded(self) -> None:
        """Load source data if no successful load has happened yet."""
        if not self.is_loaded:
            self.load()

    def build_table(self, base_amount: Any) -> PricingResult:
        """
        Build the pricing table for a base amount.

        Args:
            base_amount: Base price in the reference currency. Invalid input prices at 0.

        Returns:
            PricingResult with rows sorted by country name.

        Raises:
            PricingSourceError: If source data has never been loaded and loading fails.
        """
        self.ensure_loaded()
        amount = coerce_base_amount(base_amount)
        rows = self.engine.build(amount)
        self.logger.debug(f"Built pricing table: base={amount}, rows={len(rows)}")
        return PricingResult(
            base_amount=amount,
            reference_currency=self.engine.reference_currency,
            rows=rows,
            loaded_at=self.loaded_at,
        )
