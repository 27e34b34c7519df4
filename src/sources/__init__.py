"""
Data source clients.

Provides clients for the country directory and the exchange rate source
that feed the parity pricing engine.
"""

from src.sources.country_directory import CountryDirectoryClient, CountryDirectoryError
from src.sources.exchange_rates import ExchangeRateClient, ExchangeRateError
from src.sources.http_session import PricingSourceError

__all__ = [
    "CountryDirectoryClient",
    "CountryDirectoryError",
    "ExchangeRateClient",
    "ExchangeRateError",
    "PricingSourceError",
]
