"""
Mock responses for the country directory and exchange rate sources.

Use with the `responses` library to mock HTTP requests in tests.
"""

import copy
from typing import Any, Dict, List, Optional

import requests
import responses

from src.utils.config_loader import DEFAULT_COUNTRIES_URL

COUNTRIES_ENDPOINT = DEFAULT_COUNTRIES_URL
RATES_ENDPOINT = "https://open.er-api.com/v6/latest/USD"

# Directory entries as returned by the country endpoint, including entries
# that must be dropped (no currency, no code, no name)
SAMPLE_COUNTRY_ENTRIES: List[Dict[str, Any]] = [
    {
        "name": {"common": "Germany", "official": "Federal Republic of Germany"},
        "currencies": {"EUR": {"name": "Euro", "symbol": "€"}},
        "region": "Europe",
        "cca2": "DE",
    },
    {
        "name": {"common": "Kenya"},
        "currencies": {"KES": {"name": "Kenyan shilling", "symbol": "Sh"}},
        "region": "Africa",
        "cca2": "KE",
    },
    {
        "name": {"common": "United States"},
        "currencies": {"USD": {"name": "United States dollar", "symbol": "$"}},
        "region": "Americas",
        "cca2": "US",
    },
    {
        "name": {"common": "Japan"},
        "currencies": {"JPY": {"name": "Japanese yen", "symbol": "¥"}},
        "region": "Asia",
        "cca2": "JP",
    },
    {
        "name": {"common": "Antarctica"},
        "currencies": {},
        "region": "Antarctic",
        "cca2": "AQ",
    },
    {
        "name": {"common": "Nowhere"},
        "currencies": {"XXX": {"name": "No currency"}},
        "region": "Europe",
    },
    {
        "currencies": {"EUR": {"name": "Euro"}},
        "region": "Europe",
        "cca2": "ZZ",
    },
]

SAMPLE_RATES: Dict[str, float] = {
    "USD": 1,
    "EUR": 0.90,
    "KES": 130,
    "JPY": 150.25,
}


def country_entries() -> List[Dict[str, Any]]:
    """Get a fresh copy of the sample directory entries."""
    return copy.deepcopy(SAMPLE_COUNTRY_ENTRIES)


def rates_payload(rates: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Build an open.er-api.com style success payload."""
    return {
        "result": "success",
        "base_code": "USD",
        "rates": dict(SAMPLE_RATES if rates is None else rates),
    }


def add_countries_mock(entries: Optional[List[Dict[str, Any]]] = None, status: int = 200):
    """
    Add a country directory mock response.

    Call this within a @responses.activate block.
    """
    responses.add(
        responses.GET,
        COUNTRIES_ENDPOINT,
        json=country_entries() if entries is None else entries,
        status=status,
    )


def add_rates_mock(payload: Optional[Dict[str, Any]] = None, status: int = 200):
    """
    Add an exchange rate mock response.

    Call this within a @responses.activate block.
    """
    responses.add(
        responses.GET,
        RATES_ENDPOINT,
        json=rates_payload() if payload is None else payload,
        status=status,
    )


def add_countries_error_mock(status_code: int = 500):
    """Add a country directory mock that returns an error status."""
    responses.add(
        responses.GET,
        COUNTRIES_ENDPOINT,
        json={"status": status_code, "message": "Internal server error"},
        status=status_code,
    )


def add_rates_connection_error_mock():
    """Add an exchange rate mock that simulates a connection failure."""
    responses.add(
        responses.GET,
        RATES_ENDPOINT,
        body=requests.exceptions.ConnectionError("Connection refused"),
    )
