"""
Tests for the country directory and exchange rate clients.
"""

from unittest.mock import Mock

import pytest
import requests
import responses

from src.sources.country_directory import CountryDirectoryClient, CountryDirectoryError
from src.sources.exchange_rates import ExchangeRateClient, ExchangeRateError
from src.sources.http_session import PricingSourceError, create_session
from src.utils.config_loader import AppConfig
from tests.fixtures.source_mocks import (
    RATES_ENDPOINT,
    add_countries_error_mock,
    add_countries_mock,
    add_rates_connection_error_mock,
    add_rates_mock,
)


@pytest.fixture
def config() -> AppConfig:
    """Create test configuration."""
    return AppConfig()


class TestCreateSession:
    """Tests for the shared session factory."""

    def test_session_has_retry_adapter(self) -> None:
        """Test retries are configured on https."""
        session = create_session(max_retries=5)
        adapter = session.get_adapter("https://example.com")
        assert adapter.max_retries.total == 5
        assert 503 in adapter.max_retries.status_forcelist


class TestCountryDirectoryClient:
    """Tests for CountryDirectoryClient."""

    @responses.activate
    def test_fetch_countries_filters_invalid(self, config: AppConfig) -> None:
        """Test invalid directory entries are dropped."""
        add_countries_mock()
        client = CountryDirectoryClient(config)

        countries = client.fetch_countries()

        assert [c.name for c in countries] == ["Germany", "Kenya", "United States", "Japan"]
        germany = countries[0]
        assert germany.currency_code == "EUR"
        assert germany.country_code == "DE"
        assert germany.region == "Europe"

    @responses.activate
    def test_http_error_raises(self, config: AppConfig) -> None:
        """Test a server error raises CountryDirectoryError."""
        add_countries_error_mock(500)
        client = CountryDirectoryClient(config)

        with pytest.raises(CountryDirectoryError) as exc_info:
            client.fetch_countries()

        assert exc_info.value.message == "Failed loading country list"
        assert exc_info.value.source == "countries"
        assert "500" in exc_info.value.cause

    @responses.activate
    def test_non_list_payload_raises(self, config: AppConfig) -> None:
        """Test an unexpected payload shape raises."""
        add_countries_mock(entries={"message": "not a list"})
        client = CountryDirectoryClient(config)

        with pytest.raises(CountryDirectoryError):
            client.fetch_countries()

    def test_timeout_raises(self, config: AppConfig) -> None:
        """Test a timeout is converted to CountryDirectoryError."""
        session = Mock()
        session.get.side_effect = requests.exceptions.Timeout("slow")
        client = CountryDirectoryClient(config, session=session)

        with pytest.raises(CountryDirectoryError) as exc_info:
            client.fetch_raw()

        assert "timed out" in exc_info.value.cause
        session.get.assert_called_once_with(config.sources.countries_url, timeout=10)

    def test_error_is_source_error(self) -> None:
        """Test the error hierarchy."""
        assert issubclass(CountryDirectoryError, PricingSourceError)


class TestExchangeRateClient:
    """Tests for ExchangeRateClient."""

    def test_url_uses_reference_currency(self, config: AppConfig) -> None:
        """Test the rates URL is built from the reference currency."""
        client = ExchangeRateClient(config)
        assert client.url == RATES_ENDPOINT

    @responses.activate
    def test_fetch_rates(self, config: AppConfig) -> None:
        """Test successful rate fetch."""
        add_rates_mock()
        client = ExchangeRateClient(config)

        rates = client.fetch_rates()

        assert rates["USD"] == 1.0
        assert rates["EUR"] == 0.9
        assert rates["KES"] == 130.0

    @responses.activate
    def test_reference_rate_pinned(self, config: AppConfig) -> None:
        """Test a conflicting USD value from the source is ignored."""
        add_rates_mock(payload={"result": "success", "rates": {"USD": 3.0, "EUR": 0.9}})
        client = ExchangeRateClient(config)

        assert client.fetch_rates()["USD"] == 1.0

    @responses.activate
    def test_reference_injected_when_missing(self, config: AppConfig) -> None:
        """Test USD is present even if the source omits it."""
        add_rates_mock(payload={"result": "success", "rates": {"EUR": 0.9}})
        client = ExchangeRateClient(config)

        assert client.fetch_rates()["USD"] == 1.0

    @responses.activate
    def test_error_result_raises(self, config: AppConfig) -> None:
        """Test an error result in the payload raises."""
        add_rates_mock(payload={"result": "error", "error-type": "unsupported-code"})
        client = ExchangeRateClient(config)

        with pytest.raises(ExchangeRateError) as exc_info:
            client.fetch_rates()

        assert "unsupported-code" in exc_info.value.cause

    @responses.activate
    def test_missing_rates_raises(self, config: AppConfig) -> None:
        """Test a payload without rates raises."""
        add_rates_mock(payload={"result": "success"})
        client = ExchangeRateClient(config)

        with pytest.raises(ExchangeRateError):
            client.fetch_rates()

    @responses.activate
    def test_connection_error_raises(self, config: AppConfig) -> None:
        """Test a connection failure raises ExchangeRateError."""
        add_rates_connection_error_mock()
        client = ExchangeRateClient(config)

        with pytest.raises(ExchangeRateError) as exc_info:
            client.fetch_rates()

        assert exc_info.value.message == "Failed loading exchange rates"
        assert exc_info.value.source == "rates"

    @responses.activate
    def test_invalid_json_raises(self, config: AppConfig) -> None:
        """Test a non-JSON body raises ExchangeRateError."""
        responses.add(responses.GET, RATES_ENDPOINT, body="<html>oops</html>", status=200)
        client = ExchangeRateClient(config)

        with pytest.raises(ExchangeRateError):
            client.fetch_rates()
