"""
Shared HTTP plumbing for the data source clients.

Provides a requests session with retry logic and a JSON fetch helper that
converts transport failures into source errors.
"""

import logging
from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

logger = logging.getLogger(__name__)


class PricingSourceError(Exception):
    """Base exception for country directory and exchange rate failures."""

    def __init__(self, message: str, source: str, cause: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.source = source
        self.cause = cause


def create_session(max_retries: int = 3, backoff_factor: float = 0.5) -> requests.Session:
    """
    Create a requests session with retry logic.

    Args:
        max_retries: Total retry attempts for transient failures.
        backoff_factor: Exponential backoff factor between retries.

    Returns:
        requests.Session: Configured session object.
    """
    session = requests.Session()

    retry_strategy = Retry(
        total=max_retries,
        backoff_factor=backoff_factor,
        status_forcelist=[429, 502, 503, 504],
        allowed_methods=["GET"],
    )

    adapter = HTTPAdapter(max_retries=retry_strategy)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    session.headers.update({"Accept": "application/json"})

    return session


def fetch_json(
    session: requests.Session,
    url: str,
    timeout: float,
    error_cls: type[PricingSourceError],
    error_message: str,
) -> Any:
    """
    GET a URL and decode its JSON body.

    Args:
        session: Session to issue the request with.
        url: Absolute URL.
        timeout: Request timeout in seconds.
        error_cls: Source error type to raise on failure.
        error_message: Message for the raised error.

    Returns:
        Decoded JSON payload.

    Raises:
        PricingSourceError: If the request fails or the body is not JSON.
    """
    logger.info(f"Fetching {url}")

    try:
        response = session.get(url, timeout=timeout)
        response.raise_for_status()
        return response.json()

    except requests.exceptions.Timeout as e:
        cause = f"Request timed out after {timeout}s"
        logger.warning(f"{error_message}: {cause}")
        raise error_cls(error_message, cause=cause) from e

    except requests.exceptions.ConnectionError as e:
        cause = f"Connection error: {e}"
        logger.warning(f"{error_message}: {cause}")
        raise error_cls(error_message, cause=cause) from e

    except requests.exceptions.HTTPError as e:
        cause = f"HTTP error: {e}"
        logger.warning(f"{error_message}: {cause}")
        raise error_cls(error_message, cause=cause) from e

    except requests.exceptions.RequestException as e:
        cause = f"Request failed: {e}"
        logger.warning(f"{error_message}: {cause}")
        raise error_cls(error_message, cause=cause) from e

    except ValueError as e:
        cause = f"Invalid JSON response: {e}"
        logger.warning(f"{error_message}: {cause}")
        raise error_cls(error_message, cause=cause) from e
