"""
Configuration loader module.

Loads application configuration from YAML files and environment variables.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_COUNTRIES_URL = "https://restcountries.com/v3.1/all?fields=name,currencies,region,cca2"
DEFAULT_RATES_URL = "https://open.er-api.com/v6/latest/{currency}"


@dataclass
class ParityConfig:
    """Parity pricing configuration."""

    reference_currency: str = "USD"
    default_base_amount: float = 99.0


@dataclass
class SourcesConfig:
    """Country directory and exchange rate source configuration."""

    countries_url: str = DEFAULT_COUNTRIES_URL
    rates_url: str = DEFAULT_RATES_URL
    timeout_seconds: int = 10
    max_retries: int = 3


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "text"
    log_file: str | None = None


@dataclass
class WebConfig:
    """Web application configuration."""

    title: str = "Pricing Parity Calculator"


@dataclass
class AppConfig:
    """
    Main application configuration.

    Aggregates all configuration sections into a single object.
    """

    parity: ParityConfig = field(default_factory=ParityConfig)
    sources: SourcesConfig = field(default_factory=SourcesConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    web: WebConfig = field(default_factory=WebConfig)


def load_env(env_file: Path = Path(".env")) -> None:
    """
    Load environment variables from .env file.

    Args:
        env_file: Path to .env file.
    """
    if env_file.exists():
        load_dotenv(env_file)
        logger.debug(f"Loaded environment from: {env_file}")
    else:
        logger.debug(f"No .env file found at: {env_file}")


def load_config(config_file: Path = Path("config/config.yaml")) -> AppConfig:
    """
    Load application configuration from YAML file.

    Environment overrides are applied on top of the file (or the defaults).

    Args:
        config_file: Path to configuration YAML file.

    Returns:
        AppConfig: Loaded configuration object.

    Raises:
        yaml.YAMLError: If config file is invalid.
    """
    config_file = Path(config_file)
    if not config_file.exists():
        logger.warning(f"Config file not found: {config_file}. Using defaults.")
        return apply_env_overrides(AppConfig())

    with open(config_file, encoding="utf-8") as f:
        raw_config = yaml.safe_load(f)

    if raw_config is None:
        return apply_env_overrides(AppConfig())

    config = _parse_config(raw_config)
    logger.info(f"Loaded configuration from: {config_file}")
    return apply_env_overrides(config)


def _parse_config(raw: dict[str, Any]) -> AppConfig:
    """
    Parse raw YAML dict into AppConfig dataclass.

    Args:
        raw: Raw dictionary from YAML file.

    Returns:
        AppConfig: Parsed configuration object.
    """
    parity_raw = raw.get("parity") or {}
    parity = ParityConfig(
        reference_currency=parity_raw.get("reference_currency", "USD"),
        default_base_amount=float(parity_raw.get("default_base_amount", 99.0)),
    )

    sources_raw = raw.get("sources") or {}
    sources = SourcesConfig(
        countries_url=sources_raw.get("countries_url", DEFAULT_COUNTRIES_URL),
        rates_url=sources_raw.get("rates_url", DEFAULT_RATES_URL),
        timeout_seconds=sources_raw.get("timeout_seconds", 10),
        max_retries=sources_raw.get("max_retries", 3),
    )

    logging_raw = raw.get("logging") or {}
    logging_config = LoggingConfig(
        level=logging_raw.get("level", "INFO"),
        format=logging_raw.get("format", "text"),
        log_file=logging_raw.get("log_file"),
    )

    web_raw = raw.get("web") or {}
    web = WebConfig(
        title=web_raw.get("title", "Pricing Parity Calculator"),
    )

    return AppConfig(
        parity=parity,
        sources=sources,
        logging=logging_config,
        web=web,
    )


def apply_env_overrides(config: AppConfig) -> AppConfig:
    """
    Apply environment variable overrides to a configuration.

    Supported: PARITY_COUNTRIES_URL, PARITY_RATES_URL, LOG_LEVEL, LOG_FORMAT.

    Args:
        config: Configuration to update in place.

    Returns:
        AppConfig: The same configuration object.
    """
    countries_url = get_env_var("PARITY_COUNTRIES_URL")
    if countries_url:
        config.sources.countries_url = countries_url

    rates_url = get_env_var("PARITY_RATES_URL")
    if rates_url:
        config.sources.rates_url = rates_url

    log_level = get_env_var("LOG_LEVEL")
    if log_level:
        config.logging.level = log_level

    log_format = get_env_var("LOG_FORMAT")
    if log_format:
        config.logging.format = log_format

    return config


def get_env_var(key: str, default: str | None = None) -> str | None:
    """
    Get an environment variable with optional default.

    Args:
        key: Environment variable name.
        default: Default value if not set.

    Returns:
        Environment variable value or default.
    """
    return os.environ.get(key, default)
