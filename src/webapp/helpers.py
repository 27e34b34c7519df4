"""
Helper utilities for the Pricing Parity web application.

Display formatting for prices and multipliers. The engine returns plain
numbers; currency symbols and grouping are applied here only.
"""

import logging
from typing import Any

from src.services.pricing_service import PricingResult

logger = logging.getLogger(__name__)


# =============================================================================
# Currency Formatting
# =============================================================================

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "CNY": "CN¥",
    "INR": "₹",
    "KRW": "₩",
    "BRL": "R$",
    "CAD": "CA$",
    "AUD": "A$",
    "NZD": "NZ$",
    "MXN": "MX$",
    "ILS": "₪",
    "VND": "₫",
    "PHP": "₱",
    "NGN": "₦",
}


def format_currency(value: float, currency: str) -> str:
    """
    Format an amount with its currency symbol (or code) and two decimals.

    Args:
        value: Amount to format.
        currency: ISO currency code.

    Returns:
        str: e.g. "$99.99", "€89.99", "KES 6,498.99".
    """
    symbol = CURRENCY_SYMBOLS.get(currency)
    amount = f"{value:,.2f}"
    if symbol:
        return f"{symbol}{amount}"
    return f"{currency} {amount}"


def format_multiplier(multiplier: float) -> str:
    """Format a parity multiplier, e.g. 0.75 -> "0.75x"."""
    return f"{multiplier:.2f}x"


def format_results_for_display(result: PricingResult) -> list[dict[str, Any]]:
    """
    Format a pricing result for the HTML table.

    Args:
        result: Pricing result from the service.

    Returns:
        List of dicts with display strings for each column.
    """
    return [
        {
            "country": row.country,
            "currency": row.currency_code,
            "multiplier": format_multiplier(row.parity_multiplier),
            "reference_price": format_currency(
                row.parity_reference_price, result.reference_currency
            ),
            "local_price": format_currency(row.local_price, row.currency_code),
        }
        for row in result.rows
    ]
