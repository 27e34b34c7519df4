"""
Pricing table exporter module.

Writes parity pricing tables to CSV or Excel files.
"""

import io
import logging
from datetime import datetime
from pathlib import Path

import pandas as pd

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ("csv", "xlsx")

DISPLAY_COLUMNS = {
    "country": "Country",
    "currency_code": "Currency",
    "country_code": "Country Code",
    "parity_multiplier": "Parity Multiplier",
    "usd_to_local": "Exchange Rate",
    "parity_reference_price": "Price (USD)",
    "local_price": "Price (Local Currency)",
}


def generate_filename(prefix: str = "parity_prices", fmt: str = "csv") -> str:
    """
    Generate a timestamped filename for the export.

    Args:
        prefix: Filename prefix.
        fmt: File extension without the dot.

    Returns:
        str: Filename with timestamp.
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"{prefix}_{timestamp}.{fmt}"


def to_display_frame(df: pd.DataFrame) -> pd.DataFrame:
    """Rename table columns to their display headers."""
    return df.rename(columns=DISPLAY_COLUMNS)


def write_pricing_table(df: pd.DataFrame, output_path: Path) -> Path:
    """
    Write a pricing table to disk.

    The format is taken from the file extension (.csv or .xlsx).

    Args:
        df: Pricing table as returned by PricingResult.to_dataframe().
        output_path: Destination file.

    Returns:
        Path: Path to the created file.

    Raises:
        ValueError: If the extension is not supported.
    """
    output_path = Path(output_path)
    fmt = output_path.suffix.lower().lstrip(".")
    if fmt not in SUPPORTED_FORMATS:
        raise ValueError(f"Unsupported export format: {output_path.suffix!r}. Use .csv or .xlsx")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    display_df = to_display_frame(df)

    if fmt == "xlsx":
        display_df.to_excel(output_path, index=False, engine="openpyxl", sheet_name="Prices")
    else:
        display_df.to_csv(output_path, index=False)

    logger.info(f"Exported {len(df)} rows to {output_path}")
    return output_path


def pricing_table_to_bytes(df: pd.DataFrame, fmt: str = "csv") -> bytes:
    """
    Serialize a pricing table for download.

    Args:
        df: Pricing table.
        fmt: "csv" or "xlsx".

    Returns:
        bytes: File contents.
    """
    if fmt not in SUPPORTED_FORMATS:
        raise ValueError(f"Unsupported export format: {fmt!r}")

    display_df = to_display_frame(df)
    if fmt == "xlsx":
        buffer = io.BytesIO()
        display_df.to_excel(buffer, index=False, engine="openpyxl", sheet_name="Prices")
        return buffer.getvalue()
    return display_df.to_csv(index=False).encode("utf-8")
