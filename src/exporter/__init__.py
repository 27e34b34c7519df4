"""
Pricing table export module.

Handles writing parity pricing tables to CSV and Excel files.
"""

from src.exporter.pricing_table_exporter import (
    generate_filename,
    pricing_table_to_bytes,
    write_pricing_table,
)

__all__ = [
    "generate_filename",
    "pricing_table_to_bytes",
    "write_pricing_table",
]
