"""
Pydantic models for API responses in the web application.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class PricingRowSchema(BaseModel):
    """One country's parity prices."""

    country: str
    currency_code: str
    country_code: str
    parity_multiplier: float = Field(..., gt=0, le=1.0)
    usd_to_local: float = Field(..., gt=0)
    parity_reference_price: float = Field(..., ge=0)
    local_price: float = Field(..., ge=0)


class PricingTableResponse(BaseModel):
    """Response model for the pricing table endpoint."""

    base_amount: float = Field(..., ge=0, description="Base amount after coercion")
    reference_currency: str
    count: int = Field(0, ge=0)
    loaded_at: Optional[datetime] = None
    rows: List[PricingRowSchema] = Field(default_factory=list)


class RefreshResponse(BaseModel):
    """Response model for reloading source data."""

    status: str = "ok"
    countries: int = Field(0, ge=0)
    rates: int = Field(0, ge=0)
    loaded_at: Optional[datetime] = None
