"""
Services layer for the Pricing Parity Calculator.

Contains business logic extracted from routes for better testability.
"""

from src.services.pricing_service import PricingResult, PricingService

__all__ = ["PricingService", "PricingResult"]
