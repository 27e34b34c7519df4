"""
FastAPI routes for the Pricing Parity web application.

Handles:
- Main page with base price input and the parity pricing table
- JSON pricing table API
- Source data refresh
- CSV/Excel download of the table
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse, Response
from fastapi.templating import Jinja2Templates

from src.exporter.pricing_table_exporter import generate_filename, pricing_table_to_bytes
from src.services.pricing_service import PricingResult, PricingService
from src.sources.http_session import PricingSourceError
from src.utils.config_loader import AppConfig, load_config
from src.webapp.exceptions import ExternalAPIError, ValidationError
from src.webapp.helpers import format_results_for_display
from src.webapp.schemas import PricingTableResponse, RefreshResponse

logger = logging.getLogger(__name__)

# Project root directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

templates_dir = PROJECT_ROOT / "templates"
templates = Jinja2Templates(directory=str(templates_dir))

router = APIRouter()

EXPORT_MEDIA_TYPES = {
    "csv": "text/csv",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}


@lru_cache()
def get_app_config() -> AppConfig:
    """Get cached application config."""
    return load_config()


@lru_cache()
def get_pricing_service() -> PricingService:
    """Get the process-wide pricing service."""
    return PricingService(get_app_config())


def resolve_base_amount(raw: Optional[str], config: AppConfig) -> Any:
    """Use the configured default when no base amount was given."""
    if raw is None:
        return config.parity.default_base_amount
    return raw


def build_table_or_raise(service: PricingService, base_amount: Any) -> PricingResult:
    """Build the pricing table, mapping source failures to a 502."""
    try:
        return service.build_table(base_amount)
    except PricingSourceError as e:
        raise ExternalAPIError(e.message, api_name=e.source, cause=e.cause) from e


@router.get("/", response_class=HTMLResponse)
def index(
    request: Request,
    base_amount: Optional[str] = Query(None),
    config: AppConfig = Depends(get_app_config),
    service: PricingService = Depends(get_pricing_service),
) -> HTMLResponse:
    """Main page with the base price input and pricing table."""
    raw_amount = resolve_base_amount(base_amount, config)
    rows: list[dict[str, Any]] = []
    load_error = None

    try:
        result = service.build_table(raw_amount)
        rows = format_results_for_display(result)
    except PricingSourceError as e:
        load_error = e.message

    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "title": config.web.title,
            "reference_currency": config.parity.reference_currency,
            "base_amount": raw_amount,
            "rows": rows,
            "load_error": load_error,
        },
    )


@router.get("/api/pricing", response_model=PricingTableResponse)
def get_pricing_table(
    base_amount: Optional[str] = Query(None, description="Base price in the reference currency"),
    config: AppConfig = Depends(get_app_config),
    service: PricingService = Depends(get_pricing_service),
) -> dict[str, Any]:
    """Get the parity pricing table as JSON."""
    result = build_table_or_raise(service, resolve_base_amount(base_amount, config))
    return result.to_dict()


@router.post("/api/pricing/refresh", response_model=RefreshResponse)
def refresh_sources(
    service: PricingService = Depends(get_pricing_service),
) -> RefreshResponse:
    """Reload the country list and exchange rates."""
    try:
        service.load()
    except PricingSourceError as e:
        raise ExternalAPIError(e.message, api_name=e.source, cause=e.cause) from e

    return RefreshResponse(
        status="ok",
        countries=len(service.engine.countries),
        rates=len(service.engine.rate_table),
        loaded_at=service.loaded_at,
    )


@router.get("/api/pricing/export")
def export_pricing_table(
    base_amount: Optional[str] = Query(None),
    fmt: str = Query("csv", alias="format"),
    config: AppConfig = Depends(get_app_config),
    service: PricingService = Depends(get_pricing_service),
) -> Response:
    """Download the pricing table as CSV or Excel."""
    fmt = fmt.lower()
    if fmt not in EXPORT_MEDIA_TYPES:
        raise ValidationError(
            f"Unsupported export format: {fmt}",
            details={"supported": sorted(EXPORT_MEDIA_TYPES)},
        )

    result = build_table_or_raise(service, resolve_base_amount(base_amount, config))
    content = pricing_table_to_bytes(result.to_dataframe(), fmt)
    filename = generate_filename(fmt=fmt)

    return Response(
        content=content,
        media_type=EXPORT_MEDIA_TYPES[fmt],
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
