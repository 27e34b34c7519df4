"""
FastAPI application entry point for the Pricing Parity Calculator.

Run with:
    uvicorn src.webapp.main:app --reload

Open: http://127.0.0.1:8000
"""

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from src.services.pricing_service import PricingService
from src.utils.config_loader import load_config, load_env
from src.utils.logging_config import setup_logging
from src.webapp.exceptions import AppException
from src.webapp.routes import get_pricing_service, router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    load_env()
    config = load_config()
    setup_logging(
        level=config.logging.level,
        log_format=config.logging.format,
        log_file=config.logging.log_file,
    )

    logger.info("Pricing Parity Calculator - Web App starting...")
    yield
    logger.info("Pricing Parity Calculator - Web App shutting down...")


app = FastAPI(
    title="Pricing Parity Calculator",
    description="Purchasing-power adjusted prices by country from one USD base price",
    version="1.0.0",
    lifespan=lifespan,
)


@app.middleware("http")
async def error_handling_middleware(request: Request, call_next):
    """Global error handling middleware."""
    start_time = time.time()
    try:
        response = await call_next(request)
        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)
        return response
    except Exception as e:
        process_time = time.time() - start_time
        logger.exception(f"Unhandled error processing {request.url.path}: {e}")
        return JSONResponse(
            status_code=500,
            content={
                "error": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "details": {"path": str(request.url.path)},
            },
            headers={"X-Process-Time": str(process_time)},
        )


@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Render application errors as JSON."""
    logger.warning(f"{exc.error_code} on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.get("/health/simple")
async def simple_health_check() -> dict[str, Any]:
    """Simple health check for load balancers."""
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@app.get("/health/ready")
async def readiness_check(
    service: PricingService = Depends(get_pricing_service),
) -> dict[str, Any]:
    """Readiness check - reports whether source data has been loaded."""
    return {
        "status": "ready" if service.is_loaded else "not_loaded",
        "loaded_at": service.loaded_at.isoformat() if service.loaded_at else None,
        "load_error": service.load_error,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


app.include_router(router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("src.webapp.main:app", host="127.0.0.1", port=8000, reload=True)
