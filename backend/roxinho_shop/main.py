import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from roxinho_shop.core.config import settings
from roxinho_shop.core.logging import setup_logging

setup_logging(settings.log_level)

from roxinho_shop.api.dependencies.database import async_session_factory
from roxinho_shop.api.middleware.cors import setup_cors
from roxinho_shop.api.middleware.request_id import RequestIdMiddleware
from roxinho_shop.api.middleware.security_headers import SecurityHeadersMiddleware
from roxinho_shop.api.routes import (
    categories,
    health,
    history,
    product_scraper,
    products,
    reviews,
)
from roxinho_shop.services.category_service import seed_defaults

logger = logging.getLogger(__name__)

try:
    settings.validate_secrets()
except ValueError as e:
    logger.critical("Secret validation failed: %s", e)
    raise SystemExit(f"FATAL: {e}") from e


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    async with async_session_factory() as db:
        try:
            await seed_defaults(db)
            await db.commit()
        except Exception:
            logger.exception("Failed to seed default categories at startup")
    yield


app = FastAPI(
    title="Roxinho Shop API",
    version=settings.app_version,
    lifespan=lifespan,
)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )


setup_cors(app, settings)
app.add_middleware(
    SecurityHeadersMiddleware,
    max_body_bytes=settings.max_request_body_bytes,
    hsts_max_age=settings.hsts_max_age_seconds,
)
app.add_middleware(RequestIdMiddleware)

app.include_router(health.router, prefix="/api")
app.include_router(categories.router, prefix="/api")
app.include_router(products.router, prefix="/api")
app.include_router(product_scraper.router, prefix="/api")
app.include_router(reviews.router, prefix="/api")
app.include_router(history.router, prefix="/api")


@app.get("/")
async def root():
    return {
        "message": "Roxinho Shop API está funcionando!",
        "version": settings.app_version,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "endpoints": {
            "health": "/api/health",
            "products": "/api/products",
            "categories": "/api/categories",
            "productScraper": "/api/product-scraper",
            "reviews": "/api/reviews",
            "history": "/api/history",
        },
    }
