import logging
from urllib.parse import urlparse

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from roxinho_shop.core.config import Settings

logger = logging.getLogger(__name__)


def normalize_origins(origins: list[str]) -> list[str]:
    """Validate configured origins and reduce them to ``scheme://host[:port]``.

    Browsers send the Origin header without a path or trailing slash, so a
    configured ``https://shop.example/`` would otherwise never match.
    """
    normalized: list[str] = []
    for origin in origins:
        # Credentials are allowed, which browsers refuse to combine with "*"
        if origin == "*":
            raise ValueError("Wildcard CORS origin is not allowed")
        parsed = urlparse(origin)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"Invalid CORS origin: {origin!r}")
        value = f"{parsed.scheme}://{parsed.netloc.lower()}"
        if value not in normalized:
            normalized.append(value)
    return normalized


def setup_cors(app: FastAPI, settings: Settings) -> None:
    origins = normalize_origins(settings.cors_origins_list)
    logger.info("CORS enabled for %s", ", ".join(origins) or "no origins")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
        max_age=3600,
    )
