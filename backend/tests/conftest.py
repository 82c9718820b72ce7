from unittest.mock import AsyncMock, MagicMock

import pytest

TEST_JWT_SECRET = "test-secret-key-for-unit-tests-must-be-32-chars"


# ── Patch settings before any other import ──────────────────────────────────
@pytest.fixture(autouse=True)
def _patch_settings(monkeypatch):
    monkeypatch.setenv("JWT_SECRET_KEY", TEST_JWT_SECRET)
    from roxinho_shop.core.config import settings
    monkeypatch.setattr(settings, "jwt_secret_key", TEST_JWT_SECRET)
    monkeypatch.setattr(settings, "scraper_timeout_seconds", 10.0)
    monkeypatch.setattr(settings, "mercadolivre_api_base", "https://api.mercadolibre.com")
    monkeypatch.setattr(settings, "placeholder_image_url", "https://via.placeholder.com/400?text=Product")


@pytest.fixture
def mock_db():
    """Create a mock async database session."""
    db = AsyncMock()
    db.flush = AsyncMock()
    db.refresh = AsyncMock()
    db.add = MagicMock()
    db.delete = AsyncMock()
    db.get = AsyncMock(return_value=None)
    db.execute = AsyncMock()
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    return db


@pytest.fixture
def app_settings():
    from roxinho_shop.core.config import settings
    return settings
