"""Tests for the recently viewed products list."""
import uuid
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from roxinho_shop.core.exceptions import NotFoundError
from roxinho_shop.models.orm.product_view import ProductView
from roxinho_shop.services import history_service
from tests.factories import make_product


def _first(entry):
    result = MagicMock()
    result.scalars.return_value.first.return_value = entry
    return result


class TestRecordView:
    @pytest.mark.asyncio
    async def test_first_view_adds_entry(self, mock_db):
        product = make_product()
        mock_db.get = AsyncMock(return_value=product)
        mock_db.execute = AsyncMock(return_value=_first(None))

        entry = await history_service.record_view(mock_db, "user-1", product.id)

        assert isinstance(entry, ProductView)
        assert entry.user_id == "user-1"
        assert entry.product_id == product.id
        mock_db.add.assert_called_once_with(entry)
        mock_db.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_repeat_view_bumps_existing(self, mock_db):
        product = make_product()
        earlier = datetime.now(timezone.utc) - timedelta(hours=2)
        existing = ProductView(
            id=uuid.uuid4(), user_id="user-1", product_id=product.id, viewed_at=earlier,
        )
        mock_db.get = AsyncMock(return_value=product)
        mock_db.execute = AsyncMock(return_value=_first(existing))

        entry = await history_service.record_view(mock_db, "user-1", product.id)

        assert entry is existing
        assert entry.viewed_at > earlier
        mock_db.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_inactive_product_not_recorded(self, mock_db):
        mock_db.get = AsyncMock(return_value=make_product(is_active=False))
        with pytest.raises(NotFoundError):
            await history_service.record_view(mock_db, "user-1", uuid.uuid4())
        mock_db.add.assert_not_called()


class TestListAndClear:
    @pytest.mark.asyncio
    async def test_list_rows(self, mock_db):
        product = make_product()
        viewed_at = datetime(2026, 3, 1, tzinfo=timezone.utc)
        row = MagicMock(
            id=uuid.uuid4(), product_id=product.id, viewed_at=viewed_at,
            price_cents=product.price_cents, image_url=product.image_url,
        )
        row.name = product.name
        result = MagicMock()
        result.all.return_value = [row]
        mock_db.execute = AsyncMock(return_value=result)

        items = await history_service.list_history(mock_db, "user-1")

        assert items == [{
            "id": row.id,
            "product_id": product.id,
            "viewed_at": viewed_at,
            "product_name": "Teclado Mecânico",
            "price_cents": 19990,
            "image_url": product.image_url,
        }]

    @pytest.mark.asyncio
    async def test_clear(self, mock_db):
        result = MagicMock()
        result.rowcount = 4
        mock_db.execute = AsyncMock(return_value=result)
        assert await history_service.clear_history(mock_db, "user-1") == 4
