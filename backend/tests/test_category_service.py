"""Tests for storefront category seeding and lookup."""
from unittest.mock import AsyncMock, MagicMock

import pytest

from roxinho_shop.core.exceptions import BadRequestError, ConflictError, NotFoundError
from roxinho_shop.models.dto.category import CategoryCreate
from roxinho_shop.models.orm.category import Category
from roxinho_shop.services import category_service
from roxinho_shop.services.category_classifier import CategoryId
from tests.factories import make_category


def _ids_result(ids):
    result = MagicMock()
    result.scalars.return_value.all.return_value = ids
    return result


class TestSeedDefaults:
    @pytest.mark.asyncio
    async def test_seeds_all_on_empty_table(self, mock_db):
        mock_db.execute = AsyncMock(return_value=_ids_result([]))
        created = await category_service.seed_defaults(mock_db)
        assert created == len(CategoryId)
        added = [call.args[0] for call in mock_db.add.call_args_list]
        assert all(isinstance(c, Category) for c in added)
        assert sorted(c.id for c in added) == [int(c) for c in CategoryId]
        mock_db.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_idempotent(self, mock_db):
        mock_db.execute = AsyncMock(return_value=_ids_result([int(c) for c in CategoryId]))
        created = await category_service.seed_defaults(mock_db)
        assert created == 0
        mock_db.add.assert_not_called()
        mock_db.flush.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_only_missing_added(self, mock_db):
        mock_db.execute = AsyncMock(return_value=_ids_result([1, 2, 3]))
        created = await category_service.seed_defaults(mock_db)
        assert created == len(CategoryId) - 3
        added_ids = {call.args[0].id for call in mock_db.add.call_args_list}
        assert added_ids.isdisjoint({1, 2, 3})

    def test_every_classifier_category_has_a_row(self):
        assert {int(c[0]) for c in category_service.DEFAULT_CATEGORIES} == {int(c) for c in CategoryId}

    def test_slugs_unique(self):
        slugs = [c[2] for c in category_service.DEFAULT_CATEGORIES]
        assert len(slugs) == len(set(slugs))


class TestLookup:
    @pytest.mark.asyncio
    async def test_get_by_slug(self, mock_db):
        result = MagicMock()
        result.scalar_one_or_none.return_value = make_category()
        mock_db.execute = AsyncMock(return_value=result)
        category = await category_service.get_by_slug(mock_db, "perifericos")
        assert category.id == 2

    @pytest.mark.asyncio
    async def test_get_by_slug_missing(self, mock_db):
        result = MagicMock()
        result.scalar_one_or_none.return_value = None
        mock_db.execute = AsyncMock(return_value=result)
        with pytest.raises(NotFoundError):
            await category_service.get_by_slug(mock_db, "nope")

    @pytest.mark.asyncio
    async def test_ensure_exists_missing(self, mock_db):
        with pytest.raises(NotFoundError) as exc_info:
            await category_service.ensure_exists(mock_db, 42)
        assert exc_info.value.detail == "Categoria não encontrada."


def _scalar(value):
    result = MagicMock()
    result.scalar.return_value = value
    result.scalar_one_or_none.return_value = value
    return result


class TestAdminCrud:
    @pytest.mark.asyncio
    async def test_create_continues_after_highest_id(self, mock_db):
        mock_db.execute = AsyncMock(side_effect=[_scalar(None), _scalar(12)])
        body = CategoryCreate(name="Acessórios", slug="acessorios", icon="plug")
        category = await category_service.create(mock_db, body)
        assert category.id == 13
        assert category.slug == "acessorios"
        assert category.is_active is True
        mock_db.add.assert_called_once_with(category)
        mock_db.refresh.assert_awaited_once_with(category)

    @pytest.mark.asyncio
    async def test_create_never_reuses_fixed_ids(self, mock_db):
        mock_db.execute = AsyncMock(side_effect=[_scalar(None), _scalar(None)])
        category = await category_service.create(
            mock_db, CategoryCreate(name="Acessórios", slug="acessorios"),
        )
        assert category.id == max(int(c) for c in CategoryId) + 1

    @pytest.mark.asyncio
    async def test_create_duplicate_slug(self, mock_db):
        mock_db.execute = AsyncMock(return_value=_scalar(2))
        with pytest.raises(ConflictError) as exc_info:
            await category_service.create(
                mock_db, CategoryCreate(name="Periféricos 2", slug="perifericos"),
            )
        assert exc_info.value.status_code == 409
        mock_db.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_fields(self, mock_db):
        category = make_category(category_id=11, name="Acessórios", slug="acessorios")
        mock_db.get = AsyncMock(return_value=category)
        mock_db.execute = AsyncMock(return_value=_scalar(None))
        updated = await category_service.update(
            mock_db, 11, {"name": "Acessórios e Cabos", "slug": "acessorios-cabos", "icon": None},
        )
        assert updated.name == "Acessórios e Cabos"
        assert updated.slug == "acessorios-cabos"
        mock_db.refresh.assert_awaited_once_with(category)

    @pytest.mark.asyncio
    async def test_update_to_taken_slug(self, mock_db):
        mock_db.get = AsyncMock(return_value=make_category(category_id=11, slug="acessorios"))
        mock_db.execute = AsyncMock(return_value=_scalar(2))
        with pytest.raises(ConflictError):
            await category_service.update(mock_db, 11, {"slug": "perifericos"})

    @pytest.mark.asyncio
    async def test_update_missing(self, mock_db):
        with pytest.raises(NotFoundError):
            await category_service.update(mock_db, 99, {"name": "X"})

    @pytest.mark.asyncio
    async def test_fixed_category_cannot_be_deactivated(self, mock_db):
        category = make_category()
        mock_db.get = AsyncMock(return_value=category)
        with pytest.raises(BadRequestError):
            await category_service.deactivate(mock_db, 2)
        assert category.is_active is True

    @pytest.mark.asyncio
    async def test_deactivate_with_active_products(self, mock_db):
        category = make_category(category_id=11, slug="acessorios")
        mock_db.get = AsyncMock(return_value=category)
        mock_db.execute = AsyncMock(return_value=_scalar(3))
        with pytest.raises(BadRequestError) as exc_info:
            await category_service.deactivate(mock_db, 11)
        assert "3 produto(s)" in exc_info.value.detail
        assert category.is_active is True

    @pytest.mark.asyncio
    async def test_deactivate(self, mock_db):
        category = make_category(category_id=11, slug="acessorios")
        mock_db.get = AsyncMock(return_value=category)
        mock_db.execute = AsyncMock(return_value=_scalar(0))
        await category_service.deactivate(mock_db, 11)
        assert category.is_active is False
        mock_db.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_deactivate_through_update(self, mock_db):
        category = make_category(category_id=11, slug="acessorios")
        mock_db.get = AsyncMock(return_value=category)
        mock_db.execute = AsyncMock(return_value=_scalar(1))
        with pytest.raises(BadRequestError):
            await category_service.update(mock_db, 11, {"is_active": False})
