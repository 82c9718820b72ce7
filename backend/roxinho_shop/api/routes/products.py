from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from roxinho_shop.api.dependencies.auth import TokenUser, require_admin
from roxinho_shop.api.dependencies.database import get_db
from roxinho_shop.api.routes.product_scraper import (
    EXTRACTION_REQUEST_BODY,
    FAILURE_RESPONSES,
    failure_response,
    get_extraction_service,
    read_extraction_request,
)
from roxinho_shop.core.exceptions import BadRequestError
from roxinho_shop.models.dto import DetailResponse
from roxinho_shop.models.dto.extraction import ExtractFromUrlRequest
from roxinho_shop.models.dto.product import (
    BrandFacet,
    ProductCreate,
    ProductImportResponse,
    ProductListResponse,
    ProductResponse,
    ProductUpdate,
)
from roxinho_shop.services import product_service
from roxinho_shop.services.extraction_service import ExtractionService

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=ProductListResponse)
async def list_products(
    q: str | None = Query(None, max_length=200),
    category: int | None = Query(None, ge=1),
    brand: str | None = Query(None, max_length=500),
    price_min: float | None = Query(None, ge=0),
    price_max: float | None = Query(None, ge=0),
    in_stock: bool = False,
    sort: str = "relevance",
    page: int = Query(1, ge=1),
    per_page: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
):
    if sort not in product_service.VALID_SORTS:
        raise BadRequestError(
            f"Ordenação inválida. Use uma de: {', '.join(sorted(product_service.VALID_SORTS))}"
        )
    return await product_service.search_products(
        db,
        q=q,
        category_id=category,
        brand=brand,
        price_min=price_min,
        price_max=price_max,
        in_stock=in_stock,
        sort=sort,
        page=page,
        per_page=per_page,
    )


@router.get("/brands", response_model=list[BrandFacet])
async def list_brands(db: AsyncSession = Depends(get_db)):
    return await product_service.list_brands(db)


@router.post(
    "/import-from-url",
    response_model=ProductImportResponse,
    status_code=201,
    responses=FAILURE_RESPONSES,
    openapi_extra=EXTRACTION_REQUEST_BODY,
)
async def import_from_url(
    body: ExtractFromUrlRequest = Depends(read_extraction_request),
    db: AsyncSession = Depends(get_db),
    service: ExtractionService = Depends(get_extraction_service),
    admin: TokenUser = Depends(require_admin),
):
    result = await service.extract_product(body.url)
    if not result.success:
        return failure_response(result.failure)
    product = await product_service.create_from_record(db, result.product)
    return ProductImportResponse(
        product=ProductResponse.model_validate(product),
        platform=result.platform.wire_label,
    )


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    return await product_service.get_active(db, product_id)


@router.get("/{product_id}/related", response_model=list[ProductResponse])
async def list_related_products(
    product_id: UUID,
    limit: int = Query(4, ge=1, le=20),
    db: AsyncSession = Depends(get_db),
):
    return await product_service.list_related(db, product_id, limit=limit)


@router.post("", response_model=ProductResponse, status_code=201)
async def create_product(
    body: ProductCreate,
    db: AsyncSession = Depends(get_db),
    admin: TokenUser = Depends(require_admin),
):
    return await product_service.create(db, body)


@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: UUID,
    body: ProductUpdate,
    db: AsyncSession = Depends(get_db),
    admin: TokenUser = Depends(require_admin),
):
    product, _ = await product_service.update(
        db, product_id, body.model_dump(exclude_unset=True),
    )
    return product


@router.delete("/{product_id}", response_model=DetailResponse)
async def delete_product(
    product_id: UUID,
    db: AsyncSession = Depends(get_db),
    admin: TokenUser = Depends(require_admin),
):
    await product_service.deactivate(db, product_id)
    return {"detail": "Produto desativado com sucesso!"}
