from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from roxinho_shop.core.config import Settings, get_settings
from roxinho_shop.models.dto.extraction import (
    ExtractFromUrlRequest,
    ExtractFromUrlResponse,
    ExtractionErrorResponse,
    ExtractionFailure,
)
from roxinho_shop.services.extraction_service import ExtractionService

router = APIRouter(prefix="/product-scraper", tags=["product-scraper"])

FAILURE_RESPONSES = {
    400: {"model": ExtractionErrorResponse},
    500: {"model": ExtractionErrorResponse},
}

# The body is read by hand, so the schema is declared for the docs
EXTRACTION_REQUEST_BODY = {
    "requestBody": {
        "required": False,
        "content": {"application/json": {"schema": ExtractFromUrlRequest.model_json_schema()}},
    }
}


def get_extraction_service(settings: Settings = Depends(get_settings)) -> ExtractionService:
    return ExtractionService(settings)


async def read_extraction_request(request: Request) -> ExtractFromUrlRequest:
    """Parse the request body without FastAPI validation.

    Empty, malformed or non-object bodies become an empty request, which the
    pipeline rejects with its own 400 body.
    """
    try:
        payload = await request.json()
    except ValueError:
        payload = None
    if not isinstance(payload, dict):
        payload = {}
    return ExtractFromUrlRequest(url=payload.get("url"))


def failure_response(failure: ExtractionFailure) -> JSONResponse:
    body = ExtractionErrorResponse(message=failure.message, error=failure.error)
    return JSONResponse(
        status_code=failure.status_code,
        content=body.model_dump(exclude_none=True),
    )


@router.post(
    "/extract-from-url",
    response_model=ExtractFromUrlResponse,
    responses=FAILURE_RESPONSES,
    openapi_extra=EXTRACTION_REQUEST_BODY,
)
async def extract_from_url(
    body: ExtractFromUrlRequest = Depends(read_extraction_request),
    service: ExtractionService = Depends(get_extraction_service),
):
    result = await service.extract_product(body.url)
    if not result.success:
        return failure_response(result.failure)
    return ExtractFromUrlResponse(
        product=result.product,
        platform=result.platform.wire_label,
    )
