import uuid
from datetime import datetime, timezone

import httpx

from roxinho_shop.integrations.marketplaces.models import PlatformTag, RawProductFields
from roxinho_shop.models.dto.extraction import ProductRecord
from roxinho_shop.models.orm.category import Category
from roxinho_shop.models.orm.product import Product
from roxinho_shop.models.orm.review import Review

PLACEHOLDER = "https://via.placeholder.com/400?text=Product"


def make_category(*, category_id=2, name="Periféricos", slug="perifericos", is_active=True):
    return Category(
        id=category_id,
        name=name,
        slug=slug,
        description=None,
        icon=None,
        sort_order=category_id,
        is_active=is_active,
        created_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
    )


def make_product(
    *,
    product_id=None,
    category_id=2,
    name="Teclado Mecânico",
    price_cents=19990,
    is_active=True,
    source_platform="mercadolivre",
):
    now = datetime(2026, 1, 1, tzinfo=timezone.utc)
    return Product(
        id=product_id or uuid.uuid4(),
        category_id=category_id,
        name=name,
        description="Switch blue, ABNT2",
        brand="Redragon",
        model="K552",
        image_url="https://http2.mlstatic.com/k552.jpg",
        image_gallery=["https://http2.mlstatic.com/k552.jpg"],
        price_cents=price_cents,
        stock_quantity=5,
        source_platform=source_platform,
        source_url="https://produto.mercadolivre.com.br/MLB-1234567890-teclado",
        external_id="MLB1234567890",
        is_active=is_active,
        created_at=now,
        updated_at=now,
    )


def make_review(*, product_id=None, user_id="user-1", rating=5, helpful_count=0):
    now = datetime(2026, 1, 2, tzinfo=timezone.utc)
    return Review(
        id=uuid.uuid4(),
        product_id=product_id or uuid.uuid4(),
        user_id=user_id,
        user_name="Ana",
        rating=rating,
        title="Muito bom",
        comment="Chegou rápido e funciona bem.",
        helpful_count=helpful_count,
        created_at=now,
        updated_at=now,
    )


def make_raw_fields(**overrides) -> RawProductFields:
    data = {
        "name": "Teclado Mecânico",
        "price": 199.9,
        "description": "Switch blue, ABNT2",
        "image_url": "https://http2.mlstatic.com/k552.jpg",
        "images": ["https://http2.mlstatic.com/k552.jpg"],
        "brand": "Redragon",
        "model": "K552",
        "stock_quantity": 5,
        "external_id": "MLB1234567890",
    }
    data.update(overrides)
    return RawProductFields(**data)


def make_record(**overrides) -> ProductRecord:
    data = {
        "name": "Teclado Mecânico",
        "price": 199.9,
        "description": "Switch blue, ABNT2",
        "primary_image": "https://http2.mlstatic.com/k552.jpg",
        "image_gallery": ["https://http2.mlstatic.com/k552.jpg"],
        "brand": "Redragon",
        "model": "K552",
        "stock_quantity": 5,
        "category_id": 2,
        "source_platform": PlatformTag.MERCADOLIVRE,
        "source_url": "https://produto.mercadolivre.com.br/MLB-1234567890-teclado",
        "source_price": 199.9,
        "external_id": "MLB1234567890",
    }
    data.update(overrides)
    return ProductRecord(**data)


def mercadolivre_item(**overrides) -> dict:
    """A trimmed-down payload of the public ``/items/{id}`` endpoint."""
    item = {
        "id": "MLB1234567890",
        "title": "Teclado Mecânico",
        "price": 199.9,
        "available_quantity": 5,
        "subtitle": None,
        "thumbnail": "https://http2.mlstatic.com/D_thumb.jpg",
        "secure_thumbnail": "https://http2.mlstatic.com/D_secure.jpg",
        "pictures": [
            {"id": "1", "url": "https://http2.mlstatic.com/D_1.jpg"},
            {"id": "2", "url": "https://http2.mlstatic.com/D_2.jpg"},
        ],
        "attributes": [
            {"id": "BRAND", "name": "Marca", "value_name": "Redragon"},
            {"id": "MODEL", "name": "Modelo", "value_name": "K552"},
            {"id": "COLOR", "name": "Cor", "value_name": "Preto"},
        ],
    }
    item.update(overrides)
    return item


AMAZON_PRODUCT_HTML = """
<html><head>
  <meta name="title" content="Meta Title">
  <meta property="og:image" content="https://m.media-amazon.com/og.jpg">
</head><body>
  <h1><span id="productTitle">
      Mouse Gamer Logitech G203
  </span></h1>
  <div id="corePrice">
    <span class="a-price"><span class="a-offscreen">R$ 1.234,56</span></span>
  </div>
  <div id="productDescription"><p>Sensor de 8.000 DPI e iluminação RGB.</p></div>
  <div id="imgTagWrapperId">
    <img id="landingImage" src="https://m.media-amazon.com/main.jpg"
         data-a-dynamic-image='{"https://m.media-amazon.com/large.jpg": [1500, 1500], "https://m.media-amazon.com/small.jpg": [500, 500]}'>
  </div>
</body></html>
"""

GENERIC_PRODUCT_HTML = """
<html><head>
  <title>Loja X | Headset Gamer HyperX Cloud</title>
  <meta property="og:title" content="Headset Gamer HyperX Cloud">
  <meta property="og:description" content="Som surround 7.1 virtual.">
  <meta property="og:image" content="https://lojax.com.br/img/headset.jpg">
  <meta property="product:price:amount" content="349.90">
</head><body><h1>Headset Gamer HyperX Cloud</h1></body></html>
"""


def mock_http_client(handler) -> httpx.AsyncClient:
    """AsyncClient whose requests are answered by ``handler(request)``."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


AMAZON_PAGE_WITHOUT_IMAGES = """
<html><head><title>Amazon.com.br</title></head><body>
  <span id="productTitle">Cabo HDMI 2.1 Ultra High Speed</span>
  <span class="a-price"><span class="a-offscreen">R$ 59,90</span></span>
</body></html>
"""
