from roxinho_shop.models.orm.base import Base
from roxinho_shop.models.orm.category import Category
from roxinho_shop.models.orm.product import Product
from roxinho_shop.models.orm.product_view import ProductView
from roxinho_shop.models.orm.review import Review, ReviewVote

__all__ = ["Base", "Category", "Product", "ProductView", "Review", "ReviewVote"]
