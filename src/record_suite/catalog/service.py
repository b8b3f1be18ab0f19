from __future__ import annotations

from typing import Optional, Sequence

from ..common.validators import optional_text, require_non_empty, require_non_negative, require_price
from ..store.predicates import Contains
from ..store.repository import RecordStore
from .model import Product


class ProductService:
    """Use case: maintain the product catalog."""

    def __init__(self, store: RecordStore):
        self._store = store

    @staticmethod
    def _build(*, name: str, description: Optional[str], price: object, stock: object, product_id: Optional[int] = None) -> Product:
        return Product(
            name=require_non_empty(name, "name"),
            description=optional_text(description, "description"),
            price=require_price(price, "price"),
            stock=require_non_negative(stock, "stock"),
            id=product_id,
        )

    def create_product(self, *, name: str, price: object, stock: object = 0, description: Optional[str] = None) -> Product:
        product = self._build(name=name, description=description, price=price, stock=stock)
        return self._store.save(Product, product)

    def get_product(self, product_id: int) -> Product:
        return self._store.require(Product, product_id)

    def list_products(self) -> Sequence[Product]:
        return self._store.find_all(Product)

    def update_product(
        self,
        product_id: int,
        *,
        name: str,
        price: object,
        stock: object,
        description: Optional[str] = None,
    ) -> Product:
        product = self._build(
            name=name,
            description=description,
            price=price,
            stock=stock,
            product_id=int(product_id),
        )
        return self._store.save(Product, product)

    def delete_product(self, product_id: int) -> None:
        self._store.delete(Product, product_id)

    def search_products(self, name: Optional[str]) -> Sequence[Product]:
        if not name or not name.strip():
            return self._store.find_all(Product)
        return self._store.find_where(Product, Contains("name", name.strip()))
