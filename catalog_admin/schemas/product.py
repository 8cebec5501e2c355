# catalog_admin/schemas/product.py
from datetime import datetime

from sqlmodel import SQLModel


class ProductForm(SQLModel):
    """
    Raw product fields as posted by the admin panel (multipart form).

    Everything arrives as text; cleaning, numeric coercion and slug
    normalization happen in ProductService.
    """

    name: str | None = None
    slug: str | None = None
    description: str | None = None
    category: str | None = None
    price: str | None = None
    stock: str | None = None


class ProductValues(SQLModel):
    """
    Cleaned field set ready to be written to the products table.

    Only fields that were actually supplied are set; dump with
    `exclude_none=True` so an omitted price stays absent instead of null.
    """

    name: str | None = None
    slug: str | None = None
    description: str | None = None
    category: str | None = None
    price: float | None = None
    stock: int | None = None
    image_url: str | None = None
    image_path: str | None = None


class ProductRead(SQLModel):
    """Product row as returned to clients."""

    id: int
    name: str | None = None
    slug: str | None = None
    description: str | None = None
    category: str | None = None
    price: float | None = None
    stock: int | None = None
    image_url: str | None = None
    image_path: str | None = None
    created_at: datetime | None = None


class ProductEnvelope(SQLModel):
    product: ProductRead


class ProductList(SQLModel):
    products: list[ProductRead]
