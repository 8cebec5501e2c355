# catalog_admin/services/product_service.py
import logging
import math
import re
import unicodedata

from catalog_admin.core.errors import BackendError, BadRequest, NotFound
from catalog_admin.core.storage_utils import (
    MAX_IMAGE_BYTES,
    ImageStorage,
    ImageUpload,
    StoredImage,
    validate_image,
)
from catalog_admin.repositories.product_repo import ProductRepository
from catalog_admin.schemas.product import ProductForm, ProductRead, ProductValues

logger = logging.getLogger(__name__)


def slugify(raw: str) -> str:
    """
    Basic slugification:
      - transliterate to ASCII (drop accents)
      - lowercase
      - non-alphanumeric -> '-'
      - collapse multiple '-'
      - strip leading/trailing '-'
    """
    value = unicodedata.normalize("NFKD", raw).encode("ascii", "ignore").decode("ascii")
    value = value.strip().lower()
    value = re.sub(r"[^a-z0-9]+", "-", value)
    value = re.sub(r"-+", "-", value)
    value = value.strip("-")
    return value or "product"


class ProductService:
    """
    Business logic for products.

    Responsibilities:
      - cleaning and coercion of posted fields
      - slug generation
      - image upload/delete orchestration with Supabase Storage, keeping
        the stored image in step with the product row
    """

    def __init__(
        self,
        repo: ProductRepository,
        storage: ImageStorage,
        max_image_bytes: int = MAX_IMAGE_BYTES,
    ):
        self.repo = repo
        self.storage = storage
        self.max_image_bytes = max_image_bytes

    # ----- Helpers -----

    @staticmethod
    def _parse_price(raw: str) -> float:
        try:
            price = float(raw)
        except ValueError:
            raise BadRequest(f"Invalid price: {raw!r}")
        if not math.isfinite(price) or price < 0:
            raise BadRequest(f"Invalid price: {raw!r}")
        return price

    @staticmethod
    def _parse_stock(raw: str) -> int:
        try:
            stock = int(raw)
        except ValueError:
            raise BadRequest(f"Invalid stock: {raw!r}")
        if stock < 0:
            raise BadRequest(f"Invalid stock: {raw!r}")
        return stock

    def clean_fields(self, form: ProductForm) -> ProductValues:
        """
        Turn posted form fields into a write payload.

        - empty / whitespace-only fields are dropped (never overwrite)
        - price -> float, stock -> int (BadRequest if they don't parse)
        - slug: normalized if supplied, else derived from name
        """
        raw = {
            key: value.strip()
            for key, value in form.model_dump().items()
            if value is not None and value.strip()
        }

        values = ProductValues(
            name=raw.get("name"),
            description=raw.get("description"),
            category=raw.get("category"),
        )
        if "price" in raw:
            values.price = self._parse_price(raw["price"])
        if "stock" in raw:
            values.stock = self._parse_stock(raw["stock"])

        if "slug" in raw:
            values.slug = slugify(raw["slug"])
        elif "name" in raw:
            values.slug = slugify(raw["name"])

        return values

    def _discard_image(self, path: str) -> None:
        """Best-effort Storage cleanup; failures are logged, never raised."""
        try:
            self.storage.remove([path])
        except BackendError as exc:
            logger.warning("Could not delete image %s from storage: %s", path, exc)

    def upload_image(self, image: ImageUpload) -> StoredImage:
        validate_image(image, self.max_image_bytes)
        return self.storage.upload(image)

    # ----- Queries -----

    def list_products(self) -> list[ProductRead]:
        return [ProductRead.model_validate(row) for row in self.repo.list()]

    def get_product(self, product_id: int, elevated: bool = False) -> ProductRead:
        row = self.repo.get_by_id(product_id, elevated=elevated)
        if row is None:
            raise NotFound("Product not found")
        return ProductRead.model_validate(row)

    def get_product_by_slug(self, slug: str) -> ProductRead:
        row = self.repo.get_by_slug(slug)
        if row is None:
            raise NotFound("Product not found")
        return ProductRead.model_validate(row)

    # ----- Commands -----

    def create_product(
        self,
        form: ProductForm,
        image: ImageUpload | None = None,
    ) -> ProductRead:
        """
        Create a product, optionally with an image.

        The image is uploaded first; if the insert then fails the uploaded
        object is removed again.
        """
        values = self.clean_fields(form)
        if values.name is None:
            raise BadRequest("Product name is required")

        stored = None
        if image is not None:
            stored = self.upload_image(image)
            values.image_url = stored.url
            values.image_path = stored.path

        try:
            row = self.repo.insert(values.model_dump(exclude_none=True))
        except BackendError:
            if stored is not None:
                self._discard_image(stored.path)
            raise

        return ProductRead.model_validate(row)

    def update_product(
        self,
        product_id: int,
        form: ProductForm,
        image: ImageUpload | None = None,
    ) -> ProductRead:
        """
        Partial update. Only supplied, non-empty fields overwrite.

        A new image replaces the stored one: the new object is uploaded,
        the row updated, then the previous object removed (best-effort).
        """
        existing = self.get_product(product_id, elevated=True)
        values = self.clean_fields(form)

        stored = None
        if image is not None:
            stored = self.upload_image(image)
            values.image_url = stored.url
            values.image_path = stored.path

        updates = values.model_dump(exclude_none=True)
        if not updates:
            return existing

        try:
            row = self.repo.update(product_id, updates)
        except BackendError:
            if stored is not None:
                self._discard_image(stored.path)
            raise

        if row is None:
            if stored is not None:
                self._discard_image(stored.path)
            raise NotFound("Product not found")

        if stored is not None and existing.image_path and existing.image_path != stored.path:
            self._discard_image(existing.image_path)

        return ProductRead.model_validate(row)

    def delete_product(self, product_id: int) -> None:
        """
        Delete a product and (best-effort) its stored image.
        """
        product = self.get_product(product_id, elevated=True)

        if product.image_path:
            self._discard_image(product.image_path)

        self.repo.delete(product_id)
