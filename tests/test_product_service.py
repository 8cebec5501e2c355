"""ProductService field cleaning and slug rules."""

import pytest

from catalog_admin.core.errors import BadRequest, NotFound
from catalog_admin.core.storage_utils import ImageUpload
from catalog_admin.schemas.product import ProductForm
from catalog_admin.services.product_service import ProductService, slugify


@pytest.fixture
def service(repo, storage):
    return ProductService(repo, storage)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("Blue Mug", "blue-mug"),
        ("Blue Mug!!", "blue-mug"),
        ("  --Crème Brûlée--  ", "creme-brulee"),
        ("Tea & Coffee  Set", "tea-coffee-set"),
        ("!!!", "product"),
    ],
)
def test_slugify(raw, expected):
    assert slugify(raw) == expected


def test_clean_fields_drops_blank_values(service):
    values = service.clean_fields(ProductForm(name=" Blue Mug ", description="   ", category=""))
    assert values.model_dump(exclude_none=True) == {"name": "Blue Mug", "slug": "blue-mug"}


def test_clean_fields_prefers_supplied_slug(service):
    values = service.clean_fields(ProductForm(name="Blue Mug", slug="Mug  Azul"))
    assert values.slug == "mug-azul"


def test_clean_fields_coerces_numbers(service):
    values = service.clean_fields(ProductForm(price="19.99", stock="12"))
    assert values.price == pytest.approx(19.99)
    assert isinstance(values.stock, int) and values.stock == 12
    assert values.slug is None


def test_clean_fields_rejects_infinite_price(service):
    with pytest.raises(BadRequest):
        service.clean_fields(ProductForm(price="inf"))


def test_update_without_changes_returns_existing(service, repo):
    repo.add(name="Blue Mug", slug="blue-mug")
    product = service.update_product(1, ProductForm())
    assert product.name == "Blue Mug"


def test_update_lost_row_discards_new_upload(service, repo, bucket, monkeypatch):
    repo.add(name="Blue Mug", slug="blue-mug")
    monkeypatch.setattr(repo, "update", lambda product_id, values: None)

    with pytest.raises(NotFound):
        service.update_product(1, ProductForm(), ImageUpload("a.png", "image/png", b"x"))

    assert bucket.objects == {}
