# catalog_admin/routers/products.py
import logging

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from catalog_admin.core.auth import get_current_claim, require_admin
from catalog_admin.routers.dependencies import (
    get_media_service,
    get_product_service,
    read_upload,
)
from catalog_admin.schemas.auth import IdentityClaim
from catalog_admin.schemas.error import ErrorResponse
from catalog_admin.schemas.media import ImageDeleted, MediaList, UploadedImage
from catalog_admin.schemas.product import ProductEnvelope, ProductForm, ProductList
from catalog_admin.services.media_service import MediaService
from catalog_admin.services.product_service import ProductService

logger = logging.getLogger(__name__)

# Every product route, reads included, sits behind the admin gate.
router = APIRouter(
    prefix="/products",
    tags=["Products"],
    dependencies=[Depends(require_admin)],
    responses={401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
)


def product_form(
    name: str | None = Form(None),
    slug: str | None = Form(None),
    description: str | None = Form(None),
    category: str | None = Form(None),
    price: str | None = Form(None),
    stock: str | None = Form(None),
) -> ProductForm:
    return ProductForm(
        name=name,
        slug=slug,
        description=description,
        category=category,
        price=price,
        stock=stock,
    )


# -------- Media library --------
# Static paths are registered before /{product_id}.


@router.get("/images", response_model=MediaList)
def list_media(service: MediaService = Depends(get_media_service)):
    """
    List stored product images for the media library (newest first).
    """
    return MediaList(media=service.list_media())


@router.post(
    "/upload",
    response_model=UploadedImage,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
def upload_image(
    file: UploadFile | None = File(None),
    service: MediaService = Depends(get_media_service),
):
    """
    Upload an image without attaching it to a product.
    """
    stored = service.upload_image(read_upload(file))
    return UploadedImage(url=stored.url, name=file.filename, storagePath=stored.path)


@router.delete(
    "/image",
    response_model=ImageDeleted,
    responses={400: {"model": ErrorResponse}},
)
def delete_image(
    filePath: str | None = None,
    service: MediaService = Depends(get_media_service),
):
    """
    Delete one stored image by its storage path (`?filePath=products/...`).
    """
    service.delete_image(filePath)
    return ImageDeleted(success=True)


# -------- Products --------


@router.get("", response_model=ProductList)
def list_products(service: ProductService = Depends(get_product_service)):
    """
    List all products ordered by id.
    """
    return ProductList(products=service.list_products())


@router.get(
    "/slug/{slug}",
    response_model=ProductEnvelope,
    responses={404: {"model": ErrorResponse}},
)
def get_product_by_slug(
    slug: str,
    service: ProductService = Depends(get_product_service),
):
    return ProductEnvelope(product=service.get_product_by_slug(slug))


@router.get(
    "/{product_id}",
    response_model=ProductEnvelope,
    responses={404: {"model": ErrorResponse}},
)
def get_product(
    product_id: int,
    service: ProductService = Depends(get_product_service),
):
    return ProductEnvelope(product=service.get_product(product_id))


@router.post(
    "",
    response_model=ProductEnvelope,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
def create_product(
    form: ProductForm = Depends(product_form),
    file: UploadFile | None = File(None),
    service: ProductService = Depends(get_product_service),
    claim: IdentityClaim = Depends(get_current_claim),
):
    """
    Create a product (multipart form, optional `file` image).

    - slug is derived from name unless supplied.
    """
    product = service.create_product(form, read_upload(file))
    logger.info("Product %s created by %s", product.id, claim.email)
    return ProductEnvelope(product=product)


@router.put(
    "/{product_id}",
    response_model=ProductEnvelope,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def update_product(
    product_id: int,
    form: ProductForm = Depends(product_form),
    file: UploadFile | None = File(None),
    service: ProductService = Depends(get_product_service),
    claim: IdentityClaim = Depends(get_current_claim),
):
    """
    Partially update a product; a new `file` replaces the stored image.
    """
    product = service.update_product(product_id, form, read_upload(file))
    logger.info("Product %s updated by %s", product_id, claim.email)
    return ProductEnvelope(product=product)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
def delete_product(
    product_id: int,
    service: ProductService = Depends(get_product_service),
    claim: IdentityClaim = Depends(get_current_claim),
):
    """
    Delete a product and its stored image (image removal is best-effort).
    """
    service.delete_product(product_id)
    logger.info("Product %s deleted by %s", product_id, claim.email)
    return None
