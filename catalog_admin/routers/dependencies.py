# catalog_admin/routers/dependencies.py
"""Service wiring for routes; overridden with fakes in tests."""

from fastapi import Depends, UploadFile
from supabase import Client

from catalog_admin.core.auth import get_token_codec
from catalog_admin.core.config import Settings, get_settings
from catalog_admin.core.identity import SupabaseIdentityProvider
from catalog_admin.core.storage_utils import ImageStorage, ImageUpload
from catalog_admin.core.supabase_client import get_admin_client, get_public_client, new_auth_client
from catalog_admin.core.tokens import TokenCodec
from catalog_admin.repositories.product_repo import ProductRepository
from catalog_admin.repositories.profile_repo import ProfileRepository
from catalog_admin.services.auth_service import AuthService
from catalog_admin.services.media_service import MediaService
from catalog_admin.services.product_service import ProductService


def get_identity_provider(
    settings: Settings = Depends(get_settings),
) -> SupabaseIdentityProvider:
    return SupabaseIdentityProvider(new_auth_client(settings))


def get_profile_repository(
    admin_client: Client = Depends(get_admin_client),
    settings: Settings = Depends(get_settings),
) -> ProfileRepository:
    return ProfileRepository(admin_client, table=settings.PROFILES_TABLE)


def get_product_repository(
    client: Client = Depends(get_public_client),
    admin_client: Client = Depends(get_admin_client),
    settings: Settings = Depends(get_settings),
) -> ProductRepository:
    return ProductRepository(client, admin_client, table=settings.PRODUCTS_TABLE)


def get_image_storage(
    admin_client: Client = Depends(get_admin_client),
    settings: Settings = Depends(get_settings),
) -> ImageStorage:
    return ImageStorage(
        admin_client,
        bucket=settings.PRODUCT_IMAGES_BUCKET,
        folder=settings.PRODUCT_IMAGES_FOLDER,
        signed_url_ttl=settings.SIGNED_URL_TTL_SECONDS,
    )


def get_auth_service(
    identity: SupabaseIdentityProvider = Depends(get_identity_provider),
    profiles: ProfileRepository = Depends(get_profile_repository),
    codec: TokenCodec = Depends(get_token_codec),
    settings: Settings = Depends(get_settings),
) -> AuthService:
    return AuthService(identity, profiles, codec, admin_role=settings.ADMIN_ROLE)


def get_product_service(
    repo: ProductRepository = Depends(get_product_repository),
    storage: ImageStorage = Depends(get_image_storage),
    settings: Settings = Depends(get_settings),
) -> ProductService:
    return ProductService(repo, storage, max_image_bytes=settings.MAX_IMAGE_BYTES)


def get_media_service(
    storage: ImageStorage = Depends(get_image_storage),
    settings: Settings = Depends(get_settings),
) -> MediaService:
    return MediaService(
        storage,
        page_size=settings.MEDIA_PAGE_SIZE,
        max_image_bytes=settings.MAX_IMAGE_BYTES,
    )


def read_upload(file: UploadFile | None) -> ImageUpload | None:
    """
    Read an optional multipart file into memory.

    Browsers submit an empty part with no filename when no file was
    chosen; that counts as no file.
    """
    if file is None or not file.filename:
        return None
    return ImageUpload(
        filename=file.filename,
        content_type=file.content_type or "",
        content=file.file.read(),
    )
