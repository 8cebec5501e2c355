# catalog_admin/core/config.py
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required env vars (.env):
      - JWT_SECRET (signs the admin session tokens issued at login)
      - SUPABASE_URL
      - SUPABASE_ANON_KEY (restricted client, respects RLS)
      - SUPABASE_SERVICE_KEY (elevated client, bypasses RLS)
    """

    PROJECT_NAME: str = "Catalog Admin API"
    API_V1_STR: str = "/api/v1"

    HOST: str = "0.0.0.0"
    PORT: int = 4000
    LOG_LEVEL: str = "INFO"

    # Comma-separated allow-list of frontend origins
    CORS_ORIGINS: str = "http://localhost:5173"

    # Session tokens
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRES_SECONDS: int = 7 * 24 * 60 * 60

    # Supabase
    SUPABASE_URL: str
    SUPABASE_ANON_KEY: str
    SUPABASE_SERVICE_KEY: str

    PRODUCTS_TABLE: str = "products"
    PROFILES_TABLE: str = "profiles"
    ADMIN_ROLE: str = "admin"

    # Storage
    PRODUCT_IMAGES_BUCKET: str = "product-images"
    PRODUCT_IMAGES_FOLDER: str = "products"
    SIGNED_URL_TTL_SECONDS: int = 60 * 60
    MEDIA_PAGE_SIZE: int = 100
    MAX_IMAGE_BYTES: int = 5 * 1024 * 1024

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
