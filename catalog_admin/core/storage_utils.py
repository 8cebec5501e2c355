# catalog_admin/core/storage_utils.py
import re
import time
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlparse

import httpx
from storage3.utils import StorageException
from supabase import Client

from catalog_admin.core.errors import BackendError, BadRequest, PayloadTooLarge

# Supabase creates this object to materialize empty folders
PLACEHOLDER_NAME = ".emptyFolderPlaceholder"

MAX_IMAGE_BYTES = 5 * 1024 * 1024  # 5MB per image


@dataclass
class ImageUpload:
    """An uploaded file as received from the client."""

    filename: str
    content_type: str
    content: bytes


@dataclass
class StoredImage:
    url: str
    path: str


def validate_image(image: ImageUpload, max_bytes: int = MAX_IMAGE_BYTES) -> None:
    """
    Reject non-image content types (400) and oversized files (413).
    """
    if not image.content_type or not image.content_type.startswith("image/"):
        raise BadRequest("Unsupported file type. Only images are allowed.")
    if len(image.content) > max_bytes:
        raise PayloadTooLarge(f"Image too large (max {max_bytes // (1024 * 1024)}MB).")


def sanitize_filename(name: str) -> str:
    """
    Restrict a client filename to [a-z0-9.]; everything else becomes '_'.

    Example:
        "Blue Mug (1).PNG" -> "blue_mug__1_.png"
    """
    return re.sub(r"[^a-z0-9.]", "_", name, flags=re.IGNORECASE).lower()


def build_image_path(folder: str, filename: str) -> str:
    """
    Object path for a new upload: <folder>/<epoch millis>-<sanitized name>.
    """
    millis = int(time.time() * 1000)
    return f"{folder}/{millis}-{sanitize_filename(filename)}"


def is_usable_url(url: str | None) -> bool:
    """
    True if `url` looks like something a browser can fetch.

    Guards against public URLs built from an unset bucket/path, which come
    back with "undefined" or "None" segments.
    """
    if not url:
        return False
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return False
    segments = parsed.path.split("/")
    return "undefined" not in segments and "None" not in segments


def human_size(size: int | float | None) -> str:
    if size is None:
        return "N/A"
    if size >= 1024 * 1024:
        return f"{size / (1024 * 1024):.1f} MB"
    return f"{size / 1024:.1f} KB"


class ImageStorage:
    """
    Product image bucket on Supabase Storage.

    storage3 API errors and httpx transport errors are re-raised as
    BackendError.
    """

    def __init__(
        self,
        client: Client,
        bucket: str,
        folder: str = "products",
        signed_url_ttl: int = 60 * 60,
    ):
        self.client = client
        self.bucket = bucket
        self.folder = folder
        self.signed_url_ttl = signed_url_ttl

    def _bucket(self):
        return self.client.storage.from_(self.bucket)

    def upload(self, image: ImageUpload) -> StoredImage:
        """
        Upload bytes under a fresh collision-resistant path.

        Returns:
            StoredImage with a retrievable URL and the object path.

        Raises:
            BackendError: if the upload or the URL lookup fails.
        """
        path = build_image_path(self.folder, image.filename)
        try:
            self._bucket().upload(
                path,
                image.content,
                {"content-type": image.content_type},
            )
        except (StorageException, httpx.HTTPError) as exc:
            raise BackendError("Error uploading image", exc) from exc
        return StoredImage(url=self.resolve_url(path), path=path)

    def resolve_url(self, path: str) -> str:
        """
        Prefer the public URL; fall back to a signed URL when the public one
        is missing or malformed (private bucket).
        """
        url = self._bucket().get_public_url(path)
        if is_usable_url(url):
            return url

        try:
            signed = self._bucket().create_signed_url(path, self.signed_url_ttl)
        except (StorageException, httpx.HTTPError) as exc:
            raise BackendError("Error creating signed URL", exc) from exc
        # storage3 has used both spellings
        signed_url = signed.get("signedURL") or signed.get("signedUrl")
        if not signed_url:
            raise BackendError("Error creating signed URL", f"no URL returned for {path}")
        return signed_url

    def remove(self, paths: list[str]) -> None:
        """
        Delete objects by path. Missing objects are not an error.
        """
        try:
            self._bucket().remove(paths)
        except (StorageException, httpx.HTTPError) as exc:
            raise BackendError("Error deleting image", exc) from exc

    def list_folder(self, limit: int = 100) -> list[dict[str, Any]]:
        """
        Raw object entries under the image folder, newest first.
        """
        try:
            entries = self._bucket().list(
                self.folder,
                {
                    "limit": limit,
                    "offset": 0,
                    "sortBy": {"column": "created_at", "order": "desc"},
                },
            )
        except (StorageException, httpx.HTTPError) as exc:
            raise BackendError("Error listing images", exc) from exc
        return entries or []

    def object_path(self, name: str) -> str:
        return f"{self.folder}/{name}"
