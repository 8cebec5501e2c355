# catalog_admin/services/media_service.py
import logging
from datetime import datetime
from typing import Any

from catalog_admin.core.errors import BadRequest
from catalog_admin.core.storage_utils import (
    MAX_IMAGE_BYTES,
    PLACEHOLDER_NAME,
    ImageStorage,
    ImageUpload,
    StoredImage,
    human_size,
    validate_image,
)
from catalog_admin.schemas.media import MediaItem

logger = logging.getLogger(__name__)


def _date_only(created_at: str | None) -> str | None:
    if not created_at:
        return None
    try:
        return datetime.fromisoformat(created_at.replace("Z", "+00:00")).date().isoformat()
    except ValueError:
        return None


class MediaService:
    """
    Media library over the product image folder.

    Standalone image operations that never touch product rows.
    """

    def __init__(
        self,
        storage: ImageStorage,
        page_size: int = 100,
        max_image_bytes: int = MAX_IMAGE_BYTES,
    ):
        self.storage = storage
        self.page_size = page_size
        self.max_image_bytes = max_image_bytes

    def _to_media_item(self, entry: dict[str, Any], index: int) -> MediaItem:
        metadata = entry.get("metadata") or {}
        path = self.storage.object_path(entry["name"])
        return MediaItem(
            id=str(entry.get("id") or index + 1),
            name=entry["name"],
            url=self.storage.resolve_url(path),
            size=human_size(metadata.get("size")),
            date=_date_only(entry.get("created_at")),
            description=f"Product image: {entry['name']}",
            mimeType=metadata.get("mimetype") or "application/octet-stream",
            storagePath=path,
        )

    def list_media(self) -> list[MediaItem]:
        """
        Stored product images, newest first, placeholder entries removed.
        """
        entries = [
            entry
            for entry in self.storage.list_folder(limit=self.page_size)
            if entry.get("name") and entry["name"] != PLACEHOLDER_NAME
        ]
        entries.sort(key=lambda entry: entry.get("created_at") or "", reverse=True)
        return [self._to_media_item(entry, i) for i, entry in enumerate(entries)]

    def upload_image(self, image: ImageUpload | None) -> StoredImage:
        if image is None:
            raise BadRequest("No file provided.")
        validate_image(image, self.max_image_bytes)
        stored = self.storage.upload(image)
        logger.info("Uploaded image %s", stored.path)
        return stored

    def delete_image(self, file_path: str | None) -> None:
        """Remove one object by its full storage path."""
        if not file_path or not file_path.strip():
            raise BadRequest("filePath is required")
        self.storage.remove([file_path])
        logger.info("Deleted image %s", file_path)
