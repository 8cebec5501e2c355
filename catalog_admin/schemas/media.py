# catalog_admin/schemas/media.py
from sqlmodel import SQLModel


class MediaItem(SQLModel):
    """
    A stored product image as shown in the admin media library.

    `storagePath` is the full object path inside the bucket and is what
    DELETE /products/image expects back.
    """

    id: str
    name: str
    type: str = "image"
    url: str
    size: str
    date: str | None = None
    description: str
    mimeType: str
    storagePath: str


class MediaList(SQLModel):
    media: list[MediaItem]


class UploadedImage(SQLModel):
    url: str
    name: str
    storagePath: str


class ImageDeleted(SQLModel):
    success: bool = True
