"""Local storage for product photos uploaded by the merchant."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from pathlib import PurePath
from typing import TYPE_CHECKING, Any

from django.core.files.base import ContentFile
from django.core.files.storage import FileSystemStorage

from core.logging import get_logger
from core.result import Result, failure, success
from services.gemini.types import ImagePart

if TYPE_CHECKING:
    from pathlib import Path

logger = get_logger(__name__)

DEFAULT_MIME_TYPE = "image/jpeg"

MIME_TYPES: dict[str, str] = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".webp": "image/webp",
}


def guess_mime_type(name: str) -> str:
    """Return the image MIME type for a file name, defaulting to JPEG."""
    return MIME_TYPES.get(PurePath(name).suffix.lower(), DEFAULT_MIME_TYPE)


@dataclass(frozen=True, slots=True)
class StorageError:
    """
    Error reading a stored image.

    Attributes:
        message: Human-readable error message.
        image_id: The requested image ID.
        not_found: True when the ID is valid but nothing is stored under it.
    """

    message: str
    image_id: str
    not_found: bool = False

    def __str__(self) -> str:
        """Return string representation of the error."""
        return f"{self.message}: {self.image_id}"


@dataclass(frozen=True, slots=True)
class StoredImage:
    """
    A saved upload.

    Attributes:
        id: Random file name the image is referenced by later.
        url: Public URL.
        name: Original file name.
        size: Size in bytes.
        content_type: MIME type declared by the browser.
    """

    id: str
    url: str
    name: str
    size: int
    content_type: str

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable dict."""
        return {
            "id": self.id,
            "url": self.url,
            "name": self.name,
            "size": self.size,
            "type": self.content_type,
        }


class ImageStorage:
    """
    Stores uploads under random IDs and reads them back by ID.

    IDs are a UUID plus the original extension, so the extension still
    drives the MIME type when the image is sent to Gemini or Shopee.
    """

    def __init__(self, location: Path | str, base_url: str = "/uploads/") -> None:
        """
        Initialize the storage.

        Args:
            location: Directory the images are written to.
            base_url: Public URL prefix for stored images.
        """
        self._storage = FileSystemStorage(location=str(location), base_url=base_url)

    @property
    def location(self) -> str:
        """Return the storage directory."""
        return str(self._storage.location)

    @staticmethod
    def is_valid_id(image_id: str) -> bool:
        """Check that an ID is a plain file name (no directories, no traversal)."""
        if not image_id or image_id in {".", ".."}:
            return False
        return PurePath(image_id).name == image_id

    def save(self, filename: str, content: bytes, content_type: str | None = None) -> StoredImage:
        """
        Save an uploaded image.

        Args:
            filename: Original file name (only its extension is kept).
            content: Image bytes.
            content_type: MIME type declared by the browser.

        Returns:
            The StoredImage.
        """
        extension = PurePath(filename).suffix.lower()
        image_id = self._storage.save(f"{uuid.uuid4()}{extension}", ContentFile(content))
        logger.info("Image stored", image_id=image_id, size=len(content))
        return StoredImage(
            id=image_id,
            url=self._storage.url(image_id),
            name=filename,
            size=len(content),
            content_type=content_type or guess_mime_type(filename),
        )

    def read(self, image_id: str) -> Result[bytes, StorageError]:
        """
        Read an image by ID.

        Args:
            image_id: ID returned by ``save``.

        Returns:
            Result containing the bytes or StorageError.
        """
        if not self.is_valid_id(image_id):
            return failure(StorageError("Invalid image id", image_id=image_id))
        if not self._storage.exists(image_id):
            return failure(StorageError("Image not found", image_id=image_id, not_found=True))

        with self._storage.open(image_id, "rb") as f:
            return success(f.read())

    def open_image(self, image_id: str) -> Result[ImagePart, StorageError]:
        """Read an image by ID together with its MIME type."""
        return self.read(image_id).map(
            lambda data: ImagePart(data=data, mime_type=guess_mime_type(image_id))
        )
