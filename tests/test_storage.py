"""Tests for local image storage."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.result import Failure, Success
from services.storage import ImageStorage, guess_mime_type


class TestGuessMimeType:
    """Tests for guess_mime_type."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("a.png", "image/png"),
            ("a.JPG", "image/jpeg"),
            ("a.jpeg", "image/jpeg"),
            ("a.webp", "image/webp"),
            ("a.gif", "image/jpeg"),
            ("noext", "image/jpeg"),
        ],
    )
    def test_known_and_default(self, name: str, expected: str) -> None:
        """Known extensions map to their type; anything else is JPEG."""
        assert guess_mime_type(name) == expected


class TestImageStorage:
    """Tests for ImageStorage."""

    def test_save_uses_random_id_with_extension(self, storage: ImageStorage) -> None:
        """Saved images get a UUID name keeping the original extension."""
        stored = storage.save("My Photo.PNG", b"png-bytes", "image/png")

        assert stored.id.endswith(".png")
        assert stored.id != "My Photo.PNG"
        assert stored.url == f"/uploads/{stored.id}"
        assert stored.name == "My Photo.PNG"
        assert stored.size == 9
        assert Path(storage.location, stored.id).read_bytes() == b"png-bytes"

    def test_save_twice_gives_distinct_ids(self, storage: ImageStorage) -> None:
        """The same file uploaded twice is stored twice."""
        first = storage.save("a.jpg", b"x")
        second = storage.save("a.jpg", b"x")

        assert first.id != second.id

    def test_to_dict(self, storage: ImageStorage) -> None:
        """to_dict exposes the upload fields the browser expects."""
        stored = storage.save("a.webp", b"data")

        assert stored.to_dict() == {
            "id": stored.id,
            "url": stored.url,
            "name": "a.webp",
            "size": 4,
            "type": "image/webp",
        }

    def test_read_back(self, storage: ImageStorage) -> None:
        """A saved image can be read by ID."""
        stored = storage.save("a.jpg", b"jpeg")

        assert storage.read(stored.id) == Success(b"jpeg")

    def test_open_image_detects_mime_type(self, storage: ImageStorage) -> None:
        """open_image returns the bytes with the MIME type of the extension."""
        stored = storage.save("a.png", b"png")

        result = storage.open_image(stored.id)

        assert isinstance(result, Success)
        assert result.value.mime_type == "image/png"
        assert result.value.data == b"png"

    def test_missing_image(self, storage: ImageStorage) -> None:
        """An unknown ID fails with not_found."""
        result = storage.read("does-not-exist.jpg")

        assert isinstance(result, Failure)
        assert result.error.not_found is True

    @pytest.mark.parametrize("image_id", ["../secret.txt", "sub/dir.jpg", "..", ""])
    def test_rejects_path_traversal(self, storage: ImageStorage, image_id: str) -> None:
        """IDs that are not plain file names are rejected."""
        result = storage.read(image_id)

        assert isinstance(result, Failure)
        assert result.error.not_found is False
