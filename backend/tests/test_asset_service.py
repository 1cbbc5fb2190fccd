"""
Product Catalog Backend: Asset Service Unit Tests
=================================================

What:  Tests for AssetService storage, naming and image URL precedence.
How:   Uses temporary directories and in-memory UploadFile objects.
"""

import io
import re
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from starlette.datastructures import UploadFile

from app.exceptions import FileStorageError, StorageError
from app.services.asset_service import AssetService


def _upload(filename, content):
    return UploadFile(file=io.BytesIO(content), filename=filename, size=len(content))


class TestFilenames:

    @pytest.fixture(autouse=True)
    def _service(self, temp_uploads):
        self.temp_uploads = temp_uploads
        self.service = AssetService(upload_dir=temp_uploads)

    def test_keeps_original_extension(self):
        assert self.service._generate_filename("photo.png").endswith(".png")

    def test_timestamp_prefix(self):
        name = self.service._generate_filename("photo.jpg")
        assert re.fullmatch(r"\d{13}-[0-9a-f]{8}\.jpg", name)

    def test_no_extension(self):
        name = self.service._generate_filename("README")
        assert "." not in name

    def test_original_name_not_reused(self):
        name = self.service._generate_filename("../../etc/passwd.jpg")
        assert "passwd" not in name
        assert "/" not in name

    def test_names_are_unique(self):
        names = {self.service._generate_filename("a.jpg") for _ in range(200)}
        assert len(names) == 200

    def test_url_prefix_normalized(self):
        service = AssetService(upload_dir=self.temp_uploads, url_prefix="static/")
        assert service.url_for("x.jpg") == "/static/x.jpg"


class TestStore:

    @pytest.mark.asyncio
    async def test_store_writes_file_and_returns_url(self, temp_uploads, sample_image_bytes):
        service = AssetService(upload_dir=temp_uploads)

        url = await service.store("mango.jpg", sample_image_bytes)

        assert url.startswith("/uploads/")
        assert url.endswith(".jpg")
        stored = Path(temp_uploads) / url.rsplit("/", 1)[1]
        assert stored.read_bytes() == sample_image_bytes

    @pytest.mark.asyncio
    async def test_store_creates_missing_directory(self, tmp_path, sample_image_bytes):
        target = tmp_path / "nested" / "uploads"
        service = AssetService(upload_dir=str(target))

        await service.store("mango.jpg", sample_image_bytes)

        assert len(list(target.iterdir())) == 1

    @pytest.mark.asyncio
    async def test_store_os_error_raises_file_storage_error(self, temp_uploads):
        service = AssetService(upload_dir=temp_uploads)

        with patch("aiofiles.open", new_callable=MagicMock) as mock_open:
            mock_open.side_effect = OSError(28, "No space left on device")

            with pytest.raises(FileStorageError) as exc_info:
                await service.store("mango.jpg", b"data")

        assert "No space left on device" in exc_info.value.message
        assert isinstance(exc_info.value, StorageError)


class TestResolveImageUrl:

    @pytest.mark.asyncio
    async def test_upload_wins_over_body_url(self, temp_uploads, sample_image_bytes):
        service = AssetService(upload_dir=temp_uploads)

        url = await service.resolve_image_url(
            _upload("mango.jpg", sample_image_bytes),
            "https://cdn.example.com/other.jpg",
        )

        assert url.startswith("/uploads/")

    @pytest.mark.asyncio
    async def test_body_url_passes_through_unchanged(self, temp_uploads):
        service = AssetService(upload_dir=temp_uploads)

        url = await service.resolve_image_url(None, "https://cdn.example.com/mango.jpg?w=200")

        assert url == "https://cdn.example.com/mango.jpg?w=200"
        assert list(Path(temp_uploads).iterdir()) == []

    @pytest.mark.asyncio
    async def test_nothing_supplied(self, temp_uploads):
        service = AssetService(upload_dir=temp_uploads)
        assert await service.resolve_image_url(None, None) is None

    @pytest.mark.asyncio
    async def test_empty_file_input_counts_as_no_upload(self, temp_uploads):
        service = AssetService(upload_dir=temp_uploads)

        url = await service.resolve_image_url(_upload("", b""), "/uploads/existing.jpg")

        assert url == "/uploads/existing.jpg"
        assert list(Path(temp_uploads).iterdir()) == []

    @pytest.mark.asyncio
    async def test_upload_without_filename_is_stored(self, temp_uploads, sample_image_bytes):
        service = AssetService(upload_dir=temp_uploads)

        url = await service.resolve_image_url(_upload("", sample_image_bytes), None)

        assert url.startswith("/uploads/")
        assert len(list(Path(temp_uploads).iterdir())) == 1


class TestHasUpload:

    def test_none(self):
        assert AssetService.has_upload(None) is False

    def test_empty_file_input(self):
        assert AssetService.has_upload(_upload("", b"")) is False

    def test_filename_only(self):
        assert AssetService.has_upload(_upload("mango.jpg", b"")) is True

    def test_content_without_filename(self):
        assert AssetService.has_upload(_upload("", b"\xff\xd8")) is True
