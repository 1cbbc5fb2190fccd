"""
Product Catalog Backend: Asset Service
======================================

What:  Resolves a product's image reference to a URL the service can serve.
How:   An uploaded file is written to the upload directory under a generated
       name and its public URL is returned; without a file, the URL the
       client sent is used unchanged.
Who:   Called by the product routes on create and update.

Precedence:
    uploaded file  >  body `image_url`  >  None

Stored files:
    uploads/
    ├── 1718023312345-9f2c1a0b.jpg
    └── 1718023319876-04d7be13.png

    Name = millisecond timestamp + random hex suffix + original extension.
    The directory is mounted read-only at the upload URL prefix by main.py.
"""

import logging
import secrets
import time
from pathlib import Path
from typing import Optional

import aiofiles
from starlette.datastructures import UploadFile

from app.exceptions import FileStorageError

logger = logging.getLogger(__name__)


class AssetService:
    """
    Stores uploaded product images and derives their URLs.

    One instance is created per application by `create_app()` and kept on
    `app.state.asset_service`.
    """

    def __init__(self, upload_dir: str, url_prefix: str = "/uploads"):
        """
        Args:
            upload_dir: Directory the files are written to (created if missing).
            url_prefix: Public path under which upload_dir is served.
        """
        self.upload_dir = Path(upload_dir).resolve()
        self.url_prefix = "/" + url_prefix.strip("/")
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        logger.info("AssetService initialized with upload_dir=%s", self.upload_dir)

    def _generate_filename(self, original_filename: Optional[str]) -> str:
        """
        Timestamped, collision-resistant filename keeping the original extension.

        No part of the client's filename other than its extension is used.
        """
        extension = Path(original_filename or "").suffix
        timestamp_ms = int(time.time() * 1000)
        return f"{timestamp_ms}-{secrets.token_hex(4)}{extension}"

    def url_for(self, stored_name: str) -> str:
        return f"{self.url_prefix}/{stored_name}"

    async def store(self, filename: Optional[str], content: bytes) -> str:
        """
        Write an uploaded file and return its public URL.

        Raises:
            FileStorageError if the file cannot be written. A partially
            written file is left in place.
        """
        stored_name = self._generate_filename(filename)
        path = self.upload_dir / stored_name

        try:
            async with aiofiles.open(path, "wb") as f:
                await f.write(content)
        except OSError as e:
            logger.error("Failed to store upload at %s: %s", path, e)
            raise FileStorageError(
                message=str(e),
                context={"path": str(path), "filename": filename},
            ) from e

        logger.info("Upload stored: %s (%d bytes)", stored_name, len(content))
        return self.url_for(stored_name)

    @staticmethod
    def has_upload(upload: Optional[UploadFile]) -> bool:
        """
        Whether a file part counts as an upload.

        An empty file input in an HTML form arrives with neither a filename
        nor any bytes; that is no upload. `size` is filled in by the
        multipart parser, so this needs no read.
        """
        if upload is None:
            return False
        return bool(upload.filename or upload.size)

    def passthrough(self, url: Optional[str]) -> Optional[str]:
        """A client-supplied image URL, returned unchanged."""
        return url

    async def resolve_image_url(
        self,
        upload: Optional[UploadFile],
        body_url: Optional[str],
    ) -> Optional[str]:
        """
        Pick the image URL for a create or update request.

        Uploads are recognized by `has_upload`, the same test the presence
        check uses.
        """
        if self.has_upload(upload):
            content = await upload.read()
            return await self.store(upload.filename, content)
        return self.passthrough(body_url)
