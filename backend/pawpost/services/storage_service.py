import hashlib
import os
import uuid
from pathlib import Path
from typing import List, NamedTuple, Optional

import aiofiles
import aiofiles.os
import structlog
from fastapi import UploadFile, status

from pawpost.core.config import settings
from pawpost.core.exceptions import UploadRejectedError

logger = structlog.get_logger()

CHUNK_SIZE = 64 * 1024


class StoredFile(NamedTuple):
    filename: str
    file_path: str
    file_size: int
    file_hash: str


class StorageService:
    """
    Evidence files on local disk, under settings.UPLOAD_DIR. CSV imports
    go through the same size check.
    Uploads are checked before anything is written.
    """

    @classmethod
    def validate_upload(
        cls,
        content_type: Optional[str],
        size: Optional[int] = None,
        allowed_types: Optional[List[str]] = None,
    ) -> None:
        allowed = settings.ALLOWED_UPLOAD_TYPES if allowed_types is None else allowed_types
        media_type = (content_type or "").split(";")[0].strip().lower()
        if media_type not in allowed:
            raise UploadRejectedError(
                f"File type '{content_type}' is not allowed",
                status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
                code="unsupported_media_type",
            )
        if size is not None and size > settings.MAX_UPLOAD_BYTES:
            limit_mb = settings.MAX_UPLOAD_BYTES / (1024 * 1024)
            raise UploadRejectedError(f"File exceeds the {limit_mb:g}MB upload limit")

    @classmethod
    async def read_upload(cls, upload: UploadFile, allowed_types: Optional[List[str]] = None) -> bytes:
        """Read an upload, stopping one byte past the ceiling."""
        cls.validate_upload(upload.content_type, upload.size, allowed_types)
        limit = settings.MAX_UPLOAD_BYTES
        chunks = []
        total = 0
        while total <= limit:
            chunk = await upload.read(min(CHUNK_SIZE, limit + 1 - total))
            if not chunk:
                break
            chunks.append(chunk)
            total += len(chunk)
        cls.validate_upload(upload.content_type, total, allowed_types)
        return b"".join(chunks)

    @classmethod
    async def save_file(cls, content: bytes, original_name: str) -> StoredFile:
        """Write content under a generated name. The original extension is kept."""
        Path(settings.UPLOAD_DIR).mkdir(parents=True, exist_ok=True)

        ext = os.path.splitext(original_name or "")[1].lower() or ".bin"
        filename = f"{uuid.uuid4()}{ext}"
        file_path = os.path.join(settings.UPLOAD_DIR, filename)

        async with aiofiles.open(file_path, "wb") as f:
            await f.write(content)

        stored = StoredFile(
            filename=filename,
            file_path=file_path,
            file_size=len(content),
            file_hash=hashlib.sha256(content).hexdigest(),
        )
        logger.info("file_stored", filename=filename, size=stored.file_size)
        return stored

    @classmethod
    async def delete_file(cls, file_path: str) -> bool:
        if not await aiofiles.os.path.exists(file_path):
            logger.warning("file_missing", file_path=file_path)
            return False
        await aiofiles.os.remove(file_path)
        logger.info("file_deleted", file_path=file_path)
        return True
