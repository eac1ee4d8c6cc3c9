"""
AudioCraft Backend: Upload Storage Service
==========================================

What:  Writes uploaded audio to temporary storage and removes it afterwards.
How:   Each upload gets a uuid4 filename in settings.upload_dir (no user input
       reaches the path). The enhance workflow deletes the file in a
       `finally` block once the request is answered.
Who:   Called by AudioService.

Lifecycle of an uploaded file:
    1. Route reads the multipart `audio` part into memory
    2. FileService.store_upload() checks the size and writes the bytes
    3. AudioService runs the entitlement check and builds the response
    4. FileService.cleanup_file() deletes the file, success or failure

Cleanup is best-effort: a failed delete is logged at WARNING and never turns
into an error response.
"""

import logging
import os
import uuid
from pathlib import Path
from typing import Optional

import aiofiles

from audiocraft.config import settings
from audiocraft.exceptions import FileStorageError, ValidationError

logger = logging.getLogger(__name__)


class FileService:
    """
    Manages the short life of an uploaded file.

    Directory Structure:
        uploads/
        ├── a1b2c3d4-....wav
        └── e5f6g7h8-....mp3
    """

    def __init__(self, upload_dir: Optional[str] = None):
        """
        Args:
            upload_dir: Override the storage path (used in tests).
                        If None, settings.upload_dir is read on each call.
        """
        self._upload_dir = upload_dir

    @property
    def upload_dir(self) -> Path:
        return Path(self._upload_dir or settings.upload_dir).resolve()

    def validate_size(self, size: int) -> None:
        """
        Reject uploads above settings.max_upload_size.

        Raises:
            ValidationError with a human-readable size limit message
        """
        if size > settings.max_upload_size:
            max_mb = settings.max_upload_size / (1024 * 1024)
            raise ValidationError(
                message=f"File size ({size / (1024 * 1024):.1f}MB) exceeds maximum of {max_mb:.0f}MB.",
                field="audio",
                context={"max_size": settings.max_upload_size, "actual_size": size},
            )

    def _generate_path(self, filename: Optional[str]) -> Path:
        # Keep a short, lowercase extension for debugging; the name itself is random
        ext = Path(filename or "").suffix.lower()
        if not ext[1:].isalnum() or len(ext) > 6:
            ext = ""
        return self.upload_dir / f"{uuid.uuid4()}{ext}"

    async def store_upload(self, content: bytes, filename: Optional[str] = None) -> str:
        """
        Write an upload to temporary storage.

        Returns:
            Absolute path of the stored file.

        Raises:
            ValidationError: upload too large.
            FileStorageError: directory creation or write failed.
        """
        self.validate_size(len(content))
        path = self._generate_path(filename)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(path, "wb") as f:
                await f.write(content)
        except OSError as e:
            logger.error("Failed to store upload at %s: %s", path, str(e))
            raise FileStorageError(
                message="Failed to save uploaded audio. Please try again.",
                context={"path": str(path), "os_error": str(e)},
            )

        logger.info("Upload stored: %s (%d bytes)", path.name, len(content))
        return str(path)

    async def cleanup_file(self, file_path: Optional[str]) -> None:
        """
        Remove an uploaded file if it still exists. Never raises.
        """
        if not file_path:
            return
        try:
            path = Path(file_path)
            if path.exists():
                os.remove(path)
                logger.info("Cleaned up file: %s", path.name)
            else:
                logger.debug("Cleanup: file already gone: %s", path.name)
        except Exception as e:
            logger.warning("Failed to clean up file %s: %s", file_path, str(e))


file_service = FileService()
