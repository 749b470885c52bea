"""Upload staging for image analysis requests.

Writes each uploaded image to a uniquely named file in the configured
staging directory and removes it when the request is done, whether the
pipeline succeeded, failed, or the task was cancelled. Removal is
best-effort: failures are logged and never fail the request.
"""

import asyncio
import re
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional, Union
from uuid import uuid4

from fastapi import UploadFile

from src.models.models import StagedUpload
from src.utils.exceptions import RequestValidationFailed
from src.utils.logger import logger

CHUNK_SIZE = 1024 * 1024
SAFE_SUFFIX = re.compile(r"^\.[a-z0-9]{1,8}$")
# Room for multipart boundaries and part headers on top of the image itself
MULTIPART_OVERHEAD_BYTES = 64 * 1024


def image_too_large(max_bytes: int) -> RequestValidationFailed:
    return RequestValidationFailed(f"Image too large. Maximum size is {max_bytes // (1024 * 1024)}MB")


def exceeds_upload_limit(content_length: Optional[str], max_bytes: int) -> bool:
    """True when a declared request body cannot hold an image within ``max_bytes``.

    A missing or non-numeric header is not rejected here; the streamed write
    still enforces the limit.
    """
    if not content_length or not content_length.isdigit():
        return False
    return int(content_length) > max_bytes + MULTIPART_OVERHEAD_BYTES


def _log_error(operation_name: str, exception: Exception, log_level: str = "warning") -> None:
    """Log error with appropriate level."""
    msg = f"{operation_name}: {exception}"
    if log_level == "debug":
        logger.debug(msg)
    elif log_level == "error":
        logger.error(msg)
    else:
        logger.warning(msg)


def safe_execute_sync(func, operation_name: str, log_level: str = "warning", default_return=None):
    """Run a best-effort operation, logging instead of raising on failure.

    Args:
        func: Callable to execute (no args).
        operation_name: Description for logging.
        log_level: Logging level ("debug", "warning", "error"). Default: "warning".
        default_return: Value to return on exception.

    Returns:
        Result of func, or default_return if it raised.
    """
    try:
        return func()
    except Exception as e:
        _log_error(operation_name, e, log_level)
        return default_return


def safe_suffix(filename: Optional[str]) -> str:
    """Keep a short alphanumeric extension from the client filename, else none."""
    suffix = Path(filename or "").suffix.lower()
    return suffix if SAFE_SUFFIX.match(suffix) else ""


class UploadStaging:
    """Stages uploads under ``upload_dir`` for exactly one request."""

    def __init__(
        self,
        upload_dir: Union[str, Path],
        max_bytes: int,
        chunk_size: int = CHUNK_SIZE,
    ) -> None:
        self.upload_dir = Path(upload_dir)
        self.max_bytes = max_bytes
        self.chunk_size = chunk_size

    @asynccontextmanager
    async def stage(self, upload: Optional[UploadFile]) -> AsyncIterator[StagedUpload]:
        """Validate and write an upload, yield it, then delete it.

        Args:
            upload: The multipart file, or None if the field was absent.

        Yields:
            StagedUpload describing the file on disk.

        Raises:
            RequestValidationFailed: Missing file, non-image MIME type, empty
                file, or size above the limit. Nothing is left on disk.
        """
        if upload is None or not upload.filename:
            raise RequestValidationFailed("No image file provided")

        mime_type = (upload.content_type or "").lower()
        if not mime_type.startswith("image/"):
            logger.warning(f"Rejected upload '{upload.filename}' with MIME type {mime_type or 'unknown'}")
            raise RequestValidationFailed("Not an image! Please upload an image file.")

        path = self.upload_dir / f"{uuid4().hex}{safe_suffix(upload.filename)}"
        try:
            size = await self._write(upload, path)
            if size == 0:
                raise RequestValidationFailed("Uploaded image is empty")
            logger.debug(f"Staged upload {path.name} ({size} bytes, {mime_type})")
            yield StagedUpload(file_path=path, mime_type=mime_type, size_bytes=size)
        finally:
            await self.remove(path)

    async def _write(self, upload: UploadFile, path: Path) -> int:
        """Stream the upload to ``path``, enforcing the size limit as it goes."""
        await asyncio.to_thread(self.upload_dir.mkdir, parents=True, exist_ok=True)
        size = 0
        handle = await asyncio.to_thread(open, path, "wb")
        try:
            while chunk := await upload.read(self.chunk_size):
                size += len(chunk)
                if size > self.max_bytes:
                    raise image_too_large(self.max_bytes)
                await asyncio.to_thread(handle.write, chunk)
        finally:
            await asyncio.to_thread(handle.close)
        return size

    @staticmethod
    async def read(staged: StagedUpload) -> bytes:
        """Read the staged file without blocking the event loop."""
        return await asyncio.to_thread(staged.file_path.read_bytes)

    @staticmethod
    async def remove(path: Path) -> None:
        """Delete a staged file off the event loop; a missing file is not an error.

        The deletion is shielded so a second cancellation cannot stop it once started.
        """
        await asyncio.shield(
            asyncio.to_thread(
                safe_execute_sync,
                lambda: path.unlink(missing_ok=True),
                f"Failed to remove staged upload {path}",
                log_level="warning",
            )
        )
