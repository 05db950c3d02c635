"""Object storage for uploaded resource files.

Files land under ``<root>/<bucket>/public/`` and are served from a public
base URL by whatever fronts the storage directory.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from stratizen_hub.core.settings import settings
from stratizen_hub.db.time import utcnow
from stratizen_hub.services.errors import BackendUnavailableError, InvalidOperationError

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


@dataclass(frozen=True)
class StoredObject:
    """Location of an uploaded file."""

    path: str
    url: str


class ObjectStorage:
    """Filesystem-backed bucket with public URLs."""

    def __init__(
        self,
        root: str | Path,
        bucket: str,
        public_base_url: str,
        max_bytes: int,
    ) -> None:
        self.root = Path(root)
        self.bucket = bucket
        self.public_base_url = public_base_url.rstrip("/")
        self.max_bytes = max_bytes

    @staticmethod
    def safe_name(filename: str) -> str:
        """Collapse whitespace and unsafe characters into underscores."""
        name = Path(filename).name.strip()
        cleaned = _UNSAFE_CHARS.sub("_", name).strip("_")
        return cleaned or "file"

    def public_url(self, path: str) -> str:
        """Return the public URL of an object path inside the bucket."""
        return f"{self.public_base_url}/{self.bucket}/{path.lstrip('/')}"

    def upload(self, filename: str, data: bytes) -> StoredObject:
        """Store ``data`` and return its path and public URL.

        Raises:
            InvalidOperationError: If the file is empty or too large.
            BackendUnavailableError: If the file cannot be written.
        """
        if not data:
            raise InvalidOperationError("Uploaded file is empty")
        if len(data) > self.max_bytes:
            raise InvalidOperationError(
                f"Uploaded file exceeds the {self.max_bytes} byte limit"
            )

        stamp = int(utcnow().timestamp() * 1000)
        path = f"public/{stamp}_{self.safe_name(filename)}"
        target = self.root / self.bucket / path
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as err:
            logger.error("Failed to store %s: %s", target, err, exc_info=True)
            raise BackendUnavailableError("File storage is unavailable, please retry") from err

        logger.info("Stored %d bytes at %s/%s", len(data), self.bucket, path)
        return StoredObject(path=path, url=self.public_url(path))


storage = ObjectStorage(
    root=settings.storage_root,
    bucket=settings.storage_bucket,
    public_base_url=settings.storage_public_base_url,
    max_bytes=settings.max_upload_bytes,
)


def get_storage() -> ObjectStorage:
    """Return the shared storage configured from settings."""
    return storage
