"""On-disk storage for contact photos."""

import logging
import secrets
import time
from pathlib import Path

from starlette.datastructures import UploadFile

from contactbook.errors import MalformedRequestError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024
CONTACT_PHOTO_SUBDIR = "contacts"

# Stored extension comes from the content type, never the client filename
IMAGE_EXTENSIONS = {
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/gif": ".gif",
    "image/webp": ".webp",
}


class PhotoStorage:
    """Writes uploaded photos under ``<root>/contacts`` with unique filenames.

    Files are served back from ``/uploads/contacts/<filename>``.
    """

    def __init__(self, root: str | Path, max_bytes: int):
        self.root = Path(root)
        self.directory = self.root / CONTACT_PHOTO_SUBDIR
        self.max_bytes = max_bytes

    def ensure_directory(self) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def make_filename(extension: str) -> str:
        """Build ``<epoch-ms>-<random><ext>``."""
        return f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}{extension}"

    async def save(self, upload: UploadFile) -> str:
        """Store an uploaded image and return its filename."""
        content_type = (upload.content_type or "").split(";")[0].strip().lower()
        extension = IMAGE_EXTENSIONS.get(content_type)
        if extension is None:
            raise MalformedRequestError(
                "Photo must be an image (" + ", ".join(sorted(IMAGE_EXTENSIONS)) + ")"
            )

        self.ensure_directory()
        filename = self.make_filename(extension)
        target = self.directory / filename

        written = 0
        with target.open("wb") as out:
            while chunk := await upload.read(CHUNK_SIZE):
                written += len(chunk)
                if written > self.max_bytes:
                    break
                out.write(chunk)

        if written > self.max_bytes:
            target.unlink(missing_ok=True)
            raise MalformedRequestError("Photo is too large")

        logger.info(f"Stored contact photo {filename} ({written} bytes)")
        return filename

    def discard(self, filename: str) -> None:
        """Delete a stored photo that ended up unused."""
        (self.directory / Path(filename).name).unlink(missing_ok=True)
        logger.info(f"Discarded contact photo {filename}")
