"""On-disk storage for post images.

Images are written to ``IMAGES_DIR`` under a random name and referenced by
posts through a relative path such as ``images/<uuid>.png``; the same
directory is served statically at ``/images``.
"""

from __future__ import annotations

import logging
import os
import uuid

logger = logging.getLogger("blogapi.images")

# Uploads are served from this URL prefix regardless of where IMAGES_DIR lives.
IMAGES_URL_PREFIX = "images"

_EXTENSIONS = {
    "image/png": ".png",
    "image/jpg": ".jpg",
    "image/jpeg": ".jpg",
}


class ImageStore:
    """Save and remove image files below a single directory."""

    def __init__(self, images_dir: str, allowed_types: list[str] | tuple[str, ...]) -> None:
        self._images_dir = os.path.abspath(images_dir)
        self._allowed_types = {t.lower() for t in allowed_types}

    @property
    def images_dir(self) -> str:
        return self._images_dir

    def accepts(self, content_type: str | None) -> bool:
        return bool(content_type) and content_type.lower() in self._allowed_types

    def save(self, data: bytes, content_type: str) -> str:
        """Write *data* under a fresh name and return its relative path."""
        os.makedirs(self._images_dir, exist_ok=True)
        filename = uuid.uuid4().hex + _EXTENSIONS.get(content_type.lower(), "")
        with open(os.path.join(self._images_dir, filename), "wb") as fh:
            fh.write(data)
        relative = f"{IMAGES_URL_PREFIX}/{filename}"
        logger.info("Stored image %s (%d bytes)", relative, len(data))
        return relative

    def _resolve(self, image_path: str) -> str | None:
        """Map a stored relative path back to a file inside the images dir."""
        filename = os.path.basename(image_path.replace("\\", "/").rstrip("/"))
        if not filename or filename in (".", ".."):
            return None
        return os.path.join(self._images_dir, filename)

    def clear(self, image_path: str | None) -> bool:
        """Delete the file behind *image_path*.  Returns True when a file was removed.

        Missing files are logged and ignored; only files directly inside the
        images directory can ever be removed.
        """
        if not image_path:
            return False
        target = self._resolve(image_path)
        if target is None:
            logger.warning("Refusing to clear image with unusable path %r", image_path)
            return False
        try:
            os.remove(target)
        except FileNotFoundError:
            logger.warning("Image %s already gone", image_path)
            return False
        except OSError:
            logger.exception("Could not remove image %s", image_path)
            return False
        logger.info("Removed image %s", image_path)
        return True


def get_image_store() -> ImageStore:
    """FastAPI dependency: an :class:`ImageStore` bound to the configured directory."""
    from blogapi.config import settings

    return ImageStore(settings.IMAGES_DIR, settings.ALLOWED_IMAGE_TYPES)
