import logging
import uuid
from pathlib import Path
from typing import List, Optional, Tuple

from quickpost.repos.posts_repo import PostsRepo

logger = logging.getLogger(__name__)

IMAGES_URL_PREFIX = "images"

ALLOWED_IMAGE_TYPES = {
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/gif": "gif",
    "image/webp": "webp",
}


class ImageService:
    def __init__(self, repo: PostsRepo):
        self.repo = repo

    def upload_image(self, slug: str, data: bytes, extension: str) -> Optional[str]:
        """
        Store image bytes for a post under a freshly generated name.

        Returns the path to embed in markdown, ``images/<slug>/<name>.<ext>``,
        or None when the post does not exist.
        """
        if not self.repo.exists(slug):
            return None

        images_dir = self.repo.images_dir(slug)
        images_dir.mkdir(exist_ok=True)

        filename = f"{uuid.uuid4().hex}.{extension.lstrip('.').lower()}"
        (images_dir / filename).write_bytes(data)

        logger.info(f"Stored image {filename} for post {slug} ({len(data)} bytes)")
        return f"{IMAGES_URL_PREFIX}/{slug}/{filename}"

    def list_images(self, slug: str) -> Optional[List[str]]:
        """Paths of a post's images, or None when the post does not exist."""
        if not self.repo.exists(slug):
            return None
        images_dir = self.repo.images_dir(slug)
        if not images_dir.is_dir():
            return []
        return [
            f"{IMAGES_URL_PREFIX}/{slug}/{entry.name}"
            for entry in sorted(images_dir.iterdir())
            if entry.is_file()
        ]

    def get_image(self, image_path: str) -> Tuple[Optional[bytes], Optional[str]]:
        """
        Read an image addressed as ``<slug>/<filename>``.
        """
        slug, _, filename = image_path.partition("/")
        if not filename or not _is_safe_filename(filename):
            return None, None

        images_dir = self.repo.images_dir(slug)
        if images_dir is None:
            return None, None

        path = images_dir / filename
        if not path.is_file():
            logger.warning(f"Image not found: {image_path}")
            return None, None

        try:
            return path.read_bytes(), get_content_type_from_filename(filename)
        except OSError as e:
            logger.error(f"Error reading image {image_path}: {e}")
            return None, None


def _is_safe_filename(filename: str) -> bool:
    return (
        Path(filename).name == filename
        and not filename.startswith(".")
        and "\\" not in filename
    )


def get_content_type_from_filename(filename: str) -> str:
    """
    Determine content type from file extension
    """
    filename = filename.lower()
    if filename.endswith((".jpg", ".jpeg")):
        return "image/jpeg"
    elif filename.endswith(".png"):
        return "image/png"
    elif filename.endswith(".gif"):
        return "image/gif"
    elif filename.endswith(".svg"):
        return "image/svg+xml"
    elif filename.endswith(".webp"):
        return "image/webp"
    else:
        return "application/octet-stream"


def extension_for_content_type(content_type: Optional[str]) -> Optional[str]:
    """Map an allowed upload content type to its file extension."""
    if not content_type:
        return None
    return ALLOWED_IMAGE_TYPES.get(content_type.split(";")[0].strip().lower())


def markdown_for_image(path: str, alt: str = "") -> str:
    return f"![{alt}](/{path})"
