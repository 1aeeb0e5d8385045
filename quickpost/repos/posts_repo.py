import json
import logging
import shutil
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from quickpost.schemas.blog import PostMeta

logger = logging.getLogger(__name__)

CONTENT_FILE = "post.md"
META_FILE = "meta.json"
IMAGES_DIR = "images"


class PostsRepo:
    """
    Folder-per-post storage rooted at ``posts_dir``.

    Each post lives in ``<posts_dir>/<slug>/`` holding ``post.md``,
    ``meta.json`` and an ``images/`` folder. Nothing is cached; every call
    goes back to disk.
    """

    def __init__(self, posts_dir):
        self.posts_dir = Path(posts_dir).resolve()

    def ensure_root(self) -> None:
        self.posts_dir.mkdir(parents=True, exist_ok=True)

    def post_dir(self, slug: str) -> Optional[Path]:
        if not self._is_valid_slug(slug):
            return None
        return self.posts_dir / slug

    def exists(self, slug: str) -> bool:
        path = self.post_dir(slug)
        return path is not None and path.is_dir()

    def name_taken(self, name: str) -> bool:
        """True if any folder or file already uses this name."""
        return (self.posts_dir / name).exists()

    def folder_names(self) -> List[str]:
        if not self.posts_dir.is_dir():
            return []
        return [entry.name for entry in self.posts_dir.iterdir() if entry.is_dir()]

    def create_folder(self, slug: str) -> Path:
        path = self.posts_dir / slug
        path.mkdir(parents=True)
        (path / IMAGES_DIR).mkdir()
        return path

    def read_meta(self, slug: str) -> Optional[PostMeta]:
        path = self.post_dir(slug)
        if path is None:
            return None
        try:
            raw = (path / META_FILE).read_text(encoding="utf-8")
            return PostMeta.model_validate(json.loads(raw))
        except FileNotFoundError:
            return None
        except (ValueError, ValidationError, OSError) as e:
            logger.warning(f"Ignoring unreadable metadata for {slug}: {e}")
            return None

    def write_meta(self, slug: str, meta: PostMeta) -> None:
        path = self.posts_dir / slug / META_FILE
        path.write_text(json.dumps(meta.model_dump(), indent=2), encoding="utf-8")

    def read_content(self, slug: str) -> Optional[str]:
        path = self.post_dir(slug)
        if path is None:
            return None
        try:
            return (path / CONTENT_FILE).read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def write_content(self, slug: str, content: str) -> None:
        (self.posts_dir / slug / CONTENT_FILE).write_text(content, encoding="utf-8")

    def remove(self, slug: str) -> bool:
        if not self.exists(slug):
            return False
        shutil.rmtree(self.posts_dir / slug)
        return True

    def images_dir(self, slug: str) -> Optional[Path]:
        path = self.post_dir(slug)
        return path / IMAGES_DIR if path is not None else None

    @staticmethod
    def _is_valid_slug(slug: str) -> bool:
        if not slug or slug.startswith("."):
            return False
        return "/" not in slug and "\\" not in slug and "\x00" not in slug
