import logging
import shutil
from typing import List, Optional

from quickpost.repos.posts_repo import PostsRepo
from quickpost.schemas.blog import PostDetail, PostMeta, PostSummary
from quickpost.utils import (
    derive_slug,
    ensure_frontmatter,
    parse_frontmatter,
    parse_timestamp,
    set_frontmatter_field,
    utc_now_iso,
)

logger = logging.getLogger(__name__)

FALLBACK_SLUG = "post"


class PostsService:
    def __init__(self, repo: PostsRepo):
        self.repo = repo

    def create(self, title: str, content: str) -> PostDetail:
        self.repo.ensure_root()

        fields, _body = parse_frontmatter(content)
        base_slug = fields.get("slug") or derive_slug(title)
        slug = self._unique_slug(derive_slug(base_slug) or FALLBACK_SLUG)

        content = ensure_frontmatter(content, title, slug)
        now = utc_now_iso()
        meta = PostMeta(id=slug, slug=slug, title=title, createdAt=now, updatedAt=now)

        folder = self.repo.create_folder(slug)
        try:
            self.repo.write_content(slug, content)
            self.repo.write_meta(slug, meta)
        except OSError:
            logger.error(f"Failed to write post {slug}, removing partial folder")
            shutil.rmtree(folder, ignore_errors=True)
            raise

        logger.info(f"Created post {slug}")
        return _to_detail(meta, slug, content)

    def get(self, slug: str) -> Optional[PostDetail]:
        if not self.repo.exists(slug):
            return None
        meta = self.repo.read_meta(slug)
        if meta is None:
            return None
        content = self.repo.read_content(slug)
        if content is None:
            logger.warning(f"Post {slug} has metadata but no content file")
            return None
        return _to_detail(meta, slug, content)

    def list(self) -> List[PostSummary]:
        posts = []
        for folder in self.repo.folder_names():
            meta = self.repo.read_meta(folder)
            if meta is None:
                continue
            posts.append(PostSummary(folder=folder, **meta.model_dump()))

        posts.sort(key=lambda p: parse_timestamp(p.createdAt), reverse=True)
        return posts

    def update(
        self, slug: str, title: Optional[str] = None, content: Optional[str] = None
    ) -> Optional[PostDetail]:
        post = self.get(slug)
        if not post:
            return None

        meta = self.repo.read_meta(slug)
        now = utc_now_iso()
        new_content = content if content is not None else post.content

        fields, _body = parse_frontmatter(new_content)
        if title is not None:
            meta.title = title
            if fields:
                new_content = set_frontmatter_field(new_content, "title", title)

        if "updatedAt" in fields:
            new_content = set_frontmatter_field(new_content, "updatedAt", now)

        meta.updatedAt = now

        if new_content != post.content:
            self.repo.write_content(slug, new_content)
        self.repo.write_meta(slug, meta)

        return _to_detail(meta, slug, new_content)

    def delete(self, slug: str) -> bool:
        deleted = self.repo.remove(slug)
        if deleted:
            logger.info(f"Deleted post {slug}")
        return deleted

    def _unique_slug(self, slug: str) -> str:
        candidate = slug
        counter = 1
        while self.repo.name_taken(candidate):
            candidate = f"{slug}-{counter}"
            counter += 1
        return candidate


def _to_detail(meta: PostMeta, folder: str, content: str) -> PostDetail:
    return PostDetail(folder=folder, content=content, **meta.model_dump())
