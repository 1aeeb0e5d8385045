"""
One-time migration from the legacy flat layout (``<posts_dir>/<slug>.md``)
to the folder-per-post layout used by :class:`PostsRepo`.
"""

import datetime
import logging
from pathlib import Path
from typing import List

from quickpost.repos.posts_repo import CONTENT_FILE, PostsRepo
from quickpost.schemas.blog import PostMeta
from quickpost.utils import format_timestamp, load_frontmatter

logger = logging.getLogger(__name__)


def migrate_flat_posts(posts_dir) -> List[str]:
    """Move every ``*.md`` file in posts_dir into its own post folder."""
    repo = PostsRepo(posts_dir)
    if not repo.posts_dir.is_dir():
        return []

    migrated = []
    for path in sorted(repo.posts_dir.glob("*.md")):
        slug = path.stem
        if repo.name_taken(slug):
            logger.warning(f"Skipping {path.name}: {slug}/ already exists")
            continue

        raw = path.read_text(encoding="utf-8")
        metadata = _read_metadata(raw, path)
        mtime = _file_timestamp(path)
        meta = PostMeta(
            id=slug,
            slug=slug,
            title=str(metadata.get("title") or _derive_title(slug)),
            createdAt=_convert_date(metadata.get("createdAt")) or mtime,
            updatedAt=_convert_date(metadata.get("updatedAt")) or mtime,
        )

        repo.create_folder(slug)
        path.rename(repo.posts_dir / slug / CONTENT_FILE)
        repo.write_meta(slug, meta)
        migrated.append(slug)
        logger.info(f"Migrated {path.name} -> {slug}/")

    return migrated


def _read_metadata(raw: str, path: Path) -> dict:
    metadata, _body = load_frontmatter(raw)
    if not metadata and raw.startswith("---\n"):
        logger.warning(f"Ignoring unreadable frontmatter in {path.name}")
    return metadata


def _derive_title(slug: str) -> str:
    return slug.replace("-", " ").replace("_", " ").title()


def _convert_date(value):
    """Normalise a frontmatter date to the UTC ``...Z`` form the store writes."""
    if isinstance(value, datetime.datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=datetime.timezone.utc)
        return format_timestamp(value)
    if isinstance(value, datetime.date):
        midnight = datetime.datetime.combine(value, datetime.time())
        return format_timestamp(midnight.replace(tzinfo=datetime.timezone.utc))
    if not value:
        return None
    try:
        parsed = datetime.datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return str(value)
    return _convert_date(parsed)


def _file_timestamp(path: Path) -> str:
    mtime = datetime.datetime.fromtimestamp(path.stat().st_mtime, datetime.timezone.utc)
    return format_timestamp(mtime)
