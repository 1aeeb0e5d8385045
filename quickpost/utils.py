import datetime as dt
import re
from typing import Any, Dict, Tuple

import yaml
from frontmatter.default_handlers import YAMLHandler

SLUG_MAX_LENGTH = 60
PUBLISH_DATE_OFFSET = dt.timezone(dt.timedelta(hours=-7))
OLDEST = dt.datetime.min.replace(tzinfo=dt.timezone.utc)

FRONTMATTER_RE = re.compile(r"^---\n([\s\S]*?)\n---\n([\s\S]*)$")

yaml_handler = YAMLHandler()


def derive_slug(title: str) -> str:
    """Turn a post title into a lowercase, hyphen-separated URL-safe slug."""
    slug = title.lower().strip()
    slug = re.sub(r"[^\w\s-]", "", slug, flags=re.ASCII)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    slug = slug.strip("-")
    return slug[:SLUG_MAX_LENGTH]


def load_frontmatter(content: str) -> Tuple[Dict[str, Any], str]:
    """
    Split a leading ``---`` block off the content and load it as YAML.

    Returns ``(metadata, body)`` with the values as YAML typed them. Content
    without a block, with a block that is not valid YAML, or with a block that
    is not a mapping comes back as ``({}, content)``.
    """
    match = FRONTMATTER_RE.match(content or "")
    if not match:
        return {}, content

    try:
        metadata = yaml_handler.load(match.group(1))
    except (yaml.YAMLError, ValueError):
        return {}, content

    if not isinstance(metadata, dict):
        return {}, content

    return {str(key): value for key, value in metadata.items()}, match.group(2)


def parse_frontmatter(content: str) -> Tuple[Dict[str, str], str]:
    """Like :func:`load_frontmatter`, with every value turned into a string."""
    metadata, body = load_frontmatter(content)
    return {key: _to_text(value) for key, value in metadata.items()}, body


def _to_text(value) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, dt.datetime) and value.tzinfo is not None:
        return format_timestamp(value)
    if isinstance(value, dt.date):
        return value.isoformat()
    return str(value)


def serialize_frontmatter(metadata: Dict[str, Any]) -> str:
    text = yaml_handler.export(metadata, sort_keys=False, width=float("inf"))
    return f"---\n{text}\n---\n"


def ensure_frontmatter(content: str, title: str, slug: str) -> str:
    """Prepend a default frontmatter block unless the content already has one."""
    fields, _body = parse_frontmatter(content)
    if fields:
        return content

    now = utc_now_iso()
    defaults = {
        "title": title,
        "slug": slug,
        "publishDate": publish_date(),
        "createdAt": now,
        "updatedAt": now,
        "draft": True,
    }
    return f"{serialize_frontmatter(defaults)}\n{content}"


def set_frontmatter_field(content: str, key: str, value: Any) -> str:
    metadata, body = load_frontmatter(content)
    metadata[key] = value
    return serialize_frontmatter(metadata) + body


def format_timestamp(moment: dt.datetime) -> str:
    moment = moment.astimezone(dt.timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str) -> dt.datetime:
    """
    Read an ISO 8601 timestamp, ``Z`` suffix included. Naive values are taken
    as UTC and anything unreadable sorts as the oldest possible moment.
    """
    try:
        moment = dt.datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (AttributeError, ValueError):
        return OLDEST
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=dt.timezone.utc)
    return moment


def utc_now_iso() -> str:
    return format_timestamp(dt.datetime.now(dt.timezone.utc))


def publish_date() -> str:
    # Local blog time is pinned to UTC-7
    return dt.datetime.now(PUBLISH_DATE_OFFSET).strftime("%Y-%m-%dT%H:%M:%S-07:00")
