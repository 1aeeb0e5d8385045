"""Markdown to sanitized HTML for the editor preview."""

import re

import bleach
from markdown_it import MarkdownIt
from mdit_py_plugins.tasklists import tasklists_plugin

ALLOWED_TAGS = frozenset(
    {
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "p",
        "br",
        "hr",
        "ul",
        "ol",
        "li",
        "table",
        "thead",
        "tbody",
        "tr",
        "th",
        "td",
        "a",
        "img",
        "strong",
        "b",
        "em",
        "i",
        "u",
        "del",
        "s",
        "code",
        "pre",
        "blockquote",
        "input",  # task list checkboxes
    }
)

ALLOWED_ATTRIBUTES = [
    "href",
    "src",
    "alt",
    "title",
    "width",
    "height",
    "type",
    "checked",
    "disabled",
    "class",
]

# bleach.clean in render() is what sanitizes the output. It strips disallowed
# tags but keeps their text, so this only drops script and style bodies first.
_SCRIPT_CONTENT_RE = re.compile(
    r"<(script|style|iframe|noscript)\b[^>]*>[\s\S]*?(?:</\1\s*>|\Z)",
    re.IGNORECASE,
)


def _make_parser() -> MarkdownIt:
    md = MarkdownIt(
        "gfm-like", options_update={"linkify": False, "breaks": True, "html": True}
    )
    return md.use(tasklists_plugin)


_parser = _make_parser()


def render(markdown_text: str) -> str:
    html = _parser.render(markdown_text or "")
    html = _SCRIPT_CONTENT_RE.sub("", html)
    return bleach.clean(
        html,
        tags=ALLOWED_TAGS,
        attributes=ALLOWED_ATTRIBUTES,
        strip=True,
        strip_comments=True,
    )
