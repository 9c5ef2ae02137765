"""RSS 2.0 feed of published posts."""

from collections.abc import Iterable
from email.utils import format_datetime
from html import escape
import re

from sqlalchemy.ext.asyncio import AsyncSession

from inkblog.core.config_models import BlogConfig
from inkblog.db.models import Post
from inkblog.db.repositories import post_repository, settings_repository
from inkblog.db.utils import parse_timestamp

FEED_DESCRIPTION_LENGTH = 300
DEFAULT_PREVIEW_LENGTH = 150
DEFAULT_FEED_DESCRIPTION = "A minimal blog"

_TABLE_SEPARATOR_RE = re.compile(r"^\s*\|?\s*:?-{3,}:?\s*(\|\s*:?-{3,}:?\s*)+\|?\s*$")

# (pattern, replacement) applied in order after tables are dropped
_MARKDOWN_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"```[\s\S]*?```"), ""),
    (re.compile(r"`[^`]+`"), ""),
    (re.compile(r"!\[([^\]]*)\]\([^)]+\)"), ""),
    (re.compile(r"\[([^\]]+)\]\([^)]+\)"), r"\1"),
    (re.compile(r"^#+\s+", re.M), ""),
    (re.compile(r"\*\*([^*]+)\*\*"), r"\1"),
    (re.compile(r"\*([^*]+)\*"), r"\1"),
    (re.compile(r"__([^_]+)__"), r"\1"),
    (re.compile(r"_([^_]+)_"), r"\1"),
    (re.compile(r"^>\s+", re.M), ""),
    (re.compile(r"^[*\-+]\s+", re.M), ""),
    (re.compile(r"^\d+\.\s+", re.M), ""),
    (re.compile(r"^---$", re.M), ""),
    (re.compile(r"^\s*\|.*\|\s*$", re.M), ""),
    (re.compile(r"^\s*:?-{3,}:?\s*(\|\s*:?-{3,}:?\s*)+\s*$", re.M), ""),
)


def _drop_tables(lines: list[str]) -> list[str]:
    """Remove GitHub-style tables: a header row, its separator and the rows below it."""
    kept: list[str] = []
    i = 0
    while i < len(lines):
        current = lines[i]
        nxt = lines[i + 1] if i + 1 < len(lines) else ""
        if current and "|" in current and nxt and _TABLE_SEPARATOR_RE.match(nxt):
            i += 2
            while i < len(lines) and lines[i] and "|" in lines[i]:
                i += 1
            continue
        kept.append(current)
        i += 1
    return kept


def extract_plain_text(markdown: str | None, max_length: int = DEFAULT_PREVIEW_LENGTH) -> str:
    """Best-effort plain-text preview of a markdown document."""
    normalized = (markdown or "").replace("\r\n", "\n").replace("\r", "\n")
    text = "\n".join(_drop_tables(normalized.split("\n")))
    for pattern, replacement in _MARKDOWN_RULES:
        text = pattern.sub(replacement, text)
    text = re.sub(r"\s+", " ", text).strip()

    if len(text) > max_length:
        return text[:max_length] + "..."
    return text


def _pub_date(timestamp: str) -> str:
    try:
        return format_datetime(parse_timestamp(timestamp), usegmt=True)
    except ValueError:
        return timestamp


def render_rss(posts: Iterable[Post], settings: dict[str, str], base_url: str) -> str:
    base_url = base_url.rstrip("/")
    title = settings.get("blogTitle") or "Blog"
    description = settings.get("authorBio") or DEFAULT_FEED_DESCRIPTION
    language = settings.get("language") or "en"

    items = "\n".join(
        f"""    <item>
      <title>{escape(post.title)}</title>
      <link>{escape(base_url)}/posts/{escape(post.id)}</link>
      <guid isPermaLink="true">{escape(base_url)}/posts/{escape(post.id)}</guid>
      <description>{escape(extract_plain_text(post.content, FEED_DESCRIPTION_LENGTH))}</description>
      <pubDate>{_pub_date(post.created_at)}</pubDate>
    </item>"""
        for post in posts
    )

    return f"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:atom="http://www.w3.org/2005/Atom">
  <channel>
    <title>{escape(title)}</title>
    <link>{escape(base_url)}</link>
    <description>{escape(description)}</description>
    <language>{escape(language)}</language>
    <atom:link href="{escape(base_url)}/api/feed.xml" rel="self" type="application/rss+xml"/>
{items}
  </channel>
</rss>
"""


async def build_feed(db: AsyncSession, blog: BlogConfig) -> str:
    posts = await post_repository.get_all_posts(db, include_unpublished=False)
    settings = await settings_repository.get_settings(db)
    return render_rss(posts, settings, blog.base_url)
