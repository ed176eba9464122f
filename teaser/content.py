"""Content loading for Teaser.

This module reads markdown articles with YAML front-matter and turns them
into ArticleRecord objects ready for the feed builder.

Key classes:
- ArticleRecord: Frozen dataclass holding one rendered article.
- ArticleLoader: Discovers, parses and renders articles in a content folder.

Front-matter problems never raise here. Missing or invalid values load as
None and are reported later, when the feed entry is built.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any

import yaml

from .renderers import MarkdownRenderer
from .utils import coerce_date, is_internal_path, is_markdown, titleize

logger = logging.getLogger(__name__)

FRONTMATTER_RE = re.compile(r"^---\s*\n(.*?)\n---\s*(?:\n|$)", re.DOTALL)


class _FrontmatterLoader(yaml.SafeLoader):
    """SafeLoader that keeps impossible dates such as 2020-13-45 as strings."""

    def construct_yaml_timestamp(self, node):
        try:
            return super().construct_yaml_timestamp(node)
        except ValueError:
            return self.construct_scalar(node)


_FrontmatterLoader.add_constructor(
    "tag:yaml.org,2002:timestamp", _FrontmatterLoader.construct_yaml_timestamp
)


def extract_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Extract YAML frontmatter from content.

    Args:
        text: Raw file content.

    Returns:
        Tuple of (frontmatter dict, remaining content).
    """
    match = FRONTMATTER_RE.match(text)
    if not match:
        return {}, text
    try:
        data = yaml.load(match.group(1), Loader=_FrontmatterLoader) or {}
    except yaml.YAMLError as exc:
        logger.warning("Ignoring invalid front-matter: %s", exc)
        return {}, text
    if not isinstance(data, dict):
        return {}, text
    return data, text[match.end() :]


@dataclass(frozen=True)
class ArticleRecord:
    """A rendered article with its front-matter.

    Attributes:
        html: Rendered HTML body.
        title: Article title.
        excerpt: Short author-written summary.
        path: Site-relative URL path with a leading slash.
        created: Publication date.
        updated: Date of the last revision.
        tags: Tags from front-matter.
        source: Markdown file the article was loaded from.
    """

    html: str
    title: str | None
    excerpt: str
    path: str | None
    created: date | None
    updated: date | None = None
    tags: tuple[str, ...] = field(default_factory=tuple)
    source: Path | None = None


def _text_or_none(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _url_path(value: Any, source: Path) -> str | None:
    text = _text_or_none(value)
    if text and not text.startswith("/"):
        logger.warning("%s: path %r has no leading slash, using /%s", source, text, text)
        text = f"/{text}"
    return text


def _normalize_tags(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        value = value.split(",")
    return tuple(str(tag).strip() for tag in value if str(tag).strip())


class ArticleLoader:
    """Loads markdown articles from a content directory.

    Attributes:
        content_dir: Directory holding the markdown sources.
        renderer: Markdown renderer used for article bodies.
    """

    def __init__(self, content_dir: Path, renderer: MarkdownRenderer | None = None):
        self.content_dir = content_dir
        self.renderer = renderer or MarkdownRenderer()

    def iter_files(self) -> list[Path]:
        """List markdown files, skipping drafts and internal folders.

        Returns:
            Sorted list of paths to markdown files.
        """
        files: list[Path] = []
        for path in sorted(self.content_dir.rglob("*")):
            if path.is_dir() or not is_markdown(path):
                continue
            if is_internal_path(path.relative_to(self.content_dir)):
                continue
            files.append(path)
        return files

    def load(self, path: Path) -> ArticleRecord:
        """Load one article.

        Args:
            path: Markdown file to load.

        Returns:
            ArticleRecord for the file.
        """
        raw = path.read_text(encoding="utf-8")
        frontmatter, body = extract_frontmatter(raw)
        # page-bundle layout: content/posts/<slug>/index.md
        name = path.parent.name if path.stem == "index" else path.name
        return ArticleRecord(
            html=self.renderer.render(body),
            title=_text_or_none(frontmatter.get("title")) or titleize(name),
            excerpt=_text_or_none(frontmatter.get("excerpt")) or "",
            path=_url_path(frontmatter.get("path"), path),
            created=coerce_date(frontmatter.get("created")),
            updated=coerce_date(frontmatter.get("updated")),
            tags=_normalize_tags(frontmatter.get("tags")),
            source=path,
        )

    def load_posts(self, posts_dir: str = "posts") -> list[ArticleRecord]:
        """Load the articles under ``posts_dir``, newest first.

        Articles without a publication date are kept, after the dated ones,
        so the feed builder can report them.

        Args:
            posts_dir: Folder name an article path must contain.

        Returns:
            List of ArticleRecords sorted by creation date, descending.
        """
        records = []
        for path in self.iter_files():
            if posts_dir not in path.relative_to(self.content_dir).parts[:-1]:
                continue
            try:
                records.append(self.load(path))
            except (OSError, UnicodeDecodeError) as exc:
                logger.warning("Skipping unreadable article %s: %s", path, exc)
        logger.info("Loaded %d articles from %s", len(records), self.content_dir)

        dated = [r for r in records if r.created is not None]
        undated = [r for r in records if r.created is None]
        dated.sort(key=lambda r: r.created, reverse=True)
        return dated + undated
