"""Feed generation for Teaser.

This module turns ArticleRecords into feed entries and serializes them as
RSS 2.0. Building entries is pure and in-memory; only the generators touch
the filesystem.

Classes:
    FeedEntry: One syndication item.
    FeedResult: Entries built plus the articles that were skipped.
    FeedItemBuilder: Builds entries with a truncated HTML preview.
    FeedGenerator: Abstract base class for feed serializers.
    RSSGenerator: Writes RSS 2.0 feeds.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

from jinja2 import Environment

from .config import DEFAULT_CALL_TO_ACTION, SiteConfig
from .content import ArticleRecord
from .errors import MissingMetadata
from .excerpt import DEFAULT_PARAGRAPHS, PARAGRAPH_MARKER, preview_html

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("path", "created")


@dataclass(frozen=True)
class FeedEntry:
    """A single feed item.

    Attributes:
        title: Article title.
        description: The article excerpt.
        path: Site-relative path of the article.
        date: Publication date.
        url: Absolute URL of the article.
        guid: Unique identifier, identical to url.
        content: Preview HTML followed by the call-to-action link.
    """

    title: str | None
    description: str
    path: str
    date: date
    url: str
    guid: str
    content: str


@dataclass
class FeedResult:
    """Result of building feed entries.

    Attributes:
        entries: Entries in the same order as the input articles.
        skipped: Errors for the articles left out of the feed.
    """

    entries: list[FeedEntry] = field(default_factory=list)
    skipped: list[MissingMetadata] = field(default_factory=list)


class FeedItemBuilder:
    """Builds feed entries from articles.

    Each entry's content is the article HTML cut before its
    ``paragraphs``-th paragraph, followed by a call-to-action paragraph
    that links back to the article.

    Attributes:
        base_url: Absolute site URL prepended to article paths.
        paragraphs: The preview is cut before this paragraph marker.
        site_title: Label available to the call-to-action template.
    """

    def __init__(
        self,
        base_url: str,
        paragraphs: int = DEFAULT_PARAGRAPHS,
        call_to_action: str = DEFAULT_CALL_TO_ACTION,
        site_title: str = "",
    ):
        self.base_url = base_url
        self.paragraphs = paragraphs
        self.site_title = site_title
        self._call_to_action = Environment(autoescape=True).from_string(call_to_action)

    @classmethod
    def from_config(cls, config: SiteConfig) -> FeedItemBuilder:
        return cls(
            config.site_url,
            paragraphs=config.feed.paragraphs,
            call_to_action=config.feed.call_to_action,
            site_title=config.title,
        )

    def build_entry(self, record: ArticleRecord) -> FeedEntry:
        """Build the feed entry for one article.

        Args:
            record: Article to syndicate.

        Returns:
            The FeedEntry.

        Raises:
            MissingMetadata: If the article has no path or creation date.
        """
        missing = tuple(name for name in REQUIRED_FIELDS if not getattr(record, name))
        if missing:
            raise MissingMetadata(record.source, missing)

        url = f"{self.base_url}{record.path}"
        preview = preview_html(record.html, self.paragraphs, PARAGRAPH_MARKER)
        link = self._call_to_action.render(url=url, site_title=self.site_title)
        return FeedEntry(
            title=record.title,
            description=record.excerpt,
            path=record.path,
            date=record.created,
            url=url,
            guid=url,
            content=preview + link,
        )

    def build(self, records: Iterable[ArticleRecord]) -> FeedResult:
        """Build entries for all articles, preserving their order.

        Articles with missing metadata are skipped and reported. A path
        seen twice is logged, since both items would share one guid.

        Args:
            records: Articles in feed order, usually newest first.

        Returns:
            FeedResult with the entries and skipped articles.
        """
        result = FeedResult()
        seen: set[str] = set()
        for record in records:
            try:
                entry = self.build_entry(record)
            except MissingMetadata as exc:
                logger.warning("Skipping article: %s", exc)
                result.skipped.append(exc)
                continue
            if entry.path in seen:
                logger.warning("Duplicate article path %s in %s", entry.path, record.source)
            seen.add(entry.path)
            result.entries.append(entry)
        return result


def _rfc822(value: date) -> str:
    return value.strftime("%a, %d %b %Y 00:00:00 +0000")


RSS_TEMPLATE = """\
<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:content="http://purl.org/rss/1.0/modules/content/" \
xmlns:atom="http://www.w3.org/2005/Atom">
<channel>
<title>{{ title }}</title>
<link>{{ link }}</link>
<description>{{ description }}</description>
<atom:link href="{{ self_url }}" rel="self" type="application/rss+xml"/>
{% if last_build_date %}
<lastBuildDate>{{ last_build_date }}</lastBuildDate>
{% endif %}
{% for entry in entries %}
<item>
<title>{{ entry.title or entry.url }}</title>
<link>{{ entry.url }}</link>
<guid isPermaLink="true">{{ entry.guid }}</guid>
<description>{{ entry.description or entry.title or "" }}</description>
<pubDate>{{ rfc822(entry.date) }}</pubDate>
<content:encoded>{{ entry.content }}</content:encoded>
</item>
{% endfor %}
</channel>
</rss>
"""


class FeedGenerator(ABC):
    """Abstract base class for feed generators.

    Subclasses implement specific syndication formats.
    """

    def __init__(self, config: SiteConfig):
        self.config = config

    @property
    @abstractmethod
    def filename(self) -> str:
        """Return the output filename for this feed."""
        ...

    @abstractmethod
    def generate(self, entries: Sequence[FeedEntry]) -> str:
        """Serialize feed entries.

        Args:
            entries: Entries in feed order.

        Returns:
            Feed document as a string.
        """
        ...

    def write(self, output_dir: Path, entries: Sequence[FeedEntry]) -> Path:
        """Generate and write the feed to the output directory.

        Args:
            output_dir: Directory to write the feed file to.
            entries: Entries in feed order.

        Returns:
            Path of the written file.
        """
        output_path = output_dir / self.filename
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.generate(entries), encoding="utf-8")
        return output_path


class RSSGenerator(FeedGenerator):
    """Generates an RSS 2.0 feed with full preview content.

    The channel's lastBuildDate is the newest entry date, so rebuilding
    unchanged content gives an identical file.
    """

    _environment = Environment(autoescape=True, trim_blocks=True, lstrip_blocks=True)

    @property
    def filename(self) -> str:
        """Return RSS filename."""
        return self.config.feed.output

    def generate(self, entries: Sequence[FeedEntry]) -> str:
        """Generate RSS feed content.

        Args:
            entries: Entries in feed order.

        Returns:
            RSS XML content.
        """
        newest = max((entry.date for entry in entries), default=None)
        template = self._environment.from_string(RSS_TEMPLATE)
        return template.render(
            title=self.config.feed_title,
            link=self.config.site_url or "/",
            description=self.config.feed_description,
            self_url=f"{self.config.site_url}/{self.filename}",
            last_build_date=_rfc822(newest) if newest else None,
            entries=entries,
            rfc822=_rfc822,
        )
