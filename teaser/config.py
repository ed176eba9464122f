"""Site configuration for Teaser.

Configuration lives in ``teaser.yaml`` at the project root and is merged
over DEFAULT_CONFIG. The result is frozen into SiteConfig and passed
explicitly to every stage of the build.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml

from .errors import BuildError
from .excerpt import DEFAULT_PARAGRAPHS

CONFIG_FILENAME = "teaser.yaml"

DEFAULT_CALL_TO_ACTION = (
    '<p>This article first appeared on <a href="{{ url }}">'
    "{{ site_title or url }}</a></p>"
)

DEFAULT_CONFIG: dict[str, Any] = {
    "title": "",
    "site_url": "",
    "description": "",
    "topics": [],
    "content_path": "content",
    "output_dir": "public",
    "feed": {},
}

DEFAULT_FEED_CONFIG: dict[str, Any] = {
    "output": "rss.xml",
    "title": None,
    "posts_dir": "posts",
    "paragraphs": DEFAULT_PARAGRAPHS,
    "call_to_action": DEFAULT_CALL_TO_ACTION,
}


@dataclass(frozen=True)
class FeedConfig:
    """Feed-specific settings.

    Attributes:
        output: Feed filename inside the output directory.
        title: Channel title; the site title when unset.
        posts_dir: Content folder holding the articles to syndicate.
        paragraphs: The preview is cut before this paragraph marker.
        call_to_action: Jinja template appended to every preview.
    """

    output: str = "rss.xml"
    title: str | None = None
    posts_dir: str = "posts"
    paragraphs: int = DEFAULT_PARAGRAPHS
    call_to_action: str = DEFAULT_CALL_TO_ACTION


@dataclass(frozen=True)
class SiteConfig:
    """Site-wide settings.

    Attributes:
        title: Site title.
        site_url: Absolute base URL without a trailing slash.
        description: Site description, may contain a %TOPICS% placeholder.
        topics: Values substituted for %TOPICS%.
        content_path: Content directory, relative to the project root.
        output_dir: Output directory, relative to the project root.
        feed: Feed settings.
    """

    title: str = ""
    site_url: str = ""
    description: str = ""
    topics: tuple[str, ...] = ()
    content_path: str = "content"
    output_dir: str = "public"
    feed: FeedConfig = field(default_factory=FeedConfig)

    @property
    def feed_title(self) -> str:
        return self.feed.title or self.title

    @property
    def feed_description(self) -> str:
        """Description with the %TOPICS% placeholder filled in."""
        return self.description.replace("%TOPICS%", ", ".join(self.topics))

    def with_base_url(self, base_url: str) -> SiteConfig:
        return replace(self, site_url=base_url.rstrip("/"))


def load_config(project_root: Path) -> SiteConfig:
    """Load site configuration from teaser.yaml.

    Args:
        project_root: Root directory of the project.

    Returns:
        SiteConfig with defaults applied.

    Raises:
        BuildError: If the file is not valid YAML or holds invalid values.
    """
    config_path = project_root / CONFIG_FILENAME
    config = DEFAULT_CONFIG.copy()
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            try:
                loaded = yaml.safe_load(f) or {}
            except yaml.YAMLError as exc:
                raise BuildError(config_path, f"Invalid YAML: {exc}", exc) from exc
        if isinstance(loaded, dict):
            config.update(loaded)

    feed = DEFAULT_FEED_CONFIG.copy()
    if isinstance(config.get("feed"), dict):
        feed.update(config["feed"])
    paragraphs = feed.get("paragraphs")
    if isinstance(paragraphs, bool) or not isinstance(paragraphs, int) or paragraphs < 2:
        raise BuildError(
            config_path,
            f"feed.paragraphs must be an integer of at least 2, got {paragraphs!r}",
        )

    topics = config.get("topics") or []
    if isinstance(topics, str):
        topics = [topics]
    return SiteConfig(
        title=str(config.get("title") or ""),
        site_url=str(config.get("site_url") or "").rstrip("/"),
        description=str(config.get("description") or ""),
        topics=tuple(str(topic) for topic in topics),
        content_path=str(config.get("content_path") or "content"),
        output_dir=str(config.get("output_dir") or "public"),
        feed=FeedConfig(
            output=str(feed.get("output") or "rss.xml").lstrip("/"),
            title=feed.get("title"),
            posts_dir=str(feed.get("posts_dir") or "posts"),
            paragraphs=paragraphs,
            call_to_action=str(feed.get("call_to_action") or DEFAULT_CALL_TO_ACTION),
        ),
    )
