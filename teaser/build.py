"""Feed building for Teaser.

This module ties the stages together: it loads configuration, reads and
renders the articles, builds the feed entries and writes the RSS file.

Key functions:
- build_feed: Build the feed for a project directory.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from jinja2 import TemplateError

from .config import CONFIG_FILENAME, SiteConfig, load_config
from .content import ArticleLoader
from .errors import BuildError, MissingMetadata
from .feeds import FeedEntry, FeedItemBuilder, RSSGenerator

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    """Result of a feed build.

    Attributes:
        entries: Entries written to the feed, newest first.
        skipped: Articles left out because of missing metadata.
        output_path: Path of the written feed file.
        config: Configuration the build ran with.
    """

    entries: list[FeedEntry]
    skipped: list[MissingMetadata]
    output_path: Path
    config: SiteConfig


def build_feed(
    project_root: Path,
    base_url: str | None = None,
    output_dir_override: Path | None = None,
) -> BuildResult:
    """Build the RSS feed for a project.

    Args:
        project_root: Root directory of the project.
        base_url: Optional site URL overriding the configured one.
        output_dir_override: Optional directory to write the feed to.

    Returns:
        BuildResult describing what was written.

    Raises:
        BuildError: If the configuration or content directory is unusable.
    """
    config = load_config(project_root)
    if base_url is not None:
        config = config.with_base_url(base_url)
    if not config.site_url:
        raise BuildError(
            project_root / CONFIG_FILENAME,
            "site_url is required to build absolute feed links",
        )

    content_dir = project_root / config.content_path
    if not content_dir.is_dir():
        raise BuildError(content_dir, "Content directory not found")

    records = ArticleLoader(content_dir).load_posts(config.feed.posts_dir)
    try:
        builder = FeedItemBuilder.from_config(config)
        result = builder.build(records)
    except TemplateError as exc:
        raise BuildError(
            project_root / CONFIG_FILENAME,
            f"Invalid call_to_action template: {exc}",
            exc,
        ) from exc

    output_dir = output_dir_override or (project_root / config.output_dir)
    output_path = RSSGenerator(config).write(output_dir, result.entries)

    logger.info("Wrote %d feed entries to %s", len(result.entries), output_path)
    if result.skipped:
        logger.warning("Skipped %d articles with missing metadata", len(result.skipped))
    return BuildResult(
        entries=result.entries,
        skipped=result.skipped,
        output_path=output_path,
        config=config,
    )
