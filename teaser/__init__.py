"""Teaser RSS feed builder.

This package builds the RSS feed of a markdown blog. Every feed item carries
a short HTML preview of the article (its first few paragraphs) followed by a
link back to the full article on the site.

The main entry point is the CLI module, which provides commands for building
the feed and scaffolding new articles.

Modules:
- excerpt: Marker scanning and preview truncation.
- feeds: Feed entry construction and RSS serialization.
- content: Loading markdown articles with YAML front-matter.
- config: Immutable site and feed configuration.
- build: Orchestration of a full feed build.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
