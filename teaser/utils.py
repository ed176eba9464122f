"""Utility functions for Teaser.

This module contains small string and date helpers shared by the content
loader and the CLI.

Key functions:
    slugify: Convert a title or filename to a URL slug.
    titleize: Convert a filename to a human-readable title.
    coerce_date: Normalize front-matter date values.
    is_internal_path: Check for draft or partial paths.
    is_markdown: Check if a path is a Markdown file.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from pathlib import Path
from typing import Any


def slugify(name: str) -> str:
    """Convert a title or filename stem to a slug.

    Args:
        name: Text to convert.

    Returns:
        URL-friendly slug.
    """
    cleaned = re.sub(r"[^a-zA-Z0-9]+", "-", name)
    cleaned = cleaned.strip("-").lower()
    return cleaned or "index"


def titleize(filename: str) -> str:
    """Convert a filename to a human-readable title.

    Replaces hyphens and underscores with spaces and capitalizes each word.

    Args:
        filename: Filename with or without extension.

    Returns:
        Human-readable title string.

    Examples:
        >>> titleize("getting-started.md")
        'Getting Started'
    """
    base = Path(filename).stem
    words = re.split(r"[\s\-_]+", base)
    return " ".join(word.capitalize() for word in words if word) or "Untitled"


def coerce_date(value: Any) -> date | None:
    """Normalize a front-matter date value.

    YAML already turns ``2020-01-01`` into a date, but quoted values and
    timestamps show up too.

    Args:
        value: Raw front-matter value.

    Returns:
        A date, or None if the value is missing or unparseable.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        text = value.strip()
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            return None
    return None


def is_internal_path(path: Path) -> bool:
    """Check if a path is internal (contains components starting with _).

    Args:
        path: Path to check.

    Returns:
        True if any path component starts with underscore.
    """
    return any(part.startswith("_") for part in path.parts)


def is_markdown(path: Path) -> bool:
    """Check if a path is a Markdown file.

    Args:
        path: Path to check.

    Returns:
        True if the file has .md extension (case-insensitive).
    """
    return path.suffix.lower() == ".md"
