"""Exception types for Teaser.

Errors fall in two groups. ``InvalidArgument`` and ``BuildError`` abort the
current operation. ``MissingMetadata`` only concerns a single article and is
recovered by leaving that article out of the feed.
"""

from __future__ import annotations

from pathlib import Path


class InvalidArgument(ValueError):
    """Raised when a helper is called with arguments it cannot handle."""


class MissingMetadata(Exception):
    """An article lacks front-matter required to build its feed entry.

    Attributes:
        source: Path to the article file, when known.
        missing: Names of the missing fields.
    """

    def __init__(self, source: Path | None, missing: tuple[str, ...]):
        self.source = source
        self.missing = missing
        where = str(source) if source is not None else "<unknown article>"
        super().__init__(f"{where}: missing {', '.join(missing)}")


class BuildError(Exception):
    """Error during a feed build with file context.

    Attributes:
        source_path: Path to the file or directory that caused the error.
        message: Human-readable error message.
        original_error: The original exception that was caught.
    """

    def __init__(
        self,
        source_path: Path,
        message: str,
        original_error: Exception | None = None,
    ):
        self.source_path = source_path
        self.message = message
        self.original_error = original_error
        super().__init__(f"{source_path}: {message}")
