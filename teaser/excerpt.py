"""Preview extraction for feed items.

Feed items show only the beginning of an article. The cut point is found by
counting paragraph markers in the rendered HTML: the preview ends right
before the marker that would open one paragraph too many.

Functions:
    nth_index: Find the N-th occurrence of a marker in a string.
    preview_html: Truncate HTML to its first few paragraphs.
"""

from __future__ import annotations

from .errors import InvalidArgument

PARAGRAPH_MARKER = "<p>"
DEFAULT_PARAGRAPHS = 5


def nth_index(text: str, marker: str, n: int) -> int:
    """Return the index where the n-th occurrence of ``marker`` starts.

    Each search resumes one character after the start of the previous
    match, so overlapping occurrences are counted.

    Args:
        text: String to scan.
        marker: Non-empty substring to look for.
        n: Which occurrence to find, starting at 1.

    Returns:
        Zero-based index of the occurrence, or -1 if ``text`` holds fewer
        than ``n`` occurrences.

    Raises:
        InvalidArgument: If ``text`` is None, ``marker`` is empty or ``n``
            is not a positive integer.

    Examples:
        >>> nth_index("<p>a<p>b<p>c", "<p>", 2)
        4

        >>> nth_index("<p>a", "<p>", 3)
        -1
    """
    if text is None:
        raise InvalidArgument("text must not be None")
    if not marker:
        raise InvalidArgument("marker must be a non-empty string")
    if isinstance(n, bool) or not isinstance(n, int) or n <= 0:
        raise InvalidArgument(f"n must be a positive integer, got {n!r}")

    index = -1
    for _ in range(n):
        index = text.find(marker, index + 1)
        if index == -1:
            return -1
    return index


def preview_html(
    html: str,
    paragraphs: int = DEFAULT_PARAGRAPHS,
    marker: str = PARAGRAPH_MARKER,
) -> str:
    """Cut ``html`` right before the ``paragraphs``-th marker.

    Articles with fewer markers are returned whole, and so is HTML whose
    cut would fall at index 0, so the preview is never empty when the
    article is not.

    Args:
        html: Rendered article HTML.
        paragraphs: Occurrence of the marker to cut at.
        marker: Paragraph opening tag.

    Returns:
        The preview HTML.
    """
    cut = nth_index(html, marker, paragraphs)
    if cut <= 0:
        return html
    return html[:cut]
