import pytest

from teaser.errors import InvalidArgument
from teaser.excerpt import nth_index, preview_html


def test_nth_index_finds_occurrences():
    assert nth_index("<p>a<p>b<p>c", "<p>", 1) == 0
    assert nth_index("<p>a<p>b<p>c", "<p>", 2) == 4
    assert nth_index("<p>a<p>b<p>c", "<p>", 3) == 8


def test_nth_index_returns_sentinel_when_too_few():
    assert nth_index("<p>a", "<p>", 3) == -1
    assert nth_index("", "<p>", 1) == -1
    assert nth_index("no paragraphs here", "<p>", 1) == -1
    assert nth_index("<p>a<p>b", "<p>", 5) == -1


def test_nth_index_first_matches_find():
    for text in ["", "<p>", "abc<p>def", "x<p>y<p>", "<P>upper"]:
        assert nth_index(text, "<p>", 1) == text.find("<p>")


def test_nth_index_counts_overlapping_matches():
    # each search resumes one character after the previous match start
    assert nth_index("aaaa", "aa", 2) == 1
    assert nth_index("aaaa", "aa", 3) == 2
    assert nth_index("aaaa", "aa", 4) == -1


@pytest.mark.parametrize("n", [0, -1, True, 1.5, "2"])
def test_nth_index_rejects_invalid_n(n):
    with pytest.raises(InvalidArgument):
        nth_index("<p>a", "<p>", n)


def test_nth_index_rejects_missing_text_and_empty_marker():
    with pytest.raises(InvalidArgument):
        nth_index(None, "<p>", 1)
    with pytest.raises(InvalidArgument):
        nth_index("<p>a", "", 1)
    # InvalidArgument is a ValueError
    with pytest.raises(ValueError):
        nth_index("<p>a", "<p>", 0)


def test_preview_cuts_before_fifth_paragraph():
    html = "".join(f"<p>{i}</p>" for i in range(7))
    preview = preview_html(html)
    assert preview == "<p>0</p><p>1</p><p>2</p><p>3</p>"
    assert html.startswith(preview)


def test_preview_keeps_short_articles_whole():
    html = "<p>A</p><p>B</p>"
    assert preview_html(html) == html
    assert preview_html("") == ""
    assert preview_html("<h1>No paragraphs</h1>") == "<h1>No paragraphs</h1>"


def test_preview_with_custom_count():
    html = "<p>A</p><p>B</p><p>C</p>"
    assert preview_html(html, paragraphs=2) == "<p>A</p>"
    assert preview_html(html, paragraphs=3) == "<p>A</p><p>B</p>"
    # a cut at index 0 would leave nothing, so the article stays whole
    assert preview_html(html, paragraphs=1) == html
