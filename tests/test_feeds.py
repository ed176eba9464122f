import logging
from datetime import date

import pytest

from teaser.config import FeedConfig, SiteConfig
from teaser.content import ArticleRecord
from teaser.errors import InvalidArgument, MissingMetadata
from teaser.feeds import FeedEntry, FeedItemBuilder, RSSGenerator

BASE_URL = "https://site.test"


def _cta(url, label=None):
    return f'<p>This article first appeared on <a href="{url}">{label or url}</a></p>'


def _record(path="/blog/x", created=date(2020, 1, 1), html="<p>A</p><p>B</p>", **kwargs):
    return ArticleRecord(
        html=html,
        title=kwargs.pop("title", "X"),
        excerpt=kwargs.pop("excerpt", "exc"),
        path=path,
        created=created,
        **kwargs,
    )


def test_build_entry_for_short_article():
    entry = FeedItemBuilder(BASE_URL).build_entry(_record())
    assert entry == FeedEntry(
        title="X",
        description="exc",
        path="/blog/x",
        date=date(2020, 1, 1),
        url="https://site.test/blog/x",
        guid="https://site.test/blog/x",
        content="<p>A</p><p>B</p>" + _cta("https://site.test/blog/x"),
    )


def test_build_entry_truncates_long_article():
    html = "".join(f"<p>{i}</p>" for i in range(7))
    entry = FeedItemBuilder(BASE_URL).build_entry(_record(html=html))
    assert entry.content == "<p>0</p><p>1</p><p>2</p><p>3</p>" + _cta(entry.url)
    assert "<p>4</p>" not in entry.content


def test_build_entry_uses_site_title_and_paragraph_count():
    builder = FeedItemBuilder(BASE_URL, paragraphs=2, site_title="Code4IT")
    entry = builder.build_entry(_record(html="<p>A</p><p>B</p><p>C</p>"))
    assert entry.content == "<p>A</p>" + _cta(entry.url, "Code4IT")


def test_build_entry_with_custom_call_to_action():
    builder = FeedItemBuilder(
        BASE_URL,
        call_to_action='<p><a href="{{ url }}">Keep reading on {{ site_title }}</a></p>',
        site_title="Tom & Jerry",
    )
    entry = builder.build_entry(_record())
    assert entry.content.endswith(
        '<p><a href="https://site.test/blog/x">Keep reading on Tom &amp; Jerry</a></p>'
    )


def test_build_entry_does_not_leak_extra_metadata():
    record = _record(tags=("csharp",), updated=date(2021, 1, 1))
    entry = FeedItemBuilder(BASE_URL).build_entry(record)
    assert not hasattr(entry, "tags")
    assert not hasattr(entry, "updated")
    assert record.html == "<p>A</p><p>B</p>"


@pytest.mark.parametrize(
    "kwargs, missing",
    [
        ({"path": None}, ("path",)),
        ({"path": ""}, ("path",)),
        ({"created": None}, ("created",)),
        ({"path": None, "created": None}, ("path", "created")),
    ],
)
def test_build_entry_requires_path_and_created(kwargs, missing):
    with pytest.raises(MissingMetadata) as excinfo:
        FeedItemBuilder(BASE_URL).build_entry(_record(**kwargs))
    assert excinfo.value.missing == missing


def test_build_rejects_missing_html():
    with pytest.raises(InvalidArgument):
        FeedItemBuilder(BASE_URL).build_entry(_record(html=None))


def test_build_preserves_order_and_skips_bad_records(caplog):
    records = [
        _record(path="/blog/c", created=date(2022, 1, 1)),
        _record(path=None, created=date(2021, 6, 1)),
        _record(path="/blog/a", created=date(2020, 1, 1)),
        _record(path="/blog/b", created=date(2023, 1, 1)),
    ]
    with caplog.at_level(logging.WARNING, logger="teaser.feeds"):
        result = FeedItemBuilder(BASE_URL).build(records)

    assert [e.path for e in result.entries] == ["/blog/c", "/blog/a", "/blog/b"]
    assert len(result.skipped) == 1
    assert result.skipped[0].missing == ("path",)
    assert "Skipping article" in caplog.text


def test_build_is_idempotent():
    records = [_record(path=f"/blog/{i}", html="<p>x</p>" * i) for i in range(8)]
    builder = FeedItemBuilder(BASE_URL)
    first = builder.build(records)
    second = builder.build(records)
    assert first.entries == second.entries
    assert FeedItemBuilder(BASE_URL).build(records).entries == first.entries


def test_build_empty_input():
    result = FeedItemBuilder(BASE_URL).build([])
    assert result.entries == []
    assert result.skipped == []


def test_from_config():
    config = SiteConfig(
        title="Code4IT",
        site_url=BASE_URL,
        feed=FeedConfig(paragraphs=3),
    )
    builder = FeedItemBuilder.from_config(config)
    assert builder.base_url == BASE_URL
    assert builder.paragraphs == 3
    assert builder.site_title == "Code4IT"


def _config():
    return SiteConfig(
        title="Code4IT",
        site_url=BASE_URL,
        description="A blog for %TOPICS%",
        topics=("C# devs", "Azure lovers"),
    )


def test_rss_generator_output():
    builder = FeedItemBuilder(BASE_URL)
    entries = builder.build(
        [
            _record(path="/blog/new", created=date(2021, 3, 2), title="New"),
            _record(path="/blog/old", created=date(2020, 1, 1), title="Old <one>"),
        ]
    ).entries
    xml = RSSGenerator(_config()).generate(entries)

    assert xml.startswith('<?xml version="1.0" encoding="UTF-8"?>')
    assert "<title>Code4IT</title>" in xml
    assert f"<link>{BASE_URL}</link>" in xml
    assert "<description>A blog for C# devs, Azure lovers</description>" in xml
    assert f'<atom:link href="{BASE_URL}/rss.xml"' in xml
    assert "<lastBuildDate>Tue, 02 Mar 2021 00:00:00 +0000</lastBuildDate>" in xml
    assert '<guid isPermaLink="true">https://site.test/blog/old</guid>' in xml
    assert "<title>Old &lt;one&gt;</title>" in xml
    assert "<pubDate>Wed, 01 Jan 2020 00:00:00 +0000</pubDate>" in xml
    assert "<content:encoded>&lt;p&gt;A&lt;/p&gt;" in xml
    assert xml.index("/blog/new") < xml.index("/blog/old")


def test_rss_generator_is_deterministic_and_handles_empty_feed():
    generator = RSSGenerator(_config())
    assert generator.generate([]) == generator.generate([])
    assert "<lastBuildDate>" not in generator.generate([])
    assert "<item>" not in generator.generate([])


def test_rss_generator_uses_feed_title_and_writes(tmp_path):
    config = SiteConfig(
        title="Code4IT",
        site_url=BASE_URL,
        feed=FeedConfig(title="Code4IT RSS", output="feeds/rss.xml"),
    )
    entries = FeedItemBuilder(BASE_URL).build([_record()]).entries
    path = RSSGenerator(config).write(tmp_path, entries)
    assert path == tmp_path / "feeds" / "rss.xml"
    text = path.read_text(encoding="utf-8")
    assert "<title>Code4IT RSS</title>" in text
    assert "https://site.test/blog/x" in text


def test_build_warns_on_duplicate_paths(caplog):
    records = [
        _record(path="/blog/same", created=date(2021, 1, 1)),
        _record(path="/blog/other", created=date(2020, 6, 1)),
        _record(path="/blog/same", created=date(2020, 1, 1)),
    ]
    with caplog.at_level(logging.WARNING, logger="teaser.feeds"):
        result = FeedItemBuilder(BASE_URL).build(records)

    assert [e.path for e in result.entries] == ["/blog/same", "/blog/other", "/blog/same"]
    assert caplog.text.count("Duplicate article path /blog/same") == 1
