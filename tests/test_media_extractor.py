"""Tests for gaminghub_sitemaps.media_extractor."""

import pytest

from gaminghub_sitemaps.media_extractor import (
    ImageExtractor,
    VideoExtractor,
    format_publication_date,
    normalize_url,
    parse_duration,
    scan_image_sources,
)
from gaminghub_sitemaps.models import ArticleRecord, MediaKind, MetaobjectRecord
from gaminghub_sitemaps.record_normalizer import RecordNormalizer

FALLBACK = "2026-01-01T00:00:00+00:00"


def _article(**kwargs):
    defaults = {"handle": "article", "title": "Titre", "blog_handle": "actus"}
    defaults.update(kwargs)
    return ArticleRecord(**defaults)


# ---------------------------------------------------------------------------
# URL normalization
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("raw, expected", [
    ("https://cdn.example.com/x.jpg", "https://cdn.example.com/x.jpg"),
    ("http://cdn.example.com/x.jpg", "http://cdn.example.com/x.jpg"),
    ("//cdn.example.com/x.jpg", "https://cdn.example.com/x.jpg"),
    ("cdn.example.com/x.jpg", "https://cdn.example.com/x.jpg"),
    ("  //cdn.example.com/x.jpg\n", "https://cdn.example.com/x.jpg"),
])
def test_normalize_url(raw, expected):
    assert normalize_url(raw) == expected


def test_normalize_url_is_idempotent():
    for raw in ("//cdn.example.com/x.jpg", "cdn.example.com/x.jpg", "https://a.b/c"):
        once = normalize_url(raw)
        assert normalize_url(once) == once


@pytest.mark.parametrize("raw", [None, "", "   "])
def test_normalize_url_empty(raw):
    assert normalize_url(raw) is None


# ---------------------------------------------------------------------------
# <img> scanning
# ---------------------------------------------------------------------------

def test_scan_image_sources_in_order():
    html = '<img src="a.png"><p>x</p><img alt="b" src="b.png" />'
    assert list(scan_image_sources(html)) == ["a.png", "b.png"]


def test_scan_image_sources_first_src_per_tag():
    html = '<img src="first.png" data-fallback src="second.png">'
    assert list(scan_image_sources(html)) == ["first.png"]


def test_scan_image_sources_ignores_data_src_and_srcset():
    html = '<img data-src="lazy.png" srcset="a.png 1x, b.png 2x" src="real.png">'
    assert list(scan_image_sources(html)) == ["real.png"]


def test_scan_image_sources_only_double_quoted():
    html = "<img src='single.png'><img src=bare.png>"
    assert list(scan_image_sources(html)) == []


def test_scan_image_sources_is_case_sensitive():
    assert list(scan_image_sources('<IMG SRC="a.png"><Img src="b.png">')) == []


def test_scan_image_sources_ignores_other_tags():
    html = '<script src="app.js"></script><iframe src="https://youtube.com/embed/x"></iframe>'
    assert list(scan_image_sources(html)) == []


def test_scan_image_sources_empty():
    assert list(scan_image_sources(None)) == []
    assert list(scan_image_sources("")) == []


# ---------------------------------------------------------------------------
# Duration parsing
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("value, expected", [
    ("01:02:03", 3723),
    ("05:30", 330),
    ("01:30:00", 5400),
    ("", None),
    (None, None),
    ("abc", None),
    ("1:2:3:4", None),
    ("90", None),
    ("00:00", None),
    ("00:00:00", None),
    ("1:xx", None),
])
def test_parse_duration(value, expected):
    assert parse_duration(value) == expected


# ---------------------------------------------------------------------------
# Article images
# ---------------------------------------------------------------------------

def test_article_without_any_image_yields_nothing():
    extractor = ImageExtractor()
    assert extractor.extract_article_images(_article(html_content="<p>texte</p>")) == []


def test_article_featured_and_content_images():
    extractor = ImageExtractor()
    article = _article(
        title="Article",
        image_url="//img.example/a.png",
        html_content='<p><img src="http://img.example/b.png"></p>',
    )
    descriptors = extractor.extract_article_images(article)
    assert [d.locator for d in descriptors] == [
        "https://img.example/a.png",
        "http://img.example/b.png",
    ]
    assert all(d.kind is MediaKind.IMAGE for d in descriptors)


def test_article_featured_image_uses_alt_text_as_title():
    extractor = ImageExtractor()
    descriptors = extractor.extract_article_images(
        _article(title="Article", image_url="https://x/a.png", image_alt_text="Alt")
    )
    assert descriptors[0].title == "Alt"
    assert descriptors[0].caption == "Article"


def test_article_featured_image_title_falls_back_to_article_title():
    extractor = ImageExtractor()
    descriptors = extractor.extract_article_images(_article(title="Article", image_url="https://x/a.png"))
    assert descriptors[0].title == "Article"


def test_article_content_images_use_article_title():
    extractor = ImageExtractor()
    descriptors = extractor.extract_article_images(
        _article(title="Article", html_content='<img alt="ignored" src="https://x/b.png">')
    )
    assert descriptors[0].title == "Article"
    assert descriptors[0].caption == "Article"


def test_article_duplicate_content_images_are_emitted_once():
    extractor = ImageExtractor()
    html = '<img src="https://x/b.png"><img src="https://x/b.png">'
    descriptors = extractor.extract_article_images(_article(html_content=html))
    assert [d.locator for d in descriptors] == ["https://x/b.png"]


def test_article_content_image_matching_featured_image_after_normalization():
    extractor = ImageExtractor()
    article = _article(
        image_url="//x/a.png",
        html_content='<img src="https://x/a.png"><img src="x/a.png">',
    )
    assert [d.locator for d in extractor.extract_article_images(article)] == ["https://x/a.png"]


def test_dedup_is_by_exact_string():
    extractor = ImageExtractor()
    html = '<img src="http://x/a.png"><img src="https://x/a.png">'
    descriptors = extractor.extract_article_images(_article(html_content=html))
    assert len(descriptors) == 2


def test_articles_from_fixture(blogs_data):
    blogs = RecordNormalizer().normalize_blogs(blogs_data)
    extractor = ImageExtractor()
    zelda, no_image, robin = blogs[0].articles

    assert [d.locator for d in extractor.extract_article_images(zelda)] == [
        "https://cdn.shopify.com/s/files/zelda.jpg",
        "https://cdn.shopify.com/s/files/zelda-map.jpg",
    ]
    assert extractor.extract_article_images(no_image) == []
    assert [d.locator for d in extractor.extract_article_images(robin)] == [
        "https://cdn.example.com/robin.png",
    ]


# ---------------------------------------------------------------------------
# Game release images
# ---------------------------------------------------------------------------

def test_game_release_images(game_releases_data):
    records = RecordNormalizer().normalize_metaobjects(game_releases_data)
    extractor = ImageExtractor()
    descriptors = extractor.extract_game_release_images(records)

    assert len(descriptors) == 2
    assert descriptors[0].locator == "https://cdn.shopify.com/s/files/elden.jpg"
    assert descriptors[0].title == "Elden Ring"
    assert descriptors[0].caption == "Elden Ring"
    assert descriptors[1].locator == "https://cdn.shopify.com/s/files/mystery.jpg"
    assert descriptors[1].title == "Jeu vidéo"
    assert descriptors[1].caption == "Nouveauté jeu vidéo"
    assert extractor.skipped_game_releases == 1


# ---------------------------------------------------------------------------
# Videos
# ---------------------------------------------------------------------------

def test_format_publication_date():
    assert format_publication_date("2024-03-01", FALLBACK) == "2024-03-01T08:00:00+01:00"
    assert format_publication_date(None, FALLBACK) == FALLBACK
    assert format_publication_date("", FALLBACK) == FALLBACK
    assert format_publication_date("   ", FALLBACK) == FALLBACK
    assert format_publication_date(" 2024-03-01 ", FALLBACK) == "2024-03-01T08:00:00+01:00"


def test_extract_video_full_record():
    record = MetaobjectRecord(handle="game-x", fields={
        "id_video": "abc123",
        "titre": "Game X",
        "duration": "01:30:00",
        "date_publication": "2024-03-01",
        "tag": "RPG",
    })
    video = VideoExtractor(FALLBACK).extract_video(record)

    assert video.kind is MediaKind.VIDEO
    assert video.thumbnail_url == "https://img.youtube.com/vi/abc123/maxresdefault.jpg"
    assert video.content_url == "https://www.youtube.com/watch?v=abc123"
    assert video.player_url == "https://www.youtube.com/embed/abc123"
    assert video.locator == video.content_url
    assert video.duration_seconds == 5400
    assert video.publication_date == "2024-03-01T08:00:00+01:00"
    assert video.tag == "RPG"
    assert video.title == "Game X Toutes les cinématiques Film complet en français"
    assert video.description == (
        "Découvrez la vidéo complète du jeu Game X en 4K. "
        "Ce montage comprend toutes les cinématiques et séquences principales du jeu."
    )


def test_extract_video_fallbacks():
    record = MetaobjectRecord(fields={"id_video": "def456"})
    video = VideoExtractor(FALLBACK).extract_video(record)

    assert video.title == "Vidéo Gaming Hub Toutes les cinématiques Film complet en français"
    assert "du jeu  en 4K" in video.description
    assert video.tag == "Gaming"
    assert video.publication_date == FALLBACK
    assert video.duration_seconds is None


def test_extract_video_without_id_is_skipped_and_counted():
    extractor = VideoExtractor(FALLBACK)
    assert extractor.extract_video(MetaobjectRecord(fields={"titre": "x"})) is None
    assert extractor.extract_video(MetaobjectRecord(fields={"id_video": ""})) is None
    assert extractor.extract_video(MetaobjectRecord(fields={"id_video": "  "})) is None
    assert extractor.skipped == 3


def test_extract_videos_from_fixture(videos_data):
    records = RecordNormalizer().normalize_metaobjects(videos_data)
    extractor = VideoExtractor(FALLBACK)
    videos = extractor.extract_videos(records)

    assert [v.content_url.rsplit("=", 1)[1] for v in videos] == ["abc123", "def456", "ghi789"]
    assert extractor.skipped == 1
    assert videos[1].duration_seconds == 330
    assert videos[2].duration_seconds is None
