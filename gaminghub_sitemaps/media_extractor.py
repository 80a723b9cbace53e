"""
Media Extractor - Derives media descriptors from normalized records.

Image sitemap (ImageExtractor):
  Articles yield the featured image (title = alt text or article title,
  caption = article title) followed by every image embedded in the article
  HTML, deduplicated by normalized URL. Game-release metaobjects yield one
  image each from their "image_url" field.

Video sitemap (VideoExtractor):
  Each "video_youtube" metaobject with an "id_video" yields one descriptor.
  Thumbnail, watch and embed URLs are derived from the YouTube id; the
  "duration" field ("hh:mm:ss" or "mm:ss") becomes seconds; a missing
  "date_publication" falls back to the configured timestamp. Records without
  an id are skipped and counted.

Embedded image scanning is a deliberate lightweight heuristic, not an HTML
parser. scan_image_sources() makes one pass over the markup and, for each
<img> tag, takes the first standalone, double-quoted src attribute. It does
not see single-quoted or unquoted src values, data-src, srcset, or
upper-case tag names.

Pipeline context:
    Input comes from RecordNormalizer. The descriptors are grouped by page
    into a SitemapDocument by the orchestrators.
"""

import re
from typing import Iterable, Iterator, List, Optional

from .models import ArticleRecord, MediaDescriptor, MediaKind, MetaobjectRecord

IMG_SRC_PATTERN = re.compile(r'<img\b[^>]*?\ssrc="([^">]+)"')

YOUTUBE_THUMBNAIL_URL = "https://img.youtube.com/vi/{video_id}/maxresdefault.jpg"
YOUTUBE_WATCH_URL = "https://www.youtube.com/watch?v={video_id}"
YOUTUBE_EMBED_URL = "https://www.youtube.com/embed/{video_id}"

# Time of day and offset appended to a bare "date_publication" date.
PUBLICATION_TIME_SUFFIX = "T08:00:00+01:00"

DEFAULT_GAME_TITLE = "Jeu vidéo"
DEFAULT_GAME_CAPTION = "Nouveauté jeu vidéo"
DEFAULT_VIDEO_TITLE = "Vidéo Gaming Hub"
DEFAULT_VIDEO_TAG = "Gaming"
VIDEO_TITLE_SUFFIX = " Toutes les cinématiques Film complet en français"
VIDEO_DESCRIPTION_TEMPLATE = (
    "Découvrez la vidéo complète du jeu {title} en 4K. "
    "Ce montage comprend toutes les cinématiques et séquences principales du jeu."
)


def normalize_url(url: Optional[str]) -> Optional[str]:
    """Turn a protocol-relative or bare-host URL into an absolute https URL.

    "//cdn.example.com/x.jpg" -> "https://cdn.example.com/x.jpg"
    "cdn.example.com/x.jpg"   -> "https://cdn.example.com/x.jpg"
    "http://..." and "https://..." are returned unchanged (after trimming).

    Returns:
        The normalized URL, or None when the input is empty or blank.
    """
    if not url:
        return None
    url = url.strip()
    if not url:
        return None
    if url.startswith("//"):
        return "https:" + url
    if not url.startswith("http"):
        return "https://" + url
    return url


def scan_image_sources(html: Optional[str]) -> Iterator[str]:
    """Yield the raw src value of each <img> tag in the markup, in order."""
    if not html:
        return
    for match in IMG_SRC_PATTERN.finditer(html):
        yield match.group(1)


def parse_duration(value: Optional[str]) -> Optional[int]:
    """Convert "hh:mm:ss" or "mm:ss" to a number of seconds.

    Returns:
        The duration in seconds, or None for a missing value, any other
        number of parts, a non-integer part, or a total that is not positive.
    """
    if not value:
        return None
    try:
        parts = [int(part) for part in value.split(":")]
    except ValueError:
        return None

    if len(parts) == 3:
        seconds = parts[0] * 3600 + parts[1] * 60 + parts[2]
    elif len(parts) == 2:
        seconds = parts[0] * 60 + parts[1]
    else:
        return None

    return seconds if seconds > 0 else None


def format_publication_date(date_value: Optional[str], fallback: str) -> str:
    """Build the publication timestamp from a bare date, or use the fallback."""
    date_value = (date_value or "").strip()
    if date_value:
        return f"{date_value}{PUBLICATION_TIME_SUFFIX}"
    return fallback


class ImageExtractor:
    """Builds image descriptors for articles and game releases.

    Attributes:
        skipped_game_releases: Game-release records seen without an image_url.
        debug: If True, prints per-article extraction details.
    """

    def __init__(self, debug: bool = False):
        self.debug = debug
        self.skipped_game_releases = 0

    def extract_article_images(self, article: ArticleRecord) -> List[MediaDescriptor]:
        """Collect the featured and embedded images of one article.

        Args:
            article: The normalized article.

        Returns:
            The article's image descriptors, featured image first. Empty when
            the article has neither a featured image nor <img> tags.
        """
        descriptors = []
        seen = set()

        featured_url = normalize_url(article.image_url)
        if featured_url:
            descriptors.append(MediaDescriptor(
                kind=MediaKind.IMAGE,
                locator=featured_url,
                title=article.image_alt_text or article.title,
                caption=article.title,
            ))
            seen.add(featured_url)

        for src in scan_image_sources(article.html_content):
            image_url = normalize_url(src)
            if not image_url or image_url in seen:
                continue
            descriptors.append(MediaDescriptor(
                kind=MediaKind.IMAGE,
                locator=image_url,
                title=article.title,
                caption=article.title,
            ))
            seen.add(image_url)

        if self.debug and descriptors:
            print(f"    {article.blog_handle}/{article.handle}: {len(descriptors)} image(s)")

        return descriptors

    def extract_game_release_images(
        self, records: Iterable[MetaobjectRecord]
    ) -> List[MediaDescriptor]:
        """Collect one cover image per game-release record that has one."""
        descriptors = []
        for record in records:
            image_url = normalize_url(record.get("image_url"))
            if not image_url:
                self.skipped_game_releases += 1
                continue
            title = record.get("titre")
            descriptors.append(MediaDescriptor(
                kind=MediaKind.IMAGE,
                locator=image_url,
                title=title or DEFAULT_GAME_TITLE,
                caption=title or DEFAULT_GAME_CAPTION,
            ))
        return descriptors


class VideoExtractor:
    """Builds video descriptors from "video_youtube" metaobjects.

    Attributes:
        fallback_publication_date: Timestamp used when a record has no
            date_publication.
        skipped: Records seen without an id_video.
        debug: If True, prints skipped records.
    """

    def __init__(self, fallback_publication_date: str, debug: bool = False):
        self.fallback_publication_date = fallback_publication_date
        self.debug = debug
        self.skipped = 0

    def extract_videos(self, records: Iterable[MetaobjectRecord]) -> List[MediaDescriptor]:
        descriptors = []
        for record in records:
            descriptor = self.extract_video(record)
            if descriptor is not None:
                descriptors.append(descriptor)
        return descriptors

    def extract_video(self, record: MetaobjectRecord) -> Optional[MediaDescriptor]:
        """Build the descriptor of one video, or None if it has no id_video."""
        video_id = (record.get("id_video") or "").strip()
        if not video_id:
            self.skipped += 1
            if self.debug:
                print(f"    Skipped metaobject without id_video: {record.handle or '(no handle)'}")
            return None

        title = record.get("titre")
        content_url = YOUTUBE_WATCH_URL.format(video_id=video_id)

        return MediaDescriptor(
            kind=MediaKind.VIDEO,
            locator=content_url,
            title=(title or DEFAULT_VIDEO_TITLE) + VIDEO_TITLE_SUFFIX,
            description=VIDEO_DESCRIPTION_TEMPLATE.format(title=title or ""),
            thumbnail_url=YOUTUBE_THUMBNAIL_URL.format(video_id=video_id),
            content_url=content_url,
            player_url=YOUTUBE_EMBED_URL.format(video_id=video_id),
            duration_seconds=parse_duration(record.get("duration")),
            publication_date=format_publication_date(
                record.get("date_publication"), self.fallback_publication_date
            ),
            tag=record.get("tag") or DEFAULT_VIDEO_TAG,
        )
