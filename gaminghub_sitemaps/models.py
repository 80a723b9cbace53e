"""
Models - Records and descriptors passed between the pipeline steps.

  BlogRecord / ArticleRecord  Flattened Storefront blog and article nodes.
  MetaobjectRecord            A metaobject's field list as a key -> value map.
  MediaDescriptor             One image or video destined for a sitemap entry.
  SitemapGroup                One <url> block: a page URL and its media.
  SitemapDocument             The ordered groups of one sitemap file.

All of them live for a single run only. Descriptor values are raw text;
escaping is done by the renderer.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


@dataclass(frozen=True)
class ArticleRecord:
    handle: str
    title: str
    blog_handle: str
    image_url: Optional[str] = None
    image_alt_text: Optional[str] = None
    html_content: Optional[str] = None


@dataclass(frozen=True)
class BlogRecord:
    handle: str
    title: str
    articles: List[ArticleRecord] = field(default_factory=list)


@dataclass(frozen=True)
class MetaobjectRecord:
    """A metaobject flattened to its field values.

    Attributes:
        handle: The metaobject handle, when the query requests it.
        fields: Field key -> field value. Values may be None when the field
            exists in the definition but is unset.
    """

    handle: Optional[str] = None
    fields: Dict[str, Optional[str]] = field(default_factory=dict)

    def get(self, key: str) -> Optional[str]:
        """Return the field value, or None when absent or empty."""
        value = self.fields.get(key)
        return value if value else None


class MediaKind(Enum):
    IMAGE = "image"
    VIDEO = "video"


@dataclass(frozen=True)
class MediaDescriptor:
    """One piece of media referenced by a sitemap entry.

    For images, locator is the image URL. For videos, locator is the watch
    (content) URL and the remaining video fields are filled in.
    """

    kind: MediaKind
    locator: str
    title: str
    caption: Optional[str] = None
    description: Optional[str] = None
    thumbnail_url: Optional[str] = None
    content_url: Optional[str] = None
    player_url: Optional[str] = None
    duration_seconds: Optional[int] = None
    publication_date: Optional[str] = None
    tag: Optional[str] = None


@dataclass(frozen=True)
class SitemapGroup:
    page_url: str
    descriptors: List[MediaDescriptor] = field(default_factory=list)
    changefreq: Optional[str] = None
    priority: Optional[str] = None


@dataclass
class SitemapDocument:
    kind: MediaKind
    groups: List[SitemapGroup] = field(default_factory=list)

    @property
    def media_count(self) -> int:
        return sum(len(group.descriptors) for group in self.groups)
