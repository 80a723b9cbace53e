"""
Sitemap Renderer - Serializes a SitemapDocument to sitemap-protocol XML.

BaseSitemapRenderer writes the XML declaration, the <urlset> root with the
sitemap 0.9 namespace plus exactly one extension namespace, and one <url>
block per group. Subclasses only render the media elements of their
extension:

  ImageSitemapRenderer  <image:image> with loc, title, caption
  VideoSitemapRenderer  <video:video> with thumbnail_loc, title, description,
                        content_loc, player_loc, [duration], publication_date,
                        tag, family_friendly=no, live=no

Every text value, URLs included, goes through escape_xml() exactly once.
Rendering is pure: the same document always yields the same string.

Pipeline context:
    Used in the render step of the orchestrators. check_well_formed() runs on
    the result before OutputManager writes it.
"""

import re
from typing import List
from xml.etree import ElementTree
from xml.sax.saxutils import escape

from .errors import OutputError
from .models import MediaDescriptor, MediaKind, SitemapDocument, SitemapGroup

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'
SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
IMAGE_NS = "http://www.google.com/schemas/sitemap-image/1.1"
VIDEO_NS = "http://www.google.com/schemas/sitemap-video/1.1"

# saxutils.escape handles &, < and > (& first); quotes are added here.
_QUOTE_ENTITIES = {'"': "&quot;", "'": "&apos;"}

# Control characters XML 1.0 has no encoding for, not even as a character reference.
_INVALID_XML_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")


def escape_xml(value) -> str:
    """Escape &, <, >, " and ' for XML text. None becomes an empty string.

    Control characters that XML 1.0 cannot represent are dropped.
    """
    if value is None:
        return ""
    return escape(_INVALID_XML_CHARS.sub("", str(value)), _QUOTE_ENTITIES)


def check_well_formed(xml_text: str) -> None:
    """Parse the rendered document to make sure it is well-formed XML.

    Raises:
        OutputError: If the document does not parse.
    """
    try:
        ElementTree.fromstring(xml_text.encode("utf-8"))
    except ElementTree.ParseError as e:
        raise OutputError(f"Rendered sitemap is not well-formed XML: {e}") from e


class BaseSitemapRenderer:
    """Renders the urlset envelope and <url> groups.

    Subclasses provide the extension prefix, namespace and media elements.

    Attributes:
        kind: The media kind this renderer accepts.
        prefix: Extension namespace prefix ("image" or "video").
        namespace: Extension namespace URI.
    """

    kind: MediaKind
    prefix = ""
    namespace = ""

    def __init__(self, debug: bool = False):
        self.debug = debug

    def render(self, document: SitemapDocument) -> str:
        """Render the full document.

        Args:
            document: Groups of descriptors, in output order.

        Returns:
            The XML text, without a trailing newline.

        Raises:
            ValueError: If the document's kind does not match this renderer.
        """
        if document.kind is not self.kind:
            raise ValueError(
                f"{type(self).__name__} cannot render a {document.kind.value} sitemap"
            )

        lines = [
            XML_DECLARATION,
            f'<urlset xmlns="{SITEMAP_NS}"',
            f'        xmlns:{self.prefix}="{self.namespace}">',
        ]
        for group in document.groups:
            lines.extend(self._render_group(group))
        lines.append("</urlset>")

        if self.debug:
            print(f"  Rendered {len(document.groups)} <url> group(s), "
                  f"{document.media_count} {self.prefix} entries")

        return "\n".join(lines)

    def _render_group(self, group: SitemapGroup) -> List[str]:
        lines = [
            "  <url>",
            f"    <loc>{escape_xml(group.page_url)}</loc>",
        ]
        if group.changefreq:
            lines.append(f"    <changefreq>{escape_xml(group.changefreq)}</changefreq>")
        if group.priority:
            lines.append(f"    <priority>{escape_xml(group.priority)}</priority>")
        for descriptor in group.descriptors:
            lines.extend(self._render_media(descriptor))
        lines.append("  </url>")
        return lines

    def _element(self, name: str, value) -> str:
        return f"      <{self.prefix}:{name}>{escape_xml(value)}</{self.prefix}:{name}>"

    def _render_media(self, descriptor: MediaDescriptor) -> List[str]:
        raise NotImplementedError


class ImageSitemapRenderer(BaseSitemapRenderer):
    kind = MediaKind.IMAGE
    prefix = "image"
    namespace = IMAGE_NS

    def _render_media(self, descriptor: MediaDescriptor) -> List[str]:
        return [
            "    <image:image>",
            self._element("loc", descriptor.locator),
            self._element("title", descriptor.title),
            self._element("caption", descriptor.caption),
            "    </image:image>",
        ]


class VideoSitemapRenderer(BaseSitemapRenderer):
    kind = MediaKind.VIDEO
    prefix = "video"
    namespace = VIDEO_NS

    def _render_media(self, descriptor: MediaDescriptor) -> List[str]:
        lines = [
            "    <video:video>",
            self._element("thumbnail_loc", descriptor.thumbnail_url),
            self._element("title", descriptor.title),
            self._element("description", descriptor.description),
            self._element("content_loc", descriptor.content_url),
            self._element("player_loc", descriptor.player_url),
        ]
        if descriptor.duration_seconds:
            lines.append(self._element("duration", descriptor.duration_seconds))
        lines.extend([
            self._element("publication_date", descriptor.publication_date),
            self._element("tag", descriptor.tag),
            self._element("family_friendly", "no"),
            self._element("live", "no"),
            "    </video:video>",
        ])
        return lines
